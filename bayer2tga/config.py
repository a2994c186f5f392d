"""Sensor configuration for the RG10 to TGA conversion."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from bayer2tga.errors import ConfigError

BYTE_ORDERS = ("<", ">", "=")


@dataclass(frozen=True)
class SensorConfig:
    """Fixed geometry and bit depths of one sensor mode.

    ``width`` and ``height`` count output pixels, i.e. 2x2 mosaic blocks.
    The raw frame is therefore ``2 * height`` rows of ``2 * width`` samples.
    """

    width: int = 1920
    height: int = 1080
    input_bits: int = 10
    output_bits: int = 8
    byte_order: str = "<"

    def __post_init__(self) -> None:
        for name in ("width", "height", "input_bits", "output_bits"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}.")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Sensor size must be positive, got {self.width}x{self.height}.")
        if not 1 <= self.input_bits <= 16:
            raise ConfigError(f"input_bits must be within 1..16, got {self.input_bits}.")
        if not 1 <= self.output_bits <= 8:
            raise ConfigError(f"output_bits must be within 1..8, got {self.output_bits}.")
        if self.byte_order not in BYTE_ORDERS:
            raise ConfigError(f"byte_order must be one of {BYTE_ORDERS}, got {self.byte_order!r}.")

    @property
    def max_input(self) -> int:
        return (1 << self.input_bits) - 1

    @property
    def max_output(self) -> int:
        return (1 << self.output_bits) - 1

    @property
    def mosaic_shape(self) -> tuple[int, int]:
        """Mosaic shape as rows, columns of samples."""
        return 2 * self.height, 2 * self.width

    @property
    def sample_count(self) -> int:
        return 4 * self.width * self.height

    @property
    def input_size(self) -> int:
        """Raw frame size in bytes (four 16-bit samples per block)."""
        return self.sample_count * 2

    @property
    def output_size(self) -> int:
        return self.width * self.height * 3

    @property
    def input_dtype(self) -> str:
        return f"{self.byte_order}u2"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SensorConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"Unknown sensor config keys: {', '.join(unknown)}.")
        return cls(**payload)


DEFAULT_CONFIG = SensorConfig()


def load_config(path: str | Path) -> SensorConfig:
    """Read a SensorConfig from a JSON file."""
    path_obj = Path(path)
    try:
        payload = json.loads(path_obj.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid JSON in {path_obj}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Sensor config in {path_obj} must be a JSON object.")
    return SensorConfig.from_dict(payload)
