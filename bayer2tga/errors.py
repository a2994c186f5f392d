"""Exception types raised by the conversion stages."""

from __future__ import annotations

from typing import Optional


class Bayer2TgaError(Exception):
    """Base error; ``stage`` names the pass that failed."""

    stage = "convert"

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class ConfigError(Bayer2TgaError):
    stage = "config"


class GeometryError(Bayer2TgaError):
    stage = "geometry"


class FrameShapeError(Bayer2TgaError):
    """Mosaic buffer does not match the configured sensor geometry."""

    stage = "geometry"

    def __init__(self, expected: tuple[int, ...], actual: tuple[int, ...]) -> None:
        super().__init__(f"Mosaic shape {actual} does not match sensor geometry {expected}.")
        self.expected = expected
        self.actual = actual


class DegenerateRangeError(Bayer2TgaError):
    """Flat frame: max == min, so the normalization scale is undefined."""

    stage = "normalize"

    def __init__(self, minimum: int, maximum: int) -> None:
        super().__init__(
            f"Cannot normalize a flat frame (min={minimum}, max={maximum}); scale is undefined."
        )
        self.minimum = minimum
        self.maximum = maximum


class FrameSizeError(Bayer2TgaError):
    """Raw input is shorter or longer than one sensor frame."""

    stage = "read"

    def __init__(self, expected: int, actual: int, source: str = "") -> None:
        where = f" in {source}" if source else ""
        super().__init__(f"Expected {expected} bytes{where}, got {actual}.")
        self.expected = expected
        self.actual = actual
        self.source = source


class TgaFormatError(Bayer2TgaError):
    stage = "tga"
