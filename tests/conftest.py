import numpy as np
import pytest

from bayer2tga.config import SensorConfig


def make_frame(config: SensorConfig, red, green_red, green_blue, blue) -> np.ndarray:
    """Build a (2H, 2W) RGGB mosaic from per-channel (H, W) planes or scalars."""
    frame = np.zeros(config.mosaic_shape, dtype=np.uint16)
    frame[0::2, 0::2] = red
    frame[0::2, 1::2] = green_red
    frame[1::2, 0::2] = green_blue
    frame[1::2, 1::2] = blue
    return frame


@pytest.fixture
def small_config() -> SensorConfig:
    return SensorConfig(width=4, height=3)


@pytest.fixture
def random_frame(small_config) -> np.ndarray:
    rng = np.random.default_rng(1234)
    frame = rng.integers(100, 901, size=small_config.mosaic_shape).astype(np.uint16)
    frame[0, 0] = 100
    frame[-1, -1] = 900
    return frame
