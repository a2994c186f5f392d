"""Block-average debayering of RGGB mosaics into 8-bit BGR images."""

from __future__ import annotations

import numpy as np

from bayer2tga.config import SensorConfig
from bayer2tga.geometry import Channel, channel_plane, check_frame

# Byte offset of each color inside an output pixel.
BGR_OFFSETS = {
    "B": 0,
    "G": 1,
    "R": 2,
}

FILL_POLICIES = ("anchor", "block")


def rescale(values: np.ndarray, config: SensorConfig) -> np.ndarray:
    """Scale samples from [0, max_input] to [0, max_output], truncating.

    Integer arithmetic gives the exact truncated quotient, so the top input
    value always lands on the top output value. Samples outside
    [0, max_input] are clipped first instead of wrapping in the 8-bit store.
    """
    arr = np.clip(np.asarray(values, dtype=np.int64), 0, config.max_input)
    return (arr * config.max_output // config.max_input).astype(np.uint8)


def average_green(frame: np.ndarray) -> np.ndarray:
    """Floor average of the two green samples of every block."""
    gr = channel_plane(frame, Channel.GREEN_RED_ROW).astype(np.int64)
    gb = channel_plane(frame, Channel.GREEN_BLUE_ROW).astype(np.int64)
    return (gr + gb) // 2


def place_pixels(bgr: np.ndarray, fill: str = "anchor") -> np.ndarray:
    """Lay out one reconstructed pixel per block in the output image.

    ``"anchor"`` writes each block's triple at the block's own output
    position, giving a (H, W, 3) image with every position filled.
    ``"block"`` repeats it over the block's 2x2 footprint, giving a
    sensor-resolution (2H, 2W, 3) image.
    """
    if fill == "anchor":
        return bgr
    if fill == "block":
        return np.repeat(np.repeat(bgr, 2, axis=0), 2, axis=1)
    raise ValueError(f"Unknown fill policy {fill!r}; expected one of {FILL_POLICIES}.")


def debayer(frame: np.ndarray, config: SensorConfig, fill: str = "anchor") -> np.ndarray:
    """Convert an RGGB mosaic to a uint8 BGR image without touching the frame."""
    arr = check_frame(frame, config)

    bgr = np.empty((config.height, config.width, 3), dtype=np.uint8)
    bgr[..., BGR_OFFSETS["R"]] = rescale(channel_plane(arr, Channel.RED), config)
    bgr[..., BGR_OFFSETS["G"]] = rescale(average_green(arr), config)
    bgr[..., BGR_OFFSETS["B"]] = rescale(channel_plane(arr, Channel.BLUE), config)
    return place_pixels(bgr, fill)
