"""RGGB mosaic addressing for packed RG10 frames.

Layout of one 2x2 block (block ``(x, y)`` covers mosaic rows ``2y, 2y+1``
and columns ``2x, 2x+1``)::

    R  Gr
    Gb B
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from bayer2tga.config import SensorConfig
from bayer2tga.errors import FrameShapeError, GeometryError


class Channel(Enum):
    """Mosaic channels with their (row, col) offset inside a block."""

    RED = (0, 0)
    GREEN_RED_ROW = (0, 1)
    GREEN_BLUE_ROW = (1, 0)
    BLUE = (1, 1)

    @property
    def row(self) -> int:
        return self.value[0]

    @property
    def col(self) -> int:
        return self.value[1]


def sample_offset(x: int, y: int, channel: Channel, config: SensorConfig) -> int:
    """Linear sample offset of ``channel`` in the block at output position (x, y)."""
    if not 0 <= x < config.width or not 0 <= y < config.height:
        raise GeometryError(
            f"Block ({x}, {y}) outside sensor of {config.width}x{config.height} blocks."
        )
    row_stride = 2 * config.width
    return (2 * y + channel.row) * row_stride + 2 * x + channel.col


def check_frame(frame: np.ndarray, config: SensorConfig) -> np.ndarray:
    """Verify the mosaic matches the sensor geometry and holds integer samples."""
    arr = np.asarray(frame)
    if arr.shape != config.mosaic_shape:
        raise FrameShapeError(config.mosaic_shape, tuple(arr.shape))
    if not np.issubdtype(arr.dtype, np.integer):
        raise GeometryError(f"Mosaic samples must be integers, got {arr.dtype}.")
    return arr


def frame_from_buffer(buffer: np.ndarray, config: SensorConfig) -> np.ndarray:
    """Reshape a flat sample buffer into the (2H, 2W) mosaic."""
    flat = np.asarray(buffer).reshape(-1)
    if flat.size != config.sample_count:
        raise FrameShapeError((config.sample_count,), (flat.size,))
    return flat.astype(np.uint16, copy=False).reshape(config.mosaic_shape)


def channel_plane(frame: np.ndarray, channel: Channel) -> np.ndarray:
    """Strided (H, W) view of one channel; writes go through to the frame."""
    return frame[channel.row :: 2, channel.col :: 2]
