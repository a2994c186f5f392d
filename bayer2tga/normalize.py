"""Range statistics and full-range normalization of RG10 mosaics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from bayer2tga.config import SensorConfig
from bayer2tga.errors import DegenerateRangeError
from bayer2tga.geometry import check_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeStats:
    """Global min/max over all four channels of a frame."""

    minimum: int
    maximum: int

    @property
    def span(self) -> int:
        return self.maximum - self.minimum

    @property
    def is_degenerate(self) -> bool:
        return self.maximum == self.minimum


def compute_range(frame: np.ndarray, config: SensorConfig) -> RangeStats:
    """Return tight (min, max) bounds of every sample in the mosaic."""
    arr = check_frame(frame, config)
    stats = RangeStats(minimum=int(np.min(arr)), maximum=int(np.max(arr)))
    logger.debug("Range statistics: min=%d max=%d", stats.minimum, stats.maximum)
    return stats


def normalization_scale(stats: RangeStats, config: SensorConfig) -> float:
    """Multiplier stretching ``stats`` onto [0, max_input]."""
    if stats.is_degenerate:
        raise DegenerateRangeError(stats.minimum, stats.maximum)
    return float(config.max_input) / float(stats.span)


def normalize_frame(
    frame: np.ndarray,
    config: SensorConfig,
    stats: Optional[RangeStats] = None,
) -> RangeStats:
    """Stretch the mosaic in place so its samples span [0, max_input].

    Statistics are taken from the un-normalized frame before any sample is
    written. Each sample is written once as ``round((s - min) * scale)``
    with halves rounded away from zero. Returns the statistics used.
    """
    arr = check_frame(frame, config)
    if stats is None:
        stats = compute_range(arr, config)
    scale = normalization_scale(stats, config)

    # Samples are non-negative, so floor(v + 0.5) is round-half-away-from-zero.
    stretched = np.floor((arr.astype(np.float64) - stats.minimum) * scale + 0.5)
    np.clip(stretched, 0, config.max_input, out=stretched)
    arr[...] = stretched.astype(arr.dtype)

    logger.info(
        "Normalized frame from [%d, %d] to [0, %d] (scale=%.6f)",
        stats.minimum,
        stats.maximum,
        config.max_input,
        scale,
    )
    return stats
