"""End-to-end RG10 frame conversion: statistics, normalization, debayer, write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import numpy as np

from bayer2tga import debayer as debayer_mod
from bayer2tga import io as raw_io
from bayer2tga.config import SensorConfig
from bayer2tga.errors import DegenerateRangeError
from bayer2tga.geometry import check_frame
from bayer2tga.normalize import RangeStats, compute_range, normalize_frame

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Output image plus the statistics gathered along the way."""

    image: np.ndarray
    input_stats: RangeStats
    output_stats: Optional[RangeStats]
    normalized: bool
    fill: str


def convert_frame(
    frame: np.ndarray,
    config: SensorConfig,
    normalize: bool = True,
    fill: str = "anchor",
    allow_flat: bool = False,
) -> ConversionResult:
    """Convert one mosaic to a BGR image, normalizing it in place first if asked.

    A flat frame cannot be normalized. With ``allow_flat`` the stretch is
    skipped and the raw values are debayered; otherwise the
    DegenerateRangeError propagates.
    """
    if fill not in debayer_mod.FILL_POLICIES:
        raise ValueError(f"Unknown fill policy {fill!r}; expected one of {debayer_mod.FILL_POLICIES}.")
    arr = check_frame(frame, config)

    input_stats = compute_range(arr, config)
    logger.info("Input range: [%d, %d]", input_stats.minimum, input_stats.maximum)

    output_stats: Optional[RangeStats] = None
    normalized = False
    if normalize:
        try:
            normalize_frame(arr, config, stats=input_stats)
        except DegenerateRangeError:
            if not allow_flat:
                raise
            logger.warning(
                "Flat frame (all samples = %d); skipping normalization.", input_stats.minimum
            )
        else:
            normalized = True
            output_stats = compute_range(arr, config)

    # Normalization has finished for the whole frame before any pixel is read.
    image = debayer_mod.debayer(arr, config, fill=fill)
    logger.info("Debayered to %dx%d BGR image (fill=%s)", image.shape[1], image.shape[0], fill)
    return ConversionResult(
        image=image,
        input_stats=input_stats,
        output_stats=output_stats,
        normalized=normalized,
        fill=fill,
    )


def convert_file(
    src: str | Path,
    dst: str | Path,
    config: SensorConfig,
    normalize: bool = True,
    fill: str = "anchor",
    allow_flat: bool = False,
    preview: Optional[str | Path] = None,
) -> ConversionResult:
    """Read a raw RG10 file, convert it and write the TGA (and optional preview)."""
    frame = raw_io.read_raw_frame(src, config)
    result = convert_frame(frame, config, normalize=normalize, fill=fill, allow_flat=allow_flat)
    raw_io.write_tga(dst, result.image)
    if preview is not None:
        raw_io.save_preview(preview, result.image)
    return result


def _stats_dict(stats: Optional[RangeStats]) -> Optional[dict[str, int]]:
    if stats is None:
        return None
    return {"min": stats.minimum, "max": stats.maximum}


def conversion_report(result: ConversionResult, config: SensorConfig) -> dict[str, Any]:
    """JSON-ready summary of one conversion."""
    h, w = int(result.image.shape[0]), int(result.image.shape[1])
    return {
        "sensor": config.to_dict(),
        "output": {"width": w, "height": h, "channels": "BGR", "fill": result.fill},
        "normalized": result.normalized,
        "input_range": _stats_dict(result.input_stats),
        "output_range": _stats_dict(result.output_stats),
    }
