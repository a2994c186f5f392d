"""Raw RG10 input and TGA/preview output for bayer2tga."""

from __future__ import annotations

import json
import logging
import struct
from pathlib import Path
from typing import Any

import cv2
import numpy as np

from bayer2tga.config import SensorConfig
from bayer2tga.errors import FrameSizeError, TgaFormatError
from bayer2tga.geometry import frame_from_buffer

logger = logging.getLogger(__name__)

TGA_HEADER_SIZE = 18
TGA_TRUE_COLOR = 2
TGA_BITS_PER_PIXEL = 24
TGA_TOP_LEFT_ORIGIN = 0x20
TGA_MAX_DIMENSION = 0xFFFF


def _frame_from_payload(payload: bytes, config: SensorConfig, source: str) -> np.ndarray:
    if len(payload) != config.input_size:
        raise FrameSizeError(config.input_size, len(payload), source=source)
    samples = np.frombuffer(payload, dtype=config.input_dtype)
    # Copy into native uint16 so the frame is writable for in-place normalization.
    return frame_from_buffer(samples.astype(np.uint16), config)


def read_raw_frame(path: str | Path, config: SensorConfig) -> np.ndarray:
    """Load one packed RG10 frame from disk as a (2H, 2W) uint16 mosaic."""
    path_obj = Path(path)
    size = path_obj.stat().st_size
    if size != config.input_size:
        raise FrameSizeError(config.input_size, size, source=str(path_obj))
    payload = path_obj.read_bytes()
    frame = _frame_from_payload(payload, config, source=str(path_obj))
    logger.info("Read %d bytes of raw mosaic from %s", len(payload), path_obj)
    return frame


def read_raw_bytes(payload: bytes, config: SensorConfig) -> np.ndarray:
    """Load one packed RG10 frame from an in-memory buffer."""
    return _frame_from_payload(bytes(payload), config, source="<bytes>")


def tga_header(width: int, height: int) -> bytes:
    """Minimal header for an uncompressed 24-bit top-left-origin TGA."""
    if not 0 < width <= TGA_MAX_DIMENSION or not 0 < height <= TGA_MAX_DIMENSION:
        raise TgaFormatError(
            f"TGA dimensions must be within 1..65535, got {width}x{height}.", stage="write"
        )
    header = bytearray(TGA_HEADER_SIZE)
    header[2] = TGA_TRUE_COLOR
    struct.pack_into("<HH", header, 12, width, height)
    header[16] = TGA_BITS_PER_PIXEL
    header[17] = TGA_TOP_LEFT_ORIGIN
    return bytes(header)


def _check_bgr(image: np.ndarray) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[-1] != 3 or arr.dtype != np.uint8:
        raise ValueError(f"Expected a (H, W, 3) uint8 BGR image, got {arr.shape} {arr.dtype}.")
    return arr


def write_tga(path: str | Path, image: np.ndarray) -> None:
    """Write a BGR image as an uncompressed TGA file."""
    arr = _check_bgr(image)
    height, width = int(arr.shape[0]), int(arr.shape[1])
    header = tga_header(width, height)
    out = Path(path)
    with out.open("wb") as handle:
        handle.write(header)
        handle.write(np.ascontiguousarray(arr).tobytes())
    logger.info("Wrote %dx%d TGA to %s", width, height, out)


def read_tga(path: str | Path) -> np.ndarray:
    """Read back the TGA subset produced by ``write_tga``."""
    path_obj = Path(path)
    payload = path_obj.read_bytes()
    if len(payload) < TGA_HEADER_SIZE:
        raise TgaFormatError(f"{path_obj} is too short for a TGA header.")

    id_length = payload[0]
    image_type = payload[2]
    width, height = struct.unpack_from("<HH", payload, 12)
    bits = payload[16]
    descriptor = payload[17]
    if payload[1] != 0 or image_type != TGA_TRUE_COLOR or bits != TGA_BITS_PER_PIXEL:
        raise TgaFormatError(
            f"{path_obj}: only uncompressed 24-bit true-color TGA is supported "
            f"(type={image_type}, bpp={bits})."
        )

    start = TGA_HEADER_SIZE + id_length
    size = width * height * 3
    if len(payload) < start + size:
        raise TgaFormatError(f"{path_obj}: truncated pixel data ({len(payload) - start} of {size} bytes).")
    image = np.frombuffer(payload, dtype=np.uint8, count=size, offset=start).reshape(height, width, 3)
    if not descriptor & TGA_TOP_LEFT_ORIGIN:
        image = image[::-1]
    return image.copy()


def save_preview(path: str | Path, image: np.ndarray) -> None:
    """Write the BGR image in any format OpenCV can encode (PNG, JPEG, ...)."""
    arr = _check_bgr(image)
    out = Path(path)
    try:
        ok = cv2.imwrite(str(out), arr)
    except cv2.error as exc:
        raise OSError(f"OpenCV could not write preview image {out}: {exc}") from exc
    if not ok:
        raise OSError(f"OpenCV could not write preview image: {out}")
    logger.info("Wrote preview to %s", out)


def save_json(path: str | Path, payload: dict[str, Any]) -> None:
    """Write JSON with stable formatting."""
    out = Path(path)
    out.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
