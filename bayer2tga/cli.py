"""Command line entry point: convert a raw RG10 frame to a TGA image."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import Optional

from bayer2tga import pipeline
from bayer2tga.config import DEFAULT_CONFIG, SensorConfig, load_config
from bayer2tga.debayer import FILL_POLICIES
from bayer2tga.errors import Bayer2TgaError
from bayer2tga.io import save_json

logger = logging.getLogger("bayer2tga")


def get_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bayer2tga",
        description="Convert a packed Bayer RG10 (RGGB) sensor frame to a 24-bit TGA image.",
    )
    parser.add_argument("input", help="Raw RG10 frame (16-bit little-endian samples)")
    parser.add_argument("output", help="Destination TGA file")
    parser.add_argument("--config", help="JSON sensor configuration")
    parser.add_argument("--width", type=int, help="Output width in pixels (2x2 blocks per row)")
    parser.add_argument("--height", type=int, help="Output height in pixels (block rows)")
    parser.add_argument(
        "--no-normalize",
        dest="normalize",
        action="store_false",
        help="Skip the min/max stretch before debayering",
    )
    parser.add_argument(
        "--allow-flat",
        action="store_true",
        help="Convert flat frames without normalization instead of failing",
    )
    parser.add_argument("--fill", choices=FILL_POLICIES, default="anchor", help="Output pixel placement")
    parser.add_argument("--preview", help="Also write a preview image (PNG, JPEG, ...)")
    parser.add_argument("--report", help="Write a JSON conversion report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SensorConfig:
    config = load_config(args.config) if args.config else DEFAULT_CONFIG
    overrides = {k: v for k, v in (("width", args.width), ("height", args.height)) if v is not None}
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def main(argv: Optional[list[str]] = None) -> int:
    args = get_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        config = build_config(args)
        result = pipeline.convert_file(
            args.input,
            args.output,
            config,
            normalize=args.normalize,
            fill=args.fill,
            allow_flat=args.allow_flat,
            preview=args.preview,
        )
        if args.report:
            save_json(args.report, pipeline.conversion_report(result, config))
    except Bayer2TgaError as exc:
        logger.error("%s failed: %s", exc.stage, exc)
        return 1
    except OSError as exc:
        logger.error("I/O error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
