"""bayer2tga package for converting packed Bayer RG10 sensor frames to TGA images."""

__all__ = [
    "config",
    "errors",
    "geometry",
    "normalize",
    "debayer",
    "io",
    "pipeline",
    "cli",
]
