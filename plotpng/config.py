from __future__ import annotations

from dataclasses import dataclass


DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 300
DEFAULT_BIT_DEPTH = 8
DEFAULT_COLOR_MODE = "RGB"
CURVE_OVERSAMPLE = 50
SOFT_DIMENSION_LIMIT = 1400
SUPPORTED_EXTENSIONS = {
    ".png": "PNG",
    ".bmp": "BMP",
    ".ppm": "PPM",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}


@dataclass(frozen=True)
class RenderConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    bit_depth: int = DEFAULT_BIT_DEPTH
    color_mode: str = DEFAULT_COLOR_MODE
    curve_oversample: int = CURVE_OVERSAMPLE
    soft_dimension_limit: int = SOFT_DIMENSION_LIMIT

    def validate(self) -> "RenderConfig":
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width/height must be > 0")
        if self.curve_oversample <= 0:
            raise ValueError("curve_oversample must be > 0")
        if self.bit_depth != 8:
            raise ValueError(f"unsupported bit depth: {self.bit_depth}")
        if self.color_mode != "RGB":
            raise ValueError(f"unsupported color mode: {self.color_mode}")
        return self

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @property
    def exceeds_soft_limit(self) -> bool:
        return self.width > self.soft_dimension_limit or self.height > self.soft_dimension_limit
