from .canvas import BLACK, BLUE, RGB, WHITE, check_canvas, draw_pixel, fill, new_canvas
from .compositor import (
    CurveStats,
    SurfaceStats,
    composite_curve,
    composite_surface,
    gradient_colors,
    normalize_surface,
)

__all__ = [
    "BLACK",
    "BLUE",
    "CurveStats",
    "RGB",
    "SurfaceStats",
    "WHITE",
    "check_canvas",
    "composite_curve",
    "composite_surface",
    "draw_pixel",
    "fill",
    "gradient_colors",
    "new_canvas",
    "normalize_surface",
]
