from __future__ import annotations

import numpy as np


RGB = tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLUE: RGB = (0, 0, 255)
BLACK: RGB = (0, 0, 0)


def new_canvas(width: int, height: int, color: RGB = BLACK) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be > 0")
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    fill(canvas, color)
    return canvas


def fill(dst: np.ndarray, color: RGB) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGB) -> bool:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return False
    dst[y, x, 0:3] = color
    return True


def check_canvas(canvas: np.ndarray) -> tuple[int, int]:
    """Return (width, height) of an (H, W, 3) uint8 canvas."""
    if canvas.dtype != np.uint8:
        raise ValueError("canvas must be uint8")
    if canvas.ndim != 3 or canvas.shape[2] != 3:
        raise ValueError("canvas must have shape (H, W, 3)")
    return int(canvas.shape[1]), int(canvas.shape[0])
