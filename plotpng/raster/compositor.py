from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np

from plotpng.raster.canvas import BLACK, BLUE, WHITE, check_canvas, draw_pixel, fill
from plotpng.sampler import CurveSamples, SurfaceGrid


LOGGER = logging.getLogger(__name__)
FLAT_SURFACE_LEVEL = 0.5


@dataclass(frozen=True)
class CurveStats:
    plotted: int
    clipped: int


@dataclass(frozen=True)
class SurfaceStats:
    minimum: float | None
    maximum: float | None
    non_finite: int

    @property
    def flat(self) -> bool:
        return self.minimum is not None and self.minimum == self.maximum


def composite_curve(canvas: np.ndarray, samples: CurveSamples) -> CurveStats:
    """Trace f(x) in blue over a white background.

    Results outside [0, 1) and non-finite results are clipped silently.
    Row indices are flipped so larger values sit higher in the image.
    """
    width, height = check_canvas(canvas)
    fill(canvas, WHITE)

    plotted = 0
    clipped = 0
    for x, result in zip(samples.xs.tolist(), samples.values.tolist()):
        if not math.isfinite(result) or result < 0.0 or result >= 1.0:
            clipped += 1
            continue
        x_pixel = math.floor(x * width)
        y_pixel = math.floor(result * height)
        if draw_pixel(canvas, x_pixel, (height - 1) - y_pixel, BLUE):
            plotted += 1
        else:
            clipped += 1
    return CurveStats(plotted=plotted, clipped=clipped)


def normalize_surface(values: np.ndarray) -> tuple[np.ndarray, SurfaceStats]:
    """Rescale a surface grid into [0, 1] using its finite min and max.

    A flat grid maps every finite cell to 0.5. ``+inf`` maps to 1 and
    ``-inf`` to 0; ``nan`` stays ``nan`` and is left for the caller to paint.
    """
    finite = np.isfinite(values)
    p = np.full(values.shape, FLAT_SURFACE_LEVEL, dtype=np.float64)
    minimum: float | None = None
    maximum: float | None = None
    if np.any(finite):
        minimum = float(np.min(values[finite]))
        maximum = float(np.max(values[finite]))
        if maximum > minimum:
            p[finite] = (values[finite] - minimum) / (maximum - minimum)
    p[np.isposinf(values)] = 1.0
    p[np.isneginf(values)] = 0.0
    p[np.isnan(values)] = np.nan
    return p, SurfaceStats(minimum=minimum, maximum=maximum, non_finite=int(values.size - np.count_nonzero(finite)))


def gradient_colors(p: np.ndarray) -> np.ndarray:
    """Map p in [0, 1] to red (low) .. blue (high); nan cells become black."""
    nan = np.isnan(p)
    safe = np.where(nan, 0.0, p)
    colors = np.zeros(p.shape + (3,), dtype=np.uint8)
    colors[..., 0] = np.floor(255.0 * (1.0 - safe)).astype(np.uint8)
    colors[..., 2] = np.floor(255.0 * safe).astype(np.uint8)
    colors[nan] = BLACK
    return colors


def composite_surface(canvas: np.ndarray, grid: SurfaceGrid) -> SurfaceStats:
    width, height = check_canvas(canvas)
    if grid.shape != (width, height):
        raise ValueError(f"grid shape {grid.shape} does not match canvas {width}x{height}")
    if width != height:
        raise ValueError("surface compositing requires a square canvas")

    p, stats = normalize_surface(grid.values)
    colors = gradient_colors(p)
    # cell (i, j) lands on row (W - 1) - i, column j
    canvas[:, :, :] = colors[::-1, :, :]
    if stats.non_finite:
        LOGGER.warning("%d surface cell(s) evaluated to a non-finite value", stats.non_finite)
    if stats.flat:
        LOGGER.warning("surface is flat; rendering uniform mid-gradient colour")
    return stats
