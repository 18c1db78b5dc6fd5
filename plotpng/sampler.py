from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from plotpng.config import CURVE_OVERSAMPLE
from plotpng.errors import DimensionPolicyError
from plotpng.expression import CompiledExpression, EvaluationContext, PlotMode


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveSamples:
    """(x, f(x)) pairs in generation order; x covers [0, 1)."""

    xs: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.xs.size)


@dataclass(frozen=True)
class SurfaceGrid:
    """Dense (width, height) grid of f(x, y), indexed [i, j]."""

    values: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self.values.shape[0]), int(self.values.shape[1]))


def sample_curve(
    expression: CompiledExpression,
    width: int,
    *,
    oversample: int = CURVE_OVERSAMPLE,
    context: EvaluationContext | None = None,
) -> CurveSamples:
    if width <= 0:
        raise ValueError("width must be > 0")
    if oversample <= 0:
        raise ValueError("oversample must be > 0")
    ctx = context if context is not None else EvaluationContext()
    count = width * oversample
    xs = np.arange(count, dtype=np.float64) / count
    values = np.empty(count, dtype=np.float64)
    with np.errstate(all="ignore"):
        for k in range(count):
            ctx.set(x=xs[k])
            values[k] = expression.evaluate(ctx)
    LOGGER.debug("sampled %d curve points for %r", count, expression.text)
    return CurveSamples(xs=xs, values=values)


def sample_surface(
    expression: CompiledExpression,
    width: int,
    height: int,
    *,
    context: EvaluationContext | None = None,
) -> SurfaceGrid:
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be > 0")
    if width != height:
        raise DimensionPolicyError(
            "Invalid dimensions.\n\nExpressions of the form f(x,y) can only be written to images with square "
            f"dimension.\ne.g. 200x300 is invalid, but 300x300 or 200x200 are valid (got {width}x{height})."
        )
    ctx = context if context is not None else EvaluationContext()
    values = np.empty((width, height), dtype=np.float64)
    with np.errstate(all="ignore"):
        for i in range(width):
            ctx.set(x=i / height)
            for j in range(height):
                ctx.set(y=j / width)
                values[i, j] = expression.evaluate(ctx)
    LOGGER.debug("sampled %dx%d surface grid for %r", width, height, expression.text)
    return SurfaceGrid(values=values)


def sample(
    expression: CompiledExpression,
    mode: PlotMode,
    width: int,
    height: int,
    *,
    oversample: int = CURVE_OVERSAMPLE,
) -> CurveSamples | SurfaceGrid:
    if mode is PlotMode.CURVE:
        return sample_curve(expression, width, oversample=oversample)
    if mode is PlotMode.SURFACE:
        return sample_surface(expression, width, height)
    raise ValueError(f"unsupported plot mode: {mode!r}")
