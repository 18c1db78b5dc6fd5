from __future__ import annotations

from dataclasses import dataclass
import enum
import logging

import numpy as np

from plotpng.config import RenderConfig
from plotpng.errors import DimensionPolicyError
from plotpng.expression import CompiledExpression, PlotMode, classify_plot_mode, compile_expression
from plotpng.raster.canvas import new_canvas
from plotpng.raster.compositor import CurveStats, SurfaceStats, composite_curve, composite_surface
from plotpng.sampler import CurveSamples, sample


LOGGER = logging.getLogger(__name__)


class RenderState(enum.Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    SAMPLING = "sampling"
    COMPOSITING = "compositing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class RenderResult:
    canvas: np.ndarray
    mode: PlotMode
    sample_count: int
    stats: CurveStats | SurfaceStats

    @property
    def width(self) -> int:
        return int(self.canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self.canvas.shape[0])


class ExpressionRenderer:
    """Compile, sample and composite one expression into an RGB canvas."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = (config if config is not None else RenderConfig()).validate()
        self._state = RenderState.IDLE
        self._last_error: Exception | None = None

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def render(self, text: str) -> RenderResult:
        cfg = self._config
        mode = classify_plot_mode(text)
        LOGGER.debug("expression %r classified as %s", text, mode.value)
        self._last_error = None
        expression: CompiledExpression | None = None
        try:
            self._state = RenderState.COMPILING
            expression = compile_expression(text)
            if mode is PlotMode.SURFACE and not cfg.is_square:
                raise DimensionPolicyError(
                    "Invalid dimensions.\n\nExpressions of the form f(x,y) can only be written to images with "
                    f"square dimension.\ne.g. 200x300 is invalid, but 300x300 or 200x200 are valid "
                    f"(got {cfg.width}x{cfg.height})."
                )

            self._state = RenderState.SAMPLING
            samples = sample(expression, mode, cfg.width, cfg.height, oversample=cfg.curve_oversample)
            count = len(samples) if isinstance(samples, CurveSamples) else int(samples.values.size)
        except Exception as exc:
            self._state = RenderState.FAILED
            self._last_error = exc
            raise
        finally:
            if expression is not None:
                expression.release()

        self._state = RenderState.COMPOSITING
        canvas = new_canvas(cfg.width, cfg.height)
        stats: CurveStats | SurfaceStats
        if isinstance(samples, CurveSamples):
            stats = composite_curve(canvas, samples)
        else:
            stats = composite_surface(canvas, samples)
        self._state = RenderState.DONE
        LOGGER.debug("rendered %r: mode=%s samples=%d stats=%s", text, mode.value, count, stats)
        return RenderResult(canvas=canvas, mode=mode, sample_count=count, stats=stats)


def render_expression(text: str, config: RenderConfig | None = None) -> RenderResult:
    return ExpressionRenderer(config).render(text)
