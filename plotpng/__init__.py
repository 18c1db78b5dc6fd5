from plotpng.config import RenderConfig
from plotpng.errors import (
    DimensionPolicyError,
    ExpressionCompileError,
    ExpressionEvaluationError,
    ImageWriteError,
    PlotError,
    UsageError,
)
from plotpng.expression import CompiledExpression, EvaluationContext, PlotMode, classify_plot_mode, compile_expression
from plotpng.render import ExpressionRenderer, RenderResult, RenderState, render_expression

__all__ = [
    "CompiledExpression",
    "DimensionPolicyError",
    "EvaluationContext",
    "ExpressionCompileError",
    "ExpressionEvaluationError",
    "ExpressionRenderer",
    "ImageWriteError",
    "PlotError",
    "PlotMode",
    "RenderConfig",
    "RenderResult",
    "RenderState",
    "UsageError",
    "classify_plot_mode",
    "compile_expression",
    "render_expression",
]
