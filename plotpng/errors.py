from __future__ import annotations


class PlotError(Exception):
    """Base class for every fatal render or usage condition."""


class UsageError(PlotError):
    pass


class ExpressionCompileError(PlotError):
    pass


class ExpressionEvaluationError(PlotError):
    pass


class DimensionPolicyError(PlotError):
    pass


class ImageWriteError(PlotError):
    pass
