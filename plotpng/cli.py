from __future__ import annotations

import argparse
import logging
import sys

from plotpng.config import RenderConfig
from plotpng.encoder import image_format_for, write_image
from plotpng.errors import ExpressionCompileError, PlotError, UsageError
from plotpng.render import ExpressionRenderer


LOGGER = logging.getLogger("plotpng")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plotpng",
        description="Plot f(x) as a curve or f(x,y) as a red-to-blue heat map into an image file.",
    )
    parser.add_argument("output_file", help='Output image path, e.g. "plot.png".')
    parser.add_argument("expression", help='Bare expression in x (and optionally y), e.g. "x^2" or "x*y".')
    parser.add_argument("-v", "--verbose", action="store_true", help="Log render details to stderr.")
    return parser


def validate_arguments(output_file: str, expression: str) -> None:
    image_format_for(output_file)
    if "=" in expression:
        raise UsageError(
            "Invalid expression given.\nExpressions of the form y=f(x) or z=f(x,y) should be written "
            'f(x) or f(x,y) respectively.\ne.g. to plot y=x^2, provide "x^2" as the expression.'
        )
    if "y" in expression and "x" not in expression:
        LOGGER.warning(
            "No x variable in expression %r; treating it as f(x,y). Univariable expressions should be "
            'written in terms of x, e.g. "y^2" should be written "x^2", else it is treated as "0*x + y^2".',
            expression,
        )


def main(argv: list[str] | None = None, *, config: RenderConfig | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    cfg = config if config is not None else RenderConfig()

    try:
        validate_arguments(args.output_file, args.expression)
        if cfg.exceeds_soft_limit:
            LOGGER.warning(
                "Potential unexpected behaviour at dimensions greater than %d (got %dx%d).",
                cfg.soft_dimension_limit,
                cfg.width,
                cfg.height,
            )
        result = ExpressionRenderer(cfg).render(args.expression)
        write_image(args.output_file, result.canvas, cfg)
    except PlotError as exc:
        label = "Fatal error" if isinstance(exc, ExpressionCompileError) else "Error"
        print("Program aborted. See stderr for more information.", file=sys.stdout)
        print(f"{label}: {exc}", file=sys.stderr)
        return 1

    print(f"File {args.output_file} successfully created.")
    return 0
