from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from plotpng.config import RenderConfig
from plotpng.errors import DimensionPolicyError, ExpressionCompileError, ExpressionEvaluationError
from plotpng.expression import PlotMode
from plotpng.render import ExpressionRenderer, RenderState, render_expression


class RenderPipelineTests(unittest.TestCase):
    def test_curve_render_is_blue_on_white(self) -> None:
        renderer = ExpressionRenderer()
        result = renderer.render("x^2")
        self.assertIs(renderer.state, RenderState.DONE)
        self.assertIs(result.mode, PlotMode.CURVE)
        self.assertEqual(result.canvas.shape, (300, 300, 3))
        self.assertEqual(result.sample_count, 300 * 50)
        canvas = result.canvas
        blue = np.all(canvas == (0, 0, 255), axis=2)
        white = np.all(canvas == (255, 255, 255), axis=2)
        self.assertTrue(np.all(blue | white))
        self.assertTrue(blue[299, 0])
        self.assertTrue(np.any(blue[0:2, 299]))

    def test_surface_corners_follow_min_and_max(self) -> None:
        result = render_expression("x*y", RenderConfig(width=20, height=20))
        self.assertIs(result.mode, PlotMode.SURFACE)
        self.assertEqual(result.sample_count, 400)
        self.assertEqual(tuple(result.canvas[19, 0]), (255, 0, 0))
        self.assertEqual(tuple(result.canvas[0, 19]), (0, 0, 255))
        self.assertTrue(np.all(result.canvas[:, :, 1] == 0))

    def test_constant_surface_renders_uniform_mid_gradient(self) -> None:
        result = render_expression("0*y", RenderConfig(width=8, height=8))
        self.assertTrue(result.stats.flat)
        self.assertTrue(np.all(result.canvas == np.asarray([127, 0, 127], dtype=np.uint8)))

    def test_division_by_zero_in_curve_is_clipped(self) -> None:
        result = render_expression("1/(x*10)", RenderConfig(width=10, height=10))
        self.assertGreater(result.stats.clipped, 0)
        self.assertGreater(result.stats.plotted, 0)

    def test_non_square_surface_fails_before_sampling_or_pixels(self) -> None:
        renderer = ExpressionRenderer(RenderConfig(width=300, height=200))
        with mock.patch("plotpng.render.sample") as sampler, mock.patch("plotpng.render.new_canvas") as canvas:
            with self.assertRaises(DimensionPolicyError):
                renderer.render("x*y")
        sampler.assert_not_called()
        canvas.assert_not_called()
        self.assertIs(renderer.state, RenderState.FAILED)
        self.assertIsInstance(renderer.last_error, DimensionPolicyError)

    def test_integer_constant_beyond_float_range_is_clipped(self) -> None:
        result = render_expression("10^400", RenderConfig(width=4, height=4))
        self.assertEqual(result.stats.plotted, 0)
        self.assertEqual(result.stats.clipped, result.sample_count)
        self.assertTrue(np.all(result.canvas == 255))

    def test_literal_division_by_zero_curve_is_clipped(self) -> None:
        result = render_expression("x/0", RenderConfig(width=4, height=4))
        self.assertIs(result.mode, PlotMode.CURVE)
        self.assertEqual(result.stats.plotted, 0)
        self.assertTrue(np.all(result.canvas == 255))

    def test_literal_division_by_zero_surface_is_black(self) -> None:
        with self.assertLogs("plotpng.raster.compositor", level="WARNING"):
            result = render_expression("x*y/0", RenderConfig(width=4, height=4))
        self.assertIs(result.mode, PlotMode.SURFACE)
        self.assertEqual(result.stats.non_finite, 16)
        self.assertTrue(np.all(result.canvas == 0))

    def test_non_square_curve_is_allowed(self) -> None:
        result = render_expression("x", RenderConfig(width=30, height=20))
        self.assertEqual(result.canvas.shape, (20, 30, 3))

    def test_compile_error_aborts_render(self) -> None:
        renderer = ExpressionRenderer()
        with mock.patch("plotpng.render.sample") as sampler:
            with self.assertRaises(ExpressionCompileError):
                renderer.render("k^2")
        sampler.assert_not_called()
        self.assertIs(renderer.state, RenderState.FAILED)

    def test_expression_is_released_when_sampling_fails(self) -> None:
        seen = []

        def _fail(expression, mode, width, height, oversample):
            seen.append((expression, mode))
            raise ExpressionEvaluationError("boom")

        renderer = ExpressionRenderer(RenderConfig(width=4, height=4))
        with mock.patch("plotpng.render.sample", side_effect=_fail):
            with self.assertRaises(ExpressionEvaluationError):
                renderer.render("x")
        self.assertEqual(len(seen), 1)
        self.assertIs(seen[0][1], PlotMode.CURVE)
        self.assertTrue(seen[0][0].released)
        self.assertIs(renderer.state, RenderState.FAILED)

    def test_invalid_config_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ExpressionRenderer(RenderConfig(width=0))
        with self.assertRaises(ValueError):
            ExpressionRenderer(RenderConfig(bit_depth=16))


if __name__ == "__main__":
    unittest.main()
