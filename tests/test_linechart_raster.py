from __future__ import annotations

import unittest

import numpy as np
import torch

from luvatrix_linechart import line_chart, line_chart_write_batch
from luvatrix_linechart.animation import AnimationRequest, Compositor, ease_in_ease_out
from luvatrix_linechart.compile import FullRewrite, ReplaceRect, compile_full_rewrite_batch, compile_replace_rect_batch
from luvatrix_linechart.config import PlotConfiguration
from luvatrix_linechart.errors import InvalidValueError
from luvatrix_linechart.geometry import Rect
from luvatrix_linechart.orchestrator import ChartOrchestrator
from luvatrix_linechart.passes import PassKind
from luvatrix_linechart.raster import draw_disc, draw_polyline, draw_text, fill_polygon_gradient, new_canvas
from luvatrix_linechart.samples import SampleSet
from luvatrix_linechart.surface import LayeredSurface


BOUNDS = Rect(0, 0, 400, 300)


class RasterTests(unittest.TestCase):
    def test_gradient_fill_runs_top_to_bottom(self) -> None:
        canvas = new_canvas(12, 12, color=(0, 0, 0, 255))
        xs = np.asarray([0.0, 10.0, 10.0, 0.0])
        ys = np.asarray([0.0, 0.0, 10.0, 10.0])
        fill_polygon_gradient(canvas, xs, ys, (255, 0, 0, 255), (0, 0, 255, 255))
        top = canvas[0, 5]
        bottom = canvas[9, 5]
        self.assertGreater(int(top[0]), int(top[2]))
        self.assertGreater(int(bottom[2]), int(bottom[0]))
        self.assertEqual(canvas[5, 11].tolist(), [0, 0, 0, 255])

    def test_disc_covers_center_only(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 255))
        draw_disc(canvas, 10.0, 10.0, 3.0, (255, 255, 255, 255))
        self.assertEqual(canvas[10, 10].tolist(), [255, 255, 255, 255])
        self.assertEqual(canvas[10, 16].tolist(), [0, 0, 0, 255])

    def test_polyline_reaches_both_ends(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 255))
        draw_polyline(canvas, np.asarray([2.0, 17.0]), np.asarray([3.0, 15.0]), (0, 255, 0, 255), width=1.0)
        self.assertEqual(canvas[3, 2].tolist(), [0, 255, 0, 255])
        self.assertEqual(canvas[15, 17].tolist(), [0, 255, 0, 255])

    def test_text_leaves_coverage(self) -> None:
        canvas = new_canvas(80, 30, color=(0, 0, 0, 255))
        draw_text(canvas, 2, 2, "Jan", (255, 255, 255, 255), font_size_px=16.0)
        self.assertTrue(np.any(canvas[:, :, 0] > 0))


class CompositorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.now = 0
        self.surface = LayeredSurface()
        self.compositor = Compositor(clock=lambda: self.now)

    def test_ease_in_ease_out_curve(self) -> None:
        self.assertEqual(ease_in_ease_out(0.0), 0.0)
        self.assertEqual(ease_in_ease_out(1.0), 1.0)
        self.assertAlmostEqual(ease_in_ease_out(0.5), 0.5)
        self.assertLess(ease_in_ease_out(0.1), 0.1)
        self.assertGreater(ease_in_ease_out(0.9), 0.9)
        self.assertEqual(ease_in_ease_out(2.0), 1.0)

    def _request(self, handle, generation: int, issued_ns: int, duration_s: float = 1.0) -> AnimationRequest:
        return AnimationRequest(
            target=handle,
            generation=generation,
            key="stroke_end",
            from_value=0.0,
            to_value=1.0,
            duration_s=duration_s,
            issued_ns=issued_ns,
        )

    def test_progress_follows_clock(self) -> None:
        handle = self.surface.add_layer("line")
        generation = self.surface.replace(handle, ())
        self.compositor.request(self._request(handle, generation, issued_ns=0))
        self.assertEqual(self.compositor.progress(self.surface, handle, now_ns=0), 0.0)
        self.assertAlmostEqual(self.compositor.progress(self.surface, handle, now_ns=500_000_000), 0.5)
        self.assertEqual(self.compositor.progress(self.surface, handle, now_ns=2_000_000_000), 1.0)
        self.assertTrue(self.compositor.is_animating(self.surface, now_ns=500_000_000))
        self.assertFalse(self.compositor.is_animating(self.surface, now_ns=2_000_000_000))

    def test_zero_duration_is_complete(self) -> None:
        handle = self.surface.add_layer("line")
        generation = self.surface.replace(handle, ())
        self.compositor.request(self._request(handle, generation, issued_ns=0, duration_s=0.0))
        self.assertEqual(self.compositor.progress(self.surface, handle, now_ns=0), 1.0)

    def test_newer_request_supersedes_older(self) -> None:
        handle = self.surface.add_layer("line")
        generation = self.surface.replace(handle, ())
        self.compositor.request(self._request(handle, generation, issued_ns=0))
        self.compositor.request(self._request(handle, generation, issued_ns=1_000_000_000))
        self.assertEqual(self.compositor.progress(self.surface, handle, now_ns=1_000_000_000), 0.0)

    def test_replaced_content_drops_stale_animation(self) -> None:
        handle = self.surface.add_layer("line")
        generation = self.surface.replace(handle, ())
        self.compositor.request(self._request(handle, generation, issued_ns=0))
        self.surface.clear(handle)
        self.assertEqual(self.compositor.progress(self.surface, handle, now_ns=0), 1.0)

    def test_removed_layer_discards_request_on_compose(self) -> None:
        handle = self.surface.add_layer("line")
        generation = self.surface.replace(handle, ())
        self.compositor.request(self._request(handle, generation, issued_ns=0))
        self.surface.remove_layer(handle)
        self.compositor.compose(self.surface, 10, 10, now_ns=0)
        self.assertIsNone(self.compositor.active_request(handle))

    def test_unknown_layer_handle_is_a_key_error(self) -> None:
        handle = self.surface.add_layer("line")
        self.surface.remove_layer(handle)
        with self.assertRaises(KeyError):
            self.surface.shapes(handle)


class ComposedChartTests(unittest.TestCase):
    def setUp(self) -> None:
        self.now = 0
        self.surface = LayeredSurface()
        self.compositor = Compositor(clock=lambda: self.now)
        self.chart = ChartOrchestrator(self.surface, self.compositor)
        self.config = PlotConfiguration()

    def test_dots_occlude_axes_and_grid(self) -> None:
        samples = SampleSet.from_pairs([("Jan", 10), ("Feb", 25), ("Mar", 15)])
        self.chart.render_chart(BOUNDS, self.config, samples)
        frame = self.compositor.compose(self.surface, 400, 300, now_ns=10_000_000_000)
        centers = [s.center for s in self.chart.pass_for(PassKind.DOTS).shapes()]
        self.assertEqual(len(centers), 3)
        for cx, cy in centers:
            self.assertEqual(tuple(frame[int(round(cy)), int(round(cx))].tolist()), self.config.dot_color)

    def test_line_draws_in_over_time(self) -> None:
        self.config.update(show_fill=False, show_dots=False, show_grid=False, animation_duration=1.0)
        samples = SampleSet.from_pairs([("Jan", 10), ("Feb", 25)])
        self.chart.render_chart(BOUNDS, self.config, samples)
        background = self.config.background_color

        start = self.compositor.compose(self.surface, 400, 300, background=background, now_ns=0)
        self.assertEqual(tuple(start[24, 384].tolist()), background)

        done = self.compositor.compose(self.surface, 400, 300, background=background, now_ns=1_000_000_000)
        self.assertEqual(tuple(done[24, 384].tolist()), self.config.line_color)

    def test_line_chart_entry_point(self) -> None:
        frame = line_chart(["Jan", "Feb", "Mar"], [10, 25, 18], 320, 240)
        self.assertEqual(frame.shape, (240, 320, 4))
        self.assertEqual(frame.dtype, np.uint8)
        with self.assertRaises(InvalidValueError):
            line_chart(["Jan", "Feb"], [10, float("nan")], 320, 240)


class CompileTests(unittest.TestCase):
    def test_full_rewrite_wraps_frame(self) -> None:
        frame = new_canvas(8, 4, color=(1, 2, 3, 255))
        batch = compile_full_rewrite_batch(frame)
        self.assertEqual(len(batch.operations), 1)
        op = batch.operations[0]
        self.assertIsInstance(op, FullRewrite)
        self.assertEqual(tuple(op.tensor_h_w_4.shape), (4, 8, 4))
        self.assertEqual(op.tensor_h_w_4.dtype, torch.uint8)

    def test_replace_rect_checks_bounds(self) -> None:
        frame = new_canvas(8, 4)
        batch = compile_replace_rect_batch(frame, 2, 1, 4, 2)
        op = batch.operations[0]
        self.assertIsInstance(op, ReplaceRect)
        self.assertEqual(tuple(op.rect_h_w_4.shape), (2, 4, 4))
        with self.assertRaises(ValueError):
            compile_replace_rect_batch(frame, 6, 0, 4, 2)
        with self.assertRaises(ValueError):
            compile_full_rewrite_batch(frame.astype(np.float32))

    def test_line_chart_write_batch(self) -> None:
        batch = line_chart_write_batch(["a", "b", "c"], [1.0, 3.0, 2.0], 64, 48)
        op = batch.operations[0]
        self.assertIsInstance(op, FullRewrite)
        self.assertEqual(tuple(op.tensor_h_w_4.shape), (48, 64, 4))

    def test_line_chart_write_batch_clips_dirty_rect(self) -> None:
        batch = line_chart_write_batch(["a", "b"], [1.0, 2.0], 64, 48, dirty_rect=(60, 40, 10, 10))
        op = batch.operations[0]
        self.assertIsInstance(op, ReplaceRect)
        self.assertEqual((op.x, op.y, op.width, op.height), (60, 40, 4, 8))
        self.assertEqual(tuple(op.rect_h_w_4.shape), (8, 4, 4))
        outside = line_chart_write_batch(["a", "b"], [1.0, 2.0], 64, 48, dirty_rect=(70, 0, 5, 5))
        self.assertIsInstance(outside.operations[0], FullRewrite)


if __name__ == "__main__":
    unittest.main()
