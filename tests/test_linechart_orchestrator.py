from __future__ import annotations

import unittest
from unittest import mock

from luvatrix_linechart.animation import Compositor
from luvatrix_linechart.config import PlotConfiguration
from luvatrix_linechart.errors import InvalidValueError, RenderingError
from luvatrix_linechart.geometry import Insets, Rect
from luvatrix_linechart.orchestrator import PASS_ORDER, ChartOrchestrator
from luvatrix_linechart.passes import PassKind
from luvatrix_linechart.samples import SampleSet
from luvatrix_linechart.surface import LayeredSurface


BOUNDS = Rect(0, 0, 400, 300)
MONTHS = SampleSet.from_pairs(
    [("Jan", 10), ("Feb", 25), ("Mar", 18), ("Apr", 30), ("May", 22), ("Jun", 27)]
)


class ChartOrchestratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.now = 0
        self.surface = LayeredSurface()
        self.compositor = Compositor(clock=lambda: self.now)
        self.chart = ChartOrchestrator(self.surface, self.compositor)
        self.config = PlotConfiguration()

    def _layer_shapes(self) -> dict[str, tuple]:
        return {h.name: self.surface.shapes(h) for h in self.surface.layers()}

    def test_passes_run_in_fixed_order(self) -> None:
        report = self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertTrue(report.ok)
        self.assertFalse(report.skipped)
        self.assertEqual(report.rendered, list(PASS_ORDER))
        self.assertEqual(
            [p.kind for p in self.chart.passes],
            [PassKind.GRID, PassKind.AXES, PassKind.LABELS, PassKind.LINE_FILL, PassKind.DOTS],
        )

    def test_layer_stacking_puts_line_and_dots_on_top(self) -> None:
        names = [h.name for h in self.surface.layers()]
        self.assertEqual(names, ["grid", "axes", "labels", "line_fill", "dots"])

    def test_plot_rect_and_range_are_shared(self) -> None:
        report = self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertEqual(report.plot_rect, Rect(48, 24, 336, 244))
        self.assertEqual(report.value_range.min, 10.0)
        self.assertEqual(report.value_range.max, 30.0)
        self.assertEqual(self.chart.last_plot_rect, report.plot_rect)
        self.assertEqual(self.chart.last_value_range, report.value_range)

    def test_undersized_inputs_are_a_silent_no_op(self) -> None:
        cases = [
            (Rect(0, 0, 0, 300), MONTHS),
            (BOUNDS, SampleSet.from_pairs([("Jan", 1)])),
            (BOUNDS, SampleSet()),
        ]
        for bounds, samples in cases:
            report = self.chart.render_chart(bounds, self.config, samples)
            self.assertTrue(report.skipped)
            self.assertTrue(report.ok)
            self.assertEqual(report.rendered, [])
        self.assertTrue(all(not shapes for shapes in self._layer_shapes().values()))

    def test_insets_larger_than_bounds_skip_rendering(self) -> None:
        self.config.set_insets(Insets(top=200, left=10, bottom=200, right=10))
        report = self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertTrue(report.skipped)
        self.assertIn("insets", report.skip_reason or "")

    def test_degenerate_range_keeps_previous_chart(self) -> None:
        self.chart.render_chart(BOUNDS, self.config, MONTHS)
        before = self._layer_shapes()
        flat = SampleSet.from_pairs([("a", 5), ("b", 5), ("c", 5)])
        with self.assertLogs("luvatrix_linechart.orchestrator", level="WARNING"):
            report = self.chart.render_chart(BOUNDS, self.config, flat)
        self.assertFalse(report.ok)
        self.assertIsNone(report.failures[0].kind)
        self.assertIsInstance(report.failures[0].error, RenderingError)
        self.assertEqual(report.rendered, [])
        self.assertEqual(self._layer_shapes(), before)

    def test_flat_line_policy_draws_mid_height_line(self) -> None:
        self.config.set_degenerate_range_policy("flat_line")
        flat = SampleSet.from_pairs([("a", 5), ("b", 5), ("c", 5)])
        report = self.chart.render_chart(BOUNDS, self.config, flat)
        self.assertTrue(report.ok)
        line = self.chart.pass_for(PassKind.LINE_FILL).shapes()[-1]
        self.assertEqual(line.path.ys.tolist(), [146.0, 146.0, 146.0])

    def test_failing_pass_does_not_stop_later_passes(self) -> None:
        dots = self.chart.pass_for(PassKind.DOTS)
        with mock.patch.object(dots, "render", side_effect=RenderingError("boom")):
            with self.assertLogs("luvatrix_linechart.orchestrator", level="WARNING"):
                report = self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertEqual([f.kind for f in report.failures], [PassKind.DOTS])
        self.assertEqual(report.rendered, [PassKind.GRID, PassKind.AXES, PassKind.LABELS, PassKind.LINE_FILL])
        self.assertTrue(self.chart.pass_for(PassKind.GRID).shapes())

    def test_early_failure_does_not_suppress_line(self) -> None:
        grid = self.chart.pass_for(PassKind.GRID)
        with mock.patch.object(grid, "render", side_effect=RenderingError("boom")):
            with self.assertLogs("luvatrix_linechart.orchestrator", level="WARNING"):
                report = self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertIn(PassKind.LINE_FILL, report.rendered)
        self.assertIn(PassKind.DOTS, report.rendered)

    def test_any_chart_error_is_isolated_to_its_pass(self) -> None:
        labels = self.chart.pass_for(PassKind.LABELS)
        with mock.patch.object(labels, "render", side_effect=InvalidValueError("bad label value")):
            with self.assertLogs("luvatrix_linechart.orchestrator", level="WARNING"):
                report = self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertEqual([f.kind for f in report.failures], [PassKind.LABELS])
        self.assertIsInstance(report.failures[0].error, InvalidValueError)
        self.assertEqual(report.rendered, [PassKind.GRID, PassKind.AXES, PassKind.LINE_FILL, PassKind.DOTS])

    def test_programming_errors_propagate(self) -> None:
        axes = self.chart.pass_for(PassKind.AXES)
        with mock.patch.object(axes, "render", side_effect=TypeError("bug")):
            with self.assertRaises(TypeError):
                self.chart.render_chart(BOUNDS, self.config, MONTHS)

    def test_rerender_is_idempotent(self) -> None:
        self.chart.render_chart(BOUNDS, self.config, MONTHS)
        first = self._layer_shapes()
        self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.assertEqual(self._layer_shapes(), first)
        self.assertEqual(self.compositor.requests_issued, 2)

    def test_clear_component_then_render_component(self) -> None:
        self.chart.render_chart(BOUNDS, self.config, MONTHS)
        expected = self.chart.pass_for(PassKind.DOTS).shapes()
        self.chart.clear_component(PassKind.DOTS)
        self.assertEqual(self.chart.pass_for(PassKind.DOTS).shapes(), ())
        report = self.chart.render_component(PassKind.DOTS, BOUNDS, self.config, MONTHS)
        self.assertEqual(report.rendered, [PassKind.DOTS])
        self.assertEqual(self.chart.pass_for(PassKind.DOTS).shapes(), expected)

    def test_clear_and_destroy(self) -> None:
        self.chart.render_chart(BOUNDS, self.config, MONTHS)
        self.chart.clear()
        self.assertTrue(all(not shapes for shapes in self._layer_shapes().values()))
        self.chart.destroy()
        self.assertEqual(self.surface.layers(), [])


if __name__ == "__main__":
    unittest.main()
