from __future__ import annotations

from dataclasses import dataclass, field
import logging

from luvatrix_linechart.animation import Compositor
from luvatrix_linechart.config import PlotConfiguration
from luvatrix_linechart.errors import ChartError, RenderingError
from luvatrix_linechart.geometry import Rect, plot_rect_for
from luvatrix_linechart.passes import AxesPass, DotsPass, GridPass, LabelsPass, LineFillPass, PassKind, RenderPass
from luvatrix_linechart.samples import MIN_RENDER_SAMPLES, SampleSet, ValueRange, compute_value_range
from luvatrix_linechart.surface import LayeredSurface


LOGGER = logging.getLogger(__name__)

PASS_ORDER: tuple[PassKind, ...] = (
    PassKind.GRID,
    PassKind.AXES,
    PassKind.LABELS,
    PassKind.LINE_FILL,
    PassKind.DOTS,
)


@dataclass(frozen=True)
class PassFailure:
    kind: PassKind | None
    error: ChartError


@dataclass
class RenderReport:
    """Outcome of one render cycle.

    A pass raising any ``ChartError`` is recorded in ``failures`` and the
    remaining passes still run. Other exceptions propagate.
    """

    rendered: list[PassKind] = field(default_factory=list)
    failures: list[PassFailure] = field(default_factory=list)
    skipped: bool = False
    skip_reason: str | None = None
    plot_rect: Rect | None = None
    value_range: ValueRange | None = None

    @property
    def ok(self) -> bool:
        return not self.failures


class ChartOrchestrator:
    """Runs the chart render passes over one shared layout per cycle."""

    def __init__(self, surface: LayeredSurface, compositor: Compositor) -> None:
        self.surface = surface
        self.compositor = compositor
        self._passes: dict[PassKind, RenderPass] = {
            PassKind.GRID: GridPass(surface),
            PassKind.AXES: AxesPass(surface),
            PassKind.LABELS: LabelsPass(surface),
            PassKind.LINE_FILL: LineFillPass(surface, compositor),
            PassKind.DOTS: DotsPass(surface),
        }
        self._last_plot_rect: Rect | None = None
        self._last_value_range: ValueRange | None = None

    @property
    def passes(self) -> tuple[RenderPass, ...]:
        return tuple(self._passes[kind] for kind in PASS_ORDER)

    def pass_for(self, kind: PassKind) -> RenderPass:
        return self._passes[kind]

    @property
    def last_plot_rect(self) -> Rect | None:
        return self._last_plot_rect

    @property
    def last_value_range(self) -> ValueRange | None:
        return self._last_value_range

    def render_chart(self, bounds: Rect, config: PlotConfiguration, samples: SampleSet) -> RenderReport:
        report = RenderReport()
        layout = self._layout(bounds, config, samples, report)
        if layout is None:
            return report
        plot_rect, value_range = layout
        for kind in PASS_ORDER:
            self._run_pass(kind, plot_rect, config, samples, value_range, report)
        return report

    def render_component(self, kind: PassKind, bounds: Rect, config: PlotConfiguration, samples: SampleSet) -> RenderReport:
        report = RenderReport()
        layout = self._layout(bounds, config, samples, report)
        if layout is None:
            return report
        plot_rect, value_range = layout
        self._run_pass(kind, plot_rect, config, samples, value_range, report)
        return report

    def clear_component(self, kind: PassKind) -> None:
        self._passes[kind].clear()

    def clear(self) -> None:
        for render_pass in self.passes:
            render_pass.clear()

    def destroy(self) -> None:
        for render_pass in self.passes:
            render_pass.destroy()

    def _layout(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, report: RenderReport
    ) -> tuple[Rect, ValueRange] | None:
        if not bounds.has_area or len(samples) < MIN_RENDER_SAMPLES:
            return self._skip(report, f"nothing to draw: bounds {bounds.width:g}x{bounds.height:g}, {len(samples)} samples")

        plot_rect = plot_rect_for(bounds, config.insets)
        if not plot_rect.has_area:
            return self._skip(report, f"plot rect has no area after insets: {plot_rect.width:g}x{plot_rect.height:g}")

        value_range = compute_value_range(samples)
        if value_range.is_degenerate:
            if config.degenerate_range_policy == "flat_line":
                value_range = value_range.padded_for_flat_line()
            else:
                # Previous layers stay on screen; nothing is cleared.
                error = RenderingError(f"degenerate value range: all samples equal {value_range.min:g}")
                LOGGER.warning("skipping chart render: %s", error)
                report.failures.append(PassFailure(kind=None, error=error))
                return None

        self._last_plot_rect = plot_rect
        self._last_value_range = value_range
        report.plot_rect = plot_rect
        report.value_range = value_range
        return plot_rect, value_range

    @staticmethod
    def _skip(report: RenderReport, reason: str) -> None:
        LOGGER.debug("render skipped: %s", reason)
        report.skipped = True
        report.skip_reason = reason
        return None

    def _run_pass(
        self,
        kind: PassKind,
        plot_rect: Rect,
        config: PlotConfiguration,
        samples: SampleSet,
        value_range: ValueRange,
        report: RenderReport,
    ) -> None:
        try:
            self._passes[kind].render(plot_rect, config, samples, value_range)
        except ChartError as exc:
            LOGGER.warning("%s pass failed: %s", kind.value, exc)
            report.failures.append(PassFailure(kind=kind, error=exc))
            return
        report.rendered.append(kind)
