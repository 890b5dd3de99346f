from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
import logging

from luvatrix_linechart.animation import STROKE_END, AnimationRequest, Compositor
from luvatrix_linechart.config import PlotConfiguration
from luvatrix_linechart.geometry import Rect
from luvatrix_linechart.labels import MIN_LABEL_SPACING_PX, select_label_indices
from luvatrix_linechart.paths import PathBuilder
from luvatrix_linechart.raster import text_size
from luvatrix_linechart.samples import SampleSet, ValueRange
from luvatrix_linechart.scales import format_value_label
from luvatrix_linechart.surface import DotShape, FillShape, LayeredSurface, LayerHandle, Shape, StrokeShape, TextShape


LOGGER = logging.getLogger(__name__)

TICK_LENGTH_PX = 5.0
LABEL_GAP_PX = 4.0
AXIS_WIDTH_PX = 1.0
GRID_WIDTH_PX = 1.0


class PassKind(str, Enum):
    GRID = "grid"
    AXES = "axes"
    LABELS = "labels"
    LINE_FILL = "line_fill"
    DOTS = "dots"


def x_label_indices(samples: SampleSet, plot_width: float, config: PlotConfiguration) -> list[int]:
    """Label indices shared by the axes (ticks) and labels passes."""
    if len(samples) == 0:
        return []
    widest = max(text_size(label, font_size_px=config.label_font_size)[0] for label in samples.labels)
    spacing = max(MIN_LABEL_SPACING_PX, widest + LABEL_GAP_PX * 2)
    return select_label_indices(len(samples), plot_width, config.max_label_count, spacing)


class RenderPass(ABC):
    """One independently clearable chart layer.

    The pass adds its layer to the surface on construction and is the only
    writer of that layer until ``destroy``.
    """

    kind: PassKind

    def __init__(self, surface: LayeredSurface) -> None:
        self._surface = surface
        self._handle = surface.add_layer(self.kind.value)

    @property
    def handle(self) -> LayerHandle:
        return self._handle

    def shapes(self) -> tuple[Shape, ...]:
        return self._surface.shapes(self._handle)

    def clear(self) -> None:
        self._surface.clear(self._handle)

    def destroy(self) -> None:
        if self._surface.has_layer(self._handle):
            self._surface.remove_layer(self._handle)

    def render(self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange) -> None:
        self.clear()
        if not self.enabled(config):
            return
        shapes = self.build(bounds, config, samples, value_range)
        if shapes:
            generation = self._surface.replace(self._handle, shapes)
            self.after_draw(config, generation)
        LOGGER.debug("%s pass drew %d shapes", self.kind.value, len(shapes))

    def enabled(self, config: PlotConfiguration) -> bool:
        return True

    @abstractmethod
    def build(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange
    ) -> list[Shape]:
        raise NotImplementedError

    def after_draw(self, config: PlotConfiguration, generation: int) -> None:
        return None


class GridPass(RenderPass):
    kind = PassKind.GRID

    def enabled(self, config: PlotConfiguration) -> bool:
        return config.show_grid

    def build(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange
    ) -> list[Shape]:
        if not bounds.has_area:
            return []
        builder = PathBuilder(bounds, value_range)
        return [
            StrokeShape(path=line.path, color=config.grid_color, width=GRID_WIDTH_PX)
            for line in builder.gridlines(config.grid_line_count)
        ]


class AxesPass(RenderPass):
    kind = PassKind.AXES

    def build(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange
    ) -> list[Shape]:
        if not bounds.has_area:
            return []
        builder = PathBuilder(bounds, value_range)
        y_axis, x_axis = builder.axis_lines()
        shapes: list[Shape] = [
            StrokeShape(path=y_axis, color=config.axis_color, width=AXIS_WIDTH_PX),
            StrokeShape(path=x_axis, color=config.axis_color, width=AXIS_WIDTH_PX),
        ]
        indices = x_label_indices(samples, bounds.width, config)
        for tick in builder.axis_ticks(indices, len(samples), TICK_LENGTH_PX):
            shapes.append(StrokeShape(path=tick, color=config.axis_color, width=AXIS_WIDTH_PX))
        return shapes


class LabelsPass(RenderPass):
    kind = PassKind.LABELS

    def build(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange
    ) -> list[Shape]:
        if not bounds.has_area:
            return []
        builder = PathBuilder(bounds, value_range)
        shapes: list[Shape] = []
        if len(samples) >= 2:
            xs = builder.x_positions(len(samples))
            y = bounds.bottom + TICK_LENGTH_PX + LABEL_GAP_PX
            for i in x_label_indices(samples, bounds.width, config):
                shapes.append(
                    TextShape(
                        x=float(xs[i]),
                        y=y,
                        text=samples[i].label,
                        color=config.label_color,
                        font_size=config.label_font_size,
                    )
                )
        if config.show_grid and not value_range.is_degenerate:
            gridlines = builder.gridlines(config.grid_line_count)
            step = value_range.max / (len(gridlines) + 1) - value_range.min / (len(gridlines) + 1)
            for line in gridlines:
                shapes.append(
                    TextShape(
                        x=bounds.left - LABEL_GAP_PX,
                        y=float(line.path.ys[0]),
                        text=format_value_label(line.value, step=step),
                        color=config.label_color,
                        font_size=config.label_font_size,
                        anchor="middle-right",
                    )
                )
        return shapes


class LineFillPass(RenderPass):
    """Fill region and stroked line; each redraw restarts the draw-in animation."""

    kind = PassKind.LINE_FILL

    def __init__(self, surface: LayeredSurface, compositor: Compositor) -> None:
        super().__init__(surface)
        self._compositor = compositor

    def build(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange
    ) -> list[Shape]:
        builder = PathBuilder(bounds, value_range)
        line = builder.line_path(samples)
        shapes: list[Shape] = []
        if config.show_fill:
            shapes.append(
                FillShape(
                    path=builder.fill_path(samples),
                    top_color=config.fill_top_color,
                    bottom_color=config.fill_bottom_color,
                )
            )
        shapes.append(StrokeShape(path=line, color=config.line_color, width=config.line_width, animated=True))
        return shapes

    def after_draw(self, config: PlotConfiguration, generation: int) -> None:
        self._compositor.request(
            AnimationRequest(
                target=self._handle,
                generation=generation,
                key=STROKE_END,
                from_value=0.0,
                to_value=1.0,
                duration_s=config.animation_duration,
                issued_ns=self._compositor.now_ns(),
            )
        )


class DotsPass(RenderPass):
    kind = PassKind.DOTS

    def enabled(self, config: PlotConfiguration) -> bool:
        return config.show_dots

    def build(
        self, bounds: Rect, config: PlotConfiguration, samples: SampleSet, value_range: ValueRange
    ) -> list[Shape]:
        centers = PathBuilder(bounds, value_range).dot_centers(samples)
        return [DotShape(center=c, radius=config.dot_radius, color=config.dot_color) for c in centers]


__all__ = [
    "AxesPass",
    "DotsPass",
    "GridPass",
    "LabelsPass",
    "LineFillPass",
    "PassKind",
    "RenderPass",
    "x_label_indices",
]
