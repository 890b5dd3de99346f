from luvatrix_linechart.animation import AnimationRequest, Compositor, ease_in_ease_out
from luvatrix_linechart.api import line_chart, line_chart_write_batch
from luvatrix_linechart.compile import FullRewrite, ReplaceRect, WriteBatch
from luvatrix_linechart.config import PlotConfiguration, SettingResult
from luvatrix_linechart.errors import ChartError, InvalidConfigurationError, InvalidValueError, RenderingError
from luvatrix_linechart.geometry import Insets, Rect
from luvatrix_linechart.labels import select_label_indices
from luvatrix_linechart.orchestrator import ChartOrchestrator, PassFailure, RenderReport
from luvatrix_linechart.passes import PassKind, RenderPass
from luvatrix_linechart.paths import Path2D, PathBuilder
from luvatrix_linechart.samples import Sample, SampleSet, ValueRange, compute_value_range
from luvatrix_linechart.scales import map_index, map_linear
from luvatrix_linechart.surface import LayeredSurface, LayerHandle

__all__ = [
    "AnimationRequest",
    "ChartError",
    "ChartOrchestrator",
    "Compositor",
    "FullRewrite",
    "InvalidConfigurationError",
    "InvalidValueError",
    "Insets",
    "LayerHandle",
    "LayeredSurface",
    "PassFailure",
    "PassKind",
    "Path2D",
    "PathBuilder",
    "PlotConfiguration",
    "Rect",
    "RenderPass",
    "RenderReport",
    "RenderingError",
    "ReplaceRect",
    "Sample",
    "SampleSet",
    "SettingResult",
    "ValueRange",
    "WriteBatch",
    "compute_value_range",
    "ease_in_ease_out",
    "line_chart",
    "line_chart_write_batch",
    "map_index",
    "map_linear",
    "select_label_indices",
]
