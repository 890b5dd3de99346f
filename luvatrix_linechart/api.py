from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from luvatrix_linechart.animation import Compositor
from luvatrix_linechart.compile import WriteBatch, compile_full_rewrite_batch, compile_replace_rect_batch
from luvatrix_linechart.config import PlotConfiguration
from luvatrix_linechart.geometry import Rect
from luvatrix_linechart.orchestrator import ChartOrchestrator
from luvatrix_linechart.samples import SampleSet
from luvatrix_linechart.surface import LayeredSurface


def line_chart(
    labels: Sequence[str] | np.ndarray,
    values: Sequence[Any] | np.ndarray,
    width: int,
    height: int,
    *,
    config: PlotConfiguration | None = None,
    compositor: Compositor | None = None,
    progress: float = 1.0,
) -> np.ndarray:
    """Render one line chart frame as a ``(height, width, 4)`` uint8 array.

    ``progress`` picks the point of the draw-in animation to sample, from 0.0
    (just issued) to 1.0 (complete).
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    config = config or PlotConfiguration()
    samples = SampleSet.from_columns(labels, values)
    surface = LayeredSurface()
    compositor = compositor or Compositor()
    orchestrator = ChartOrchestrator(surface, compositor)
    orchestrator.render_chart(Rect(0, 0, width, height), config, samples)
    now_ns = compositor.now_ns() + int(config.animation_duration * 1e9 * min(1.0, max(0.0, progress)))
    return compositor.compose(surface, width, height, background=config.background_color, now_ns=now_ns)


def line_chart_write_batch(
    labels: Sequence[str] | np.ndarray,
    values: Sequence[Any] | np.ndarray,
    width: int,
    height: int,
    *,
    config: PlotConfiguration | None = None,
    compositor: Compositor | None = None,
    progress: float = 1.0,
    dirty_rect: tuple[int, int, int, int] | None = None,
) -> WriteBatch:
    """Render a frame and wrap it as a host write batch.

    With ``dirty_rect`` only that region is sent; a rect outside the frame
    falls back to a full rewrite.
    """
    frame = line_chart(labels, values, width, height, config=config, compositor=compositor, progress=progress)
    if dirty_rect is None:
        return compile_full_rewrite_batch(frame)
    x, y, w, h = dirty_rect
    x0 = max(0, int(x))
    y0 = max(0, int(y))
    x1 = min(frame.shape[1], x0 + int(w))
    y1 = min(frame.shape[0], y0 + int(h))
    if x1 <= x0 or y1 <= y0:
        return compile_full_rewrite_batch(frame)
    return compile_replace_rect_batch(frame, x0, y0, x1 - x0, y1 - y0)
