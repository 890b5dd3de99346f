from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable, Literal

import numpy as np

from luvatrix_linechart.paths import trim_path
from luvatrix_linechart.raster import (
    draw_disc,
    draw_polyline,
    draw_text,
    fill_polygon_gradient,
    new_canvas,
    text_size,
)
from luvatrix_linechart.surface import (
    RGBA,
    DotShape,
    FillShape,
    LayeredSurface,
    LayerHandle,
    Shape,
    StrokeShape,
    TextShape,
)


LOGGER = logging.getLogger(__name__)

TimingCurve = Literal["linear", "ease_in_ease_out"]
STROKE_END = "stroke_end"


def ease_in_ease_out(t: float) -> float:
    t = min(1.0, max(0.0, t))
    return t * t * (3.0 - 2.0 * t)


_TIMING: dict[str, Callable[[float], float]] = {
    "linear": lambda t: min(1.0, max(0.0, t)),
    "ease_in_ease_out": ease_in_ease_out,
}


@dataclass(frozen=True)
class AnimationRequest:
    """Fire-and-forget property animation on one layer's current content."""

    target: LayerHandle
    generation: int
    key: str
    from_value: float
    to_value: float
    duration_s: float
    issued_ns: int
    timing: TimingCurve = "ease_in_ease_out"

    def value_at(self, now_ns: int) -> float:
        if self.duration_s <= 0:
            return self.to_value
        elapsed = (now_ns - self.issued_ns) / 1e9
        eased = _TIMING[self.timing](elapsed / self.duration_s)
        return self.from_value + (self.to_value - self.from_value) * eased


class Compositor:
    """Presents a ``LayeredSurface`` as RGBA frames and runs property animations.

    A newer request for a target supersedes the previous one; a request made
    for an older layer generation no longer applies once the layer content is
    replaced. Nothing here is awaited by callers.
    """

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock
        self._requests: dict[int, AnimationRequest] = {}
        self.requests_issued = 0

    def now_ns(self) -> int:
        return self._clock()

    def request(self, req: AnimationRequest) -> None:
        if req.timing not in _TIMING:
            raise ValueError(f"unsupported timing curve: {req.timing}")
        self._requests[req.target.layer_id] = req
        self.requests_issued += 1
        LOGGER.debug("animation %s on %s for %.3fs", req.key, req.target.name, req.duration_s)

    def active_request(self, target: LayerHandle) -> AnimationRequest | None:
        return self._requests.get(target.layer_id)

    def progress(self, surface: LayeredSurface, target: LayerHandle, key: str = STROKE_END, now_ns: int | None = None) -> float:
        req = self._requests.get(target.layer_id)
        if req is None or req.key != key or not surface.has_layer(target):
            return 1.0
        if req.generation != surface.generation(target):
            return 1.0
        now = self._clock() if now_ns is None else now_ns
        return min(1.0, max(0.0, req.value_at(now)))

    def is_animating(self, surface: LayeredSurface, now_ns: int | None = None) -> bool:
        now = self._clock() if now_ns is None else now_ns
        for req in self._requests.values():
            if not surface.has_layer(req.target) or req.generation != surface.generation(req.target):
                continue
            if req.duration_s > 0 and (now - req.issued_ns) < req.duration_s * 1e9:
                return True
        return False

    def compose(
        self,
        surface: LayeredSurface,
        width: int,
        height: int,
        *,
        background: RGBA = (0, 0, 0, 255),
        now_ns: int | None = None,
    ) -> np.ndarray:
        now = self._clock() if now_ns is None else now_ns
        self._discard_removed(surface)
        canvas = new_canvas(width, height, color=background)
        for handle in surface.layers():
            stroke_end = self.progress(surface, handle, STROKE_END, now)
            for shape in surface.shapes(handle):
                _rasterize(canvas, shape, stroke_end)
        return canvas

    def _discard_removed(self, surface: LayeredSurface) -> None:
        stale = [layer_id for layer_id, req in self._requests.items() if not surface.has_layer(req.target)]
        for layer_id in stale:
            del self._requests[layer_id]


def _rasterize(canvas: np.ndarray, shape: Shape, stroke_end: float) -> None:
    if isinstance(shape, StrokeShape):
        path = trim_path(shape.path, stroke_end) if shape.animated else shape.path
        draw_polyline(canvas, path.xs, path.ys, shape.color, width=shape.width)
    elif isinstance(shape, FillShape):
        fill_polygon_gradient(canvas, shape.path.xs, shape.path.ys, shape.top_color, shape.bottom_color)
    elif isinstance(shape, DotShape):
        draw_disc(canvas, shape.center[0], shape.center[1], shape.radius, shape.color)
    elif isinstance(shape, TextShape):
        w, h = text_size(shape.text, font_size_px=shape.font_size)
        if shape.anchor == "middle-right":
            x, y = shape.x - w, shape.y - h / 2.0
        else:
            x, y = shape.x - w / 2.0, shape.y
        draw_text(canvas, int(round(x)), int(round(y)), shape.text, shape.color, font_size_px=shape.font_size)
    else:
        raise TypeError(f"unsupported shape: {type(shape)!r}")
