from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Literal, Union

from luvatrix_linechart.paths import Path2D


RGBA = tuple[int, int, int, int]
TextAnchor = Literal["top-center", "middle-right"]


@dataclass(frozen=True)
class StrokeShape:
    path: Path2D
    color: RGBA
    width: float
    animated: bool = False


@dataclass(frozen=True)
class FillShape:
    path: Path2D
    top_color: RGBA
    bottom_color: RGBA


@dataclass(frozen=True)
class DotShape:
    center: tuple[float, float]
    radius: float
    color: RGBA


@dataclass(frozen=True)
class TextShape:
    x: float
    y: float
    text: str
    color: RGBA
    font_size: float
    anchor: TextAnchor = "top-center"


Shape = Union[StrokeShape, FillShape, DotShape, TextShape]


@dataclass(frozen=True)
class LayerHandle:
    """Opaque reference to one layer on a ``LayeredSurface``."""

    layer_id: int
    name: str


@dataclass
class _Layer:
    handle: LayerHandle
    shapes: tuple[Shape, ...] = ()
    generation: int = 0


class LayeredSurface:
    """Persistent parent surface holding child layers in z-order (bottom first)."""

    def __init__(self) -> None:
        self._ids = count(1)
        self._layers: dict[int, _Layer] = {}

    def add_layer(self, name: str) -> LayerHandle:
        handle = LayerHandle(layer_id=next(self._ids), name=name)
        self._layers[handle.layer_id] = _Layer(handle=handle)
        return handle

    def remove_layer(self, handle: LayerHandle) -> None:
        self._get(handle)
        del self._layers[handle.layer_id]

    def has_layer(self, handle: LayerHandle) -> bool:
        return handle.layer_id in self._layers

    def layers(self) -> list[LayerHandle]:
        return [layer.handle for layer in self._layers.values()]

    def replace(self, handle: LayerHandle, shapes: list[Shape] | tuple[Shape, ...]) -> int:
        layer = self._get(handle)
        layer.shapes = tuple(shapes)
        layer.generation += 1
        return layer.generation

    def clear(self, handle: LayerHandle) -> int:
        return self.replace(handle, ())

    def shapes(self, handle: LayerHandle) -> tuple[Shape, ...]:
        return self._get(handle).shapes

    def generation(self, handle: LayerHandle) -> int:
        return self._get(handle).generation

    def _get(self, handle: LayerHandle) -> _Layer:
        try:
            return self._layers[handle.layer_id]
        except KeyError:
            raise KeyError(f"unknown layer: {handle.name}#{handle.layer_id}") from None
