from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from luvatrix_linechart.errors import RenderingError
from luvatrix_linechart.geometry import Rect
from luvatrix_linechart.samples import MIN_RENDER_SAMPLES, SampleSet, ValueRange
from luvatrix_linechart.scales import map_index_array, map_linear, map_linear_array


MIN_GRID_ROWS = 2
MAX_GRID_ROWS = 20


@dataclass(frozen=True, eq=False)
class Path2D:
    xs: np.ndarray
    ys: np.ndarray
    closed: bool = False

    def __post_init__(self) -> None:
        xs = np.asarray(self.xs, dtype=np.float64)
        ys = np.asarray(self.ys, dtype=np.float64)
        if xs.shape != ys.shape or xs.ndim != 1:
            raise ValueError("path xs/ys must be 1-D arrays of equal length")
        object.__setattr__(self, "xs", xs)
        object.__setattr__(self, "ys", ys)

    def __len__(self) -> int:
        return int(self.xs.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path2D):
            return NotImplemented
        return self.closed == other.closed and np.array_equal(self.xs, other.xs) and np.array_equal(self.ys, other.ys)

    def vertices(self) -> list[tuple[float, float]]:
        return list(zip(self.xs.tolist(), self.ys.tolist(), strict=True))

    def length(self) -> float:
        if self.xs.size < 2:
            return 0.0
        return float(np.sum(np.hypot(np.diff(self.xs), np.diff(self.ys))))


def segment(x0: float, y0: float, x1: float, y1: float) -> Path2D:
    return Path2D(np.asarray([x0, x1]), np.asarray([y0, y1]))


def trim_path(path: Path2D, fraction: float) -> Path2D:
    """Leading ``fraction`` of an open polyline, measured by arc length."""
    fraction = min(1.0, max(0.0, float(fraction)))
    if fraction >= 1.0 or path.xs.size < 2:
        return path
    seg = np.hypot(np.diff(path.xs), np.diff(path.ys))
    cum = np.concatenate(([0.0], np.cumsum(seg)))
    target = cum[-1] * fraction
    if target <= 0.0:
        return Path2D(path.xs[:1], path.ys[:1])
    # Last vertex fully inside the drawn prefix.
    k = int(np.searchsorted(cum, target, side="right")) - 1
    k = min(k, seg.size - 1)
    t = (target - cum[k]) / seg[k] if seg[k] > 0 else 0.0
    end_x = path.xs[k] + (path.xs[k + 1] - path.xs[k]) * t
    end_y = path.ys[k] + (path.ys[k + 1] - path.ys[k]) * t
    return Path2D(np.append(path.xs[: k + 1], end_x), np.append(path.ys[: k + 1], end_y))


@dataclass(frozen=True)
class Gridline:
    value: float
    path: Path2D = field(compare=False)


class PathBuilder:
    """Geometry for every chart layer, all derived from one scale."""

    def __init__(self, plot_rect: Rect, value_range: ValueRange) -> None:
        self.plot_rect = plot_rect
        self.value_range = value_range

    def _require_drawable(self, samples: SampleSet) -> None:
        if len(samples) < MIN_RENDER_SAMPLES:
            raise RenderingError(f"line geometry needs at least {MIN_RENDER_SAMPLES} samples, got {len(samples)}")
        if not self.plot_rect.has_area:
            raise RenderingError(
                f"plot rect has no area: {self.plot_rect.width:g}x{self.plot_rect.height:g}"
            )

    def x_positions(self, count: int) -> np.ndarray:
        return map_index_array(count, self.plot_rect.left, self.plot_rect.right)

    def y_for_value(self, value: float) -> float:
        # Screen y grows downward, so the value max maps to the top edge.
        return map_linear(value, self.value_range.min, self.value_range.max, self.plot_rect.bottom, self.plot_rect.top)

    def line_path(self, samples: SampleSet) -> Path2D:
        self._require_drawable(samples)
        xs = self.x_positions(len(samples))
        ys = map_linear_array(
            samples.values,
            self.value_range.min,
            self.value_range.max,
            self.plot_rect.bottom,
            self.plot_rect.top,
        )
        return Path2D(xs, ys)

    def fill_path(self, samples: SampleSet) -> Path2D:
        line = self.line_path(samples)
        baseline = self.plot_rect.bottom
        xs = np.concatenate((line.xs, [line.xs[-1], line.xs[0]]))
        ys = np.concatenate((line.ys, [baseline, baseline]))
        return Path2D(xs, ys, closed=True)

    def dot_centers(self, samples: SampleSet) -> list[tuple[float, float]]:
        return self.line_path(samples).vertices()

    def gridlines(self, rows: int) -> list[Gridline]:
        rows = max(MIN_GRID_ROWS, min(MAX_GRID_ROWS, int(rows)))
        rect = self.plot_rect
        out: list[Gridline] = []
        for i in range(1, rows + 1):
            frac = i / (rows + 1)
            y = rect.bottom - frac * rect.height
            value = (1.0 - frac) * self.value_range.min + frac * self.value_range.max
            out.append(Gridline(value=value, path=segment(rect.left, y, rect.right, y)))
        return out

    def axis_lines(self) -> tuple[Path2D, Path2D]:
        """Return ``(y_axis, x_axis)`` along the left and bottom edges."""
        rect = self.plot_rect
        y_axis = segment(rect.left, rect.top, rect.left, rect.bottom)
        x_axis = segment(rect.left, rect.bottom, rect.right, rect.bottom)
        return y_axis, x_axis

    def axis_ticks(self, indices: list[int], count: int, length: float) -> list[Path2D]:
        if count < 2 or not indices:
            return []
        xs = self.x_positions(count)
        bottom = self.plot_rect.bottom
        return [segment(float(xs[i]), bottom, float(xs[i]), bottom + length) for i in indices]
