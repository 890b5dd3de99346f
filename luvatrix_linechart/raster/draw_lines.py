from __future__ import annotations

import numpy as np

from luvatrix_linechart.raster.canvas import RGBA, draw_hline, draw_pixel, draw_vline


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: float = 1.0) -> None:
    if xs.size < 2:
        return
    px = np.rint(xs).astype(np.int32)
    py = np.rint(ys).astype(np.int32)
    brush = max(1, int(round(width)))
    for i in range(px.size - 1):
        _draw_line_segment(dst, int(px[i]), int(py[i]), int(px[i + 1]), int(py[i + 1]), color=color, width=brush)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    radius = width // 2
    # Axis-aligned segments (grid, axes, ticks) take the span fast path.
    if y0 == y1:
        for yy in range(y0 - radius, y0 - radius + width):
            draw_hline(dst, x0, x1, yy, color)
        return
    if x0 == x1:
        for xx in range(x0 - radius, x0 - radius + width):
            draw_vline(dst, xx, y0, y1, color)
        return

    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, radius=radius)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, radius: int) -> None:
    if color[3] >= 255:
        y0 = max(0, y - radius)
        y1 = min(dst.shape[0], y + radius + 1)
        x0 = max(0, x - radius)
        x1 = min(dst.shape[1], x + radius + 1)
        if y0 < y1 and x0 < x1:
            dst[y0:y1, x0:x1] = np.asarray(color, dtype=np.uint8)
        return
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
