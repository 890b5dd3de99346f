from __future__ import annotations

import numpy as np

from luvatrix_linechart.raster.canvas import RGBA, draw_hline


def fill_polygon_gradient(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, top_color: RGBA, bottom_color: RGBA) -> None:
    """Even-odd scanline fill with a vertical gradient over the polygon's extent."""
    if xs.size < 3:
        return
    ymin = float(np.min(ys))
    ymax = float(np.max(ys))
    row_start = max(0, int(np.ceil(ymin - 0.5)))
    row_end = min(dst.shape[0] - 1, int(np.floor(ymax - 0.5)))
    if row_end < row_start:
        return

    x_a = xs
    y_a = ys
    x_b = np.roll(xs, -1)
    y_b = np.roll(ys, -1)
    top = np.asarray(top_color, dtype=np.float64)
    bottom = np.asarray(bottom_color, dtype=np.float64)
    height = max(ymax - ymin, 1e-9)

    for row in range(row_start, row_end + 1):
        yc = row + 0.5
        crosses = (y_a <= yc) != (y_b <= yc)
        if not np.any(crosses):
            continue
        ya = y_a[crosses]
        yb = y_b[crosses]
        xa = x_a[crosses]
        xb = x_b[crosses]
        x_hits = np.sort(xa + (yc - ya) / (yb - ya) * (xb - xa))
        t = (yc - ymin) / height
        color = tuple(int(round(c)) for c in top + (bottom - top) * t)
        if color[3] <= 0:
            continue
        for left, right in zip(x_hits[0::2], x_hits[1::2], strict=False):
            x0 = int(np.ceil(left - 0.5))
            x1 = int(np.floor(right - 0.5))
            if x1 >= x0:
                draw_hline(dst, x0, x1, row, color)  # type: ignore[arg-type]
