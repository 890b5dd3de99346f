from __future__ import annotations

import numpy as np

from luvatrix_linechart.raster.canvas import RGBA


def draw_disc(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    r = max(0.5, float(radius))
    y0 = max(0, int(np.floor(cy - r)))
    y1 = min(dst.shape[0], int(np.ceil(cy + r)) + 1)
    x0 = max(0, int(np.floor(cx - r)))
    x1 = min(dst.shape[1], int(np.ceil(cx + r)) + 1)
    if y0 >= y1 or x0 >= x1:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    inside = (xx - cx) ** 2 + (yy - cy) ** 2 <= r * r
    if not np.any(inside):
        return
    patch = dst[y0:y1, x0:x1]
    a = color[3] / 255.0
    rgb = np.asarray(color[:3], dtype=np.float32)
    blended = rgb * a + patch[:, :, :3].astype(np.float32) * (1.0 - a)
    patch[inside, :3] = blended[inside].astype(np.uint8)
    patch[inside, 3] = 255
