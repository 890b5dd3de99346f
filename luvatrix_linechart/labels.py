from __future__ import annotations

import math


MIN_LABEL_SPACING_PX = 36.0


def select_label_indices(count: int, width: float, max_labels: int, min_spacing: float = MIN_LABEL_SPACING_PX) -> list[int]:
    """Pick which sample indices get an x-axis label.

    Uses the smallest stride ``k`` that keeps at most ``max_labels`` labels and
    places consecutive strided labels at least ``min_spacing`` apart. The last
    index is always appended, even when it sits closer than one stride to the
    previous label. With ``max_labels == 1`` only the first label is shown.
    """
    if count <= 0 or max_labels <= 0:
        return []
    if count == 1 or max_labels == 1:
        return [0]

    last = count - 1
    slot = width / last if width > 0 else 0.0
    stride = last
    for k in range(1, last + 1):
        shown = math.ceil(last / k) + 1
        if shown <= max_labels and k * slot >= min_spacing:
            stride = k
            break

    indices = list(range(0, last, stride))
    indices.append(last)
    return indices
