from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math

import numpy as np

from luvatrix_linechart.errors import RenderingError


def _domain_fraction(value, domain_min: float, domain_max: float):
    span = domain_max - domain_min
    if math.isinf(span):
        # Finite ends whose difference overflows; halving keeps every term finite.
        return (value * 0.5 - domain_min * 0.5) / (domain_max * 0.5 - domain_min * 0.5)
    return (value - domain_min) / span


def map_linear(value: float, domain_min: float, domain_max: float, range_min: float, range_max: float) -> float:
    """Map ``value`` from the domain onto the range by linear interpolation.

    A degenerate domain (``domain_min == domain_max``) maps every value to the
    midpoint of the range, so a single-valued series lands at mid height.
    """
    if domain_max == domain_min:
        return range_min + (range_max - range_min) * 0.5
    return range_min + _domain_fraction(value, domain_min, domain_max) * (range_max - range_min)


def map_index(index: int, count: int, range_min: float, range_max: float) -> float:
    if count < 2:
        raise RenderingError(f"index mapping needs at least 2 samples, got {count}")
    return range_min + index / (count - 1) * (range_max - range_min)


def map_linear_array(values: np.ndarray, domain_min: float, domain_max: float, range_min: float, range_max: float) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    if domain_max == domain_min:
        return np.full(values.shape, range_min + (range_max - range_min) * 0.5, dtype=np.float64)
    return range_min + _domain_fraction(values, domain_min, domain_max) * (range_max - range_min)


def map_index_array(count: int, range_min: float, range_max: float) -> np.ndarray:
    if count < 2:
        raise RenderingError(f"index mapping needs at least 2 samples, got {count}")
    return range_min + np.arange(count, dtype=np.float64) / (count - 1) * (range_max - range_min)


def format_value_label(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(nice_number(step, round_result=True)) if step is not None and step > 0 else 2
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6):
        return f"{value:.3e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 2
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    # One extra digit: gridline values are not snapped to the nice step.
    decimals = max(0, -int(exp) + 1)
    return min(6, decimals)
