from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal
import math
import sys
from typing import Any, overload

import numpy as np

from luvatrix_linechart.errors import InvalidValueError, RenderingError


MIN_RENDER_SAMPLES = 2


def _coerce_value(raw: Any) -> float:
    if isinstance(raw, bool) or raw is None:
        raise InvalidValueError(f"sample value must be a real number: {raw!r}")
    if isinstance(raw, Decimal):
        raw = float(raw)
    try:
        value = float(raw)
    except OverflowError as exc:
        raise InvalidValueError(f"sample value must be finite: {raw!r}") from exc
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(f"sample value must be a real number: {raw!r}") from exc
    if not math.isfinite(value):
        raise InvalidValueError(f"sample value must be finite: {value!r}")
    return value


@dataclass(frozen=True)
class Sample:
    label: str
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "label", str(self.label))
        object.__setattr__(self, "value", _coerce_value(self.value))

    @classmethod
    def unchecked(cls, label: str, value: float) -> "Sample":
        """Build a sample from an internally computed value without validation."""
        sample = object.__new__(cls)
        object.__setattr__(sample, "label", label)
        object.__setattr__(sample, "value", value)
        return sample


class SampleSet(Sequence[Sample]):
    """Ordered samples; the index of a sample is its x position."""

    __slots__ = ("_samples",)

    def __init__(self, samples: Sequence[Sample] = ()) -> None:
        for i, sample in enumerate(samples):
            if not isinstance(sample, Sample):
                raise InvalidValueError(f"item {i} is not a Sample: {sample!r}")
        self._samples: tuple[Sample, ...] = tuple(samples)

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[str, Any]]) -> "SampleSet":
        return cls([Sample(label, value) for label, value in pairs])

    @classmethod
    def from_columns(cls, labels: Sequence[str] | np.ndarray, values: Sequence[Any] | np.ndarray) -> "SampleSet":
        label_list = [str(v) for v in (labels.tolist() if isinstance(labels, np.ndarray) else labels)]
        value_arr = _coerce_1d(values)
        if len(label_list) != value_arr.size:
            raise InvalidValueError(f"labels and values length mismatch: {len(label_list)} != {value_arr.size}")
        bad = np.flatnonzero(~np.isfinite(value_arr))
        if bad.size:
            idx = int(bad[0])
            raise InvalidValueError(f"values contains non-finite value at index {idx}: {value_arr[idx]!r}")
        return cls([Sample.unchecked(label, float(v)) for label, v in zip(label_list, value_arr.tolist(), strict=True)])

    @overload
    def __getitem__(self, index: int) -> Sample: ...

    @overload
    def __getitem__(self, index: slice) -> "SampleSet": ...

    def __getitem__(self, index: int | slice) -> Sample | "SampleSet":
        if isinstance(index, slice):
            return SampleSet(self._samples[index])
        return self._samples[index]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleSet):
            return NotImplemented
        return self._samples == other._samples

    def __hash__(self) -> int:
        return hash(self._samples)

    def __repr__(self) -> str:
        return f"SampleSet({list(self._samples)!r})"

    @property
    def labels(self) -> list[str]:
        return [s.label for s in self._samples]

    @property
    def values(self) -> np.ndarray:
        return np.asarray([s.value for s in self._samples], dtype=np.float64)

    @property
    def is_renderable(self) -> bool:
        return len(self._samples) >= MIN_RENDER_SAMPLES


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return not self.min < self.max

    def padded_for_flat_line(self, ratio: float = 0.05) -> "ValueRange":
        """Widen a zero-span range so a flat series sits at mid height."""
        if not self.is_degenerate:
            return self
        delta = max(1.0, abs(self.min) * ratio)
        limit = sys.float_info.max
        return ValueRange(min=max(-limit, self.min - delta), max=min(limit, self.max + delta))


def compute_value_range(samples: SampleSet) -> ValueRange:
    if len(samples) == 0:
        raise RenderingError("cannot compute value range of empty samples")
    values = samples.values
    return ValueRange(min=float(np.min(values)), max=float(np.max(values)))


def _coerce_1d(value: Any) -> np.ndarray:
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidValueError("values must be 1-D")
        if value.dtype.kind in {"i", "u", "f"}:
            return value.astype(np.float64, copy=False)
        value = value.tolist()
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise InvalidValueError(f"unsupported values input type: {type(value)!r}")

    out = np.empty(len(value), dtype=np.float64)
    for i, raw in enumerate(value):
        try:
            out[i] = _coerce_value(raw)
        except InvalidValueError as exc:
            raise InvalidValueError(f"values contains invalid value at index {i}: {raw!r}") from exc
    return out
