from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import numbers
import re
from typing import Any, Literal, Mapping

from luvatrix_linechart.errors import InvalidConfigurationError
from luvatrix_linechart.geometry import Insets


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
DegenerateRangePolicy = Literal["skip", "flat_line"]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


@dataclass(frozen=True)
class SettingRange:
    low: float
    high: float
    integral: bool = False

    def check(self, value: Any) -> str | None:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return "must be a number"
        try:
            number = float(value)
        except OverflowError:
            return "must be finite"
        if not math.isfinite(number):
            return "must be finite"
        if self.integral and number != int(number):
            return "must be an integer"
        if value < self.low or value > self.high:
            return f"must be within [{self.low:g}, {self.high:g}]"
        return None


SETTING_RANGES: dict[str, SettingRange] = {
    "line_width": SettingRange(0.1, 20.0),
    "dot_radius": SettingRange(0.1, 20.0),
    "grid_line_count": SettingRange(2, 20, integral=True),
    "max_label_count": SettingRange(1, 20, integral=True),
    "label_font_size": SettingRange(8.0, 24.0),
    "animation_duration": SettingRange(0.0, 5.0),
}

_NUMERIC_DEFAULTS: dict[str, float | int] = {
    "line_width": 2.0,
    "dot_radius": 4.0,
    "grid_line_count": 5,
    "max_label_count": 6,
    "label_font_size": 12.0,
    "animation_duration": 1.0,
}

_TOGGLE_DEFAULTS: dict[str, bool] = {
    "show_grid": True,
    "show_fill": True,
    "show_dots": True,
}

_COLOR_DEFAULTS: dict[str, RGBA] = {
    "line_color": (62, 149, 255, 255),
    "fill_top_color": (62, 149, 255, 110),
    "fill_bottom_color": (62, 149, 255, 0),
    "dot_color": (255, 255, 255, 255),
    "grid_color": (44, 53, 66, 255),
    "axis_color": (124, 138, 156, 255),
    "label_color": (208, 218, 232, 255),
    "background_color": (20, 26, 36, 255),
}

_DEGENERATE_POLICIES = ("skip", "flat_line")


@dataclass(frozen=True)
class SettingResult:
    setting: str
    accepted: bool
    value: Any
    error: InvalidConfigurationError | None = None

    def __bool__(self) -> bool:
        return self.accepted


def parse_color(value: Any) -> RGBA:
    """Accept ``#RRGGBB``/``#RRGGBBAA`` strings or 3/4-tuples of 0..255 ints."""
    if isinstance(value, str):
        if not _HEX_COLOR.match(value):
            raise ValueError("color must be a hex color (#RRGGBB or #RRGGBBAA)")
        raw = value[1:]
        r, g, b = int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)
        a = int(raw[6:8], 16) if len(raw) == 8 else 255
        return (r, g, b, a)
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = list(value)
        if any(isinstance(c, bool) or not isinstance(c, int) or c < 0 or c > 255 for c in channels):
            raise ValueError("color channels must be ints in [0, 255]")
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ValueError(f"unsupported color value: {value!r}")


class PlotConfiguration:
    """Display settings; every stored value stays within its declared range.

    Invalid assignments are rejected and the previous value is kept. Setters
    report the outcome through ``SettingResult`` instead of raising.
    """

    def __init__(self, **overrides: Any) -> None:
        self._values: dict[str, Any] = {}
        self._values.update(_NUMERIC_DEFAULTS)
        self._values.update(_TOGGLE_DEFAULTS)
        self._values.update(_COLOR_DEFAULTS)
        self._values["insets"] = Insets()
        self._values["degenerate_range_policy"] = "skip"
        if overrides:
            self.update(**overrides)

    @property
    def line_width(self) -> float:
        return self._values["line_width"]

    @property
    def dot_radius(self) -> float:
        return self._values["dot_radius"]

    @property
    def grid_line_count(self) -> int:
        return self._values["grid_line_count"]

    @property
    def max_label_count(self) -> int:
        return self._values["max_label_count"]

    @property
    def label_font_size(self) -> float:
        return self._values["label_font_size"]

    @property
    def animation_duration(self) -> float:
        return self._values["animation_duration"]

    @property
    def show_grid(self) -> bool:
        return self._values["show_grid"]

    @property
    def show_fill(self) -> bool:
        return self._values["show_fill"]

    @property
    def show_dots(self) -> bool:
        return self._values["show_dots"]

    @property
    def insets(self) -> Insets:
        return self._values["insets"]

    @property
    def degenerate_range_policy(self) -> DegenerateRangePolicy:
        return self._values["degenerate_range_policy"]

    @property
    def line_color(self) -> RGBA:
        return self._values["line_color"]

    @property
    def fill_top_color(self) -> RGBA:
        return self._values["fill_top_color"]

    @property
    def fill_bottom_color(self) -> RGBA:
        return self._values["fill_bottom_color"]

    @property
    def dot_color(self) -> RGBA:
        return self._values["dot_color"]

    @property
    def grid_color(self) -> RGBA:
        return self._values["grid_color"]

    @property
    def axis_color(self) -> RGBA:
        return self._values["axis_color"]

    @property
    def label_color(self) -> RGBA:
        return self._values["label_color"]

    @property
    def background_color(self) -> RGBA:
        return self._values["background_color"]

    def set(self, name: str, value: Any) -> SettingResult:
        if name not in self._values:
            raise KeyError(f"unknown setting: {name}")

        if name in SETTING_RANGES:
            allowed = SETTING_RANGES[name]
            reason = allowed.check(value)
            if reason is None:
                value = int(value) if allowed.integral else float(value)
        elif name in _TOGGLE_DEFAULTS:
            reason = None if isinstance(value, bool) else "must be a bool"
        elif name in _COLOR_DEFAULTS:
            try:
                value = parse_color(value)
                reason = None
            except ValueError as exc:
                reason = str(exc)
        elif name == "insets":
            value, reason = _coerce_insets(value)
        else:
            reason = None if value in _DEGENERATE_POLICIES else f"must be one of {_DEGENERATE_POLICIES}"

        if reason is not None:
            error = InvalidConfigurationError(name, value, reason)
            LOGGER.warning("rejected configuration %s=%r: %s; keeping %r", name, value, reason, self._values[name])
            return SettingResult(setting=name, accepted=False, value=self._values[name], error=error)

        self._values[name] = value
        return SettingResult(setting=name, accepted=True, value=value)

    def update(self, **values: Any) -> dict[str, SettingResult]:
        return {name: self.set(name, value) for name, value in values.items()}

    def set_line_width(self, value: float) -> SettingResult:
        return self.set("line_width", value)

    def set_dot_radius(self, value: float) -> SettingResult:
        return self.set("dot_radius", value)

    def set_grid_line_count(self, value: int) -> SettingResult:
        return self.set("grid_line_count", value)

    def set_max_label_count(self, value: int) -> SettingResult:
        return self.set("max_label_count", value)

    def set_label_font_size(self, value: float) -> SettingResult:
        return self.set("label_font_size", value)

    def set_animation_duration(self, value: float) -> SettingResult:
        return self.set("animation_duration", value)

    def set_show_grid(self, value: bool) -> SettingResult:
        return self.set("show_grid", value)

    def set_show_fill(self, value: bool) -> SettingResult:
        return self.set("show_fill", value)

    def set_show_dots(self, value: bool) -> SettingResult:
        return self.set("show_dots", value)

    def set_insets(self, value: Insets | Mapping[str, float]) -> SettingResult:
        return self.set("insets", value)

    def set_degenerate_range_policy(self, value: DegenerateRangePolicy) -> SettingResult:
        return self.set("degenerate_range_policy", value)

    def copy(self) -> "PlotConfiguration":
        out = PlotConfiguration()
        out._values = dict(self._values)
        return out

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"PlotConfiguration({self._values!r})"


def _coerce_insets(value: Any) -> tuple[Any, str | None]:
    if isinstance(value, Insets):
        return value, None
    if isinstance(value, Mapping):
        unknown = set(value) - {"top", "left", "bottom", "right"}
        if unknown:
            return value, f"unknown inset keys: {sorted(unknown)}"
        try:
            return Insets(**{k: float(v) for k, v in value.items()}), None
        except (TypeError, ValueError):
            return value, "inset values must be numbers"
    return value, "must be Insets or a mapping of top/left/bottom/right"
