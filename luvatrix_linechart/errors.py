from __future__ import annotations


class ChartError(Exception):
    """Base class for line chart errors."""


class InvalidValueError(ChartError, ValueError):
    """Raised when a sample value is not a finite real number."""


class InvalidConfigurationError(ChartError):
    """Describes a rejected configuration assignment.

    Setters never raise this; it is carried on the returned ``SettingResult``.
    """

    def __init__(self, setting: str, value: object, reason: str) -> None:
        super().__init__(f"{setting}: {reason} (got {value!r})")
        self.setting = setting
        self.value = value
        self.reason = reason


class RenderingError(ChartError):
    """Raised when a render pass precondition is violated."""
