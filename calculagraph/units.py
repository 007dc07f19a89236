"""Time units a measurement can be reported in."""

from __future__ import annotations

from enum import Enum

from calculagraph.exceptions import InvalidTimeUnit

ALLOWED_UNITS_MESSAGE = "Invalid unit of time, only `s`, `ms`, `us`, `ns` are supported"


class TimeUnit(Enum):
    S = "s"
    MS = "ms"
    US = "us"
    NS = "ns"

    @property
    def short_name(self) -> str:
        return self.value

    @property
    def nanos(self) -> int:
        """Nanoseconds in one unit."""
        return _NANOS[self]

    def select(self, elapsed_ns: int) -> int:
        """Whole units in ``elapsed_ns``, truncated toward zero."""
        return elapsed_ns // self.nanos

    def __str__(self) -> str:
        return self.value


_NANOS = {
    TimeUnit.S: 1_000_000_000,
    TimeUnit.MS: 1_000_000,
    TimeUnit.US: 1_000,
    TimeUnit.NS: 1,
}


def resolve_time_unit(token: TimeUnit | str, location: str | None = None) -> TimeUnit:
    if isinstance(token, TimeUnit):
        return token
    try:
        return TimeUnit(token.lower())
    except ValueError:
        raise InvalidTimeUnit(ALLOWED_UNITS_MESSAGE, location) from None
