"""Parsing of timer directive arguments into a unit and an output format.

A directive takes at most two positional arguments::

    @timer_println                              # ms, "fn:<name> cost {}ms"
    @timer_println(us)                          # us, "fn:<name> cost {}us"
    @timer_println(ns, "took {} nanoseconds")   # ns, custom format

The parser itself is agnostic to where the arguments come from; the readers
turn one raw argument into a unit or a format and raise on anything else.
Runtime decorators use the default readers below, the code generator passes
readers that understand ``ast`` nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from calculagraph.exceptions import InvalidFormatLiteral, InvalidTimeUnit, TooManyArguments
from calculagraph.units import TimeUnit, resolve_time_unit

USAGE = "Invalid arguments, usage: [(TimeUnit[, OutputFormatString])]"
UNIT_EXPECTED = "Invalid argument, `TimeUnit` expected"
FORMAT_EXPECTED = (
    "Invalid FormatString, the usage is similar to `str.format` "
    "with a single `{}` placeholder"
)


@dataclass(frozen=True)
class Directive:
    unit: TimeUnit
    output_format: str

    def render(self, elapsed_ns: int) -> str:
        # Placeholder count is not validated; extra positional fields raise IndexError.
        return self.output_format.format(self.unit.select(elapsed_ns))


def default_format(fn_name: str, unit: TimeUnit) -> str:
    return f"fn:{fn_name} cost {{}}{unit}"


def read_time_unit(arg: Any, location: str | None = None) -> TimeUnit:
    if isinstance(arg, (TimeUnit, str)):
        return resolve_time_unit(arg, location)
    raise InvalidTimeUnit(UNIT_EXPECTED, location)


def read_output_format(arg: Any, location: str | None = None) -> str:
    if isinstance(arg, str):
        return arg
    raise InvalidFormatLiteral(FORMAT_EXPECTED, location)


def parse_directive(
    args: Sequence[Any],
    fn_name: str,
    *,
    read_unit: Callable[..., TimeUnit] = read_time_unit,
    read_format: Callable[..., str] = read_output_format,
    location: str | None = None,
) -> Directive:
    """Resolve directive arguments for the function named ``fn_name``.

    Raises:
        TooManyArguments: more than two arguments were given
        InvalidTimeUnit: the first argument is not s, ms, us or ns
        InvalidFormatLiteral: the second argument is not a literal string
    """
    if len(args) > 2:
        raise TooManyArguments(USAGE, location)
    if not args:
        return Directive(TimeUnit.MS, default_format(fn_name, TimeUnit.MS))

    unit = read_unit(args[0], location)
    if len(args) == 1:
        return Directive(unit, default_format(fn_name, unit))
    return Directive(unit, read_format(args[1], location))
