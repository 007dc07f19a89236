"""Measure the execution time of functions.

Four decorators differ only in where the measurement goes:
``timer_println`` prints it, ``timer_log_info``, ``timer_log_debug`` and
``timer_log_trace`` log it on the decorated function's module logger::

    import time
    from calculagraph import timer_println, ms

    @timer_println(ms)
    def main():
        time.sleep(0.01)
        print("job done")

    main()  # prints "job done", then "fn:main cost 10ms"

The same directives can be expanded ahead of time into plain Python with
``transform_source`` / ``transform_file``.

Timed functions get helper variables named ``_calculagraph_<role>_<SUFFIX>``
(see ``calculagraph.synthesis.SUFFIX``) when expanded; don't use them.
"""

from calculagraph.codegen import expand_function, transform_file, transform_source
from calculagraph.decorators import instrument, timer_log_debug, timer_log_info, timer_log_trace, timer_println
from calculagraph.directive import Directive, parse_directive
from calculagraph.exceptions import (
    CalculagraphError,
    ConfigError,
    InvalidFormatLiteral,
    InvalidTimeUnit,
    TooManyArguments,
    TransformError,
    UnsupportedTargetKind,
)
from calculagraph.logger import TRACE
from calculagraph.units import TimeUnit

s = TimeUnit.S
ms = TimeUnit.MS
us = TimeUnit.US
ns = TimeUnit.NS

__all__ = [
    "timer_println",
    "timer_log_info",
    "timer_log_debug",
    "timer_log_trace",
    "instrument",
    "transform_source",
    "transform_file",
    "expand_function",
    "Directive",
    "parse_directive",
    "TimeUnit",
    "s",
    "ms",
    "us",
    "ns",
    "TRACE",
    "CalculagraphError",
    "ConfigError",
    "TransformError",
    "TooManyArguments",
    "InvalidTimeUnit",
    "InvalidFormatLiteral",
    "UnsupportedTargetKind",
]
