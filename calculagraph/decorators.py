from __future__ import annotations
import inspect
import sys
import time
from functools import wraps
from typing import Any, Callable

from calculagraph.decompose import callable_location, ensure_function
from calculagraph.directive import Directive, parse_directive
from calculagraph.logger import get_logger
from calculagraph.settings import get_settings
from calculagraph.sinks import DEBUG, INFO, PRINT, TRACE_SINK, Sink
from calculagraph.units import TimeUnit

log = get_logger(__name__)


def instrument(fn: Callable[..., Any], directive: Directive, sink: Sink) -> Callable[..., Any]:
    """Wrap ``fn`` so each completed call emits one measurement through ``sink``.

    A call that raises emits nothing; the exception reaches the caller as is.
    """
    logger = sink.logger_for(fn.__module__)

    if inspect.iscoroutinefunction(fn):
        @wraps(fn)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter_ns()
            result = await fn(*args, **kwargs)
            sink.emit(directive.render(time.perf_counter_ns() - start), logger)
            return result
        return async_wrapper

    @wraps(fn)
    def wrapper(*args, **kwargs):
        start = time.perf_counter_ns()
        result = fn(*args, **kwargs)
        sink.emit(directive.render(time.perf_counter_ns() - start), logger)
        return result
    return wrapper


def _apply(target: Any, args: tuple[Any, ...], sink: Sink) -> Callable[..., Any]:
    fn = ensure_function(target)
    directive = parse_directive(args, fn.__name__, location=callable_location(fn))
    if not get_settings().enabled:
        log.debug(f"Timing disabled, leaving fn:{fn.__qualname__} unwrapped")
        return fn
    log.debug(f"Wrapped fn:{fn.__qualname__} with {sink.name} (unit={directive.unit})")
    return instrument(fn, directive, sink)


def _is_target(arg: Any) -> bool:
    return callable(arg) and not isinstance(arg, (str, TimeUnit))


def _caller_location() -> str:
    # Frames: _caller_location, _entry, timer_*, then the directive site.
    frame = sys._getframe(3)
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


def _entry(sink: Sink, args: tuple[Any, ...]):
    # Bare `@timer_x`: the only argument is the target itself.
    if len(args) == 1 and _is_target(args[0]):
        return _apply(args[0], (), sink)

    # Fail on the directive line rather than at decoration.
    parse_directive(args, "", location=_caller_location())

    def decorator(target: Any) -> Callable[..., Any]:
        return _apply(target, args, sink)
    return decorator


def timer_println(*args: Any):
    """``print`` the execution time after each call of the decorated function.

    Accepts no arguments, a unit (``s``, ``ms`` by default, ``us``, ``ns``) or
    a unit and a format string with a single ``{}`` placeholder::

        @timer_println
        def func(): ...

        @timer_println(ns)
        def func1(): ...

        @timer_println(ns, "func2() execution time: {}ns")
        def func2(): ...
    """
    return _entry(PRINT, args)


def timer_log_info(*args: Any):
    """Like :func:`timer_println`, logging at INFO on the function's module logger."""
    return _entry(INFO, args)


def timer_log_debug(*args: Any):
    """Like :func:`timer_println`, logging at DEBUG on the function's module logger."""
    return _entry(DEBUG, args)


def timer_log_trace(*args: Any):
    """Like :func:`timer_println`, logging at TRACE (5) on the function's module logger."""
    return _entry(TRACE_SINK, args)
