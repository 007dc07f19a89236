"""Output sinks: where a formatted measurement ends up."""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass

from calculagraph.logger import TRACE


@dataclass(frozen=True)
class Sink:
    """An emission primitive.

    ``level`` is ``None`` for console output, otherwise the logging level the
    text is logged at on the decorated function's module logger.
    """

    name: str
    level: int | None = None

    @property
    def uses_logging(self) -> bool:
        return self.level is not None

    def logger_for(self, module: str) -> logging.Logger | None:
        return logging.getLogger(module) if self.uses_logging else None

    def emit(self, text: str, logger: logging.Logger | None) -> None:
        if self.level is None:
            print(text)
        else:
            logger.log(self.level, text)

    def call(self, text: ast.expr, logging_alias: str) -> ast.expr:
        """Build the ``ast`` call that emits ``text`` from generated code."""
        if self.level is None:
            return ast.Call(func=ast.Name(id="print", ctx=ast.Load()), args=[text], keywords=[])
        get_logger_call = ast.Call(
            func=ast.Attribute(
                value=ast.Name(id=logging_alias, ctx=ast.Load()),
                attr="getLogger",
                ctx=ast.Load(),
            ),
            args=[ast.Name(id="__name__", ctx=ast.Load())],
            keywords=[],
        )
        return ast.Call(
            func=ast.Attribute(value=get_logger_call, attr="log", ctx=ast.Load()),
            args=[ast.Constant(value=self.level), text],
            keywords=[],
        )


PRINT = Sink("timer_println")
INFO = Sink("timer_log_info", logging.INFO)
DEBUG = Sink("timer_log_debug", logging.DEBUG)
TRACE_SINK = Sink("timer_log_trace", TRACE)

SINKS = {sink.name: sink for sink in (PRINT, INFO, DEBUG, TRACE_SINK)}
