"""Source-to-source expansion of timer directives.

``transform_source`` parses a module, replaces every function decorated with
``timer_println``, ``timer_log_info``, ``timer_log_debug`` or
``timer_log_trace`` by its synthesized timed version and returns the
unparsed result. The generated code only needs the standard library.
"""

from __future__ import annotations

import ast
import copy
from pathlib import Path
from typing import Any, Sequence

from calculagraph.decompose import node_location, split_function
from calculagraph.directive import FORMAT_EXPECTED, UNIT_EXPECTED, parse_directive
from calculagraph.exceptions import InvalidFormatLiteral, InvalidTimeUnit
from calculagraph.logger import get_logger
from calculagraph.sinks import SINKS, Sink
from calculagraph.synthesis import synthesize
from calculagraph.units import TimeUnit, resolve_time_unit

log = get_logger(__name__)


def _unit_reader(filename: str):
    def read(node: Any, location: str | None = None) -> TimeUnit:
        where = node_location(node, filename)
        if isinstance(node, ast.Name):
            token = node.id
        elif isinstance(node, ast.Attribute):
            token = node.attr
        elif isinstance(node, ast.Constant) and isinstance(node.value, str):
            token = node.value
        else:
            raise InvalidTimeUnit(UNIT_EXPECTED, where)
        return resolve_time_unit(token, where)
    return read


def _format_reader(filename: str):
    def read(node: Any, location: str | None = None) -> str:
        if isinstance(node, ast.Constant) and isinstance(node.value, str):
            return node.value
        raise InvalidFormatLiteral(FORMAT_EXPECTED, node_location(node, filename))
    return read


def directive_of(decorator: ast.expr) -> tuple[Sink, list[Any]] | None:
    """Sink and raw arguments if ``decorator`` is a timer directive."""
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    if isinstance(target, ast.Name):
        name = target.id
    elif isinstance(target, ast.Attribute):
        name = target.attr
    else:
        return None
    sink = SINKS.get(name)
    if sink is None:
        return None
    if not isinstance(decorator, ast.Call):
        return sink, []
    # Keywords count as arguments so they are rejected by position.
    return sink, [*decorator.args, *decorator.keywords]


def expand_function(
    node: ast.AST,
    sink: Sink | str,
    args: Sequence[Any] = (),
    filename: str = "<string>",
) -> ast.FunctionDef | ast.AsyncFunctionDef:
    """Expand one directive applied to ``node``.

    ``node`` must not carry the directive itself among its decorators; any
    decorators it has are passed through unchanged.
    """
    if isinstance(sink, str):
        sink = SINKS[sink]
    parts = split_function(node, filename)
    directive = parse_directive(
        args,
        parts.name,
        read_unit=_unit_reader(filename),
        read_format=_format_reader(filename),
        location=node_location(node, filename),
    )
    log.debug(f"Expanded fn:{parts.name} with {sink.name} (unit={directive.unit})")
    return synthesize(directive, parts, sink)


class _TimerExpander(ast.NodeTransformer):
    def __init__(self, filename: str):
        self.filename = filename

    def _expand(self, node: ast.AST) -> ast.AST:
        # Decorators apply bottom-up, so the innermost directive goes first.
        while True:
            for index in reversed(range(len(node.decorator_list))):
                found = directive_of(node.decorator_list[index])
                if found is not None:
                    break
            else:
                return node
            if isinstance(node, ast.ClassDef):
                # Raises UnsupportedTargetKind at the class.
                split_function(node, self.filename)
            sink, args = found
            stripped = copy.copy(node)
            stripped.decorator_list = node.decorator_list[:index] + node.decorator_list[index + 1:]
            node = expand_function(stripped, sink, args, self.filename)

    def visit_FunctionDef(self, node: ast.FunctionDef) -> ast.AST:
        self.generic_visit(node)
        return self._expand(node)

    visit_AsyncFunctionDef = visit_FunctionDef
    visit_ClassDef = visit_FunctionDef


def transform_source(source: str, filename: str = "<string>") -> str:
    """Rewrite all timer directives in ``source``.

    Comments and original formatting are not preserved (``ast.unparse``).

    Raises:
        SyntaxError: ``source`` does not parse
        TransformError: a directive is malformed or decorates a class
    """
    tree = ast.parse(source, filename=filename)
    tree = ast.fix_missing_locations(_TimerExpander(filename).visit(tree))
    return ast.unparse(tree)


def transform_file(path: str | Path) -> str:
    path = Path(path)
    return transform_source(path.read_text(encoding="utf-8"), str(path))
