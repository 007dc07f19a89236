"""Synthesis of the timed replacement for a decomposed function.

For ``@timer_println(ms)`` on ``def add(a, b): return a + b`` the generated
definition is equivalent to::

    def add(a, b):
        import time as _calculagraph_time_<SUFFIX>
        _calculagraph_now_<SUFFIX> = _calculagraph_time_<SUFFIX>.perf_counter_ns()

        def _calculagraph_body_<SUFFIX>(a, b):
            return a + b

        _calculagraph_result_<SUFFIX> = _calculagraph_body_<SUFFIX>(a, b)
        print('fn:add cost {}ms'.format(
            (_calculagraph_time_<SUFFIX>.perf_counter_ns() - _calculagraph_now_<SUFFIX>) // 1000000))
        return _calculagraph_result_<SUFFIX>

The original statements run unchanged inside the nested function, so their
``return``/``raise`` stay local to it. Parameters are handed to it by name
(``*args`` and ``**kwargs`` as their tuple and dict), which lets the body
rebind them just as it could before.
"""

from __future__ import annotations

import ast
import copy
from dataclasses import dataclass
from typing import Any

from calculagraph.decompose import FunctionParts
from calculagraph.directive import Directive
from calculagraph.sinks import Sink

# Fixed so synthesis stays reproducible. Don't use these names in timed functions.
SUFFIX = "x5e0b9c27d41f8a63"


@dataclass(frozen=True)
class InjectedNames:
    now: str
    result: str
    body: str
    time: str
    logging: str

    @classmethod
    def fresh(cls) -> InjectedNames:
        return cls(
            now=f"_calculagraph_now_{SUFFIX}",
            result=f"_calculagraph_result_{SUFFIX}",
            body=f"_calculagraph_body_{SUFFIX}",
            time=f"_calculagraph_time_{SUFFIX}",
            logging=f"_calculagraph_logging_{SUFFIX}",
        )


def _load(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def _store(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Store())


def _type_params(params: list[Any]) -> dict[str, Any]:
    # type_params only exists on 3.12+.
    if "type_params" in ast.FunctionDef._fields:
        return {"type_params": params}
    return {}


def _clock(names: InjectedNames) -> ast.expr:
    return ast.Call(
        func=ast.Attribute(value=_load(names.time), attr="perf_counter_ns", ctx=ast.Load()),
        args=[],
        keywords=[],
    )


def _nested_body(parts: FunctionParts, names: InjectedNames) -> ast.stmt:
    node_type = ast.AsyncFunctionDef if parts.is_async else ast.FunctionDef
    args = ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=name) for name in parts.parameter_names],
        vararg=None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[],
    )
    return node_type(
        name=names.body,
        args=args,
        body=copy.deepcopy(parts.body),
        decorator_list=[],
        returns=None,
        **_type_params([]),
    )


def _invoke_body(parts: FunctionParts, names: InjectedNames) -> ast.expr:
    call = ast.Call(
        func=_load(names.body),
        args=[_load(name) for name in parts.parameter_names],
        keywords=[],
    )
    return ast.Await(value=call) if parts.is_async else call


def _formatted_elapsed(directive: Directive, names: InjectedNames) -> ast.expr:
    elapsed = ast.BinOp(
        left=ast.BinOp(left=_clock(names), op=ast.Sub(), right=_load(names.now)),
        op=ast.FloorDiv(),
        right=ast.Constant(value=directive.unit.nanos),
    )
    return ast.Call(
        func=ast.Attribute(value=ast.Constant(value=directive.output_format), attr="format", ctx=ast.Load()),
        args=[elapsed],
        keywords=[],
    )


def synthesize(directive: Directive, parts: FunctionParts, sink: Sink) -> ast.FunctionDef | ast.AsyncFunctionDef:
    """Build the replacement definition; ``parts`` is not modified."""
    names = InjectedNames.fresh()

    body: list[ast.stmt] = []
    if parts.docstring is not None:
        body.append(copy.deepcopy(parts.docstring))
    body.append(ast.Import(names=[ast.alias(name="time", asname=names.time)]))
    if sink.uses_logging:
        body.append(ast.Import(names=[ast.alias(name="logging", asname=names.logging)]))
    body.extend(
        [
            ast.Assign(targets=[_store(names.now)], value=_clock(names)),
            _nested_body(parts, names),
            ast.Assign(targets=[_store(names.result)], value=_invoke_body(parts, names)),
            ast.Expr(value=sink.call(_formatted_elapsed(directive, names), names.logging)),
            ast.Return(value=_load(names.result)),
        ]
    )

    node_type = ast.AsyncFunctionDef if parts.is_async else ast.FunctionDef
    node = node_type(
        name=parts.name,
        args=copy.deepcopy(parts.args),
        body=body,
        decorator_list=copy.deepcopy(parts.attributes),
        returns=copy.deepcopy(parts.returns),
        **_type_params(copy.deepcopy(parts.type_params)),
    )
    node.lineno = parts.lineno
    node.col_offset = parts.col_offset
    node.end_lineno = parts.end_lineno if parts.end_lineno is not None else parts.lineno
    node.end_col_offset = parts.end_col_offset if parts.end_col_offset is not None else parts.col_offset
    return ast.fix_missing_locations(node)
