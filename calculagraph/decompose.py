"""Splitting a timer target into the parts the synthesizer reassembles."""

from __future__ import annotations

import ast
import copy
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable

from calculagraph.exceptions import UnsupportedTargetKind

ONLY_FUNCTIONS = "only functions are supported"
NO_GENERATORS = "generator functions are not supported"

_NESTED_SCOPES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda, ast.ClassDef)


@dataclass
class FunctionParts:
    """A function definition taken apart.

    Everything except ``body`` is passed through to the replacement as is.
    Python has no visibility marker, so there is no field for one; the
    underscore convention travels with ``name``.
    """

    attributes: list[ast.expr]
    name: str
    args: ast.arguments
    returns: ast.expr | None
    body: list[ast.stmt]
    docstring: ast.stmt | None = None
    is_async: bool = False
    type_params: list[Any] = field(default_factory=list)
    lineno: int = 1
    col_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None

    @property
    def parameter_names(self) -> list[str]:
        a = self.args
        names = [arg.arg for arg in a.posonlyargs + a.args]
        if a.vararg is not None:
            names.append(a.vararg.arg)
        names.extend(arg.arg for arg in a.kwonlyargs)
        if a.kwarg is not None:
            names.append(a.kwarg.arg)
        return names


def node_location(node: ast.AST, filename: str) -> str:
    return f"{filename}:{getattr(node, 'lineno', 0)}:{getattr(node, 'col_offset', 0) + 1}"


def _contains_yield(body: list[ast.stmt]) -> bool:
    pending: list[ast.AST] = list(body)
    while pending:
        node = pending.pop()
        if isinstance(node, (ast.Yield, ast.YieldFrom)):
            return True
        for child in ast.iter_child_nodes(node):
            if not isinstance(child, _NESTED_SCOPES):
                pending.append(child)
    return False


def split_function(node: ast.AST, filename: str = "<string>") -> FunctionParts:
    """Decompose a parsed ``def``; the input node is left untouched.

    Raises:
        UnsupportedTargetKind: ``node`` is not a function, or is a generator
    """
    if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        raise UnsupportedTargetKind(ONLY_FUNCTIONS, node_location(node, filename))
    if _contains_yield(node.body):
        raise UnsupportedTargetKind(NO_GENERATORS, node_location(node, filename))

    body = copy.deepcopy(node.body)
    docstring = None
    if (
        body
        and isinstance(body[0], ast.Expr)
        and isinstance(body[0].value, ast.Constant)
        and isinstance(body[0].value.value, str)
    ):
        docstring = body.pop(0)
    if not body:
        # A docstring-only function still needs a body to wrap.
        body = [ast.copy_location(ast.Pass(), docstring)]

    return FunctionParts(
        attributes=copy.deepcopy(node.decorator_list),
        name=node.name,
        args=copy.deepcopy(node.args),
        returns=copy.deepcopy(node.returns),
        body=body,
        docstring=docstring,
        is_async=isinstance(node, ast.AsyncFunctionDef),
        type_params=copy.deepcopy(getattr(node, "type_params", [])),
        lineno=node.lineno,
        col_offset=node.col_offset,
        end_lineno=node.end_lineno,
        end_col_offset=node.end_col_offset,
    )


def callable_location(obj: Any) -> str:
    """Qualified name and definition site of ``obj`` for error messages."""
    name = getattr(obj, "__qualname__", None) or type(obj).__name__
    code = getattr(inspect.unwrap(obj) if callable(obj) else obj, "__code__", None)
    if code is None:
        return name
    return f"{name} ({code.co_filename}:{code.co_firstlineno})"


def ensure_function(obj: Any) -> Callable[..., Any]:
    """Check that a runtime decorator target is a plain or bound function.

    Raises:
        UnsupportedTargetKind: classes, builtins, partials, callable
            instances, staticmethod/classmethod objects and generators
    """
    if not (inspect.isfunction(obj) or inspect.ismethod(obj)):
        raise UnsupportedTargetKind(ONLY_FUNCTIONS, callable_location(obj))
    if inspect.isgeneratorfunction(obj) or inspect.isasyncgenfunction(obj):
        raise UnsupportedTargetKind(NO_GENERATORS, callable_location(obj))
    return obj
