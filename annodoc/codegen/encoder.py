"""Conversion of metadata values into Python literal expressions."""

from __future__ import annotations

import ast
from typing import Any, List, Mapping, Optional

from ..errors import ReferenceSyntaxError, UnsupportedValueError
from ..models import Deferred, Raw
from .templates import lazy


class ValueEncoder:
    """Encodes metadata values as ``ast`` expression nodes.

    Statements hoisted out of :class:`Raw` values are collected in
    :attr:`hoisted`, in encounter order, for the emitter to place before
    the statement that uses them.
    """

    def __init__(self) -> None:
        self.hoisted: List[ast.stmt] = []

    def encode(self, value: Any) -> ast.expr:
        if isinstance(value, Raw):
            self.hoisted.extend(value.hoisted)
            return value.expression
        if isinstance(value, Deferred):
            return lazy(parse_expression(value.source))
        if isinstance(value, (list, tuple)):
            return ast.List(elts=[self.encode(item) for item in value], ctx=ast.Load())
        # bool is checked before the numeric types it subclasses
        if isinstance(value, bool):
            return ast.Constant(value=value)
        if isinstance(value, str):
            return ast.Constant(value=value)
        if isinstance(value, (int, float)):
            return _number(value)
        if isinstance(value, Mapping):
            return self.encode_mapping(value)
        raise UnsupportedValueError(value)

    def encode_mapping(self, mapping: Mapping[str, Any]) -> ast.Dict:
        keys: List[Optional[ast.expr]] = []
        values: List[ast.expr] = []
        for key, value in mapping.items():
            keys.append(ast.Constant(value=str(key)))
            values.append(self.encode(value))
        return ast.Dict(keys=keys, values=values)


def parse_expression(source: str) -> ast.expr:
    """Parse ``source`` as a single Python expression."""
    try:
        return ast.parse(source.strip(), mode="eval").body
    except SyntaxError as exc:
        raise ReferenceSyntaxError(source, exc.msg) from exc


def _number(value: int | float) -> ast.expr:
    if value < 0:
        return ast.UnaryOp(op=ast.USub(), operand=ast.Constant(value=-value))
    return ast.Constant(value=value)


__all__ = ["ValueEncoder", "parse_expression"]
