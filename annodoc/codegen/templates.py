"""Small AST templates for the statements annodoc generates."""

from __future__ import annotations

import ast
from typing import List, Sequence, cast

ATTACH = "attach"
WITH_META = "with_meta"


def attach_call(reference: ast.expr, metadata: ast.expr) -> ast.stmt:
    """``attach(REFERENCE, METADATA)`` as an expression statement."""
    statement = cast(ast.Expr, ast.parse(f"{ATTACH}(ENTITY, OBJECT)").body[0])
    cast(ast.Call, statement.value).args = [reference, metadata]
    return statement


def with_meta_call(target: ast.expr, metadata: ast.expr) -> ast.expr:
    """``with_meta(TARGET, METADATA)`` as an expression."""
    call = cast(ast.Call, ast.parse(f"{WITH_META}(OBJECT, META)", mode="eval").body)
    call.args = [target, metadata]
    return call


def lazy(expression: ast.expr) -> ast.expr:
    """Wrap ``expression`` in a zero-argument lambda."""
    node = cast(ast.Lambda, ast.parse("lambda: None", mode="eval").body)
    node.body = expression
    return node


def function(name: str, body: Sequence[ast.stmt]) -> ast.FunctionDef:
    """Zero-argument function definition named ``name`` with ``body``."""
    node = cast(ast.FunctionDef, ast.parse(f"def {name}():\n    pass\n").body[0])
    statements: List[ast.stmt] = list(body)
    node.body = statements or [ast.Pass()]
    return node


__all__ = ["ATTACH", "WITH_META", "attach_call", "function", "lazy", "with_meta_call"]
