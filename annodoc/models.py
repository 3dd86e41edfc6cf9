"""Core data models shared across annodoc stages."""

import ast
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class EntityRecord:
    """Raw block for one ``@annotate:`` marker, before any parsing."""

    reference: str
    line: int
    metadata: str = ""
    documentation: str = ""


@dataclass
class ParsedEntity:
    """Reference text paired with its analyzed metadata mapping."""

    reference: str
    metadata: Dict[str, Any]
    line: int = 0


@dataclass(frozen=True)
class Example:
    """Code sample collected from documentation text."""

    name: Optional[str]
    source: str
    inferred: bool = True


@dataclass(frozen=True)
class Deferred:
    """Expression text resolved lazily by the generated module (``~`` fields)."""

    source: str


@dataclass
class Raw:
    """Pre-built expression emitted verbatim by the encoder.

    ``hoisted`` holds statements that must precede the expression in the
    generated module, such as example function definitions.
    """

    expression: ast.expr
    hoisted: List[ast.stmt] = field(default_factory=list)
