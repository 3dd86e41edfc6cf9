"""Generation of the attachment module from normalized entities."""

from __future__ import annotations

import ast
from typing import Iterable, List, Sequence

from ..errors import ReferenceSyntaxError
from ..logging import get_logger
from ..models import ParsedEntity
from .encoder import ValueEncoder
from .templates import attach_call

DEFAULT_PRELUDE = ("from annodoc.runtime import attach, with_meta",)

logger = get_logger("codegen")


def parse_reference(reference: str) -> ast.expr:
    """Parse an entity reference, which must be exactly one expression statement."""
    try:
        module = ast.parse(reference)
    except SyntaxError as exc:
        raise ReferenceSyntaxError(reference, exc.msg) from exc
    if len(module.body) != 1 or not isinstance(module.body[0], ast.Expr):
        raise ReferenceSyntaxError(reference, "expected a single expression")
    return module.body[0].value


class Emitter:
    """Turns entities into ``attach(...)`` statements and serializes them."""

    def __init__(self, prelude: Sequence[str] | None = None) -> None:
        self.prelude = list(DEFAULT_PRELUDE if prelude is None else prelude)

    def entity_statements(self, entity: ParsedEntity) -> List[ast.stmt]:
        """Return the hoisted definitions and the attachment call for ``entity``."""
        target = parse_reference(entity.reference)
        encoder = ValueEncoder()
        metadata = encoder.encode_mapping(entity.metadata)
        return [*encoder.hoisted, attach_call(target, metadata)]

    def emit(self, entities: Iterable[ParsedEntity]) -> str:
        body: List[ast.stmt] = []
        count = 0
        for entity in entities:
            body.extend(self.entity_statements(entity))
            count += 1
        logger.debug("Emitting %d attachment statements", count)

        module = ast.fix_missing_locations(ast.Module(body=body, type_ignores=[]))
        chunks = [line for line in self.prelude if line.strip()]
        generated = ast.unparse(module)
        if generated:
            if chunks:
                chunks.append("")
            chunks.append(generated)
        return "\n".join(chunks) + "\n"


__all__ = ["DEFAULT_PRELUDE", "Emitter", "parse_reference"]
