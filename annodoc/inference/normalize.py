"""Derivation of secondary metadata fields."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping

from ..models import ParsedEntity
from .examples import ExampleInferencer

_MARKER_LINE = re.compile(r"^::$", re.MULTILINE)
_TRAILING_MARKER = re.compile(r"::+[ \t]*$", re.MULTILINE)


def rewrite_documentation(documentation: str) -> str:
    """Drop standalone ``::`` lines and turn trailing ``::`` into ``:``."""
    return _TRAILING_MARKER.sub(":", _MARKER_LINE.sub("", documentation))


def infer_deprecated(metadata: Mapping[str, Any]) -> Dict[str, Any]:
    result = dict(metadata)
    if result.get("deprecated"):
        result["stability"] = "deprecated"
    return result


def normalize_metadata(
    reference: str, metadata: Mapping[str, Any], inferencer: ExampleInferencer
) -> Dict[str, Any]:
    """Apply deprecation inference, example inference and the marker rewrite, in that order.

    Examples are read from the documentation before the rewrite removes
    the ``::`` markers they rely on.
    """
    result = infer_deprecated(metadata)
    documentation = result.get("documentation")
    if isinstance(documentation, str) and documentation:
        result.update(inferencer.infer(reference, documentation))
        result["documentation"] = rewrite_documentation(documentation)
    return result


def normalize(entities: Iterable[ParsedEntity], inferencer: ExampleInferencer) -> List[ParsedEntity]:
    return [
        ParsedEntity(
            reference=entity.reference,
            metadata=normalize_metadata(entity.reference, entity.metadata, inferencer),
            line=entity.line,
        )
        for entity in entities
    ]


__all__ = ["infer_deprecated", "normalize", "normalize_metadata", "rewrite_documentation"]
