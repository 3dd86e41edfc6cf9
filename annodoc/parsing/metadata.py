"""YAML metadata analysis for entity records."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import yaml

from ..errors import MetadataParseError
from ..logging import get_logger
from ..models import Deferred, EntityRecord, ParsedEntity

SPECIAL_PREFIX = "~"

logger = get_logger("metadata")


def analyse(records: Iterable[EntityRecord]) -> List[ParsedEntity]:
    """Parse the metadata block of every record."""
    return [parse_metadata(record) for record in records]


def parse_metadata(record: EntityRecord) -> ParsedEntity:
    """Load a record's YAML block and attach its documentation text."""
    try:
        loaded = yaml.safe_load(record.metadata)
    except yaml.YAMLError as exc:
        raise MetadataParseError(str(exc), record.reference, record.line) from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise MetadataParseError(
            f"expected a mapping, got {type(loaded).__name__}", record.reference, record.line
        )

    metadata = _convert_mapping(loaded, record)
    metadata["documentation"] = record.documentation
    logger.debug("Parsed %d metadata fields for %s", len(metadata) - 1, record.reference)
    return ParsedEntity(reference=record.reference, metadata=metadata, line=record.line)


def _convert_mapping(mapping: Dict[Any, Any], record: EntityRecord) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for raw_key, value in mapping.items():
        key = str(raw_key)
        if key.startswith(SPECIAL_PREFIX):
            key = key[len(SPECIAL_PREFIX):]
            result[key] = _as_deferred(key, value, record)
        else:
            result[key] = _convert_value(value, record)
    return result


def _convert_value(value: Any, record: EntityRecord) -> Any:
    if isinstance(value, dict):
        return _convert_mapping(value, record)
    if isinstance(value, list):
        return [_convert_value(item, record) for item in value]
    return value


def _as_deferred(key: str, value: Any, record: EntityRecord) -> Deferred:
    if isinstance(value, (dict, list)) or value is None:
        raise MetadataParseError(
            f"special field `~{key}` must hold an expression", record.reference, record.line
        )
    return Deferred(str(value))


__all__ = ["SPECIAL_PREFIX", "analyse", "parse_metadata"]
