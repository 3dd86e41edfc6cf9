"""Line classification and block reduction for annotation files."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple, Union

from ..errors import StructuralError
from ..logging import get_logger
from ..models import EntityRecord

_ENTITY_PATTERN = re.compile(r"^@annotate:(.*)$")
_SEPARATOR_PATTERN = re.compile(r"^---+\s*$")
_LINE_BREAK = re.compile(r"\r\n|\n\r|\r|\n")

logger = get_logger("parsing")


@dataclass(frozen=True)
class Entity:
    name: str


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class Line:
    text: str


@dataclass(frozen=True)
class EndOfInput:
    pass


TaggedLine = Union[Entity, Separator, Line, EndOfInput]


def classify_line(line: str) -> TaggedLine:
    """Tag a single line as an entity marker, a separator or plain content."""
    match = _ENTITY_PATTERN.match(line)
    if match:
        return Entity(match.group(1).strip())
    if _SEPARATOR_PATTERN.match(line):
        return Separator()
    return Line(line)


def split_lines(source: str) -> List[str]:
    return _LINE_BREAK.split(source)


@dataclass(frozen=True)
class ReducerState:
    """Accumulator threaded through :func:`reduce_step`."""

    current: Optional[EntityRecord] = None
    annotation: bool = False
    completed: Tuple[EntityRecord, ...] = ()

    def finalize(self) -> Tuple[EntityRecord, ...]:
        if self.current is None:
            return self.completed
        return self.completed + (self.current,)


def reduce_step(state: ReducerState, tagged: TaggedLine, line_number: int) -> ReducerState:
    """Apply one tagged line to the reducer state and return the next state."""
    if isinstance(tagged, Entity):
        return ReducerState(
            current=EntityRecord(reference=tagged.name, line=line_number),
            annotation=True,
            completed=state.finalize(),
        )

    if isinstance(tagged, EndOfInput):
        return ReducerState(current=None, annotation=False, completed=state.finalize())

    if state.current is None:
        if isinstance(tagged, Separator):
            raise StructuralError(
                "Annotation separator found without a matching entity", line_number
            )
        raise StructuralError("Documentation found before an entity annotation", line_number)

    if isinstance(tagged, Separator):
        return replace(state, annotation=False)

    record = state.current
    if state.annotation:
        record = replace(record, metadata=f"{record.metadata}\n{tagged.text}")
    else:
        record = replace(record, documentation=f"{record.documentation}\n{tagged.text}")
    return replace(state, current=record)


def reduce_lines(tagged_lines: Iterable[TaggedLine]) -> List[EntityRecord]:
    """Fold classified lines into entity records, in source order.

    Line numbers are 1-based positions in ``tagged_lines``; the trailing
    :class:`EndOfInput` marker is appended here.
    """
    state = ReducerState()
    line_number = 0
    for line_number, tagged in enumerate(tagged_lines, start=1):
        state = reduce_step(state, tagged, line_number)
    state = reduce_step(state, EndOfInput(), line_number + 1)
    return list(state.completed)


def parse_records(source: str) -> List[EntityRecord]:
    """Split ``source`` into raw entity records."""
    records = reduce_lines(classify_line(line) for line in split_lines(source))
    logger.debug("Found %d annotated entities", len(records))
    return records


__all__ = [
    "EndOfInput",
    "Entity",
    "Line",
    "ReducerState",
    "Separator",
    "TaggedLine",
    "classify_line",
    "parse_records",
    "reduce_lines",
    "reduce_step",
    "split_lines",
]
