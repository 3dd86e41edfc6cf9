"""Inference of runnable examples from documentation text.

A heading or paragraph whose text ends with ``::`` marks the code block
that follows it as an example. Code blocks collected under the same
heading form a single example named after that heading.
"""

from __future__ import annotations

import ast
import itertools
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..codegen.encoder import ValueEncoder
from ..codegen.templates import function, with_meta_call
from ..errors import ExampleSyntaxError
from ..logging import get_logger
from ..models import Example, Raw

EXAMPLE_MARKER = re.compile(r"::\s*$")

# Code fragments of an example closed by a heading are joined with a blank
# line; the fragments of the final example use an explicit statement separator.
BLOCK_SEPARATOR = "\n\n"
STATEMENT_SEPARATOR = ";\n"

_CODE_TOKENS = {"fence", "code_block"}

logger = get_logger("inference")


@dataclass(frozen=True)
class Block:
    """Top-level markdown block reduced to what example scanning needs."""

    kind: str
    text: str = ""


@dataclass(frozen=True)
class ScanState:
    examples: Tuple[Example, ...] = ()
    code: Tuple[str, ...] = ()
    heading: Optional[str] = None
    pending: bool = False


def is_example_lead(text: str) -> bool:
    return EXAMPLE_MARKER.search(text) is not None


def example_name(heading: Optional[str]) -> str:
    if heading is None:
        return ""
    return EXAMPLE_MARKER.sub("", heading).rstrip()


def lex_blocks(documentation: str, parser: MarkdownIt | None = None) -> List[Block]:
    """Lex ``documentation`` into its top-level blocks, in document order."""
    tokens = (parser or MarkdownIt("commonmark")).parse(documentation)
    return list(_top_level_blocks(tokens))


def _top_level_blocks(tokens: Sequence[Token]) -> Iterator[Block]:
    for index, token in enumerate(tokens):
        if token.level != 0 or token.nesting == -1:
            continue
        if token.type in ("heading_open", "paragraph_open"):
            inline = tokens[index + 1]
            yield Block(kind=token.type[: -len("_open")], text=inline.content)
        elif token.type in _CODE_TOKENS:
            yield Block(kind="code", text=token.content)
        else:
            yield Block(kind=token.type)


def scan_step(state: ScanState, block: Block) -> ScanState:
    """Advance the example scan over one block."""
    if block.kind == "heading":
        examples = state.examples
        if state.code:
            examples += (
                Example(name=example_name(state.heading), source=BLOCK_SEPARATOR.join(state.code)),
            )
        return ScanState(
            examples=examples,
            code=(),
            heading=block.text,
            pending=is_example_lead(block.text),
        )
    if block.kind == "paragraph":
        return replace(state, pending=is_example_lead(block.text))
    if block.kind == "code":
        if not state.pending:
            return replace(state, pending=False)
        fragment = block.text.rstrip()
        code = state.code + (fragment,) if fragment else state.code
        return replace(state, code=code, pending=False)
    return replace(state, pending=False)


def join_statements(fragments: Sequence[str]) -> str:
    """Join code fragments with the statement separator.

    A fragment's own trailing semicolon is dropped so the separator never
    produces an empty statement.
    """
    return STATEMENT_SEPARATOR.join(fragment.rstrip().rstrip(";").rstrip() for fragment in fragments)


def collect_examples(documentation: str, parser: MarkdownIt | None = None) -> List[Example]:
    """Return the examples marked in ``documentation``, in document order."""
    state = ScanState()
    for block in lex_blocks(documentation, parser):
        state = scan_step(state, block)
    examples = list(state.examples)
    if state.code:
        examples.append(
            Example(name=example_name(state.heading), source=join_statements(state.code))
        )
    return examples


class ExampleInferencer:
    """Turns collected examples into hoisted functions tagged with their source.

    One inferencer is shared by every entity of a generated module so
    example function names stay unique within it.
    """

    def __init__(
        self,
        *,
        feature_version: Tuple[int, int] | None = None,
        prefix: str = "_example",
    ) -> None:
        self.feature_version = feature_version
        self.prefix = prefix
        self._parser = MarkdownIt("commonmark")
        self._counter = itertools.count(1)

    def infer(self, reference: str, documentation: str) -> Dict[str, Any]:
        examples = collect_examples(documentation or "", self._parser)
        if not examples:
            return {}
        logger.debug("Inferred %d example(s) for %s", len(examples), reference)
        return {"examples": [self.parse_example(reference, example) for example in examples]}

    def parse_example(self, reference: str, example: Example) -> Dict[str, Any]:
        name = example.name or ""
        try:
            module = ast.parse(example.source, feature_version=self.feature_version)
        except SyntaxError as exc:
            raise ExampleSyntaxError(reference, name, f"{exc.msg} (line {exc.lineno})") from exc

        definition = function(f"{self.prefix}_{next(self._counter)}", module.body)
        try:
            wrapper = ast.fix_missing_locations(ast.Module(body=[definition], type_ignores=[]))
            compile(wrapper, f"<example {name or definition.name}>", "exec")
        except SyntaxError as exc:
            raise ExampleSyntaxError(reference, name, exc.msg) from exc
        tagged = with_meta_call(
            ast.Name(id=definition.name, ctx=ast.Load()),
            ValueEncoder().encode({"source": example.source}),
        )
        return {
            "name": name,
            "call": Raw(expression=tagged, hoisted=[definition]),
            "inferred": example.inferred,
        }


__all__ = [
    "BLOCK_SEPARATOR",
    "Block",
    "ExampleInferencer",
    "STATEMENT_SEPARATOR",
    "ScanState",
    "collect_examples",
    "example_name",
    "is_example_lead",
    "join_statements",
    "lex_blocks",
    "scan_step",
]
