"""Tests for example inference from documentation text."""

from __future__ import annotations

import ast

import pytest

from annodoc.errors import ExampleSyntaxError
from annodoc.inference.examples import (
    Block,
    ExampleInferencer,
    ScanState,
    collect_examples,
    lex_blocks,
    scan_step,
)
from annodoc.models import Example, Raw


def test_heading_marker_infers_named_example() -> None:
    examples = collect_examples("## Example::\n\n```\n1+1\n```\n")

    assert examples == [Example(name="Example", source="1+1")]


def test_code_without_marker_is_ignored() -> None:
    assert collect_examples("## Usage\n\n```\n1+1\n```\n") == []
    assert collect_examples("Just text.\n\n```\n1+1\n```\n") == []


def test_paragraph_marker_applies_to_next_block_only() -> None:
    documentation = (
        "Try it::\n\n```\na = 1\n```\n\n```\nnot_an_example()\n```\n"
    )

    assert collect_examples(documentation) == [Example(name="", source="a = 1")]


def test_other_blocks_cancel_pending_marker() -> None:
    documentation = "Look::\n\n- a list item\n\n```\nskipped()\n```\n"

    assert collect_examples(documentation) == []


def test_interior_and_trailing_examples_join_differently() -> None:
    documentation = (
        "## First::\n\n```\na = 1\n```\n\nMore::\n\n```\nb = 2\n```\n\n"
        "## Second::\n\n```\nc = 3\n```\n\nAgain::\n\n```\nd = 4\n```\n"
    )

    examples = collect_examples(documentation)

    assert examples == [
        Example(name="First", source="a = 1\n\nb = 2"),
        Example(name="Second", source="c = 3;\nd = 4"),
    ]
    for example in examples:
        ast.parse(example.source)


def test_heading_without_code_does_not_emit_example() -> None:
    documentation = "## Empty::\n\nNo code here.\n\n## Filled::\n\n```\nx = 1\n```\n"

    assert collect_examples(documentation) == [Example(name="Filled", source="x = 1")]


def test_indented_code_blocks_count_as_code() -> None:
    documentation = "Example::\n\n    total = sum([1, 2])\n"

    assert collect_examples(documentation) == [Example(name="", source="total = sum([1, 2])")]


def test_lex_blocks_keeps_only_top_level_blocks() -> None:
    blocks = lex_blocks("# Title::\n\n> quoted::\n\ntext\n")

    assert blocks == [
        Block(kind="heading", text="Title::"),
        Block(kind="blockquote_open"),
        Block(kind="paragraph", text="text"),
    ]


def test_scan_step_records_heading_state() -> None:
    state = scan_step(ScanState(code=("x = 1",), heading="Old"), Block("heading", "New ::"))

    assert state.examples == (Example(name="Old", source="x = 1"),)
    assert state.code == ()
    assert state.heading == "New ::"
    assert state.pending is True


def test_inferencer_builds_hoisted_example_functions() -> None:
    inferencer = ExampleInferencer()

    result = inferencer.infer("foo", "## Example::\n\n```\n1+1\n```\n")

    [example] = result["examples"]
    assert example["name"] == "Example"
    assert example["inferred"] is True
    call = example["call"]
    assert isinstance(call, Raw)
    assert ast.unparse(call.expression) == "with_meta(_example_1, {'source': '1+1'})"
    [definition] = call.hoisted
    assert ast.unparse(definition) == "def _example_1():\n    1 + 1"


def test_inferencer_numbers_examples_across_entities() -> None:
    inferencer = ExampleInferencer(prefix="_demo")
    documentation = "Run::\n\n```\npass\n```\n"

    first = inferencer.infer("a", documentation)["examples"][0]["call"]
    second = inferencer.infer("b", documentation)["examples"][0]["call"]

    assert first.hoisted[0].name == "_demo_1"
    assert second.hoisted[0].name == "_demo_2"


def test_inferencer_returns_nothing_without_examples() -> None:
    assert ExampleInferencer().infer("foo", "Plain documentation.\n") == {}


def test_invalid_example_raises_example_syntax_error() -> None:
    with pytest.raises(ExampleSyntaxError) as excinfo:
        ExampleInferencer().infer("Maybe.map", "## Broken::\n\n```\ndef (:\n```\n")

    assert excinfo.value.reference == "Maybe.map"
    assert excinfo.value.example == "Broken"


def test_feature_version_limits_example_grammar() -> None:
    documentation = "## Match::\n\n```\nmatch x:\n    case 1:\n        pass\n```\n"

    ExampleInferencer().infer("foo", documentation)
    with pytest.raises(ExampleSyntaxError):
        ExampleInferencer(feature_version=(3, 8)).infer("foo", documentation)


def test_trailing_example_tolerates_fragments_ending_in_semicolon() -> None:
    documentation = "Run::\n\n```\nx = 1;\n```\n\nThen::\n\n```\ny = x\n```\n"

    [example] = collect_examples(documentation)
    assert example.source == "x = 1;\ny = x"

    result = ExampleInferencer().infer("foo", documentation)
    assert ast.unparse(result["examples"][0]["call"].hoisted[0]) == (
        "def _example_1():\n    x = 1\n    y = x"
    )


@pytest.mark.parametrize(
    "code",
    ["from math import *\nsqrt(4)", "nonlocal value", "await task"],
)
def test_example_that_cannot_live_in_a_function_is_rejected(code: str) -> None:
    with pytest.raises(ExampleSyntaxError) as excinfo:
        ExampleInferencer().infer("math.sqrt", f"## Usage::\n\n```\n{code}\n```\n")

    assert excinfo.value.reference == "math.sqrt"
    assert excinfo.value.example == "Usage"
