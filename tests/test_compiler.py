"""End-to-end tests for the compilation pipeline."""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Any, Dict

import pytest

from annodoc.compiler import Compiler, compile_file, compile_markdown
from annodoc.config import CodegenConfig
from annodoc.errors import (
    ExampleSyntaxError,
    MetadataParseError,
    ReferenceSyntaxError,
    StructuralError,
    UnsupportedValueError,
    UsageError,
)
from annodoc.runtime import metadata_for
from tests._fixtures.annotation_builder import AnnotationBuilder, fixture_text


class Maybe:
    def __init__(self, value: Any = None, present: bool = False) -> None:
        self.value = value
        self.present = present

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Maybe)
            and self.present == other.present
            and self.value == other.value
        )

    @staticmethod
    def Just(value: Any) -> "Maybe":
        return Maybe(value, True)

    @staticmethod
    def Nothing() -> "Maybe":
        return Maybe()


def _execute(generated: str) -> Dict[str, Any]:
    namespace: Dict[str, Any] = {"Maybe": Maybe}
    exec(compile(generated, "<annodoc>", "exec"), namespace)
    return namespace


def test_entity_count_matches_marker_count() -> None:
    source = fixture_text("maybe.md")

    entities = Compiler().entities(source)

    marker_count = sum(1 for line in source.splitlines() if line.startswith("@annotate:"))
    assert len(entities) == marker_count == 3


def test_simple_entity_compiles_to_single_attachment() -> None:
    generated = compile_markdown("@annotate: foo\nstability: experimental\n---\nSome text.\n")

    module = ast.parse(generated)
    [statement] = module.body[1:]
    call = statement.value
    assert ast.unparse(call.args[0]) == "foo"
    assert ast.literal_eval(call.args[1]) == {
        "stability": "experimental",
        "documentation": "\nSome text.\n",
    }


def test_generated_module_attaches_metadata_at_runtime() -> None:
    _execute(compile_markdown(fixture_text("maybe.md")))

    maybe_meta = metadata_for(Maybe)
    assert maybe_meta["category"] == "Data Structures"
    assert maybe_meta["authors"] == ["Quildreen Motta"]
    assert "## Example:\n" in maybe_meta["documentation"]
    assert "::" not in maybe_meta["documentation"]

    just_meta = metadata_for(Maybe.Just)
    assert just_meta["belongsTo"]() is Maybe
    assert just_meta["stability"] == "experimental"

    nothing_meta = metadata_for(Maybe.Nothing)
    assert nothing_meta["stability"] == "deprecated"
    assert nothing_meta["deprecated"] is True
    assert "examples" not in nothing_meta


def test_inferred_examples_run_and_keep_their_source() -> None:
    _execute(compile_markdown(fixture_text("maybe.md")))

    examples = metadata_for(Maybe)["examples"]

    assert [example["name"] for example in examples] == ["Example", "Why use Maybe?"]
    assert all(example["inferred"] is True for example in examples)
    for example in examples:
        example["call"]()
    trailing = metadata_for(examples[1]["call"])
    assert trailing["source"] == "value = Maybe.Just(1);\nempty = Maybe.Nothing()"


def test_structural_error_reports_line(annotations: AnnotationBuilder) -> None:
    path = annotations.write("bad.md", "intro text\n@annotate: foo\n")

    with pytest.raises(StructuralError) as excinfo:
        compile_file(path)

    assert excinfo.value.line == 1


@pytest.mark.parametrize(
    ("source", "error"),
    [
        ("@annotate: foo\nkey: [\n---\n", MetadataParseError),
        ("@annotate: foo bar\n---\n", ReferenceSyntaxError),
        ("@annotate: foo\nwhen: 2016-01-01\n---\n", UnsupportedValueError),
        ("@annotate: foo\n---\nRun::\n\n```\nif:\n```\n", ExampleSyntaxError),
    ],
)
def test_pipeline_errors_are_fatal(source: str, error: type) -> None:
    with pytest.raises(error):
        compile_markdown(source)


def test_compile_file_requires_a_path() -> None:
    with pytest.raises(UsageError):
        compile_file(None)


def test_compile_file_uses_sibling_config(annotations: AnnotationBuilder) -> None:
    annotations.config(
        """
        codegen:
          prelude:
            - "from mylib import attach, with_meta"
          example_prefix: "_sample"
        """
    )
    path = annotations.write("entity.md", "@annotate: foo\n---\nRun::\n\n```\npass\n```\n")

    generated = compile_file(path)

    assert generated.startswith("from mylib import attach, with_meta\n")
    assert "def _sample_1():" in generated


def test_compile_file_accepts_explicit_config(annotations: AnnotationBuilder, tmp_path: Path) -> None:
    config = tmp_path / "custom.yml"
    config.write_text("codegen:\n  prelude: []\n", encoding="utf-8")
    path = annotations.write("entity.md", "@annotate: foo\n---\n")

    generated = compile_file(path, config_path=config)

    assert generated == "attach(foo, {'documentation': '\\n'})\n"


def test_compiler_applies_codegen_settings() -> None:
    compiler = Compiler(CodegenConfig(prelude=[], example_prefix="_ex"))

    generated = compiler.compile_source("@annotate: foo\n---\n## Demo::\n\n```\n1\n```\n")

    assert generated.startswith("def _ex_1():\n    1\n")
