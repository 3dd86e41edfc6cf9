"""Pipeline orchestration: annotation markdown in, Python source out."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .codegen import Emitter
from .config import AnnodocConfig, CodegenConfig, load_config
from .errors import UsageError
from .inference import ExampleInferencer, normalize
from .logging import get_logger
from .models import ParsedEntity
from .parsing import analyse, parse_records

logger = get_logger("compiler")


class Compiler:
    """Runs the classifier, reducer, analyzer, normalizer and emitter in sequence."""

    def __init__(self, codegen: CodegenConfig | None = None) -> None:
        self.codegen = codegen or CodegenConfig()

    @classmethod
    def from_config(cls, config: AnnodocConfig) -> "Compiler":
        return cls(config.codegen)

    def entities(self, source: str) -> List[ParsedEntity]:
        """Parse and normalize ``source`` without generating code."""
        inferencer = ExampleInferencer(
            feature_version=self.codegen.feature_version,
            prefix=self.codegen.example_prefix,
        )
        return normalize(analyse(parse_records(source)), inferencer)

    def compile_source(self, source: str) -> str:
        entities = self.entities(source)
        return Emitter(self.codegen.prelude).emit(entities)

    def compile_path(self, path: Path | str) -> str:
        input_path = Path(path)
        logger.debug("Compiling %s", input_path)
        return self.compile_source(input_path.read_text(encoding="utf-8"))


def compile_markdown(source: str, codegen: CodegenConfig | None = None) -> str:
    """Compile annotation markdown text into a Python module."""
    return Compiler(codegen).compile_source(source)


def compile_file(path: Path | str | None, config_path: Path | None = None) -> str:
    """Compile ``path`` using the ``.annodoc.yml`` next to it (or ``config_path``)."""
    if not path:
        raise UsageError("Usage: annodoc <INPUT>")
    config = load_config(config_path or Path(path))
    return Compiler.from_config(config).compile_path(path)


__all__ = ["Compiler", "compile_file", "compile_markdown"]
