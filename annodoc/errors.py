"""Exception types raised by the annodoc compiler."""

from __future__ import annotations

from typing import Any, Optional


class AnnodocError(RuntimeError):
    """Base class for every fatal compilation failure."""


class UsageError(AnnodocError):
    """Raised when the compiler is invoked without an input file."""


class StructuralError(AnnodocError):
    """Raised when entity markers, separators and content appear out of order."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"{message} at line {line}")
        self.line = line


class MetadataParseError(AnnodocError):
    """Raised when an entity's metadata block is not a YAML mapping."""

    def __init__(self, message: str, reference: str, line: Optional[int] = None) -> None:
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"Invalid metadata for `{reference}`{location}: {message}")
        self.reference = reference
        self.line = line


class ExampleSyntaxError(AnnodocError):
    """Raised when an inferred example is not valid Python."""

    def __init__(self, reference: str, example: str, detail: str) -> None:
        label = f"example `{example}`" if example else "unnamed example"
        super().__init__(f"Syntax error in {label} of `{reference}`: {detail}")
        self.reference = reference
        self.example = example


class ReferenceSyntaxError(AnnodocError):
    """Raised when a reference is not a single Python expression."""

    def __init__(self, reference: str, detail: str) -> None:
        super().__init__(f"Invalid reference `{reference}`: {detail}")
        self.reference = reference


class UnsupportedValueError(AnnodocError, TypeError):
    """Raised when a metadata value has no literal encoding."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Type of property not supported: {value!r} ({type(value).__name__})")
        self.value = value


__all__ = [
    "AnnodocError",
    "ExampleSyntaxError",
    "MetadataParseError",
    "ReferenceSyntaxError",
    "StructuralError",
    "UnsupportedValueError",
    "UsageError",
]
