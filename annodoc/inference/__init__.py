"""Metadata inference: examples, deprecation and documentation cleanup."""

from .examples import ExampleInferencer, collect_examples
from .normalize import normalize, normalize_metadata, rewrite_documentation

__all__ = [
    "ExampleInferencer",
    "collect_examples",
    "normalize",
    "normalize_metadata",
    "rewrite_documentation",
]
