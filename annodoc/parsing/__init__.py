"""Front end of the compiler: annotation files to parsed entities."""

from .lines import classify_line, parse_records, reduce_lines, reduce_step
from .metadata import analyse, parse_metadata

__all__ = [
    "analyse",
    "classify_line",
    "parse_metadata",
    "parse_records",
    "reduce_lines",
    "reduce_step",
]
