"""Back end of the compiler: metadata to generated Python source."""

from .emitter import DEFAULT_PRELUDE, Emitter, parse_reference
from .encoder import ValueEncoder, parse_expression

__all__ = ["DEFAULT_PRELUDE", "Emitter", "ValueEncoder", "parse_expression", "parse_reference"]
