"""AsciiMath → MathML translation engine."""
from __future__ import annotations

from .markup import count_errors, error_messages, pretty, to_string
from .parser import Parser, parse, translate
from .scanner import Scanner
from .symbols import SYMBOLS, Symbol, SymbolKind

__all__ = [
    "Parser",
    "Scanner",
    "Symbol",
    "SymbolKind",
    "SYMBOLS",
    "count_errors",
    "error_messages",
    "parse",
    "pretty",
    "to_string",
    "translate",
]
