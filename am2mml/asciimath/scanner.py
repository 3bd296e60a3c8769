"""
Longest-match tokenizer over AsciiMath source text.

The scanner never moves backwards: :meth:`Scanner.peek` looks ahead without
committing and :meth:`Scanner.next` commits.  Every branch other than end of
input advances by at least one character, which is what guarantees the
grammar terminates on arbitrary input.
"""
from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager

from .symbols import EOF, Symbol, number, text_literal, unknown

_SPACE_RE = re.compile(r"\s*")
_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")

SymbolTable = Mapping[str, Sequence[Symbol]]


class Scanner:
    """Scan state for one translation: source text, cursor and font stack."""

    def __init__(self, text: str, symbols: SymbolTable) -> None:
        self.text = text
        self.symbols = symbols
        self.pos = 0
        self._fonts: list[dict[int, str]] = []

    def skip_whitespace(self) -> int:
        """Advance past whitespace and return the new cursor position."""
        self.pos = _SPACE_RE.match(self.text, self.pos).end()
        return self.pos

    def at_end(self) -> bool:
        return self.skip_whitespace() >= len(self.text)

    def peek(self) -> tuple[Symbol, int]:
        """Return the next symbol and the position just past it."""
        pos = self.skip_whitespace()
        text = self.text
        if pos >= len(text):
            return EOF, pos

        curr = text[pos]
        if curr == '"':
            end = text.find('"', pos + 1)
            if end < 0:
                # Unterminated text runs to the end of input.
                return text_literal(text[pos:], text[pos + 1:]), len(text)
            return text_literal(text[pos:end + 1], text[pos + 1:end]), end + 1

        m = _NUMBER_RE.match(text, pos)
        if m:
            return number(m.group(0)), m.end()

        for sym in self.symbols.get(curr, ()):
            if text.startswith(sym.pattern, pos):
                return sym, pos + len(sym.pattern)

        return unknown(curr), pos + 1

    def next(self) -> Symbol:
        """Consume and return the next symbol."""
        sym, self.pos = self.peek()
        return sym

    def source(self, start: int, end: int) -> str:
        return self.text[start:end]

    # ------------------------------------------------------------------
    # Font substitution
    # ------------------------------------------------------------------

    @contextmanager
    def font_scope(self, table: dict[int, str]) -> Iterator[None]:
        """Make *table* the active substitution table for the enclosed parse."""
        self._fonts.append(table)
        try:
            yield
        finally:
            self._fonts.pop()

    def styled(self, text: str) -> str:
        """Apply the innermost substitution table to *text*, if any is active."""
        if not self._fonts:
            return text
        return text.translate(self._fonts[-1])
