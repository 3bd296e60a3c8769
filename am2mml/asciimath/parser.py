"""
Recursive-descent grammar turning AsciiMath into a MathML element tree.

Grammar tiers
-------------
simple        one symbol; a bracket group; a matrix; or a construct that
              pulls its own arguments (``sqrt x``, ``frac a b``)
intermediate  simple [ "_" simple ] [ "^" simple ]
expression    { intermediate [ "/" intermediate ] } up to a terminator

Division binds only the two intermediate expressions next to the slash and
is checked once per term, so ``a/b/c`` renders as ``(a/b)`` followed by a
``/`` operator and ``c``.

Nothing here raises on malformed input.  Unknown characters, missing
closing brackets and constructs nested deeper than ``max_depth`` become
``<merror>`` nodes in an otherwise well-formed tree.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET

from .markup import (
    MATHML_NS,
    MISSING_CLOSER,
    TOO_DEEP,
    Fragment,
    element,
    error,
    node,
    row,
    to_string,
)
from .scanner import Scanner, SymbolTable
from .symbols import SYMBOLS, Symbol, SymbolKind

# Default bound on nested brackets and argument-taking constructs
MAX_DEPTH = 100

# Terminator sets for :meth:`Parser.expression`
TOP_LEVEL = frozenset({SymbolKind.EOF})
GROUP = frozenset({SymbolKind.EOF, SymbolKind.RIGHT_BRACKET})
MATRIX_CELL = frozenset(
    {
        SymbolKind.EOF,
        SymbolKind.MATRIX_RIGHT_BRACKET,
        SymbolKind.MATRIX_CELL_SEPARATOR,
        SymbolKind.MATRIX_ROW_SEPARATOR,
    }
)

_MATRIX_END = frozenset({SymbolKind.EOF, SymbolKind.MATRIX_RIGHT_BRACKET})

_OPENERS = frozenset({SymbolKind.LEFT_BRACKET, SymbolKind.MATRIX_LEFT_BRACKET})
_CLOSERS = frozenset({SymbolKind.RIGHT_BRACKET, SymbolKind.MATRIX_RIGHT_BRACKET})

# Enclosing pairs stripped from raw arguments such as ``color(red)``
_RAW_PAIRS = {"(": ")", "[": "]", "{": "}", '"': '"'}


class Parser:
    """Grammar over one :class:`Scanner`; create a new instance per input."""

    def __init__(self, text: str, symbols: SymbolTable = SYMBOLS,
                 max_depth: int = MAX_DEPTH) -> None:
        self.scanner = Scanner(text, symbols)
        self.max_depth = max_depth
        self._depth = 0

    def parse(self) -> Fragment:
        return self.expression(TOP_LEVEL)

    # ------------------------------------------------------------------
    # Simple expressions
    # ------------------------------------------------------------------

    def simple(self) -> Fragment:
        """Parse one simple expression and return its fragment."""
        return self._simple()[0]

    def _simple(self) -> tuple[Fragment, Symbol]:
        sym = self.scanner.next()
        if self._depth >= self.max_depth:
            self._skip_construct(sym)
            return error(TOO_DEEP), sym
        self._depth += 1
        try:
            if sym.kind is SymbolKind.LEFT_BRACKET:
                return self._group(sym), sym
            if sym.kind is SymbolKind.MATRIX_LEFT_BRACKET:
                return self._matrix(sym), sym
            return sym.render(self), sym
        finally:
            self._depth -= 1

    def _skip_construct(self, opener: Symbol) -> None:
        """Consume the rest of a bracketed construct without rendering it."""
        balance = 1 if opener.kind in _OPENERS else 0
        while balance:
            sym = self.scanner.next()
            if sym.kind is SymbolKind.EOF:
                return
            if sym.kind in _OPENERS:
                balance += 1
            elif sym.kind in _CLOSERS:
                balance -= 1

    def _group(self, opener: Symbol) -> Fragment:
        left = opener.render(self)
        content = self.expression(GROUP)
        closer = self.scanner.next()
        if closer.kind is SymbolKind.RIGHT_BRACKET:
            right = closer.render(self)
        else:
            right = error(MISSING_CLOSER)
        return [row(left + content + right)]

    def raw_argument(self) -> str:
        """Consume one simple expression and return its source text.

        One pair of enclosing brackets or quotes is removed, so both
        ``color(red)`` and ``color "red"`` yield ``red``.
        """
        start = self.scanner.skip_whitespace()
        self.simple()
        raw = self.scanner.source(start, self.scanner.pos).strip()
        if len(raw) >= 2 and _RAW_PAIRS.get(raw[0]) == raw[-1]:
            return raw[1:-1]
        return raw

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def intermediate(self) -> Fragment:
        """Parse a simple expression with optional sub- and superscript."""
        base, sym = self._simple()
        sub = sup = None
        nxt, _ = self.scanner.peek()
        if nxt.pattern == "_":
            self.scanner.next()
            sub = node(self.simple())
            nxt, _ = self.scanner.peek()
        if nxt.pattern == "^":
            self.scanner.next()
            sup = node(self.simple())

        if sub is None and sup is None:
            return base
        if sym.kind is SymbolKind.UNDER_OVER:
            tags = ("munder", "mover", "munderover")
        else:
            tags = ("msub", "msup", "msubsup")
        if sup is None:
            return [element(tags[0], [node(base), sub])]
        if sub is None:
            return [element(tags[1], [node(base), sup])]
        return [element(tags[2], [node(base), sub, sup])]

    # ------------------------------------------------------------------
    # Sequences and fractions
    # ------------------------------------------------------------------

    def expression(self, stops: frozenset[SymbolKind] = TOP_LEVEL) -> Fragment:
        """Concatenate terms until a symbol whose kind is in *stops* is next."""
        result: Fragment = []
        while self.scanner.peek()[0].kind not in stops:
            term = self.intermediate()
            if self.scanner.peek()[0].pattern == "/":
                self.scanner.next()
                if self.scanner.peek()[0].kind in stops:
                    denominator: Fragment = []
                else:
                    denominator = self.intermediate()
                term = [element("mfrac", [node(term), node(denominator)])]
            result += term
        return result

    # ------------------------------------------------------------------
    # Matrices
    # ------------------------------------------------------------------

    def _matrix(self, opener: Symbol) -> Fragment:
        left = opener.render(self)
        rows: list[ET.Element] = []
        while self.scanner.peek()[0].kind not in _MATRIX_END:
            rows.append(self._matrix_row())

        closer = self.scanner.next()
        if closer.kind is SymbolKind.MATRIX_RIGHT_BRACKET:
            right = closer.render(self)
        else:
            right = error(MISSING_CLOSER)

        table = element("mtable", rows)
        if not left and not right:
            return [table]
        return [row(left + [table] + right)]

    def _matrix_row(self) -> ET.Element:
        cells: list[ET.Element] = []
        while True:
            cells.append(element("mtd", self.expression(MATRIX_CELL)))
            sym, _ = self.scanner.peek()
            if sym.kind is SymbolKind.MATRIX_CELL_SEPARATOR:
                self.scanner.next()
                continue
            if sym.kind is SymbolKind.MATRIX_ROW_SEPARATOR:
                self.scanner.next()
            # A matrix closer or end of input is left for _matrix.
            return element("mtr", cells)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse(text: str, inline: bool = False, *, displaystyle: bool = True,
          xmlns: bool = False, max_depth: int = MAX_DEPTH) -> ET.Element:
    """Translate AsciiMath *text* into a ``<math>`` element.

    Args:
        text: AsciiMath source.
        inline: Render with ``display="inline"`` instead of ``"block"``.
        displaystyle: Value of the inner ``<mstyle displaystyle>`` switch.
        xmlns: Add the MathML namespace attribute, for XHTML or standalone
            XML consumers.
        max_depth: Nesting bound for brackets and argument-taking
            constructs; anything deeper becomes a "Nesting too deep"
            diagnostic.

    Returns:
        The root ``<math>`` element.  Malformed input never raises; problems
        appear as ``<merror>`` nodes inside the tree.
    """
    if not isinstance(text, str):
        raise TypeError(f"AsciiMath input must be a string, not {type(text).__name__}")

    content = Parser(text, max_depth=max_depth).parse()
    style = element("mstyle", content, displaystyle="true" if displaystyle else "false")
    attrib = {"display": "inline" if inline else "block"}
    if xmlns:
        attrib["xmlns"] = MATHML_NS
    return element("math", [style], **attrib)


def translate(text: str, inline: bool = False, *, displaystyle: bool = True,
              xmlns: bool = False, max_depth: int = MAX_DEPTH) -> str:
    """Translate AsciiMath *text* into a serialized MathML string."""
    return to_string(
        parse(text, inline, displaystyle=displaystyle, xmlns=xmlns, max_depth=max_depth)
    )
