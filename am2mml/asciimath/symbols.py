"""
The AsciiMath symbol table.

Each entry is a :class:`Symbol`: the literal pattern that triggers it, a
:class:`SymbolKind` that drives the grammar, and a rendering action.  Actions
receive the running :class:`~am2mml.asciimath.parser.Parser` so that
constructs taking arguments (``sqrt``, ``frac``, ``bb``, …) can pull them from
the input themselves; their arity is simply how often they call back into
the parser.

Buckets are keyed by the first character of each pattern.  Within a bucket a
pattern must come before every pattern that is a prefix of it, so the first
match found by the scanner is always the longest one.  The order is authored
by hand; ``tests/unit/test_symbols.py`` checks it.
"""
from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import fonts
from .markup import Fragment, element, error, is_xml_char, leaf, node, xml_safe

if TYPE_CHECKING:
    from .parser import Parser

Action = Callable[["Parser"], Fragment]


class SymbolKind(enum.Enum):
    DEFAULT = "default"
    UNDER_OVER = "underover"
    LEFT_BRACKET = "left-bracket"
    RIGHT_BRACKET = "right-bracket"
    MATRIX_LEFT_BRACKET = "matrix-left-bracket"
    MATRIX_RIGHT_BRACKET = "matrix-right-bracket"
    MATRIX_CELL_SEPARATOR = "matrix-cell-separator"
    MATRIX_ROW_SEPARATOR = "matrix-row-separator"
    EOF = "eof"


@dataclass(frozen=True)
class Symbol:
    kind: SymbolKind
    pattern: str
    action: Action

    def render(self, parser: Parser) -> Fragment:
        return self.action(parser)


def _nothing(parser: Parser) -> Fragment:
    return []


def _mo(output: str | None) -> Action:
    """Action rendering a fixed operator, or nothing when *output* is None."""
    if output is None:
        return _nothing
    return lambda parser: leaf("mo", output)


# ---------------------------------------------------------------------------
# Symbols produced by the scanner itself
# ---------------------------------------------------------------------------

EOF = Symbol(SymbolKind.EOF, "", _nothing)


def text_literal(source: str, content: str) -> Symbol:
    """Quoted text; *source* is the raw notation including its quotes."""
    return Symbol(
        SymbolKind.DEFAULT,
        source,
        lambda parser: leaf("mtext", parser.scanner.styled(xml_safe(content))),
    )


def number(digits: str) -> Symbol:
    return Symbol(SymbolKind.DEFAULT, digits, lambda parser: leaf("mn", digits))


def unknown(char: str) -> Symbol:
    """Error symbol for a character no table entry starts with.

    Characters that XML cannot carry are named by code point instead.
    """
    name = char if is_xml_char(char) else f"U+{ord(char):04X}"
    return Symbol(SymbolKind.DEFAULT, char, lambda parser: error(name))


# ---------------------------------------------------------------------------
# Table entry factories
# ---------------------------------------------------------------------------

def ident(pattern: str, output: str | None = None) -> Symbol:
    text = pattern if output is None else output
    return Symbol(
        SymbolKind.DEFAULT,
        pattern,
        lambda parser: leaf("mi", parser.scanner.styled(text)),
    )


def oper(pattern: str, output: str | None = None) -> Symbol:
    return Symbol(SymbolKind.DEFAULT, pattern, _mo(pattern if output is None else output))


def text_oper(pattern: str, output: str | None = None) -> Symbol:
    """Word operators such as ``and`` or ``mod``, padded with 1ex spaces."""
    text = pattern if output is None else output

    def action(parser: Parser) -> Fragment:
        return [
            element(
                "mrow",
                [
                    element("mspace", width="1ex"),
                    element("mtext", text=text),
                    element("mspace", width="1ex"),
                ],
            )
        ]

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def under_over(pattern: str, output: str | None = None) -> Symbol:
    return Symbol(SymbolKind.UNDER_OVER, pattern, _mo(pattern if output is None else output))


def left_bracket(pattern: str, output: str | None = None) -> Symbol:
    return Symbol(SymbolKind.LEFT_BRACKET, pattern, _mo(output))


def right_bracket(pattern: str, output: str | None = None) -> Symbol:
    return Symbol(SymbolKind.RIGHT_BRACKET, pattern, _mo(output))


def matrix_left(pattern: str, output: str | None = None) -> Symbol:
    return Symbol(SymbolKind.MATRIX_LEFT_BRACKET, pattern, _mo(output))


def matrix_right(pattern: str, output: str | None = None) -> Symbol:
    return Symbol(SymbolKind.MATRIX_RIGHT_BRACKET, pattern, _mo(output))


def cell_separator(pattern: str) -> Symbol:
    return Symbol(SymbolKind.MATRIX_CELL_SEPARATOR, pattern, _mo(pattern))


def row_separator(pattern: str) -> Symbol:
    return Symbol(SymbolKind.MATRIX_ROW_SEPARATOR, pattern, _mo(pattern))


def unary(pattern: str, output: str | None = None) -> Symbol:
    """Prefix function such as ``sin``: operator followed by its argument."""
    op = pattern if output is None else output

    def action(parser: Parser) -> Fragment:
        arg = parser.simple()
        return [element("mrow", leaf("mo", op) + arg)]

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def unary_embed(pattern: str, tag: str, **attrib: str) -> Symbol:
    """Wrap the argument in *tag*, e.g. ``sqrt`` → ``<msqrt>``."""

    def action(parser: Parser) -> Fragment:
        return [element(tag, parser.simple(), **attrib)]

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def unary_under_over(pattern: str, tag: str, accent: str) -> Symbol:
    """Accents placed under or over the argument, e.g. ``hat`` or ``ul``."""

    def action(parser: Parser) -> Fragment:
        arg = parser.simple()
        return [element(tag, [node(arg), element("mo", text=accent)])]

    return Symbol(SymbolKind.UNDER_OVER, pattern, action)


def unary_surround(pattern: str, left: str, right: str) -> Symbol:
    """Delimit the argument on both sides, e.g. ``abs`` → ``|x|``."""

    def action(parser: Parser) -> Fragment:
        arg = parser.simple()
        return [element("mrow", leaf("mo", left) + arg + leaf("mo", right))]

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def unary_font(pattern: str, table: dict[int, str]) -> Symbol:
    """Parse the argument with *table* as the active letter substitution."""

    def action(parser: Parser) -> Fragment:
        with parser.scanner.font_scope(table):
            return parser.simple()

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def unary_text(pattern: str) -> Symbol:
    """``text(...)``: the raw argument source becomes an ``<mtext>``."""

    def action(parser: Parser) -> Fragment:
        return leaf("mtext", parser.scanner.styled(xml_safe(parser.raw_argument())))

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def binary_embed(pattern: str, tag: str, *, swap: bool = False) -> Symbol:
    """Two-argument layout element.

    With *swap* the second argument becomes the base, as in ``root(n)(x)``
    or ``overset(a)(b)``.
    """

    def action(parser: Parser) -> Fragment:
        first = node(parser.simple())
        second = node(parser.simple())
        if swap:
            first, second = second, first
        return [element(tag, [first, second])]

    return Symbol(SymbolKind.DEFAULT, pattern, action)


def binary_attr(pattern: str, tag: str, attr: str) -> Symbol:
    """The raw first argument becomes attribute *attr* of *tag*, e.g. ``color``."""

    def action(parser: Parser) -> Fragment:
        value = xml_safe(parser.raw_argument())
        return [element(tag, parser.simple(), **{attr: value})]

    return Symbol(SymbolKind.DEFAULT, pattern, action)


# ---------------------------------------------------------------------------
# The table
# ---------------------------------------------------------------------------

SYMBOLS: dict[str, tuple[Symbol, ...]] = {
    "a": (
        unary("arcsin"),
        unary("arccos"),
        unary("arctan"),
        ident("alpha", "α"),
        oper("aleph", "ℵ"),
        unary_surround("abs", "|", "|"),
        text_oper("and"),
        ident("a"),
    ),
    "A": (
        unary("Arcsin"),
        unary("Arccos"),
        unary("Arctan"),
        unary_surround("Abs", "|", "|"),
        oper("AA", "∀"),
        ident("A"),
    ),
    "b": (
        unary_font("bbb", fonts.DOUBLE_STRUCK),
        unary_font("bb", fonts.BOLD),
        ident("beta", "β"),
        unary_under_over("bar", "mover", "¯"),
        ident("b"),
    ),
    "B": (
        ident("B"),
    ),
    "c": (
        unary_embed("cancel", "menclose", notation="updiagonalstrike"),
        binary_attr("color", "mstyle", "mathcolor"),
        binary_attr("class", "mrow", "class"),
        oper("cdots", "⋯"),
        unary_surround("ceil", "⌈", "⌉"),
        unary("cosh"),
        unary("csch"),
        unary("cos"),
        unary("cot"),
        unary("csc"),
        unary_font("cc", fonts.CALLIGRAPHIC),
        ident("chi", "χ"),
        ident("c"),
    ),
    "C": (
        unary("Cosh"),
        unary("Cos"),
        unary("Cot"),
        unary("Csc"),
        oper("CC", "ℂ"),
        ident("C"),
    ),
    "d": (
        oper("diamonds", "⋄"),
        ident("delta", "δ"),
        oper("ddots", "⋱"),
        unary_under_over("ddot", "mover", ".."),
        oper("darr", "↓"),
        oper("del", "∂"),
        unary("det"),
        unary_under_over("dot", "mover", "."),
        text_oper("dim"),
        ident("d"),
    ),
    "D": (
        oper("Delta", "Δ"),
        ident("D"),
    ),
    "e": (
        ident("epsi", "ε"),
        ident("eta", "η"),
        unary("exp"),
        ident("e"),
    ),
    "E": (
        oper("EE", "∃"),
        ident("E"),
    ),
    "f": (
        unary_surround("floor", "⌊", "⌋"),
        oper("frown", "⌢"),
        binary_embed("frac", "mfrac"),
        unary_font("fr", fonts.FRAKTUR),
        ident("f"),
    ),
    "F": (
        ident("F"),
    ),
    "g": (
        ident("gamma", "γ"),
        oper("grad", "∇"),
        unary("gcd"),
        text_oper("glb"),
        ident("g"),
    ),
    "G": (
        oper("Gamma", "Γ"),
        ident("G"),
    ),
    "h": (
        oper("harr", "↔"),
        oper("hArr", "⇔"),
        unary_under_over("hat", "mover", "^"),
        ident("h"),
    ),
    "H": (
        ident("H"),
    ),
    "i": (
        ident("iota", "ι"),
        oper("int", "∫"),
        oper("in", "∈"),
        text_oper("if"),
        binary_attr("id", "mrow", "id"),
        ident("i"),
    ),
    "I": (
        ident("I"),
    ),
    "j": (
        ident("j"),
    ),
    "J": (
        ident("J"),
    ),
    "k": (
        ident("kappa", "κ"),
        ident("k"),
    ),
    "K": (
        ident("K"),
    ),
    "l": (
        ident("lambda", "λ"),
        oper("larr", "←"),
        oper("lArr", "⇐"),
        under_over("lim"),
        unary("log"),
        unary("lcm"),
        text_oper("lub"),
        unary("ln"),
        ident("l"),
    ),
    "L": (
        oper("Lambda", "Λ"),
        under_over("Lim"),
        unary("Log"),
        unary("Ln"),
        ident("L"),
    ),
    "m": (
        unary_font("mathbf", fonts.BOLD),
        unary_font("mathbb", fonts.DOUBLE_STRUCK),
        unary_font("mathcal", fonts.CALLIGRAPHIC),
        unary_font("mathfrak", fonts.FRAKTUR),
        unary_font("mathsf", fonts.SANS_SERIF),
        under_over("min"),
        under_over("max"),
        text_oper("mod"),
        ident("mu", "μ"),
        ident("m"),
    ),
    "M": (
        ident("M"),
    ),
    "n": (
        unary_surround("norm", "∥", "∥"),
        under_over("nnn", "⋂"),
        oper("not", "¬"),
        oper("nn", "∩"),
        ident("nu", "ν"),
        ident("n"),
    ),
    "N": (
        oper("NN", "ℕ"),
        ident("N"),
    ),
    "o": (
        unary_under_over("overarc", "mover", "⏜"),
        binary_embed("overset", "mover", swap=True),
        unary_under_over("obrace", "mover", "⏞"),
        ident("omega", "ω"),
        oper("oint", "∮"),
        text_oper("or"),
        oper("o+", "⊕"),
        oper("ox", "⊗"),
        oper("o.", "⊙"),
        oper("oo", "∞"),
        ident("o"),
    ),
    "O": (
        oper("Omega", "Ω"),
        oper("O/", "∅"),
        ident("O"),
    ),
    "p": (
        under_over("prod", "∏"),
        oper("prop", "∝"),
        ident("phi", "\u03D5"),
        ident("psi", "ψ"),
        ident("pi", "π"),
        ident("p"),
    ),
    "P": (
        oper("Phi", "Φ"),
        ident("Psi", "Ψ"),
        oper("Pi", "Π"),
        ident("P"),
    ),
    "q": (
        oper("qquad", "\u00A0\u00A0\u00A0\u00A0"),
        oper("quad", "\u00A0\u00A0"),
        ident("q"),
    ),
    "Q": (
        oper("QQ", "ℚ"),
        ident("Q"),
    ),
    "r": (
        oper("rarr", "→"),
        oper("rArr", "⇒"),
        binary_embed("root", "mroot", swap=True),
        ident("rho", "ρ"),
        ident("r"),
    ),
    "R": (
        oper("RR", "ℝ"),
        ident("R"),
    ),
    "s": (
        binary_embed("stackrel", "mover", swap=True),
        oper("setminus", "\\"),
        oper("square", "□"),
        ident("sigma", "σ"),
        oper("sube", "⊆"),
        oper("supe", "⊇"),
        unary_embed("sqrt", "msqrt"),
        unary("sinh"),
        unary("sech"),
        under_over("sum", "∑"),
        oper("sub", "⊂"),
        oper("sup", "⊃"),
        unary("sin"),
        unary("sec"),
        unary_font("sf", fonts.SANS_SERIF),
        ident("s"),
    ),
    "S": (
        oper("Sigma", "Σ"),
        unary("Sinh"),
        unary("Sin"),
        unary("Sec"),
        ident("S"),
    ),
    "t": (
        ident("theta", "θ"),
        unary_under_over("tilde", "mover", "~"),
        unary_text("text"),
        unary("tanh"),
        unary("tan"),
        ident("tau", "τ"),
        ident("t"),
    ),
    "T": (
        oper("Theta", "Θ"),
        unary("Tanh"),
        unary("Tan"),
        oper("TT", "⊤"),
        ident("T"),
    ),
    "u": (
        binary_embed("underset", "munder", swap=True),
        ident("upsilon", "υ"),
        unary_under_over("ubrace", "munder", "⏟"),
        oper("uarr", "↑"),
        under_over("uuu", "⋃"),
        oper("uu", "∪"),
        unary_under_over("ul", "munder", "\u0332"),
        ident("u"),
    ),
    "U": (
        ident("U"),
    ),
    "v": (
        ident("varepsilon", "\u025B"),
        ident("vartheta", "ϑ"),
        ident("varphi", "\u03C6"),
        oper("vdots", "⋮"),
        unary_under_over("vec", "mover", "→"),
        under_over("vvv", "⋁"),
        oper("vv", "∨"),
        ident("v"),
    ),
    "V": (
        ident("V"),
    ),
    "w": (
        ident("w"),
    ),
    "W": (
        ident("W"),
    ),
    "x": (
        ident("xi", "ξ"),
        oper("xx", "×"),
        ident("x"),
    ),
    "X": (
        ident("Xi", "Ξ"),
        ident("X"),
    ),
    "y": (
        ident("y"),
    ),
    "Y": (
        ident("Y"),
    ),
    "z": (
        ident("zeta", "ζ"),
        ident("z"),
    ),
    "Z": (
        oper("ZZ", "ℤ"),
        ident("Z"),
    ),
    "-": (
        oper("-<=", "⪯"),
        oper("->>", "↠"),
        oper("->", "→"),
        oper("-<", "≺"),
        oper("-:", "÷"),
        oper("-=", "≡"),
        oper("-+", "∓"),
        oper("-", "−"),
    ),
    "*": (
        oper("***", "⋆"),
        oper("**", "∗"),
        oper("*", "⋅"),
    ),
    "+": (
        oper("+-", "±"),
        oper("+"),
    ),
    "/": (
        oper("/_\\", "△"),
        oper("/_", "∠"),
        oper("//", "/"),
        oper("/"),
    ),
    "\\": (
        oper("\\\\", "\\"),
        oper("\\", "\u00A0"),
    ),
    "|": (
        oper("|><|", "⋈"),
        oper("|><", "⋉"),
        oper("|->", "↦"),
        oper("|--", "⊢"),
        oper("|==", "⊨"),
        oper("|__", "⌊"),
        oper("|~", "⌈"),
        matrix_right("|:}", "}"),
        matrix_right("|]", "]"),
        matrix_right("|)", ")"),
        matrix_right("|}"),
        left_bracket("|:", "|"),
        oper("|"),
    ),
    "<": (
        oper("<=>", "⇔"),
        oper("<=", "≤"),
        oper("<<", "≪"),
        oper("<"),
    ),
    ">": (
        oper(">->>", "⤖"),
        oper(">->", "↣"),
        oper("><|", "⋊"),
        oper(">-=", "⪰"),
        oper(">=", "≥"),
        oper(">-", "≻"),
        oper(">>", "≫"),
        oper(">"),
    ),
    "=": (
        oper("=>", "⇒"),
        oper("="),
    ),
    "@": (
        oper("@", "∘"),
    ),
    "^": (
        under_over("^^^", "⋀"),
        oper("^^", "∧"),
        oper("^", ""),
    ),
    "~": (
        oper("~~", "≈"),
        oper("~=", "≅"),
        oper("~|", "⌉"),
        oper("~", "∼"),
    ),
    "!": (
        oper("!in", "∉"),
        oper("!=", "≠"),
        oper("!"),
    ),
    ":": (
        oper(":="),
        right_bracket(":)", "\u232A"),
        right_bracket(":|", "|"),
        right_bracket(":}", "}"),
        oper(":.", "∴"),
        oper(":'", "∵"),
        oper(":"),
    ),
    ".": (
        oper("..."),
        oper("."),
    ),
    ",": (
        oper(","),
    ),
    ";": (
        row_separator(";;"),
        cell_separator(";"),
    ),
    "_": (
        oper("__|", "⌋"),
        oper("_|_", "⊥"),
        oper("_", ""),
    ),
    "'": (
        oper("'", "′"),
    ),
    "(": (
        left_bracket("(:", "\u2329"),
        matrix_left("(|", "("),
        left_bracket("(", "("),
    ),
    ")": (
        right_bracket(")", ")"),
    ),
    "[": (
        matrix_left("[|", "["),
        left_bracket("[", "["),
    ),
    "]": (
        right_bracket("]", "]"),
    ),
    "{": (
        matrix_left("{:|", "{"),
        left_bracket("{:", "{"),
        matrix_left("{|"),
        left_bracket("{"),
    ),
    "}": (
        right_bracket("}"),
    ),
}


def all_symbols() -> list[Symbol]:
    """Every table entry, bucket by bucket in declaration order."""
    return [sym for bucket in SYMBOLS.values() for sym in bucket]
