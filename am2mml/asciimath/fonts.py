"""
Character substitution tables for the font-changing constructs.

Each table maps the 52 ASCII letters to a code point in the Unicode
Mathematical Alphanumeric Symbols block (U+1D400–U+1D7FF).  Letters that
were encoded earlier in the Letterlike Symbols block (ℬ, ℭ, ℂ, …) leave a
reserved hole in the math block; those are filled from ``holes``.

Tables are ``str.translate`` mappings, so any character outside A–Z / a–z
passes through unchanged.
"""
from __future__ import annotations

import string


def _alphabet(upper: int, lower: int, holes: dict[str, str] | None = None) -> dict[int, str]:
    """Build a translate table from the first code points of each case."""
    mapping: dict[str, str] = {}
    for i, ch in enumerate(string.ascii_uppercase):
        mapping[ch] = chr(upper + i)
    for i, ch in enumerate(string.ascii_lowercase):
        mapping[ch] = chr(lower + i)
    mapping.update(holes or {})
    return str.maketrans(mapping)


BOLD = _alphabet(0x1D400, 0x1D41A)

SANS_SERIF = _alphabet(0x1D5A0, 0x1D5BA)

CALLIGRAPHIC = _alphabet(
    0x1D49C,
    0x1D4B6,
    {
        "B": "ℬ", "E": "ℰ", "F": "ℱ", "H": "ℋ",
        "I": "ℐ", "L": "ℒ", "M": "ℳ", "R": "ℛ",
        "e": "ℯ", "g": "ℊ", "o": "ℴ",
    },
)

FRAKTUR = _alphabet(
    0x1D504,
    0x1D51E,
    {
        "C": "ℭ", "H": "ℌ", "I": "ℑ", "R": "ℜ",
        "Z": "ℨ",
    },
)

DOUBLE_STRUCK = _alphabet(
    0x1D538,
    0x1D552,
    {
        "C": "ℂ", "H": "ℍ", "N": "ℕ", "P": "ℙ",
        "Q": "ℚ", "R": "ℝ", "Z": "ℤ",
    },
)

TABLES: dict[str, dict[int, str]] = {
    "bold": BOLD,
    "sans-serif": SANS_SERIF,
    "calligraphic": CALLIGRAPHIC,
    "fraktur": FRAKTUR,
    "double-struck": DOUBLE_STRUCK,
}
