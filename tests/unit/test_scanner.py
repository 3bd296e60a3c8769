"""
Unit tests for the longest-match scanner.

Tests am2mml/asciimath/scanner.py: lookahead without commit, literals,
unknown characters and the font substitution stack.
"""
import pytest

from am2mml.asciimath import SYMBOLS, Scanner, SymbolKind
from am2mml.asciimath.fonts import BOLD, FRAKTUR
from am2mml.asciimath.symbols import EOF


def scan(text: str) -> Scanner:
    return Scanner(text, SYMBOLS)


class TestPeekAndNext:
    """Test the peek()/next() contract."""

    def test_peek_does_not_commit(self):
        s = scan("sin x")
        sym, end = s.peek()
        assert sym.pattern == "sin"
        assert end == 3
        assert s.peek() == (sym, end)
        assert s.pos == 0

    def test_next_commits(self):
        s = scan("sin x")
        assert s.next().pattern == "sin"
        assert s.pos == 3
        assert s.next().pattern == "x"

    def test_leading_whitespace_is_skipped(self):
        s = scan("  \n\t->")
        sym, end = s.peek()
        assert sym.pattern == "->"
        assert end == 6

    def test_end_of_input(self):
        s = scan("   ")
        assert s.next() is EOF
        assert s.next().kind is SymbolKind.EOF
        assert s.at_end()

    def test_longest_match_wins(self):
        assert scan("<=>").next().pattern == "<=>"
        assert scan("<=").next().pattern == "<="
        assert scan("<").next().pattern == "<"

    def test_tokens_in_sequence(self):
        s = scan("x->oo")
        assert [s.next().pattern for _ in range(3)] == ["x", "->", "oo"]
        assert s.next() is EOF


class TestLiterals:
    """Test numeric and quoted-text literals."""

    @pytest.mark.parametrize(
        "text, digits, end",
        [("42", "42", 2), ("3.14x", "3.14", 4), ("12.", "12", 2), ("1.2.3", "1.2", 3)],
    )
    def test_numbers(self, text, digits, end):
        s = scan(text)
        sym = s.next()
        assert sym.pattern == digits
        assert s.pos == end

    def test_quoted_text(self):
        s = scan('"a b" c')
        sym = s.next()
        assert sym.pattern == '"a b"'
        assert sym.kind is SymbolKind.DEFAULT
        assert s.pos == 5

    def test_unterminated_quote_consumes_rest(self):
        s = scan('"abc')
        s.next()
        assert s.pos == 4
        assert s.next() is EOF

    def test_empty_quotes(self):
        s = scan('""x')
        assert s.next().pattern == '""'
        assert s.next().pattern == "x"


class TestUnknownCharacters:
    """Characters with no table entry."""

    def test_unknown_consumes_one_character(self):
        s = scan("#a")
        sym = s.next()
        assert sym.pattern == "#"
        assert s.pos == 1
        assert s.next().pattern == "a"

    def test_control_character_keeps_raw_pattern(self):
        s = scan("\x01")
        assert s.next().pattern == "\x01"
        assert s.at_end()

    def test_character_without_bucket(self):
        s = scan("?")
        assert s.next().pattern == "?"
        assert s.pos == 1


class TestFontStack:
    """Test the substitution table stack."""

    def test_no_table_leaves_text(self):
        assert scan("").styled("Ab") == "Ab"

    def test_innermost_table_applies(self):
        s = scan("")
        with s.font_scope(BOLD):
            assert s.styled("A") == "\U0001D400"
            with s.font_scope(FRAKTUR):
                assert s.styled("A") == "\U0001D504"
            assert s.styled("A") == "\U0001D400"
        assert s.styled("A") == "A"

    def test_scope_pops_on_exception(self):
        s = scan("")
        with pytest.raises(RuntimeError):
            with s.font_scope(BOLD):
                raise RuntimeError("boom")
        assert s.styled("a") == "a"

    def test_source_slice(self):
        s = scan("color(red)")
        assert s.source(5, 10) == "(red)"
