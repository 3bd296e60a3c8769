"""
Document conversion: Markdown text or notebook markdown cells → HTML with MathML.

Pipeline for each markdown source
---------------------------------
1. Stash fenced code blocks and inline code spans so math inside them is
   left alone.
2. Translate display math (``$$…$$``) to block MathML and inline math
   (``$…$``) to inline MathML.  Each result is stashed behind a placeholder
   so Markdown never sees the markup.
3. Restore the code spans, convert Markdown to HTML, strip active content,
   then substitute the MathML back in.
"""
from __future__ import annotations

import re
import warnings
from pathlib import Path
from typing import Any

import markdown
import nbformat

from .asciimath import error_messages, parse, to_string
from .config import Config

_DISPLAY_RE = re.compile(r"\$\$(.+?)\$\$", re.DOTALL)
_INLINE_RE = re.compile(r"(?<!\$)\$(?!\$)(.+?)(?<!\$)\$(?!\$)", re.DOTALL)

# Fenced code blocks — protected from all math processing
# Matches ``` or ~~~  (3+ identical fence chars) with optional language tag
_FENCED_CODE_RE = re.compile(r"^(`{3,}|~{3,})[^\n]*\n.*?\1[ \t]*$", re.MULTILINE | re.DOTALL)
_INLINE_CODE_RE = re.compile(r"(`+)(.+?)\1")
_PROTECTED_TOKEN = "\x00PROTECTED{}\x00"

# Letters and digits only, so Markdown passes it through untouched
_MATH_TOKEN = "AMMATHSPAN{}END"
_MATH_TOKEN_RE = re.compile(r"(<p>)?AMMATHSPAN(\d+)END(</p>)?")

# Markdown extensions used for cell conversion
_MD_EXTENSIONS = ["extra", "sane_lists", "nl2br"]

# Best-effort HTML sanitization for author-supplied raw HTML.
_DANGEROUS_BLOCK_TAG_RE = re.compile(
    r"<\s*(script|iframe|object|embed)\b[^>]*>.*?<\s*/\s*\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_DANGEROUS_SINGLE_TAG_RE = re.compile(
    r"<\s*(script|iframe|object|embed|link|meta)\b[^>]*?/?>",
    re.IGNORECASE,
)
_EVENT_ATTR_RE = re.compile(
    r"""\s+on[a-zA-Z0-9_-]+\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""",
    re.IGNORECASE,
)
_JS_URI_QUOTED_RE = re.compile(
    r"""(\b(?:href|src|xlink:href)\s*=\s*)(["'])\s*javascript:[^"']*\2""",
    re.IGNORECASE,
)
_JS_URI_UNQUOTED_RE = re.compile(
    r"""(\b(?:href|src|xlink:href)\s*=\s*)javascript:[^\s>]+""",
    re.IGNORECASE,
)

_DOCUMENT_SUFFIXES = frozenset({".md", ".markdown", ".ipynb"})


class Converter:
    """Converts Markdown documents or notebooks into HTML content fragments."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def convert(self, path: Path) -> str:
        """Convert a ``.md`` or ``.ipynb`` file to a concatenated HTML string."""
        suffix = path.suffix.lower()
        if suffix not in _DOCUMENT_SUFFIXES:
            allowed = ", ".join(sorted(_DOCUMENT_SUFFIXES))
            raise ValueError(f"document must use one of: {allowed}")
        if suffix == ".ipynb":
            return self.convert_notebook(nbformat.read(str(path), as_version=4))
        return self.convert_text(path.read_text(encoding="utf-8"))

    def convert_text(self, text: str) -> str:
        """Convert one Markdown string."""
        self._check_size(len(text))
        self._span_count = 0
        return self._markdown_cell(text)

    def convert_notebook(self, nb: Any) -> str:
        """Convert the markdown cells of a notebook; other cells are skipped."""
        sources = [
            _join_text(cell.get("source", ""))
            for cell in nb.get("cells", [])
            if cell.get("cell_type") == "markdown"
        ]
        self._check_size(sum(len(src) for src in sources))
        self._span_count = 0
        return "\n".join(self._markdown_cell(src) for src in sources)

    # ------------------------------------------------------------------
    # Cell processing
    # ------------------------------------------------------------------

    def _markdown_cell(self, src: str) -> str:
        """Render one markdown source to HTML with embedded MathML."""
        src, stash = _protect_markdown_code_spans(src)
        rendered: list[tuple[str, bool]] = []

        def _stash_math(expr: str, inline: bool) -> str:
            rendered.append((self._math(expr, inline=inline), inline))
            return _MATH_TOKEN.format(len(rendered) - 1)

        # Blank lines around display math so Markdown treats it as a block
        src = _DISPLAY_RE.sub(lambda m: f"\n\n{_stash_math(m.group(1), False)}\n\n", src)
        src = _INLINE_RE.sub(lambda m: _stash_math(m.group(1), True), src)

        src = _restore_protected_spans(src, stash)
        html = markdown.markdown(src, extensions=_MD_EXTENSIONS)
        html = _sanitize_html_fragment(html)

        def _restore_math(m: re.Match) -> str:
            math, inline = rendered[int(m.group(2))]
            if m.group(1) and m.group(3) and not inline:
                return math  # display math stands alone, no paragraph
            return (m.group(1) or "") + math + (m.group(3) or "")

        html = _MATH_TOKEN_RE.sub(_restore_math, html)
        return f'<div class="md-cell">{html}</div>\n'

    def _math(self, expr: str, *, inline: bool) -> str:
        """Translate one math span, warning about embedded diagnostics."""
        self._span_count += 1
        limit = self.config.safety.max_math_spans
        if self._span_count > limit:
            raise ValueError(f"document exceeds the limit of {limit} math spans")
        expr = expr.strip()
        if len(expr) > self.config.safety.max_input_chars:
            raise ValueError(
                f"math span exceeds {self.config.safety.max_input_chars} characters"
            )

        math = self.config.math
        root = parse(
            expr,
            inline,
            displaystyle=math.displaystyle,
            xmlns=math.xmlns,
            max_depth=self.config.safety.max_nesting,
        )
        if self.config.warn_on_errors:
            messages = error_messages(root)
            if messages:
                warnings.warn(
                    f"AsciiMath span {expr!r} rendered with errors: {', '.join(messages)}",
                    RuntimeWarning,
                    stacklevel=2,
                )
        return to_string(root)

    def _check_size(self, size: int) -> None:
        limit = self.config.safety.max_document_chars
        if size > limit:
            raise ValueError(f"document exceeds the limit of {limit} characters")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _sanitize_html_fragment(fragment: str) -> str:
    """Remove active-content vectors from author-provided HTML."""
    cleaned = _DANGEROUS_BLOCK_TAG_RE.sub("", fragment)
    cleaned = _DANGEROUS_SINGLE_TAG_RE.sub("", cleaned)
    cleaned = _EVENT_ATTR_RE.sub("", cleaned)
    cleaned = _JS_URI_QUOTED_RE.sub(r"\1\2#\2", cleaned)
    cleaned = _JS_URI_UNQUOTED_RE.sub(r"\1#", cleaned)
    return cleaned


def _join_text(value: Any) -> str:
    """Join notebook text payloads that can be str or list[str]."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "".join(part for part in value if isinstance(part, str))
    return ""


def _protect_markdown_code_spans(src: str) -> tuple[str, list[str]]:
    """Protect fenced and inline code spans from math translation."""
    stash: list[str] = []

    def _protect(match: re.Match) -> str:
        stash.append(match.group(0))
        return _PROTECTED_TOKEN.format(len(stash) - 1)

    src = _FENCED_CODE_RE.sub(_protect, src)
    src = _INLINE_CODE_RE.sub(_protect, src)
    return src, stash


def _restore_protected_spans(src: str, stash: list[str]) -> str:
    """Restore code spans previously stashed by ``_protect_markdown_code_spans``."""
    for i, block in enumerate(stash):
        src = src.replace(_PROTECTED_TOKEN.format(i), block)
    return src
