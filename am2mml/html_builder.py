"""
Assemble standalone HTML pages: converted documents and expression previews.

The preview mirrors a live editor panel: the rendered equation, the source
it came from, and a collapsible "Show MathML" block with the indented markup
highlighted by Pygments.
"""
from __future__ import annotations

import html as html_mod
import xml.etree.ElementTree as ET

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import XmlLexer

from .asciimath import error_messages, pretty
from .config import PreviewConfig

# Split into head/tail so we never have to escape CSS braces
_HEAD = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>$title</title>
  <style>
    * { box-sizing: border-box; }
    body {
      font-family: Georgia, "Times New Roman", serif;
      font-size: 18px;
      line-height: 1.7;
      color: #222;
      max-width: 960px;
      margin: 0 auto;
      padding: 24px 16px 60px;
      background: #f0f0f0;
    }
    #content {
      background: #fff;
      padding: 48px 56px;
      border-radius: 8px;
      box-shadow: 0 2px 12px rgba(0,0,0,0.08);
    }
    .md-cell { margin-bottom: 1.2em; }
    math[display="block"] { margin: 1em 0; }
    merror { color: #b00020; }
    /* --- preview --- */
    .am-preview .label {
      font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
      font-size: 12px;
      text-transform: uppercase;
      letter-spacing: 0.08em;
      color: #888;
    }
    .am-preview .source {
      font-family: "DejaVu Sans Mono", "Fira Code", Consolas, monospace;
      background: #f4f4f4;
      padding: 0.6em 1em;
      border-radius: 4px;
    }
    .am-preview .diagnostics { color: #b00020; font-size: 0.9em; }
    details { margin-top: 1.4em; }
    summary { cursor: pointer; color: #555; }
    pre, code {
      font-family: "DejaVu Sans Mono", "Fira Code", Consolas, monospace;
      font-size: 0.85em;
    }
    pre { padding: 1em; border-radius: 4px; overflow-x: auto; }
    table { border-collapse: collapse; margin-bottom: 1em; }
    th, td { border: 1px solid #ddd; padding: 0.4em 0.8em; }
    blockquote {
      border-left: 4px solid #ddd;
      margin: 1em 0;
      padding: 0.2em 1em;
      color: #666;
    }
"""

_HEAD_END = """\
  </style>
</head>
<body>
  <div id="content">
"""

_TAIL = """\
  </div><!-- #content -->
</body>
</html>
"""


def build_page(content_html: str, *, title: str = "am2mml", extra_css: str = "") -> str:
    """Wrap *content_html* in a full standalone HTML page."""
    head = _HEAD.replace("$title", html_mod.escape(title))
    return head + extra_css + _HEAD_END + content_html + _TAIL


def build_preview(expression: str, math: ET.Element, config: PreviewConfig) -> str:
    """Return a standalone preview page for one translated expression."""
    formatter = HtmlFormatter(style=config.style, cssclass="mathml-source")
    source = pretty(math, indent=" " * config.pretty_indent)

    parts = [
        '<div class="am-preview">\n',
        '<span class="label">Input</span>\n',
        f'<div class="source">{html_mod.escape(expression)}</div>\n',
        '<span class="label">Preview</span>\n',
        f'<div class="rendered">{ET.tostring(math, encoding="unicode")}</div>\n',
    ]
    messages = error_messages(math)
    if messages:
        items = "".join(f"<li>{html_mod.escape(msg)}</li>" for msg in messages)
        parts.append(f'<ul class="diagnostics">{items}</ul>\n')
    parts.append(
        "<details>\n<summary>Show MathML</summary>\n"
        f"{highlight(source, XmlLexer(), formatter)}"
        "</details>\n"
    )
    parts.append("</div>\n")

    css = formatter.get_style_defs(".mathml-source")
    return build_page("".join(parts), title=config.title, extra_css=css + "\n")
