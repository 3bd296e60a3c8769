"""Programmatic API for server-side am2mml usage."""
from __future__ import annotations

import re
from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any
from uuid import uuid4

import nbformat

from .asciimath import parse, to_string
from .config import Config, load_config, load_config_from_dict
from .converter import Converter
from .html_builder import build_page, build_preview

_CONTROL_CHAR_RE = re.compile(r"[\x00-\x1f\x7f]")


def translate(
    expression: str,
    inline: bool | None = None,
    *,
    config: Config | Mapping[str, Any] | str | Path | None = None,
) -> str:
    """Translate one AsciiMath expression to a MathML string.

    Args:
        expression: AsciiMath source.
        inline: Force inline (``True``) or block (``False``) display.
            ``None`` uses ``config.math.display``.
        config: ``None``, a ``Config``, a dict-like mapping using the
            ``config.yaml`` schema, or a path to a YAML config file.

    Returns:
        Serialized ``<math>`` element.  Malformed notation never raises;
        problems are embedded as ``<merror>`` nodes.
    """
    resolved = _resolve_config(config)
    return to_string(_parse_checked(expression, resolved, inline))


def preview(
    expression: str,
    inline: bool | None = None,
    *,
    config: Config | Mapping[str, Any] | str | Path | None = None,
) -> str:
    """Return a standalone HTML preview page for one expression."""
    resolved = _resolve_config(config)
    math = _parse_checked(expression, resolved, inline)
    return build_preview(expression, math, resolved.preview)


def convert(
    document: str | Path | Mapping[str, Any] | nbformat.NotebookNode,
    *,
    config: Config | Mapping[str, Any] | str | Path | None = None,
    standalone: bool = True,
) -> str:
    """Convert a Markdown document or notebook into HTML with embedded MathML.

    Args:
        document: Either:
            - path to a ``.md`` or ``.ipynb`` file, or
            - in-memory Jupyter notebook payload (dict/NotebookNode)
        config: Conversion config, as for :func:`translate`.
        standalone: Wrap the result in a full HTML page.

    Returns:
        HTML page (or fragment when *standalone* is false).
    """
    resolved = _resolve_config(config)
    converter = Converter(resolved)

    if isinstance(document, (str, Path)):
        content_html = converter.convert(_sanitize_input_path(document))
    else:
        content_html = converter.convert_notebook(_coerce_notebook_node(document))
    return build_page(content_html) if standalone else content_html


def convert_text(
    text: str,
    *,
    config: Config | Mapping[str, Any] | str | Path | None = None,
    standalone: bool = False,
) -> str:
    """Convert a Markdown string into HTML with embedded MathML."""
    if not isinstance(text, str):
        raise TypeError("text must be a string")
    content_html = Converter(_resolve_config(config)).convert_text(text)
    return build_page(content_html) if standalone else content_html


def _parse_checked(expression: str, config: Config, inline: bool | None):
    if not isinstance(expression, str):
        raise TypeError("expression must be a string")
    limit = config.safety.max_input_chars
    if len(expression) > limit:
        raise ValueError(f"expression exceeds the limit of {limit} characters")
    if inline is None:
        inline = config.math.display == "inline"
    return parse(
        expression,
        inline,
        displaystyle=config.math.displaystyle,
        xmlns=config.math.xmlns,
        max_depth=config.safety.max_nesting,
    )


def _resolve_config(
    config: Config | Mapping[str, Any] | str | Path | None,
) -> Config:
    if config is None:
        return Config()
    if isinstance(config, Config):
        return config
    if isinstance(config, Mapping):
        return load_config_from_dict(config)
    if isinstance(config, (str, Path)):
        return load_config(Path(config))
    raise TypeError(
        "config must be None, Config, dict-like mapping, or a config file path."
    )


def _sanitize_input_path(path_like: str | Path) -> Path:
    raw = str(path_like)
    if _CONTROL_CHAR_RE.search(raw):
        raise ValueError("document path contains invalid control characters")

    path = Path(path_like)
    if not path.exists():
        raise FileNotFoundError(f"'{path}' not found.")
    return path


def _coerce_notebook_node(
    notebook: Mapping[str, Any] | nbformat.NotebookNode,
) -> nbformat.NotebookNode:
    """Normalize and validate an in-memory notebook payload."""
    if isinstance(notebook, nbformat.NotebookNode):
        node = deepcopy(notebook)
    elif isinstance(notebook, Mapping):
        node = nbformat.from_dict(deepcopy(dict(notebook)))
    else:
        raise TypeError(
            "document must be a path or an in-memory Jupyter notebook "
            "payload (dict/NotebookNode)."
        )

    # Payloads written by hand often omit cell ids
    cells = node.get("cells", [])
    if isinstance(cells, list):
        for cell in cells:
            if isinstance(cell, Mapping) and not cell.get("id"):
                cell["id"] = uuid4().hex[:8]

    try:
        nbformat.validate(node)
    except Exception as exc:
        raise ValueError(f"Invalid Jupyter notebook payload: {exc}") from exc
    return node
