from __future__ import annotations

import yaml
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

_DISPLAY_MODES = ("block", "inline")


@dataclass
class MathConfig:
    """Options for the generated ``<math>`` elements."""

    display: str = "block"  # default display mode for single expressions
    displaystyle: bool = True  # value of <mstyle displaystyle>
    xmlns: bool = False  # emit the MathML namespace on <math>


@dataclass
class PreviewConfig:
    """Options for the standalone preview page."""

    style: str = "default"  # Pygments style for the MathML source panel
    title: str = "AsciiMath Preview"
    pretty_indent: int = 2  # spaces per level in the MathML source panel


@dataclass
class SafetyConfig:
    """Input limits for untrusted server-side conversion workloads."""

    max_input_chars: int = 100_000  # max chars in a single expression
    max_document_chars: int = 5 * 1024 * 1024  # max chars in a converted document
    max_math_spans: int = 5000  # max number of math spans per document
    max_nesting: int = 100  # max depth of nested brackets and constructs per expression


@dataclass
class Config:
    """Top-level configuration aggregating math, preview and safety settings."""

    warn_on_errors: bool = True  # warn when a document span renders <merror> nodes
    math: MathConfig = field(default_factory=MathConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    safety: SafetyConfig = field(default_factory=SafetyConfig)


def load_config(path: Optional[Path]) -> Config:
    """Load configuration from a YAML file, returning defaults if *path* is None or missing."""
    if path is None or not path.exists():
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    return load_config_from_dict(data)


def load_config_from_dict(data: Mapping[str, Any]) -> Config:
    """Build a :class:`Config` from a mapping using the ``config.yaml`` schema.

    Unknown keys are ignored so that configs written for newer versions
    still load.
    """
    if not isinstance(data, Mapping):
        raise TypeError("config data must be a mapping")

    math_fields = _known_fields(data.get("math"), MathConfig)
    preview_fields = _known_fields(data.get("preview"), PreviewConfig)
    safety_fields = _known_fields(data.get("safety"), SafetyConfig)

    display = math_fields.get("display", "block")
    if display not in _DISPLAY_MODES:
        raise ValueError(
            f"math.display must be one of {', '.join(_DISPLAY_MODES)}, got {display!r}"
        )

    return Config(
        warn_on_errors=bool(data.get("warn_on_errors", True)),
        math=MathConfig(**math_fields),
        preview=PreviewConfig(**preview_fields),
        safety=SafetyConfig(**safety_fields),
    )


def _known_fields(section: Any, cls: type) -> dict[str, Any]:
    """Return the entries of *section* that are fields of dataclass *cls*."""
    if not isinstance(section, Mapping):
        return {}
    return {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
