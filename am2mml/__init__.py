from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .api import convert, convert_text, preview, translate
from .asciimath import parse
from .config import Config, MathConfig, PreviewConfig, SafetyConfig

try:
    __version__ = version("am2mml")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "Config",
    "MathConfig",
    "PreviewConfig",
    "SafetyConfig",
    "convert",
    "convert_text",
    "parse",
    "preview",
    "translate",
]
