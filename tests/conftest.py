"""
Shared pytest fixtures and configuration for am2mml tests.

This module provides:
- Configuration fixtures (default, quiet, inline)
- Notebook fixtures (programmatically generated)
- Temporary document fixtures
- Global pytest configuration
"""
from __future__ import annotations

import pytest
import nbformat


# ==============================================================================
# Global pytest configuration
# ==============================================================================

def pytest_configure(config):
    """Global pytest configuration - runs once at test session start."""
    # Suppress warnings from dependencies
    import warnings
    warnings.filterwarnings('ignore', category=DeprecationWarning)
    warnings.filterwarnings('ignore', category=PendingDeprecationWarning)


# ==============================================================================
# Configuration fixtures
# ==============================================================================

@pytest.fixture
def default_config():
    """Return default configuration."""
    from am2mml.config import Config
    return Config()


@pytest.fixture
def quiet_config():
    """Return configuration that does not warn about <merror> output."""
    from am2mml.config import Config
    return Config(warn_on_errors=False)


@pytest.fixture
def inline_config():
    """Return configuration rendering single expressions inline."""
    from am2mml.config import Config, MathConfig
    return Config(math=MathConfig(display="inline", displaystyle=False))


# ==============================================================================
# Notebook fixtures (programmatically generated)
# ==============================================================================

@pytest.fixture
def math_notebook():
    """Return notebook mixing markdown math cells with a code cell."""
    nb = nbformat.v4.new_notebook()
    nb.metadata = {"kernelspec": {"name": "python3", "language": "python"}}
    nb.cells = [
        nbformat.v4.new_markdown_cell("# Heading"),
        nbformat.v4.new_markdown_cell("Paragraph with $x^2$ inline math."),
        nbformat.v4.new_code_cell("print('$not math$')"),
        nbformat.v4.new_markdown_cell("$$sum_(i=1)^n i = (n(n+1))/2$$"),
    ]
    return nb


# ==============================================================================
# Temporary file fixtures
# ==============================================================================

@pytest.fixture
def temp_notebook(tmp_path, math_notebook):
    """Write the math notebook to a temporary file and return its path."""
    notebook_path = tmp_path / "test.ipynb"
    with open(notebook_path, "w") as f:
        nbformat.write(math_notebook, f)
    return notebook_path


@pytest.fixture
def temp_md(tmp_path):
    """Write a small Markdown document with math to a temporary file."""
    md_path = tmp_path / "test.md"
    md_path.write_text(
        "# Test\n\n"
        "Euler: $e^(i pi) + 1 = 0$.\n\n"
        "$$int_0^1 x dx = 1/2$$\n\n"
        "```python\nprint('$x$')\n```\n",
        encoding="utf-8",
    )
    return md_path


@pytest.fixture
def temp_config(tmp_path):
    """Write a config.yaml selecting inline display and return its path."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "math:\n"
        "  display: inline\n"
        "  xmlns: true\n"
        "preview:\n"
        "  title: Scratch\n"
        "safety:\n"
        "  max_input_chars: 50\n",
        encoding="utf-8",
    )
    return config_path
