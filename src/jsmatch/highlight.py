"""Terminal syntax highlighting for emitted JavaScript."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JavascriptLexer


def highlight_js(code: str) -> str:
    """Return ``code`` with ANSI colors, keeping its text and line structure."""
    return highlight(code, JavascriptLexer(), TerminalFormatter())
