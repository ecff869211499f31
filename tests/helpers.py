"""Shared test helpers for the jsmatch test suite."""

from __future__ import annotations

from jsmatch.ast_nodes import Expr, Pattern
from jsmatch.checks import render_check
from jsmatch.config import FormatConfig, JsmatchConfig
from jsmatch.document import Doc, group, render, text
from jsmatch.js_emitter import JsEmitter
from jsmatch.patterns import compile_pattern


def flat(doc: Doc) -> str:
    """Render a document fragment inside a group, wide enough to stay flat."""
    return render(group(doc), 1000)


def compile_to_strings(pattern: Pattern, **kwargs) -> tuple[list[str], dict[str, str]]:
    """Compile against ``$`` and return (rendered checks, rendered bindings)."""
    compiled = compile_pattern(pattern, text("$"), **kwargs)
    checks = [flat(render_check(c)) for c in compiled.checks]
    bindings = {name: flat(ref) for name, ref in compiled.bindings.items()}
    return checks, bindings


def emit(expr: Expr, width: int = 80) -> str:
    """Generate JavaScript for ``expr`` at the given width."""
    config = JsmatchConfig(format=FormatConfig(width=width))
    return JsEmitter(config).emit(expr)
