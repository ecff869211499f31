"""jsmatch command line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from jsmatch import __version__
from jsmatch.ast_nodes import Expr
from jsmatch.config import (
    CONFIG_NAME,
    DEFAULT_CONFIG_TEXT,
    JsmatchConfig,
    discover_config,
)
from jsmatch.decoder import load_expr
from jsmatch.errors import CompileError, Diagnostic, DiagnosticRenderer
from jsmatch.js_emitter import JsEmitter

logger = logging.getLogger(__name__)


def _report(diagnostics: list[Diagnostic], filename: str) -> None:
    renderer = DiagnosticRenderer(color=True, filename=filename)
    for diag in diagnostics:
        click.echo(renderer.render(diag), err=True)


def _load(file: str) -> tuple[Expr, JsmatchConfig]:
    """Decode FILE and find its config; exit with diagnostics on failure."""
    path = Path(file)
    try:
        config = discover_config(path)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
    try:
        expr = load_expr(path.read_text())
    except CompileError as e:
        _report(e.diagnostics, file)
        raise SystemExit(1)
    logger.debug("decoded %s (width %d)", file, config.format.width)
    return expr, config


def _generate(expr: Expr, config: JsmatchConfig, filename: str) -> str:
    emitter = JsEmitter(config)
    try:
        code = emitter.emit(expr)
    except CompileError as e:
        _report(e.diagnostics, filename)
        raise SystemExit(1)
    _report(emitter.diagnostics, filename)
    return code


@click.group()
@click.version_option(__version__, prog_name="jsmatch")
@click.option("-v", "--verbose", is_flag=True, help="Log generation decisions to stderr.")
def main(verbose: bool) -> None:
    """Compile pattern-matching expression trees to JavaScript."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--width", type=int, default=None, help="Override the maximum line width.")
@click.option("--color", is_flag=True, help="Syntax-highlight the output.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None,
              help="Write JavaScript to this file instead of stdout.")
def emit(file: str, width: int | None, color: bool, output: str | None) -> None:
    """Generate JavaScript from a JSON expression tree."""
    expr, config = _load(file)
    if width is not None:
        if width <= 0:
            click.echo("error: --width must be positive", err=True)
            raise SystemExit(1)
        config.format.width = width
    code = _generate(expr, config, file)

    if output is not None:
        Path(output).write_text(code + "\n")
        click.echo(f"wrote {output}")
    elif color:
        from jsmatch.highlight import highlight_js

        click.echo(highlight_js(code), nl=False)
    else:
        click.echo(code)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def check(file: str) -> None:
    """Validate a JSON expression tree without printing code."""
    expr, config = _load(file)
    _generate(expr, config, file)
    click.echo(f"checked {file} — no errors")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def view(file: str) -> None:
    """View the decoded AST of a JSON expression tree."""
    expr, _config = _load(file)
    _dump_ast(expr, 0)


@main.command()
@click.argument("path", default=".", type=click.Path(file_okay=False))
def init(path: str) -> None:
    """Write a default jsmatch.toml."""
    target = Path(path) / CONFIG_NAME
    if target.exists():
        click.echo(f"error: {target} already exists", err=True)
        raise SystemExit(1)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEXT)
    click.echo(f"created {target}")


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if hasattr(node, "__dataclass_fields__"):
        fields = node.__dataclass_fields__  # type: ignore[union-attr]
        click.echo(f"{indent}{name}")
        for field_name in fields:
            value = getattr(node, field_name)
            if isinstance(value, list):
                if not value:
                    click.echo(f"{indent}  {field_name}: []")
                elif all(isinstance(v, str) for v in value):
                    click.echo(f"{indent}  {field_name}: {value!r}")
                else:
                    click.echo(f"{indent}  {field_name}:")
                    for item in value:
                        _dump_ast(item, depth + 2)
            elif hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            else:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
