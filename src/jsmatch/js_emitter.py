"""Generate JavaScript source from a jsmatch expression tree."""

from __future__ import annotations

import logging

from jsmatch.ast_nodes import (
    ApplyExpr,
    BinopExpr,
    BoolLit,
    Expr,
    IntLit,
    LambdaExpr,
    LetExpr,
    ListExpr,
    MatchClause,
    MatchExpr,
    StringLit,
    VarExpr,
)
from jsmatch.checks import Check, render_checks
from jsmatch.config import JsmatchConfig
from jsmatch.document import (
    LINE,
    SOFT_BREAK,
    Doc,
    concat,
    group,
    join,
    nest,
    nest_if_broken,
    render,
    separator,
    text,
)
from jsmatch.errors import CompileError, Diagnostic, DiagnosticLabel, Severity
from jsmatch.patterns import CompiledPattern, compile_pattern
from jsmatch.syntax import (
    SUBJECT_NAME,
    bool_literal,
    identifier,
    int_literal,
    operator,
    string_literal,
)

logger = logging.getLogger(__name__)

NON_EXHAUSTIVE_MESSAGE = "Non-exhaustive match clauses"

_COMMA = concat([text(","), separator(" ", "")])


class JsEmitter:
    """Emit JavaScript from an expression tree."""

    def __init__(self, config: JsmatchConfig | None = None) -> None:
        self._config = config or JsmatchConfig()
        self.diagnostics: list[Diagnostic] = []

    # ── Public API ─────────────────────────────────────────────

    def emit(self, expr: Expr) -> str:
        """Generate JavaScript source for ``expr``, laid out to the configured width."""
        return render(self.document(expr), self._config.format.width)

    def document(self, expr: Expr) -> Doc:
        """Build the unrendered document for ``expr``."""
        self.diagnostics = []
        return self._emit_expr(expr, "expr")

    # ── Expressions ────────────────────────────────────────────

    def _emit_expr(self, expr: Expr, path: str) -> Doc:
        if isinstance(expr, IntLit):
            return text(int_literal(expr.value))
        if isinstance(expr, StringLit):
            return text(string_literal(expr.value))
        if isinstance(expr, BoolLit):
            return text(bool_literal(expr.value))
        if isinstance(expr, VarExpr):
            return text(identifier(expr.name, path))
        if isinstance(expr, ListExpr):
            items = [
                self._emit_expr(item, f"{path}.items[{i}]")
                for i, item in enumerate(expr.items)
            ]
            return _wrap("[", items, "]")
        if isinstance(expr, BinopExpr):
            return concat([
                self._emit_expr(expr.left, f"{path}.left"),
                text(f" {operator(expr.op, f'{path}.op')} "),
                self._emit_expr(expr.right, f"{path}.right"),
            ])
        if isinstance(expr, LetExpr):
            return self._emit_let(expr, path)
        if isinstance(expr, ApplyExpr):
            return self._emit_apply(expr, path)
        if isinstance(expr, LambdaExpr):
            return self._emit_lambda(expr, path)
        if isinstance(expr, MatchExpr):
            return self._emit_match(expr, path)
        raise TypeError(f"unknown expression: {expr!r}")

    def _emit_let(self, expr: LetExpr, path: str) -> Doc:
        name = identifier(expr.name, f"{path}.name")
        return _immediately_invoked([
            _let_stmt(name, self._emit_expr(expr.value, f"{path}.value")),
            _return_stmt(self._emit_expr(expr.body, f"{path}.body")),
        ])

    def _emit_apply(self, expr: ApplyExpr, path: str) -> Doc:
        function = self._emit_expr(expr.function, f"{path}.function")
        # An arrow function or operator chain must be parenthesised to be called
        if isinstance(expr.function, (LambdaExpr, BinopExpr)):
            function = concat([text("("), function, text(")")])
        args = [
            self._emit_expr(arg, f"{path}.args[{i}]")
            for i, arg in enumerate(expr.args)
        ]
        return concat([function, _wrap("(", args, ")")])

    def _emit_lambda(self, expr: LambdaExpr, path: str) -> Doc:
        seen: dict[str, int] = {}
        params: list[Doc] = []
        for i, param in enumerate(expr.params):
            param_path = f"{path}.params[{i}]"
            if param in seen:
                raise CompileError([
                    Diagnostic(
                        Severity.ERROR,
                        "E203",
                        f"duplicate parameter '{param}'",
                        labels=[
                            DiagnosticLabel(f"{path}.params[{seen[param]}]", "first declared here"),
                            DiagnosticLabel(param_path, "declared again here"),
                        ],
                    ),
                ])
            seen[param] = i
            params.append(text(identifier(param, param_path)))
        body = self._emit_expr(expr.body, f"{path}.body")
        return group(concat([
            _wrap_ungrouped("(", params, ")"),
            text(" =>"),
            nest_if_broken(concat([separator(" ", ""), body])),
        ]))

    # ── Match expressions ──────────────────────────────────────

    def _emit_match(self, expr: MatchExpr, path: str) -> Doc:
        subject = text(SUBJECT_NAME)
        statements = [
            _let_stmt(SUBJECT_NAME, self._emit_expr(expr.subject, f"{path}.subject")),
        ]

        for i, clause in enumerate(expr.clauses):
            clause_path = f"{path}.clauses[{i}]"
            compiled = compile_pattern(
                clause.pattern,
                subject,
                allow_shadowing=self._config.emit.allow_shadowed_bindings,
                path=f"{clause_path}.pattern",
            )
            body = self._clause_body(compiled, clause, clause_path)

            if compiled.is_catch_all:
                logger.debug("%s: catch-all clause, %d clause(s) dropped",
                             clause_path, len(expr.clauses) - i - 1)
                statements.extend(body)
                self._warn_unreachable(expr.clauses, i, path)
                break

            logger.debug("%s: %d check(s)", clause_path, len(compiled.checks))
            statements.append(_if_block(compiled.checks, body))
        else:
            logger.debug("%s: no catch-all clause, adding failure", path)
            statements.append(
                text(f"throw new Error({string_literal(NON_EXHAUSTIVE_MESSAGE)});")
            )

        return _immediately_invoked(statements)

    def _clause_body(self, compiled: CompiledPattern, clause: MatchClause, path: str) -> list[Doc]:
        statements = [
            _let_stmt(identifier(name), ref) for name, ref in compiled.bindings.items()
        ]
        statements.append(_return_stmt(self._emit_expr(clause.body, f"{path}.body")))
        return statements

    def _warn_unreachable(self, clauses: list[MatchClause], catch_all: int, path: str) -> None:
        for j in range(catch_all + 1, len(clauses)):
            self.diagnostics.append(
                Diagnostic(
                    Severity.WARNING,
                    "W301",
                    "unreachable match clause",
                    labels=[
                        DiagnosticLabel(f"{path}.clauses[{j}]", "this clause is never emitted"),
                        DiagnosticLabel(f"{path}.clauses[{catch_all}]", "every value matches here"),
                    ],
                )
            )


# ── Document helpers ───────────────────────────────────────────


def _wrap_ungrouped(open_: str, items: list[Doc], close: str) -> Doc:
    if not items:
        return text(open_ + close)
    return concat([
        text(open_),
        nest_if_broken(concat([SOFT_BREAK, join(items, _COMMA)])),
        separator("", ","),
        text(close),
    ])


def _wrap(open_: str, items: list[Doc], close: str) -> Doc:
    """Comma-separated items; one per line with a trailing comma when too wide."""
    return group(_wrap_ungrouped(open_, items, close))


def _let_stmt(name: str, value: Doc) -> Doc:
    return concat([text(f"let {name} = "), value, text(";")])


def _return_stmt(value: Doc) -> Doc:
    return concat([text("return "), value, text(";")])


def _block(statements: list[Doc]) -> Doc:
    return nest(concat([LINE, join(statements, LINE)]))


def _immediately_invoked(statements: list[Doc]) -> Doc:
    """``(() => { ... })()`` so a statement sequence can stand as an expression."""
    return concat([text("(() => {"), _block(statements), LINE, text("})()")])


def _if_block(checks: list[Check], body: list[Doc]) -> Doc:
    condition = group(concat([
        text("if ("),
        nest(concat([SOFT_BREAK, render_checks(checks)])),
        SOFT_BREAK,
        text(") {"),
    ]))
    return concat([condition, _block(body), LINE, text("}")])


def generate(expr: Expr, config: JsmatchConfig | None = None) -> str:
    """Generate JavaScript for ``expr`` with the given (or default) config."""
    return JsEmitter(config).emit(expr)
