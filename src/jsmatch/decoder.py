"""Decode JSON documents into expression and pattern trees.

Every node is an object with a ``"type"`` tag::

    {"type": "match",
     "subject": {"type": "var", "name": "xs"},
     "clauses": [
         {"pattern": {"type": "list", "items": []},
          "body": {"type": "string", "value": "empty"}},
         {"pattern": {"type": "wildcard"},
          "body": {"type": "string", "value": "other"}}
     ]}

Problems are collected with the path of the offending node and raised
together as one CompileError.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from jsmatch.ast_nodes import (
    ApplyExpr,
    BinopExpr,
    BoolLit,
    BoolPattern,
    Expr,
    IntLit,
    IntPattern,
    LambdaExpr,
    LetExpr,
    ListExpr,
    ListPattern,
    ListTailPattern,
    MatchClause,
    MatchExpr,
    Pattern,
    StringLit,
    StringPattern,
    VarExpr,
    VariablePattern,
    WildcardPattern,
)
from jsmatch.errors import CompileError, Diagnostic, error
from jsmatch.syntax import is_operator


_KIND_NAMES: dict[type, str] = {
    dict: "an object",
    list: "a list",
    str: "a string",
    int: "an integer",
    bool: "a boolean",
}


class _Invalid(Exception):
    """Internal: abandon the current node after recording a diagnostic."""


class Decoder:
    """Build AST nodes from parsed JSON values."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    # ── Public API ─────────────────────────────────────────────

    def expr(self, data: Any) -> Expr:
        return self._finish(self._expr, data, "expr")

    def pattern(self, data: Any) -> Pattern:
        return self._finish(self._pattern, data, "pattern")

    def _finish(self, fn: Callable[[Any, str], Any], data: Any, root: str) -> Any:
        self.diagnostics = []
        try:
            node = fn(data, root)
        except _Invalid:
            node = None
        if self.diagnostics:
            raise CompileError(self.diagnostics)
        return node

    # ── Field access ───────────────────────────────────────────

    def _fail(self, code: str, message: str, path: str) -> _Invalid:
        self.diagnostics.append(error(code, message, path))
        return _Invalid()

    def _tag(self, data: Any, path: str) -> str:
        if not isinstance(data, dict):
            raise self._fail("E003", f"expected an object, got {type(data).__name__}", path)
        tag = data.get("type")
        if not isinstance(tag, str):
            raise self._fail("E003", "missing 'type' tag", path)
        return tag

    def _field(self, data: dict, name: str, kind: type, path: str) -> Any:
        if name not in data:
            raise self._fail("E003", f"missing field '{name}'", path)
        value = data[name]
        # bool is an int subclass; never accept it where an integer is wanted
        if (kind is int and isinstance(value, bool)) or not isinstance(value, kind):
            raise self._fail(
                "E003", f"field '{name}' must be {_KIND_NAMES[kind]}", f"{path}.{name}"
            )
        return value

    def _names(self, data: dict, name: str, path: str) -> list[str]:
        values = self._field(data, name, list, path)
        for i, value in enumerate(values):
            if not isinstance(value, str):
                raise self._fail("E003", f"'{name}' entries must be strings", f"{path}.{name}[{i}]")
        return list(values)

    def _each(self, fn: Callable[[Any, str], Any], items: list, path: str) -> list:
        """Decode every item, collecting diagnostics from all of them."""
        result = []
        failed = False
        for i, item in enumerate(items):
            try:
                result.append(fn(item, f"{path}[{i}]"))
            except _Invalid:
                failed = True
        if failed:
            raise _Invalid()
        return result

    # ── Expressions ────────────────────────────────────────────

    def _expr(self, data: Any, path: str) -> Expr:
        tag = self._tag(data, path)
        if tag == "int":
            return IntLit(self._field(data, "value", int, path))
        if tag == "string":
            return StringLit(self._field(data, "value", str, path))
        if tag == "bool":
            return BoolLit(self._field(data, "value", bool, path))
        if tag == "var":
            return VarExpr(self._field(data, "name", str, path))
        if tag == "list":
            items = self._field(data, "items", list, path)
            return ListExpr(self._each(self._expr, items, f"{path}.items"))
        if tag == "binop":
            op = self._field(data, "op", str, path)
            if not is_operator(op):
                raise self._fail(
                    "E003", "field 'op' must be an operator without whitespace", f"{path}.op"
                )
            return BinopExpr(
                op,
                self._expr(self._field(data, "left", dict, path), f"{path}.left"),
                self._expr(self._field(data, "right", dict, path), f"{path}.right"),
            )
        if tag == "let":
            return LetExpr(
                self._field(data, "name", str, path),
                self._expr(self._field(data, "value", dict, path), f"{path}.value"),
                self._expr(self._field(data, "body", dict, path), f"{path}.body"),
            )
        if tag == "apply":
            function = self._expr(self._field(data, "function", dict, path), f"{path}.function")
            args = self._field(data, "args", list, path)
            return ApplyExpr(function, self._each(self._expr, args, f"{path}.args"))
        if tag == "lambda":
            return LambdaExpr(
                self._names(data, "params", path),
                self._expr(self._field(data, "body", dict, path), f"{path}.body"),
            )
        if tag == "match":
            subject = self._expr(self._field(data, "subject", dict, path), f"{path}.subject")
            clauses = self._field(data, "clauses", list, path)
            return MatchExpr(subject, self._each(self._clause, clauses, f"{path}.clauses"))
        raise self._fail("E002", f"unknown expression type '{tag}'", path)

    def _clause(self, data: Any, path: str) -> MatchClause:
        if not isinstance(data, dict):
            raise self._fail("E003", "a clause must be an object", path)
        return MatchClause(
            self._pattern(self._field(data, "pattern", dict, path), f"{path}.pattern"),
            self._expr(self._field(data, "body", dict, path), f"{path}.body"),
        )

    # ── Patterns ───────────────────────────────────────────────

    def _pattern(self, data: Any, path: str) -> Pattern:
        tag = self._tag(data, path)
        if tag == "wildcard":
            return WildcardPattern()
        if tag == "var":
            return VariablePattern(self._field(data, "name", str, path))
        if tag == "int":
            return IntPattern(self._field(data, "value", int, path))
        if tag == "string":
            return StringPattern(self._field(data, "value", str, path))
        if tag == "bool":
            return BoolPattern(self._field(data, "value", bool, path))
        if tag == "list":
            items = self._field(data, "items", list, path)
            return ListPattern(self._each(self._pattern, items, f"{path}.items"))
        if tag == "list_tail":
            items = self._field(data, "items", list, path)
            return ListTailPattern(
                self._each(self._pattern, items, f"{path}.items"),
                self._field(data, "tail", str, path),
            )
        raise self._fail("E002", f"unknown pattern type '{tag}'", path)


def decode_expr(data: Any) -> Expr:
    return Decoder().expr(data)


def decode_pattern(data: Any) -> Pattern:
    return Decoder().pattern(data)


def load_expr(source: str) -> Expr:
    """Parse JSON text and decode it into an expression tree."""
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise CompileError([
            error("E001", f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"),
        ]) from e
    return decode_expr(data)
