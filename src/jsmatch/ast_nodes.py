"""AST node definitions for jsmatch input trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# ── Patterns ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListPattern:
    items: list[Pattern]


@dataclass(frozen=True)
class ListTailPattern:
    items: list[Pattern]
    tail: str


@dataclass(frozen=True)
class VariablePattern:
    name: str


@dataclass(frozen=True)
class WildcardPattern:
    pass


@dataclass(frozen=True)
class IntPattern:
    value: int


@dataclass(frozen=True)
class StringPattern:
    value: str


@dataclass(frozen=True)
class BoolPattern:
    value: bool


Pattern = Union[
    ListPattern, ListTailPattern, VariablePattern, WildcardPattern,
    IntPattern, StringPattern, BoolPattern,
]


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class IntLit:
    value: int


@dataclass(frozen=True)
class StringLit:
    value: str


@dataclass(frozen=True)
class BoolLit:
    value: bool


@dataclass(frozen=True)
class VarExpr:
    name: str


@dataclass(frozen=True)
class ListExpr:
    items: list[Expr]


@dataclass(frozen=True)
class BinopExpr:
    op: str  # emitted verbatim
    left: Expr
    right: Expr


@dataclass(frozen=True)
class LetExpr:
    name: str
    value: Expr
    body: Expr


@dataclass(frozen=True)
class ApplyExpr:
    function: Expr
    args: list[Expr]


@dataclass(frozen=True)
class LambdaExpr:
    params: list[str]
    body: Expr


@dataclass(frozen=True)
class MatchClause:
    pattern: Pattern
    body: Expr


@dataclass(frozen=True)
class MatchExpr:
    subject: Expr
    clauses: list[MatchClause]


Expr = Union[
    IntLit, StringLit, BoolLit, VarExpr, ListExpr,
    BinopExpr, LetExpr, ApplyExpr, LambdaExpr, MatchExpr,
]
