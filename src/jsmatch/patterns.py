"""Lower a pattern against a subject reference into checks and bindings.

Patterns are walked depth-first, left to right. Every literal contributes an
equality check, every list pattern a length check followed by the checks of
its items against ``subject[i]``. Variables and list tails contribute
bindings from the user's name to the subject-derived reference.

A pattern that produces no checks always matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from jsmatch.ast_nodes import (
    BoolPattern,
    IntPattern,
    ListPattern,
    ListTailPattern,
    Pattern,
    StringPattern,
    VariablePattern,
    WildcardPattern,
)
from jsmatch.checks import Check, EqualityCheck, LengthCheck
from jsmatch.document import Doc, concat, text
from jsmatch.errors import CompileError, DiagnosticLabel, Diagnostic, Severity
from jsmatch.syntax import bool_literal, identifier, int_literal, string_literal


@dataclass
class CompiledPattern:
    checks: list[Check] = field(default_factory=list)
    bindings: dict[str, Doc] = field(default_factory=dict)

    @property
    def is_catch_all(self) -> bool:
        return not self.checks


def index(subject: Doc, i: int) -> Doc:
    return concat([subject, text(f"[{i}]")])


def slice_from(subject: Doc, start: int) -> Doc:
    return concat([subject, text(f".slice({start})")])


class PatternCompiler:
    """Accumulates checks and bindings for a single pattern."""

    def __init__(self, *, allow_shadowing: bool = False, path: str = "pattern") -> None:
        self._allow_shadowing = allow_shadowing
        self._root_path = path
        self._checks: list[Check] = []
        self._bindings: dict[str, Doc] = {}
        self._binding_paths: dict[str, str] = {}

    def compile(self, pattern: Pattern, subject: Doc) -> CompiledPattern:
        self._walk(pattern, subject, self._root_path)
        return CompiledPattern(list(self._checks), dict(self._bindings))

    # ── Traversal ──────────────────────────────────────────────

    def _walk(self, pattern: Pattern, subject: Doc, path: str) -> None:
        if isinstance(pattern, VariablePattern):
            self._bind(pattern.name, subject, path)
        elif isinstance(pattern, WildcardPattern):
            pass
        elif isinstance(pattern, IntPattern):
            self._checks.append(EqualityCheck(subject, text(int_literal(pattern.value))))
        elif isinstance(pattern, StringPattern):
            self._checks.append(EqualityCheck(subject, text(string_literal(pattern.value))))
        elif isinstance(pattern, BoolPattern):
            self._checks.append(EqualityCheck(subject, text(bool_literal(pattern.value))))
        elif isinstance(pattern, ListPattern):
            self._checks.append(LengthCheck(subject, len(pattern.items), at_least=False))
            self._walk_items(pattern.items, subject, path)
        elif isinstance(pattern, ListTailPattern):
            self._checks.append(LengthCheck(subject, len(pattern.items), at_least=True))
            self._walk_items(pattern.items, subject, path)
            self._bind(pattern.tail, slice_from(subject, len(pattern.items)), f"{path}.tail")
        else:
            raise TypeError(f"unknown pattern: {pattern!r}")

    def _walk_items(self, items: list[Pattern], subject: Doc, path: str) -> None:
        for i, item in enumerate(items):
            self._walk(item, index(subject, i), f"{path}.items[{i}]")

    def _bind(self, name: str, ref: Doc, path: str) -> None:
        identifier(name, path)
        if name in self._bindings and not self._allow_shadowing:
            first = self._binding_paths[name]
            raise CompileError([
                Diagnostic(
                    Severity.ERROR,
                    "E201",
                    f"'{name}' is bound more than once in the same pattern",
                    labels=[
                        DiagnosticLabel(first, "first bound here"),
                        DiagnosticLabel(path, "bound again here"),
                    ],
                    notes=["each variable in a pattern must have a distinct name"],
                ),
            ])
        self._bindings[name] = ref
        self._binding_paths[name] = path


def compile_pattern(
    pattern: Pattern,
    subject: Doc,
    *,
    allow_shadowing: bool = False,
    path: str = "pattern",
) -> CompiledPattern:
    """Compile ``pattern`` against ``subject`` into checks and bindings."""
    compiler = PatternCompiler(allow_shadowing=allow_shadowing, path=path)
    return compiler.compile(pattern, subject)
