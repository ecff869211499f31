"""JavaScript lexical helpers shared by the emitters."""

from __future__ import annotations

import json
import re

from jsmatch.errors import CompileError, Suggestion, error

SUBJECT_NAME = "$"

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_OPERATOR_RE = re.compile(r"\S+\Z")
_INVALID_CHAR_RE = re.compile(r"[^A-Za-z0-9_]")

# ECMAScript reserved words, the strict-mode and contextual names that
# cannot be declared with ``let``, and globals the emitter relies on.
RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "export",
    "extends", "false", "finally", "for", "function", "if", "implements",
    "import", "in", "instanceof", "interface", "let", "new", "null",
    "package", "private", "protected", "public", "return", "static",
    "super", "switch", "this", "throw", "true", "try", "typeof", "var",
    "void", "while", "with", "yield", "arguments", "eval", "undefined",
    # globals referenced by generated match code
    "Array", "Error",
})


def int_literal(value: int) -> str:
    return str(int(value))


def string_literal(value: str) -> str:
    """Double-quoted JavaScript string with standard escapes."""
    return json.dumps(value)


def bool_literal(value: bool) -> str:
    return "true" if value else "false"


def identifier(name: str, path: str = "") -> str:
    """Validate a user name and escape it if it is a reserved word.

    Reserved words get a trailing ``$`` (``class`` -> ``class$``). The bare
    subject name ``$`` is never a valid user name.
    """
    if not _IDENTIFIER_RE.match(name):
        diag = error("E202", f"invalid identifier {name!r}", path,
                     "names must match [A-Za-z_][A-Za-z0-9_]*")
        diag.suggestions.append(Suggestion("rename it", suggest_identifier(name)))
        raise CompileError([diag])
    if name in RESERVED_WORDS:
        return name + "$"
    return name


def suggest_identifier(name: str) -> str:
    """Closest valid name: bad characters become ``_``, a leading digit gets ``_``."""
    fixed = _INVALID_CHAR_RE.sub("_", name)
    if not fixed or fixed[0].isdigit():
        fixed = "_" + fixed
    return fixed


def is_operator(op: str) -> bool:
    """Operators are emitted verbatim, so they must be one non-blank token."""
    return _OPERATOR_RE.match(op) is not None


def operator(op: str, path: str = "") -> str:
    if not is_operator(op):
        raise CompileError([
            error("E204", f"invalid operator {op!r}", path,
                  "operators must be non-empty and contain no whitespace"),
        ])
    return op
