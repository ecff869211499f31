"""Runtime checks produced by pattern compilation, and their rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from jsmatch.document import Doc, concat, join, separator, text


@dataclass(frozen=True)
class LengthCheck:
    """The subject is an array of exactly (or at least) ``length`` items."""

    subject: Doc
    length: int
    at_least: bool


@dataclass(frozen=True)
class EqualityCheck:
    """The subject is strictly equal to a rendered literal."""

    subject: Doc
    literal: Doc


Check = Union[LengthCheck, EqualityCheck]

# `a &&` then a space, or a newline if the condition group breaks
_AND = concat([text(" &&"), separator(" ", "")])


def render_check(check: Check) -> Doc:
    if isinstance(check, LengthCheck):
        op = " >= " if check.at_least else " === "
        return concat([
            text("Array.isArray("), check.subject, text(")"),
            _AND,
            check.subject, text(".length"), text(op), text(str(check.length)),
        ])
    if isinstance(check, EqualityCheck):
        return concat([check.subject, text(" === "), check.literal])
    raise TypeError(f"unknown check: {check!r}")


def render_checks(checks: list[Check]) -> Doc:
    """Combine checks with ``&&``, left to right."""
    return join((render_check(c) for c in checks), _AND)
