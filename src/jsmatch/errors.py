"""Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points at a node inside the input tree, e.g. ``clauses[1].pattern``."""

    path: str
    message: str = ""


@dataclass(frozen=True)
class Suggestion:
    """A suggested fix."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and suggestions."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def error(code: str, message: str, path: str = "", label: str = "") -> Diagnostic:
    labels = [DiagnosticLabel(path, label)] if path else []
    return Diagnostic(Severity.ERROR, code, message, labels=labels)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True, filename: str = "<input>") -> None:
        self.color = color
        self.filename = filename

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E201]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} {self.filename}#{label.path}"
            )
            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        for suggestion in diag.suggestions:
            lines.append(
                f"  {self._c(_BLUE)}try:{self._c(_RESET)} {suggestion.replacement}"
            )

        return "\n".join(lines)


class CompileError(Exception):
    """Generation error carrying one or more diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")
