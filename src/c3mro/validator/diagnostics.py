"""Diagnostic types for the hierarchy validator.

A ``Diagnostic`` is an annotated message attached to the class it concerns.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"MRO001"``.
    message:
        Human-readable description of the problem.
    subject:
        Name of the class the finding is about, or ``None`` for findings
        about the hierarchy as a whole.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The rule name that produced this diagnostic.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    subject: str | None = None
    suggestion: str | None = field(default=None)
    rule: str = field(default="")

    def __str__(self) -> str:
        where = f" in {self.subject}" if self.subject else ""
        prefix = f"[{self.code}] {self.severity.name}"
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix}{where}: {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should block a successful validation."""
        return self.severity == DiagnosticSeverity.ERROR
