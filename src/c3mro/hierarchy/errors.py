"""Error types raised for malformed hierarchy input.

These errors are detected *before* any linearization is attempted.  A
hierarchy that loads and validates cleanly can still be inconsistent; that
case is reported by :class:`c3mro.linearizer.InconsistentHierarchyError`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from c3mro.validator.diagnostics import Diagnostic


class HierarchyLoadError(ValueError):
    """Raised when a hierarchy description cannot be read.

    Parameters
    ----------
    message:
        What was wrong with the input.
    source:
        Optional name of the file or stream being loaded.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


class InvalidHierarchyError(ValueError):
    """Raised when a hierarchy is structurally malformed.

    Unknown parent identifiers, duplicate bases, cycles in the parent graph
    and a root that declares parents all end up here.

    Parameters
    ----------
    message:
        Summary of the problem.
    diagnostics:
        The error-level findings that caused the failure.
    """

    def __init__(
        self, message: str, diagnostics: list["Diagnostic"] | None = None
    ) -> None:
        self.diagnostics: list[Diagnostic] = list(diagnostics or [])
        super().__init__(message)

    def __str__(self) -> str:
        if not self.diagnostics:
            return super().__str__()
        lines = [super().__str__()]
        for diagnostic in self.diagnostics:
            lines.append(f"  {diagnostic}")
        return "\n".join(lines)


class UnknownClassError(InvalidHierarchyError):
    """Raised when a requested class is not part of the hierarchy."""

    def __init__(self, name: str) -> None:
        self.class_name = name
        super().__init__(f"Class {name!r} is not defined in the hierarchy")
