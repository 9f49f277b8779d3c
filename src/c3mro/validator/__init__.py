"""Validator module.

Exports the ``Validator`` class, the ``validate`` and ``check_structure``
convenience functions, ``Diagnostic`` types, and all built-in rules.
"""
from __future__ import annotations

from c3mro.validator.diagnostics import Diagnostic, DiagnosticSeverity
from c3mro.validator.rules import DEFAULT_RULES, STRUCTURAL_RULES, Rule
from c3mro.validator.validator import Validator, check_structure, validate

__all__ = [
    "Validator",
    "validate",
    "check_structure",
    "Diagnostic",
    "DiagnosticSeverity",
    "Rule",
    "DEFAULT_RULES",
    "STRUCTURAL_RULES",
]
