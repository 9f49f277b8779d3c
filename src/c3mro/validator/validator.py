"""Hierarchy validator: structural and ordering checks of a ``Hierarchy``.

The ``Validator`` runs a configurable set of validation rules against a
``Hierarchy`` and returns a list of ``Diagnostic`` objects.  In strict
mode, warnings are promoted to errors so that CI pipelines can enforce
tighter quality gates.

Usage
-----
::

    from c3mro.hierarchy import load_file
    from c3mro.validator import Validator

    hierarchy = load_file("diamond.yaml")
    diagnostics = Validator().validate(hierarchy)
    errors = [d for d in diagnostics if d.is_error]
"""
from __future__ import annotations

import logging

from c3mro.hierarchy.errors import InvalidHierarchyError
from c3mro.hierarchy.nodes import Hierarchy
from c3mro.validator.diagnostics import Diagnostic, DiagnosticSeverity
from c3mro.validator.rules import DEFAULT_RULES, STRUCTURAL_RULES, Rule

logger = logging.getLogger(__name__)


class Validator:
    """Rule-based validator for class hierarchies.

    Parameters
    ----------
    rules:
        The list of validation rules to run.  Defaults to all built-in
        rules (``DEFAULT_RULES``).  Pass a custom list to extend or
        restrict which rules apply.
    strict:
        When ``True``, WARNING-level diagnostics are promoted to ERROR
        severity, causing the overall validation to fail on warnings.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        strict: bool = False,
    ) -> None:
        self._rules: list[Rule] = rules if rules is not None else list(DEFAULT_RULES)
        self._strict: bool = strict

    def validate(self, hierarchy: Hierarchy) -> list[Diagnostic]:
        """Run all rules against ``hierarchy`` and return the collected diagnostics.

        Returns
        -------
        list[Diagnostic]
            All findings, sorted by the declaration position of their
            subject class, then by code.  May be empty if the hierarchy
            is valid.
        """
        all_diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                all_diagnostics.extend(rule(hierarchy))
            except Exception as exc:  # noqa: BLE001
                # Rule implementation errors should not crash the validator;
                # record them as internal errors instead.
                logger.exception("Validation rule %r failed", rule.__name__)
                all_diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        code="MRO999",
                        message=f"Internal validator error in rule {rule.__name__!r}: {exc}",
                        suggestion="Please report this as a bug",
                        rule=rule.__name__,
                    )
                )

        if self._strict:
            all_diagnostics = [
                Diagnostic(
                    severity=DiagnosticSeverity.ERROR,
                    code=d.code,
                    message=d.message,
                    subject=d.subject,
                    suggestion=d.suggestion,
                    rule=d.rule,
                )
                if d.severity == DiagnosticSeverity.WARNING
                else d
                for d in all_diagnostics
            ]

        all_diagnostics.sort(
            key=lambda d: (
                hierarchy.position(d.subject) if d.subject else -1,
                d.code,
            )
        )
        logger.debug(
            "Validated %d class(es): %d finding(s)", len(hierarchy), len(all_diagnostics)
        )
        return all_diagnostics

    def add_rule(self, rule: Rule) -> None:
        """Add a custom rule to this validator instance.

        Parameters
        ----------
        rule:
            A callable ``(Hierarchy) -> list[Diagnostic]``.
        """
        self._rules.append(rule)

    @property
    def rule_count(self) -> int:
        """Return the number of rules currently registered."""
        return len(self._rules)


def validate(hierarchy: Hierarchy, strict: bool = False) -> list[Diagnostic]:
    """Convenience function: validate a ``Hierarchy`` with default rules.

    Parameters
    ----------
    hierarchy:
        The hierarchy to validate.
    strict:
        If ``True``, warnings become errors.

    Returns
    -------
    list[Diagnostic]
        Sorted list of all findings.
    """
    return Validator(strict=strict).validate(hierarchy)


def check_structure(hierarchy: Hierarchy) -> None:
    """Raise if ``hierarchy`` cannot be linearized at all.

    Runs only the structural rules (unknown parents, duplicate parents,
    cycles, root with parents, duplicate declarations).

    Raises
    ------
    InvalidHierarchyError
        Carrying every structural error found.
    """
    errors = [
        d for d in Validator(rules=list(STRUCTURAL_RULES)).validate(hierarchy) if d.is_error
    ]
    if errors:
        raise InvalidHierarchyError(
            f"Invalid hierarchy: {len(errors)} structural error(s)", errors
        )
