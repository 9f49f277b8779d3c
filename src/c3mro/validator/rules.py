"""Individual validation rules for the hierarchy validator.

Each rule is a callable that accepts a ``Hierarchy`` and returns a list of
``Diagnostic`` objects.  Rules are composed into the ``Validator`` class
which runs them all and aggregates results.

Rule codes use the ``MRO`` prefix followed by a three-digit number:

    MRO001  Unknown parent identifier
    MRO002  Duplicate parent in a base list
    MRO003  Cycle in the parent graph
    MRO004  Root class declares parents
    MRO005  Redundant base already inherited through an earlier base
    MRO006  No consistent linearization exists for a class
    MRO007  Class declared more than once

MRO001-MRO004 and MRO007 are structural: a hierarchy failing any of them
cannot be linearized at all, so ``MRO006`` only runs when they all pass.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable

from c3mro.hierarchy.nodes import Hierarchy
from c3mro.validator.diagnostics import Diagnostic, DiagnosticSeverity

Rule = Callable[[Hierarchy], list[Diagnostic]]


def _make(
    code: str,
    severity: DiagnosticSeverity,
    message: str,
    subject: str | None,
    suggestion: str | None = None,
    rule: str = "",
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        subject=subject,
        suggestion=suggestion,
        rule=rule,
    )


# ---------------------------------------------------------------------------
# MRO001 — unknown parents
# ---------------------------------------------------------------------------

def rule_unknown_parents(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO001: Every parent must be a declared class (or the root)."""
    diagnostics: list[Diagnostic] = []
    for node in hierarchy:
        for base in node.bases:
            if base in hierarchy or base == hierarchy.root:
                continue
            diagnostics.append(_make(
                "MRO001",
                DiagnosticSeverity.ERROR,
                f"Class {node.name!r} inherits from undefined class {base!r}",
                node.name,
                suggestion=f"Declare {base!r} or remove it from the bases of {node.name!r}",
                rule="unknown_parents",
            ))
    return diagnostics


# ---------------------------------------------------------------------------
# MRO002 — duplicate parents
# ---------------------------------------------------------------------------

def rule_duplicate_parents(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO002: A class may list each parent only once."""
    diagnostics: list[Diagnostic] = []
    for node in hierarchy:
        counts = Counter(node.bases)
        for base in dict.fromkeys(node.bases):
            if counts[base] > 1:
                diagnostics.append(_make(
                    "MRO002",
                    DiagnosticSeverity.ERROR,
                    f"Class {node.name!r} lists base {base!r} {counts[base]} times",
                    node.name,
                    suggestion=f"Remove the repeated {base!r}",
                    rule="duplicate_parents",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# MRO003 — cycles
# ---------------------------------------------------------------------------

def _find_cycles(hierarchy: Hierarchy) -> list[list[str]]:
    """Return each distinct cycle once, as a closed path of class names."""
    visiting, done = 1, 2
    state: dict[str, int] = {}
    cycles: list[list[str]] = []
    seen_members: set[frozenset[str]] = set()

    for start in hierarchy.names:
        if start in state:
            continue
        path: list[str] = []
        stack: list[tuple[str, int]] = [(start, 0)]
        state[start] = visiting
        path.append(start)
        while stack:
            name, index = stack[-1]
            bases = hierarchy[name].bases
            if index >= len(bases):
                stack.pop()
                path.pop()
                state[name] = done
                continue
            stack[-1] = (name, index + 1)
            base = bases[index]
            if base not in hierarchy:
                continue
            if state.get(base) == visiting:
                cycle = path[path.index(base):] + [base]
                members = frozenset(cycle)
                if members not in seen_members:
                    seen_members.add(members)
                    cycles.append(cycle)
            elif base not in state:
                state[base] = visiting
                path.append(base)
                stack.append((base, 0))
    return cycles


def rule_cycles(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO003: The parent graph must be acyclic."""
    diagnostics: list[Diagnostic] = []
    for cycle in _find_cycles(hierarchy):
        diagnostics.append(_make(
            "MRO003",
            DiagnosticSeverity.ERROR,
            "Inheritance cycle: " + " -> ".join(cycle),
            cycle[0],
            suggestion="A class cannot be its own ancestor",
            rule="cycles",
        ))
    return diagnostics


# ---------------------------------------------------------------------------
# MRO004 — root with parents
# ---------------------------------------------------------------------------

def rule_root_has_parents(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO004: The configured root must be parentless."""
    if hierarchy.root is None:
        return []
    node = hierarchy.get(hierarchy.root)
    if node is None or not node.bases:
        return []
    return [_make(
        "MRO004",
        DiagnosticSeverity.ERROR,
        f"Root class {node.name!r} declares parents: {', '.join(node.bases)}",
        node.name,
        suggestion="Remove the bases of the root class or choose another root",
        rule="root_has_parents",
    )]


# ---------------------------------------------------------------------------
# MRO007 — duplicate declarations
# ---------------------------------------------------------------------------

def rule_duplicate_classes(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO007: Class names must be unique within a hierarchy."""
    counts = Counter(hierarchy.names)
    return [
        _make(
            "MRO007",
            DiagnosticSeverity.ERROR,
            f"Class {name!r} is declared {counts[name]} times",
            name,
            suggestion=f"Rename or merge the {name!r} declarations",
            rule="duplicate_classes",
        )
        for name in dict.fromkeys(hierarchy.names)
        if counts[name] > 1
    ]


# ---------------------------------------------------------------------------
# MRO005 — redundant bases
# ---------------------------------------------------------------------------

def rule_redundant_bases(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO005: Warn when a base is already inherited through an earlier base.

    ``class C(B, A)`` where ``B`` already derives from ``A`` is legal but
    listing ``A`` has no effect on the order.  The opposite spelling,
    ``class C(A, B)``, is inconsistent and reported by MRO006.
    """
    diagnostics: list[Diagnostic] = []
    for node in hierarchy:
        for later_index, later in enumerate(node.bases):
            for earlier in node.bases[:later_index]:
                if earlier in hierarchy and later in hierarchy.ancestors(earlier):
                    diagnostics.append(_make(
                        "MRO005",
                        DiagnosticSeverity.WARNING,
                        f"Base {later!r} of {node.name!r} is already inherited through {earlier!r}",
                        node.name,
                        suggestion=f"Drop {later!r} from the bases of {node.name!r}",
                        rule="redundant_bases",
                    ))
                    break
    return diagnostics


# ---------------------------------------------------------------------------
# MRO006 — inconsistent linearization
# ---------------------------------------------------------------------------

def rule_consistency(hierarchy: Hierarchy) -> list[Diagnostic]:
    """MRO006: Every class must have a C3 linearization.

    Skipped when any structural rule fails, since the merge is undefined
    on a malformed graph.
    """
    if any(d.is_error for rule in STRUCTURAL_RULES for d in rule(hierarchy)):
        return []

    from c3mro.linearizer.config import LinearizerConfig
    from c3mro.linearizer.errors import InconsistentHierarchyError
    from c3mro.linearizer.linearizer import Linearizer

    linearizer = Linearizer(hierarchy, LinearizerConfig(validate=False))
    diagnostics: list[Diagnostic] = []
    for name in hierarchy.names:
        try:
            linearizer.linearize(name)
        except InconsistentHierarchyError as exc:
            # Only report at the class whose own merge fails.
            if exc.target != name:
                continue
            diagnostics.append(_make(
                "MRO006",
                DiagnosticSeverity.ERROR,
                f"Cannot create a consistent method resolution order for {name!r}: "
                f"{exc.describe_conflicts()}",
                name,
                suggestion="Reorder the bases so every class agrees on their relative order",
                rule="consistency",
            ))
    return diagnostics


STRUCTURAL_RULES: list[Rule] = [
    rule_duplicate_classes,
    rule_unknown_parents,
    rule_duplicate_parents,
    rule_cycles,
    rule_root_has_parents,
]

DEFAULT_RULES: list[Rule] = [
    *STRUCTURAL_RULES,
    rule_redundant_bases,
    rule_consistency,
]
