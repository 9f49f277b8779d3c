#!/usr/bin/env python3
"""Example: Inconsistent hierarchies

``X(A, B)`` and ``Y(B, A)`` disagree about ``A`` and ``B``, so no
linearization exists for ``Z(X, Y)``.  Shows the error, the validator
diagnostic, and the merge trace of a class that does linearize.

Usage:
    python examples/03_inconsistent.py

Requirements:
    pip install c3mro
"""
from __future__ import annotations

from c3mro.hierarchy import load
from c3mro.linearizer import InconsistentHierarchyError, Linearizer
from c3mro.validator import validate

HIERARCHY = {
    "A": [],
    "B": [],
    "X": ["A", "B"],
    "Y": ["B", "A"],
    "Z": ["X", "Y"],
}


def main() -> None:
    hierarchy = load(HIERARCHY)
    linearizer = Linearizer(hierarchy)

    try:
        linearizer.linearize("Z")
    except InconsistentHierarchyError as exc:
        print(f"Error: {exc}")
        print(f"Conflicting classes: {', '.join(exc.classes)}")

    for diag in validate(hierarchy):
        print(f"  {diag}")

    trace = linearizer.explain("X")
    print(f"\nMerge for X, inputs: {[list(seq) for seq in trace.inputs]}")
    for step in trace.steps:
        print(f"  heads={list(step.heads)} -> {step.selected}")
    print(f"MRO(X) = {trace.result}")


if __name__ == "__main__":
    main()
