#!/usr/bin/env python3
"""Example: c3mro quickstart

Minimal working example: describe a diamond hierarchy, compute its
method resolution order, validate it, and follow a cooperative chain.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install c3mro
"""
from __future__ import annotations

import c3mro

DIAMOND = {
    "root": "object",
    "classes": {
        "A": {"bases": [], "defines": {"greet": "chain"}},
        "B": {"bases": ["A"], "defines": {"greet": "chain"}},
        "C": {"bases": ["A"], "defines": {"greet": "chain"}},
        "D": {"bases": ["B", "C"], "defines": {"greet": "chain"}},
    },
}


def main() -> None:
    print(f"c3mro version: {c3mro.__version__}")

    # Step 1: Build the hierarchy
    hierarchy = c3mro.load(DIAMOND)
    print(f"Loaded {len(hierarchy)} classes, root={hierarchy.root!r}")

    # Step 2: Linearize
    for name in hierarchy.names:
        print(f"  MRO({name}) = {c3mro.linearize(hierarchy, name)}")

    # Step 3: Validate
    diagnostics = c3mro.validate(hierarchy)
    print(f"Validation: {len(diagnostics)} finding(s)")
    for diag in diagnostics:
        print(f"  {diag}")

    # Step 4: Cooperative chain, every class runs exactly once
    calls = c3mro.simulate(hierarchy, "D", "greet")
    print(f"greet on D runs: {' -> '.join(calls)}")


if __name__ == "__main__":
    main()
