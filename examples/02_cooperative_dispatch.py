#!/usr/bin/env python3
"""Example: Cooperative dispatch

Registers real implementations on a diamond hierarchy and shows how
``cursor.call_next`` walks the linearization of the *invoked* class, so
the shared base runs once.  Then breaks the chain in ``B`` to show the
classic pitfall where ``C`` and ``A`` are never reached.

Usage:
    python examples/02_cooperative_dispatch.py

Requirements:
    pip install c3mro
"""
from __future__ import annotations

from c3mro.dispatch import DispatchTable, NextCursor
from c3mro.hierarchy import load


def build(b_chains: bool) -> DispatchTable:
    hierarchy = load({"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]})
    table = DispatchTable(hierarchy)

    def chaining(cursor: NextCursor, log: list[str]) -> None:
        log.append(cursor.owner)
        if cursor.has_next:
            cursor.call_next(log)

    def stopping(cursor: NextCursor, log: list[str]) -> None:
        log.append(cursor.owner)

    for name in ("A", "C", "D"):
        table.define(name, "setup", chaining)
    table.define("B", "setup", chaining if b_chains else stopping)
    return table


def main() -> None:
    table = build(b_chains=True)
    print(f"MRO(D): {table.linearizer.linearize('D')}")
    print(f"setup resolves to: {table.resolve('D', 'setup').owner}")

    log: list[str] = []
    table.invoke("D", "setup", log)
    print(f"Cooperative chain: {' -> '.join(log)}")

    log = []
    build(b_chains=False).invoke("D", "setup", log)
    print(f"B does not chain:  {' -> '.join(log)}")


if __name__ == "__main__":
    main()
