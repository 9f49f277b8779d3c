"""Data model for class hierarchies and their linearizations.

Every node is a frozen dataclass so that a hierarchy, once built, can be
shared freely between linearizers and dispatch tables without copying.
Parents are referenced by identifier; the ``Hierarchy`` container owns the
name-to-node mapping and is the only place where identifiers are resolved.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import overload


# ---------------------------------------------------------------------------
# Class declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class OperationDecl:
    """An operation a class defines.

    Parameters
    ----------
    name:
        The operation name, e.g. ``"__init__"`` or ``"greet"``.
    chains:
        ``True`` when the implementation delegates to the next class in
        the linearization after doing its own work.
    """

    name: str
    chains: bool = False


@dataclass(frozen=True, slots=True)
class ClassNode:
    """A single class declaration.

    Parameters
    ----------
    name:
        Unique identifier of the class within its hierarchy.
    bases:
        Direct parents in declaration order.  The order is significant:
        it is the local precedence order that every linearization must
        respect.
    operations:
        Operations defined directly on this class.
    """

    name: str
    bases: tuple[str, ...] = ()
    operations: tuple[OperationDecl, ...] = ()

    def defines(self, operation: str) -> bool:
        """Return True if this class defines ``operation`` itself."""
        return any(op.name == operation for op in self.operations)

    def operation(self, operation: str) -> OperationDecl | None:
        """Return the declaration for ``operation``, or ``None``."""
        for op in self.operations:
            if op.name == operation:
                return op
        return None

    @property
    def is_root_level(self) -> bool:
        """Return True if this class declares no parents."""
        return not self.bases


# ---------------------------------------------------------------------------
# Hierarchy container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hierarchy:
    """An immutable, ordered collection of class declarations.

    Parameters
    ----------
    classes:
        Declarations in the order they were described.  Names are not
        checked for uniqueness here; the loader rejects duplicates and
        the validator reports unresolved parents.
    root:
        Identifier of the universal root ancestor, or ``None`` when the
        hierarchy has no implicit top.
    """

    classes: tuple[ClassNode, ...] = ()
    root: str | None = None
    _index: dict[str, ClassNode] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {node.name: node for node in self.classes})

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[ClassNode]:
        return iter(self.classes)

    def __len__(self) -> int:
        return len(self.classes)

    def __getitem__(self, name: str) -> ClassNode:
        return self._index[name]

    def get(self, name: str) -> ClassNode | None:
        """Return the node named ``name`` or ``None``."""
        return self._index.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        """Class identifiers in declaration order."""
        return tuple(node.name for node in self.classes)

    def position(self, name: str) -> int:
        """Return the declaration index of ``name``.

        Classes that are not declared sort after every declared class.
        """
        for index, node in enumerate(self.classes):
            if node.name == name:
                return index
        return len(self.classes)

    def ancestors(self, name: str) -> set[str]:
        """Return every class reachable from ``name`` through parent edges.

        Unknown parents are included as identifiers but not expanded.
        ``name`` itself is only included if the graph contains a cycle
        back to it.
        """
        seen: set[str] = set()
        stack = list(self._index[name].bases) if name in self._index else []
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            node = self._index.get(current)
            if node is not None:
                stack.extend(node.bases)
        return seen

    def with_root(self, root: str | None) -> "Hierarchy":
        """Return a copy of this hierarchy using a different root."""
        return Hierarchy(classes=self.classes, root=root)


# ---------------------------------------------------------------------------
# Linearization
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Linearization(Sequence[str]):
    """The resolution order computed for one class.

    Parameters
    ----------
    order:
        Class identifiers, starting with the target class itself.
    """

    order: tuple[str, ...]

    @property
    def target(self) -> str:
        """The class this linearization was computed for."""
        return self.order[0]

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        return self.order[index]

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __contains__(self, name: object) -> bool:
        return name in self.order

    def __str__(self) -> str:
        return "[" + ", ".join(self.order) + "]"

    def after(self, name: str) -> tuple[str, ...]:
        """Return the classes strictly after ``name`` in this order."""
        return self.order[self.order.index(name) + 1:]
