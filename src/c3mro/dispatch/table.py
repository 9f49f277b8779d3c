"""Method dispatch by linear scan of a cached linearization.

A ``DispatchTable`` maps ``(class, operation)`` pairs to implementations.
Resolving an operation for a class scans that class's linearization from
the start and picks the first class that defines it.  Every implementation
receives a :class:`NextCursor` as its first argument; calling
``cursor.call_next(...)`` continues the scan *in the same linearization*
from the cursor's position, which is what cooperative ``super()`` chains
do.  Control never jumps to the owner's declared parent directly, so a
shared ancestor in a diamond runs once.

Usage
-----
::

    table = DispatchTable(hierarchy)

    @table.define("B", "greet")
    def greet_b(cursor, calls):
        calls.append("B")
        cursor.call_next(calls)

    table.invoke("D", "greet", [])
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from c3mro.dispatch.errors import OperationNotFoundError
from c3mro.hierarchy.nodes import Hierarchy, Linearization
from c3mro.linearizer.linearizer import Linearizer

logger = logging.getLogger(__name__)

ImplementationFunc = Callable[..., Any]


@dataclass(frozen=True)
class Implementation:
    """An implementation of an operation, as defined on one class."""

    owner: str
    operation: str
    func: ImplementationFunc


@dataclass(frozen=True)
class NextCursor:
    """Position of the running implementation within a linearization.

    Parameters
    ----------
    table:
        The table the call was dispatched through.
    linearization:
        Resolution order of the class the operation was invoked on.
    position:
        Index of the class whose implementation is running.
    operation:
        The operation being dispatched.
    """

    table: "DispatchTable"
    linearization: Linearization
    position: int
    operation: str

    @property
    def owner(self) -> str:
        """The class whose implementation is running."""
        return self.linearization[self.position]

    @property
    def target(self) -> str:
        """The class the operation was originally invoked on."""
        return self.linearization.target

    def next_position(self) -> int | None:
        """Index of the next class that defines the operation, or ``None``."""
        for index in self.table.provider_positions(self.target, self.operation):
            if index > self.position:
                return index
        return None

    @property
    def has_next(self) -> bool:
        """Return True if some later class defines the operation."""
        return self.next_position() is not None

    def call_next(self, *args: Any, **kwargs: Any) -> Any:
        """Invoke the next implementation in order.

        Raises
        ------
        OperationNotFoundError
            If no class after the owner defines the operation.
        """
        index = self.next_position()
        if index is None:
            raise OperationNotFoundError(self.target, self.operation, after=self.owner)
        cursor = NextCursor(self.table, self.linearization, index, self.operation)
        logger.debug(
            "Chaining %s.%s -> %s.%s",
            self.owner,
            self.operation,
            cursor.owner,
            self.operation,
        )
        return self.table.implementation(cursor.owner, self.operation).func(
            cursor, *args, **kwargs
        )


class DispatchTable:
    """Registry of operation implementations over one hierarchy.

    Parameters
    ----------
    hierarchy:
        The class graph.
    linearizer:
        Linearizer to use; one is created for ``hierarchy`` when omitted.
    """

    def __init__(self, hierarchy: Hierarchy, linearizer: Linearizer | None = None) -> None:
        self._linearizer = linearizer or Linearizer(hierarchy)
        self._implementations: dict[tuple[str, str], Implementation] = {}
        self._positions: dict[tuple[str, str], tuple[int, ...]] = {}

    @property
    def linearizer(self) -> Linearizer:
        return self._linearizer

    def define(
        self, class_name: str, operation: str, func: ImplementationFunc | None = None
    ) -> Any:
        """Register ``func`` as ``class_name``'s implementation of ``operation``.

        Usable as a decorator when ``func`` is omitted.  A later definition
        for the same pair replaces the earlier one.

        Raises
        ------
        UnknownClassError
            If ``class_name`` is not in the hierarchy.
        """
        self._linearizer.bases_of(class_name)

        def decorator(fn: ImplementationFunc) -> ImplementationFunc:
            self._implementations[(class_name, operation)] = Implementation(
                class_name, operation, fn
            )
            self._positions.clear()
            logger.debug("Defined %s.%s", class_name, operation)
            return fn

        if func is None:
            return decorator
        return decorator(func)

    def defines(self, class_name: str, operation: str) -> bool:
        """Return True if ``class_name`` itself defines ``operation``."""
        return (class_name, operation) in self._implementations

    def implementation(self, class_name: str, operation: str) -> Implementation:
        """Return ``class_name``'s own implementation of ``operation``.

        Raises
        ------
        KeyError
            If ``class_name`` does not define ``operation`` itself.
        """
        return self._implementations[(class_name, operation)]

    def provider_positions(self, class_name: str, operation: str) -> tuple[int, ...]:
        """Indices into ``class_name``'s linearization of classes defining ``operation``."""
        key = (class_name, operation)
        positions = self._positions.get(key)
        if positions is None:
            order = self._linearizer.linearize(class_name)
            positions = tuple(
                index for index, name in enumerate(order) if self.defines(name, operation)
            )
            self._positions[key] = positions
        return positions

    def providers(self, class_name: str, operation: str) -> tuple[str, ...]:
        """Classes in ``class_name``'s linearization that define ``operation``, in order."""
        order = self._linearizer.linearize(class_name)
        return tuple(order[index] for index in self.provider_positions(class_name, operation))

    def resolve(self, class_name: str, operation: str) -> Implementation:
        """Return the implementation that ``class_name`` uses for ``operation``.

        Raises
        ------
        OperationNotFoundError
            If no class in the linearization defines ``operation``.
        """
        positions = self.provider_positions(class_name, operation)
        if not positions:
            raise OperationNotFoundError(class_name, operation)
        order = self._linearizer.linearize(class_name)
        return self.implementation(order[positions[0]], operation)

    def invoke(self, class_name: str, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Call ``operation`` as dispatched for an instance of ``class_name``.

        Raises
        ------
        OperationNotFoundError
            If no class in the linearization defines ``operation``.
        """
        positions = self.provider_positions(class_name, operation)
        if not positions:
            raise OperationNotFoundError(class_name, operation)
        cursor = NextCursor(
            self, self._linearizer.linearize(class_name), positions[0], operation
        )
        logger.debug("Dispatching %s.%s to %s", class_name, operation, cursor.owner)
        return self.implementation(cursor.owner, operation).func(cursor, *args, **kwargs)

    @classmethod
    def from_hierarchy(
        cls,
        hierarchy: Hierarchy,
        action: Callable[[str, str], None],
        linearizer: Linearizer | None = None,
    ) -> "DispatchTable":
        """Build a table from the operations each class declares.

        Every declared implementation calls ``action(owner, operation)``
        and then, if the declaration chains, calls the next class in
        order (when there is one).
        """
        table = cls(hierarchy, linearizer)
        for node in hierarchy:
            for decl in node.operations:
                table.define(node.name, decl.name, _declared_impl(action, decl.chains))
        return table


def _declared_impl(action: Callable[[str, str], None], chains: bool) -> ImplementationFunc:
    def impl(cursor: NextCursor) -> None:
        action(cursor.owner, cursor.operation)
        if chains and cursor.has_next:
            cursor.call_next()

    return impl


def simulate(
    hierarchy: Hierarchy,
    class_name: str,
    operation: str,
    linearizer: Linearizer | None = None,
) -> list[str]:
    """Return the classes whose implementations run, in call order.

    Uses the operations declared in ``hierarchy``: a class that chains
    hands over to the next class in the linearization, a class that does
    not ends the chain there.

    Raises
    ------
    OperationNotFoundError
        If no class in the linearization declares ``operation``.
    """
    calls: list[str] = []
    table = DispatchTable.from_hierarchy(
        hierarchy, lambda owner, _operation: calls.append(owner), linearizer
    )
    table.invoke(class_name, operation)
    return calls
