"""Linearizer: C3 method resolution order over a ``Hierarchy``.

For a class ``C`` with direct parents ``P1 ... Pn``::

    L[C] = C + merge(L[P1], ..., L[Pn], [P1, ..., Pn])

and a class without parents linearizes to ``[C]``.  When the hierarchy has a
universal root, the root is an implicit last parent of every parentless
class, so it closes every linearization exactly once.

Usage
-----
::

    from c3mro.hierarchy import load
    from c3mro.linearizer import Linearizer

    hierarchy = load({"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]})
    Linearizer(hierarchy).linearize("D")
    # Linearization(order=('D', 'B', 'C', 'A'))
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from c3mro.hierarchy.errors import InvalidHierarchyError, UnknownClassError
from c3mro.hierarchy.loader import from_classes
from c3mro.hierarchy.nodes import Hierarchy, Linearization
from c3mro.linearizer.config import LinearizerConfig
from c3mro.linearizer.merge import MergeStep, merge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeTrace:
    """The top-level merge performed for one class.

    Parameters
    ----------
    target:
        The class that was linearized.
    inputs:
        The sequences handed to ``merge``: each parent's linearization
        followed by the list of parents.
    steps:
        Every selection, in order.
    result:
        The resulting linearization.
    """

    target: str
    inputs: tuple[tuple[str, ...], ...]
    steps: tuple[MergeStep, ...]
    result: Linearization


class Linearizer:
    """Computes and caches C3 linearizations for one hierarchy.

    Parameters
    ----------
    hierarchy:
        The class graph.  It is never modified.
    config:
        Root, caching and validation settings.  Defaults to
        ``LinearizerConfig()``.

    Raises
    ------
    InvalidHierarchyError
        On construction, if validation is enabled and the hierarchy has
        unknown parents, duplicate bases, cycles, duplicate declarations
        or a root with parents.
    """

    def __init__(
        self, hierarchy: Hierarchy, config: LinearizerConfig | None = None
    ) -> None:
        self._config = config or LinearizerConfig()
        if self._config.root is not None:
            hierarchy = hierarchy.with_root(self._config.root)
        self._hierarchy = hierarchy
        self._cache: dict[str, Linearization] = {}

        if self._config.validate:
            from c3mro.validator.validator import check_structure

            check_structure(hierarchy)

    @property
    def hierarchy(self) -> Hierarchy:
        """The hierarchy this linearizer works on."""
        return self._hierarchy

    @property
    def root(self) -> str | None:
        """The effective universal root, if any."""
        return self._hierarchy.root

    def bases_of(self, name: str) -> tuple[str, ...]:
        """Return the effective direct parents of ``name``.

        Includes the implicit root for parentless classes.

        Raises
        ------
        UnknownClassError
            If ``name`` is neither declared nor the root.
        """
        root = self._hierarchy.root
        node = self._hierarchy.get(name)
        if node is None:
            if name == root:
                return ()
            raise UnknownClassError(name)
        if not node.bases and root is not None and name != root:
            return (root,)
        return node.bases

    def _merge_inputs(
        self, name: str, computed: dict[str, Linearization]
    ) -> list[tuple[str, ...]]:
        bases = self.bases_of(name)
        return [computed[base].order for base in bases] + [bases]

    def linearize(self, name: str) -> Linearization:
        """Return the C3 linearization of ``name``.

        Raises
        ------
        UnknownClassError
            If ``name`` is not in the hierarchy.
        InconsistentHierarchyError
            If no order satisfies every class's base ordering.  The
            error's ``target`` is the class whose own merge failed, which
            may be an ancestor of ``name``.
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        self.bases_of(name)  # reject unknown names before any work
        computed: dict[str, Linearization] = dict(self._cache)
        in_progress: set[str] = set()
        stack: list[tuple[str, bool]] = [(name, False)]

        # Post-order walk with an explicit stack; deep hierarchies must not
        # depend on the interpreter's recursion limit.
        while stack:
            current, ready = stack.pop()
            if current in computed:
                continue
            if ready:
                order = [current] + merge(
                    self._merge_inputs(current, computed), target=current
                )
                computed[current] = Linearization(tuple(order))
                in_progress.discard(current)
                logger.debug("Linearized %s: %s", current, computed[current])
                continue
            if current in in_progress:
                raise InvalidHierarchyError(
                    f"Inheritance cycle through {current!r}"
                )
            in_progress.add(current)
            stack.append((current, True))
            for base in reversed(self.bases_of(current)):
                if base not in computed:
                    stack.append((base, False))

        if self._config.cache:
            self._cache.update(computed)
        return computed[name]

    def linearize_all(self) -> dict[str, Linearization]:
        """Return the linearization of every declared class.

        Raises
        ------
        InconsistentHierarchyError
            On the first class, in declaration order, without a valid
            linearization.
        """
        return {name: self.linearize(name) for name in self._hierarchy.names}

    def explain(self, name: str) -> MergeTrace:
        """Return the top-level merge performed for ``name``, step by step.

        Raises
        ------
        UnknownClassError
            If ``name`` is not in the hierarchy.
        InconsistentHierarchyError
            If ``name`` or one of its ancestors cannot be linearized.
        """
        bases = self.bases_of(name)
        computed = {base: self.linearize(base) for base in bases}
        inputs = self._merge_inputs(name, computed)
        steps: list[MergeStep] = []
        order = [name] + merge(inputs, target=name, trace=steps)
        return MergeTrace(
            target=name,
            inputs=tuple(tuple(seq) for seq in inputs),
            steps=tuple(steps),
            result=Linearization(tuple(order)),
        )

    def clear_cache(self) -> None:
        """Forget every cached linearization."""
        self._cache.clear()


def linearize(hierarchy: Hierarchy, name: str, root: str | None = None) -> Linearization:
    """Convenience function: linearize one class of ``hierarchy``.

    Parameters
    ----------
    hierarchy:
        The class graph.
    name:
        The class to linearize.
    root:
        Overrides the hierarchy's universal root when given.
    """
    return Linearizer(hierarchy, LinearizerConfig(root=root)).linearize(name)


def mro_of(cls: type) -> tuple[str, ...]:
    """Return the C3 order of a live Python class, by qualified name.

    For any class CPython accepts this equals
    ``tuple(c.__qualname__ for c in cls.__mro__)``.
    """
    return Linearizer(from_classes(cls)).linearize(cls.__qualname__).order
