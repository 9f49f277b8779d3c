"""c3mro. C3 linearization toolkit for method resolution orders, validation and dispatch.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import c3mro

    # Describe a hierarchy (or read one with c3mro.load_file)
    hierarchy = c3mro.load({
        "root": "object",
        "classes": {"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]},
    })

    # Compute a method resolution order
    c3mro.linearize(hierarchy, "D")
    # Linearization(order=('D', 'B', 'C', 'A', 'object'))

    # Check the hierarchy for structural and ordering problems
    diagnostics = c3mro.validate(hierarchy)

    # Follow a cooperative call chain declared in the hierarchy
    calls = c3mro.simulate(hierarchy, "D", "greet")

    c3mro.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from c3mro.hierarchy.nodes import Hierarchy, Linearization
    from c3mro.validator.diagnostics import Diagnostic


def load(data: dict[str, Any]) -> "Hierarchy":
    """Build a ``Hierarchy`` from a description mapping.

    Raises
    ------
    c3mro.hierarchy.HierarchyLoadError
        If the description has the wrong shape.
    """
    from c3mro.hierarchy.loader import load as _load

    return _load(data)


def load_file(path: str | Path) -> "Hierarchy":
    """Read a YAML or JSON hierarchy description file.

    Raises
    ------
    c3mro.hierarchy.HierarchyLoadError
        If the file cannot be read or parsed.
    """
    from c3mro.hierarchy.loader import load_file as _load_file

    return _load_file(path)


def linearize(hierarchy: "Hierarchy", name: str, root: str | None = None) -> "Linearization":
    """Compute the C3 linearization of ``name``.

    Parameters
    ----------
    hierarchy:
        The class graph.
    name:
        The class to linearize.
    root:
        Universal root ancestor; overrides the hierarchy's own root.

    Raises
    ------
    c3mro.hierarchy.InvalidHierarchyError
        If the hierarchy is malformed or ``name`` is unknown.
    c3mro.linearizer.InconsistentHierarchyError
        If no consistent order exists.
    """
    from c3mro.linearizer.linearizer import linearize as _linearize

    return _linearize(hierarchy, name, root=root)


def validate(hierarchy: "Hierarchy", strict: bool = False) -> list["Diagnostic"]:
    """Validate a ``Hierarchy`` against all built-in rules.

    Parameters
    ----------
    hierarchy:
        The class graph to check.
    strict:
        When ``True``, warnings are promoted to errors.
    """
    from c3mro.validator.validator import validate as _validate

    return _validate(hierarchy, strict=strict)


def simulate(hierarchy: "Hierarchy", name: str, operation: str) -> list[str]:
    """Return the classes reached when ``operation`` is invoked on ``name``.

    Raises
    ------
    c3mro.dispatch.OperationNotFoundError
        If no class in the linearization declares ``operation``.
    """
    from c3mro.dispatch.table import simulate as _simulate

    return _simulate(hierarchy, name, operation)


def mro_of(cls: type) -> tuple[str, ...]:
    """Return the C3 order of a live Python class, by qualified name."""
    from c3mro.linearizer.linearizer import mro_of as _mro_of

    return _mro_of(cls)


__all__ = [
    "__version__",
    "load",
    "load_file",
    "linearize",
    "validate",
    "simulate",
    "mro_of",
]
