"""Build ``Hierarchy`` objects from descriptions and from live classes.

A hierarchy description is a mapping, usually read from YAML (JSON is
accepted as the YAML subset it is)::

    root: object
    classes:
      A: []
      B: [A]
      C: [A]
      D:
        bases: [B, C]
        defines:
          greet: chain
          close: stop

A bare ``{name: bases}`` mapping without the ``classes`` key is also
accepted.  ``defines`` may be a list of operation names, in which case
every listed operation is a plain override that does not chain.

Usage
-----
::

    from c3mro.hierarchy.loader import load_file

    hierarchy = load_file("diamond.yaml")
"""
from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from yaml.constructor import ConstructorError

from c3mro.hierarchy.errors import HierarchyLoadError
from c3mro.hierarchy.nodes import ClassNode, Hierarchy, OperationDecl

logger = logging.getLogger(__name__)

_CHAIN_WORDS = {"chain": True, "stop": False}
_UNSET: Any = object()


class _HierarchyLoader(yaml.SafeLoader):
    """``SafeLoader`` whose mapping keys are always text (``On:`` stays
    ``"On"``) and appear at most once per mapping.
    """

    def construct_mapping(self, node: yaml.Node, deep: bool = False) -> dict[Any, Any]:
        if not isinstance(node, yaml.MappingNode):
            raise ConstructorError(
                None, None, f"expected a mapping node, but found {node.id}", node.start_mark
            )
        own_keys = {id(key_node) for key_node, _ in node.value}
        self.flatten_mapping(node)
        mapping: dict[Any, Any] = {}
        declared: set[Any] = set()
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = self.construct_scalar(key_node)
            else:
                key = self.construct_object(key_node, deep=deep)
            try:
                hash(key)
            except TypeError as exc:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    "found unhashable key",
                    key_node.start_mark,
                ) from exc
            # Keys pulled in through a '<<' merge may be overridden.
            if id(key_node) in own_keys:
                if key in declared:
                    raise ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                declared.add(key)
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def _require_name(value: object, what: str, source: str | None) -> str:
    if isinstance(value, bool):
        raise HierarchyLoadError(
            f"{what} must be a non-empty string, got {value!r}; "
            "quote names such as 'Yes' or 'On' that YAML reads as booleans",
            source,
        )
    if not isinstance(value, str) or not value.strip():
        raise HierarchyLoadError(
            f"{what} must be a non-empty string, got {value!r}", source
        )
    return value.strip()


def _parse_bases(name: str, raw: object, source: str | None) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (_require_name(raw, f"Base of {name!r}", source),)
    if not isinstance(raw, list):
        raise HierarchyLoadError(
            f"Bases of {name!r} must be a list of class names, got {type(raw).__name__}",
            source,
        )
    return tuple(_require_name(base, f"Base of {name!r}", source) for base in raw)


def _parse_defines(name: str, raw: object, source: str | None) -> tuple[OperationDecl, ...]:
    if raw is None:
        return ()
    if isinstance(raw, list):
        return tuple(
            OperationDecl(_require_name(op, f"Operation of {name!r}", source))
            for op in raw
        )
    if not isinstance(raw, Mapping):
        raise HierarchyLoadError(
            f"'defines' of {name!r} must be a list or a mapping", source
        )
    operations: list[OperationDecl] = []
    for op_name, mode in raw.items():
        op_name = _require_name(op_name, f"Operation of {name!r}", source)
        if isinstance(mode, bool):
            chains = mode
        elif mode is None:
            chains = False
        elif isinstance(mode, str) and mode.lower() in _CHAIN_WORDS:
            chains = _CHAIN_WORDS[mode.lower()]
        else:
            raise HierarchyLoadError(
                f"Operation {op_name!r} of {name!r} must be 'chain' or 'stop', got {mode!r}",
                source,
            )
        operations.append(OperationDecl(op_name, chains=chains))
    return tuple(operations)


def _parse_class(name: str, raw: object, source: str | None) -> ClassNode:
    if raw is None or isinstance(raw, (list, str)):
        return ClassNode(name=name, bases=_parse_bases(name, raw, source))
    if not isinstance(raw, Mapping):
        raise HierarchyLoadError(
            f"Class {name!r} must map to a list of bases or a mapping", source
        )
    unknown_keys = set(raw) - {"bases", "defines"}
    if unknown_keys:
        raise HierarchyLoadError(
            f"Class {name!r} has unknown keys: {', '.join(sorted(map(str, unknown_keys)))}",
            source,
        )
    return ClassNode(
        name=name,
        bases=_parse_bases(name, raw.get("bases"), source),
        operations=_parse_defines(name, raw.get("defines"), source),
    )


def load(
    data: Mapping[str, Any], source: str | None = None, root: str | None = _UNSET
) -> Hierarchy:
    """Build a ``Hierarchy`` from a description mapping.

    Parameters
    ----------
    data:
        Either ``{"root": ..., "classes": {...}}`` or a bare
        ``{name: bases}`` mapping.
    source:
        Name used in error messages.
    root:
        Overrides the description's ``root`` key when given.  Pass
        ``None`` explicitly to drop the root.

    Raises
    ------
    HierarchyLoadError
        If the description has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise HierarchyLoadError(
            f"Hierarchy description must be a mapping, got {type(data).__name__}",
            source,
        )

    if "classes" in data:
        unknown_keys = set(data) - {"classes", "root"}
        if unknown_keys:
            raise HierarchyLoadError(
                f"Unknown top-level keys: {', '.join(sorted(map(str, unknown_keys)))}",
                source,
            )
        classes_raw = data["classes"] or {}
        declared_root = data.get("root")
    else:
        classes_raw = data
        declared_root = None

    if not isinstance(classes_raw, Mapping):
        raise HierarchyLoadError("'classes' must be a mapping of class names", source)

    nodes: list[ClassNode] = []
    for raw_name, raw_class in classes_raw.items():
        name = _require_name(raw_name, "Class name", source)
        nodes.append(_parse_class(name, raw_class, source))

    effective_root = declared_root if root is _UNSET else root
    if effective_root is not None:
        effective_root = _require_name(effective_root, "Root", source)

    logger.debug(
        "Loaded %d class(es) from %s (root=%r)",
        len(nodes),
        source or "<mapping>",
        effective_root,
    )
    return Hierarchy(classes=tuple(nodes), root=effective_root)


def loads(text: str, source: str | None = None, root: str | None = _UNSET) -> Hierarchy:
    """Parse YAML (or JSON) text into a ``Hierarchy``.

    Raises
    ------
    HierarchyLoadError
        If the text is not valid YAML, repeats a key within a mapping, or
        has the wrong shape.
    """
    try:
        data = yaml.load(text, Loader=_HierarchyLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise HierarchyLoadError(f"Invalid YAML: {exc}", source) from exc
    if data is None:
        data = {}
    return load(data, source=source, root=root)


def load_file(path: str | Path, root: str | None = _UNSET) -> Hierarchy:
    """Read and parse a hierarchy description file.

    Raises
    ------
    HierarchyLoadError
        If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HierarchyLoadError(f"Cannot read file: {exc}", str(path)) from exc
    return loads(text, source=str(path), root=root)


# ---------------------------------------------------------------------------
# Live Python classes
# ---------------------------------------------------------------------------


def _operations_of(cls: type) -> tuple[OperationDecl, ...]:
    # A function chains when its body refers to super().
    operations: list[OperationDecl] = []
    for attr_name, value in vars(cls).items():
        func = value.__func__ if isinstance(value, (classmethod, staticmethod)) else value
        if not inspect.isfunction(func):
            continue
        chains = "super" in func.__code__.co_names
        operations.append(OperationDecl(attr_name, chains=chains))
    return tuple(operations)


def from_classes(*classes: type, root: str | None = "object") -> Hierarchy:
    """Describe live Python classes and all their ancestors as a ``Hierarchy``.

    Classes are named by ``__qualname__``.  ``object`` is kept as an
    ordinary parentless class; with the default ``root="object"`` it also
    becomes the hierarchy's root, so computed linearizations line up with
    CPython's ``__mro__``.

    Raises
    ------
    HierarchyLoadError
        If two distinct classes share a qualified name.
    """
    names: dict[type, str] = {}
    taken: dict[str, type] = {}
    ordered: list[type] = []

    def visit(cls: type) -> None:
        stack: list[tuple[type, bool]] = [(cls, False)]
        while stack:
            current, expanded = stack.pop()
            if current in names:
                continue
            if expanded:
                name = current.__qualname__
                if name in taken and taken[name] is not current:
                    raise HierarchyLoadError(
                        f"Two different classes are both named {name!r}"
                    )
                names[current] = name
                taken[name] = current
                ordered.append(current)
                continue
            stack.append((current, True))
            for base in reversed(current.__bases__):
                if base not in names:
                    stack.append((base, False))

    for cls in classes:
        visit(cls)

    nodes = tuple(
        ClassNode(
            name=names[cls],
            bases=tuple(names[base] for base in cls.__bases__),
            operations=_operations_of(cls) if cls is not object else (),
        )
        for cls in ordered
    )
    return Hierarchy(classes=nodes, root=root)
