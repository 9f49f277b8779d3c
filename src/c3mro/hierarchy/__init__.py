"""Hierarchy module.

Exports the data model, the loader functions, the serializer and the
input error types.
"""
from __future__ import annotations

from c3mro.hierarchy.errors import (
    HierarchyLoadError,
    InvalidHierarchyError,
    UnknownClassError,
)
from c3mro.hierarchy.loader import from_classes, load, load_file, loads
from c3mro.hierarchy.nodes import ClassNode, Hierarchy, Linearization, OperationDecl
from c3mro.hierarchy.serializer import HierarchySerializer

__all__ = [
    "ClassNode",
    "OperationDecl",
    "Hierarchy",
    "Linearization",
    "load",
    "loads",
    "load_file",
    "from_classes",
    "HierarchySerializer",
    "HierarchyLoadError",
    "InvalidHierarchyError",
    "UnknownClassError",
]
