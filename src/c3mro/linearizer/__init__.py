"""Linearizer module.

Exports the ``Linearizer`` class, its configuration, the ``merge``
function and the inconsistency error.
"""
from __future__ import annotations

from c3mro.linearizer.config import LinearizerConfig
from c3mro.linearizer.errors import InconsistentHierarchyError
from c3mro.linearizer.linearizer import Linearizer, MergeTrace, linearize, mro_of
from c3mro.linearizer.merge import MergeStep, merge

__all__ = [
    "Linearizer",
    "LinearizerConfig",
    "MergeTrace",
    "MergeStep",
    "merge",
    "linearize",
    "mro_of",
    "InconsistentHierarchyError",
]
