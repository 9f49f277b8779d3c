"""Dispatch module.

Exports the ``DispatchTable``, the ``NextCursor`` handed to every
implementation, the ``simulate`` helper and ``OperationNotFoundError``.
"""
from __future__ import annotations

from c3mro.dispatch.errors import OperationNotFoundError
from c3mro.dispatch.table import DispatchTable, Implementation, NextCursor, simulate

__all__ = [
    "DispatchTable",
    "Implementation",
    "NextCursor",
    "simulate",
    "OperationNotFoundError",
]
