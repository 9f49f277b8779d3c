"""Configuration for :class:`c3mro.linearizer.Linearizer`."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LinearizerConfig:
    """Settings for a ``Linearizer``.

    Parameters
    ----------
    root:
        Universal root ancestor.  When set it replaces the hierarchy's own
        ``root``; when ``None`` the hierarchy's ``root`` is used.
    cache:
        Keep every computed linearization for the lifetime of the
        linearizer (default True).  Without the cache each call recomputes
        the ancestors it needs.
    validate:
        Run the structural checks when the linearizer is created
        (default True).  Turning this off is only safe for hierarchies
        that have already been checked.
    """

    root: str | None = None
    cache: bool = True
    validate: bool = True
