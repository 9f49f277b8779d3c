"""Shared test fixtures for c3mro.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from c3mro.hierarchy import Hierarchy, load

_EXAMPLES = Path(__file__).parent.parent / "examples" / "hierarchies"


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "c3mro"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def hierarchies_dir() -> Path:
    """Directory holding the example hierarchy files."""
    return _EXAMPLES


@pytest.fixture()
def diamond() -> Hierarchy:
    """``A``; ``B(A)``; ``C(A)``; ``D(B, C)``, rooted at ``object``."""
    return load({
        "root": "object",
        "classes": {"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]},
    })


@pytest.fixture()
def inconsistent() -> Hierarchy:
    """``X(A, B)`` and ``Y(B, A)`` joined by ``Z(X, Y)``."""
    return load({
        "A": [],
        "B": [],
        "X": ["A", "B"],
        "Y": ["B", "A"],
        "Z": ["X", "Y"],
    })
