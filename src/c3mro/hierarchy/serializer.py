"""Serialize a ``Hierarchy`` back to its canonical description form.

The canonical form always uses the ``classes`` key and the short
``name: [bases]`` spelling for classes that define no operations.  It
loads back into an equal ``Hierarchy``.
"""
from __future__ import annotations

import json
from typing import Any

import yaml

from c3mro.hierarchy.nodes import ClassNode, Hierarchy


class HierarchySerializer:
    """Convert hierarchies to plain dicts, YAML and JSON."""

    def node_to_dict(self, node: ClassNode) -> list[str] | dict[str, Any]:
        """Return the description of a single class."""
        if not node.operations:
            return list(node.bases)
        return {
            "bases": list(node.bases),
            "defines": {
                op.name: "chain" if op.chains else "stop" for op in node.operations
            },
        }

    def to_dict(self, hierarchy: Hierarchy) -> dict[str, Any]:
        """Return the canonical description mapping."""
        data: dict[str, Any] = {}
        if hierarchy.root is not None:
            data["root"] = hierarchy.root
        data["classes"] = {node.name: self.node_to_dict(node) for node in hierarchy}
        return data

    def to_yaml(self, hierarchy: Hierarchy) -> str:
        """Return the canonical description as YAML text."""
        return yaml.safe_dump(
            self.to_dict(hierarchy),
            sort_keys=False,
            default_flow_style=None,
            allow_unicode=True,
        )

    def to_json(self, hierarchy: Hierarchy, indent: int | None = 2) -> str:
        """Return the canonical description as JSON text."""
        return json.dumps(self.to_dict(hierarchy), indent=indent) + "\n"


def to_yaml(hierarchy: Hierarchy) -> str:
    """Convenience function: canonical YAML for ``hierarchy``."""
    return HierarchySerializer().to_yaml(hierarchy)


def to_json(hierarchy: Hierarchy, indent: int | None = 2) -> str:
    """Convenience function: canonical JSON for ``hierarchy``."""
    return HierarchySerializer().to_json(hierarchy, indent=indent)
