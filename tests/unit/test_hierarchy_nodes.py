"""Unit tests for c3mro.hierarchy.nodes: ClassNode, Hierarchy, Linearization."""
from __future__ import annotations

import dataclasses

import pytest

from c3mro.hierarchy.nodes import ClassNode, Hierarchy, Linearization, OperationDecl


def _hierarchy() -> Hierarchy:
    return Hierarchy(
        classes=(
            ClassNode("A", operations=(OperationDecl("greet", chains=True),)),
            ClassNode("B", ("A",)),
            ClassNode("C", ("A",)),
            ClassNode("D", ("B", "C")),
        ),
        root="object",
    )


class TestClassNode:
    def test_frozen(self) -> None:
        node = ClassNode("A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.name = "B"  # type: ignore[misc]

    def test_defaults(self) -> None:
        node = ClassNode("A")
        assert node.bases == ()
        assert node.operations == ()
        assert node.is_root_level

    def test_bases_keep_declaration_order(self) -> None:
        node = ClassNode("D", ("C", "B"))
        assert node.bases == ("C", "B")
        assert not node.is_root_level

    def test_defines_and_operation(self) -> None:
        node = ClassNode("A", operations=(OperationDecl("greet", chains=True),))
        assert node.defines("greet")
        assert not node.defines("close")
        assert node.operation("greet") == OperationDecl("greet", chains=True)
        assert node.operation("close") is None

    def test_operation_default_does_not_chain(self) -> None:
        assert OperationDecl("greet").chains is False


class TestHierarchy:
    def test_lookup(self) -> None:
        hierarchy = _hierarchy()
        assert "D" in hierarchy
        assert "Z" not in hierarchy
        assert hierarchy["D"].bases == ("B", "C")
        assert hierarchy.get("Z") is None
        assert len(hierarchy) == 4

    def test_names_in_declaration_order(self) -> None:
        assert _hierarchy().names == ("A", "B", "C", "D")

    def test_iteration_yields_nodes(self) -> None:
        assert [node.name for node in _hierarchy()] == ["A", "B", "C", "D"]

    def test_missing_name_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            _hierarchy()["Z"]

    def test_position(self) -> None:
        hierarchy = _hierarchy()
        assert hierarchy.position("A") == 0
        assert hierarchy.position("D") == 3
        assert hierarchy.position("object") == 4

    def test_ancestors(self) -> None:
        hierarchy = _hierarchy()
        assert hierarchy.ancestors("D") == {"A", "B", "C"}
        assert hierarchy.ancestors("A") == set()
        assert hierarchy.ancestors("unknown") == set()

    def test_ancestors_include_unknown_parents(self) -> None:
        hierarchy = Hierarchy(classes=(ClassNode("A", ("Missing",)),))
        assert hierarchy.ancestors("A") == {"Missing"}

    def test_ancestors_terminate_on_cycles(self) -> None:
        hierarchy = Hierarchy(classes=(ClassNode("A", ("B",)), ClassNode("B", ("A",))))
        assert hierarchy.ancestors("A") == {"A", "B"}

    def test_with_root_returns_new_hierarchy(self) -> None:
        hierarchy = _hierarchy()
        rerooted = hierarchy.with_root(None)
        assert rerooted.root is None
        assert hierarchy.root == "object"
        assert rerooted.classes == hierarchy.classes

    def test_equality_ignores_index(self) -> None:
        assert _hierarchy() == _hierarchy()
        assert _hierarchy() != _hierarchy().with_root("Base")

    def test_hashable(self) -> None:
        assert hash(_hierarchy()) == hash(_hierarchy())


class TestLinearization:
    def test_sequence_protocol(self) -> None:
        lin = Linearization(("D", "B", "C", "A"))
        assert len(lin) == 4
        assert lin[0] == "D"
        assert lin[1:3] == ("B", "C")
        assert list(lin) == ["D", "B", "C", "A"]
        assert "C" in lin
        assert "Z" not in lin
        assert lin.index("C") == 2

    def test_target(self) -> None:
        assert Linearization(("D", "B")).target == "D"

    def test_after(self) -> None:
        lin = Linearization(("D", "B", "C", "A"))
        assert lin.after("B") == ("C", "A")
        assert lin.after("A") == ()

    def test_str(self) -> None:
        assert str(Linearization(("D", "B", "A"))) == "[D, B, A]"

    def test_equality(self) -> None:
        assert Linearization(("A",)) == Linearization(("A",))
        assert Linearization(("A",)) != Linearization(("B",))
