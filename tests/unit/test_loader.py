"""Unit tests for c3mro.hierarchy.loader: mappings, YAML/JSON text, files,
and live Python classes.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from c3mro.hierarchy import HierarchyLoadError
from c3mro.hierarchy.loader import from_classes, load, load_file, loads
from c3mro.hierarchy.nodes import ClassNode, OperationDecl

_DIAMOND_YAML = """\
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
"""


# ===========================================================================
# load (mappings)
# ===========================================================================


class TestLoadMapping:
    def test_bare_mapping(self) -> None:
        hierarchy = load({"A": [], "B": ["A"]})
        assert hierarchy.names == ("A", "B")
        assert hierarchy["B"].bases == ("A",)
        assert hierarchy.root is None

    def test_classes_key_with_root(self) -> None:
        hierarchy = load({"root": "object", "classes": {"A": []}})
        assert hierarchy.root == "object"
        assert hierarchy.names == ("A",)

    def test_none_bases_means_parentless(self) -> None:
        assert load({"A": None})["A"].bases == ()

    def test_single_string_base(self) -> None:
        assert load({"A": [], "B": "A"})["B"].bases == ("A",)

    def test_long_form(self) -> None:
        hierarchy = load({
            "A": [],
            "B": {"bases": ["A"], "defines": {"greet": "chain", "close": "stop"}},
        })
        node = hierarchy["B"]
        assert node.bases == ("A",)
        assert node.operations == (
            OperationDecl("greet", chains=True),
            OperationDecl("close", chains=False),
        )

    def test_defines_list_means_stop(self) -> None:
        node = load({"A": {"defines": ["greet", "close"]}})["A"]
        assert node.operations == (OperationDecl("greet"), OperationDecl("close"))

    def test_defines_accepts_booleans_and_case(self) -> None:
        node = load({"A": {"defines": {"x": True, "y": False, "z": "CHAIN", "w": None}}})["A"]
        assert [op.chains for op in node.operations] == [True, False, True, False]

    def test_root_override(self) -> None:
        hierarchy = load({"root": "object", "classes": {"A": []}}, root="Base")
        assert hierarchy.root == "Base"

    def test_root_explicit_none_drops_root(self) -> None:
        hierarchy = load({"root": "object", "classes": {"A": []}}, root=None)
        assert hierarchy.root is None

    def test_names_are_stripped(self) -> None:
        hierarchy = load({" A ": [], "B": [" A "]})
        assert hierarchy.names == ("A", "B")
        assert hierarchy["B"].bases == ("A",)

    def test_empty_classes(self) -> None:
        assert len(load({"classes": None})) == 0

    def test_parents_are_not_resolved_by_loader(self) -> None:
        # Unknown parents are the validator's business.
        assert load({"A": ["Missing"]})["A"].bases == ("Missing",)


class TestLoadMappingErrors:
    def test_non_mapping(self) -> None:
        with pytest.raises(HierarchyLoadError, match="must be a mapping"):
            load(["A", "B"])  # type: ignore[arg-type]

    def test_unknown_top_level_keys(self) -> None:
        with pytest.raises(HierarchyLoadError, match="Unknown top-level keys: extra"):
            load({"classes": {}, "extra": 1})

    def test_classes_not_a_mapping(self) -> None:
        with pytest.raises(HierarchyLoadError, match="'classes' must be a mapping"):
            load({"classes": ["A"]})

    def test_non_string_class_name(self) -> None:
        with pytest.raises(HierarchyLoadError, match="Class name must be a non-empty string"):
            load({1: []})  # type: ignore[dict-item]

    def test_empty_base_name(self) -> None:
        with pytest.raises(HierarchyLoadError, match="Base of 'A'"):
            load({"A": [""]})

    def test_bases_wrong_type(self) -> None:
        with pytest.raises(HierarchyLoadError, match="must be a list of class names"):
            load({"A": {"bases": 3}})

    def test_class_wrong_type(self) -> None:
        with pytest.raises(HierarchyLoadError, match="must map to a list of bases"):
            load({"A": 3})

    def test_unknown_class_keys(self) -> None:
        with pytest.raises(HierarchyLoadError, match="unknown keys: parents"):
            load({"A": {"parents": []}})

    def test_bad_chain_mode(self) -> None:
        with pytest.raises(HierarchyLoadError, match="must be 'chain' or 'stop'"):
            load({"A": {"defines": {"greet": "sometimes"}}})

    def test_defines_wrong_type(self) -> None:
        with pytest.raises(HierarchyLoadError, match="'defines' of 'A'"):
            load({"A": {"defines": "greet"}})

    def test_source_in_message(self) -> None:
        with pytest.raises(HierarchyLoadError, match="^file.yaml: ") as exc_info:
            load({"A": 3}, source="file.yaml")
        assert exc_info.value.source == "file.yaml"

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            load({"A": 3})


# ===========================================================================
# loads / load_file
# ===========================================================================


class TestLoads:
    def test_yaml(self) -> None:
        hierarchy = loads(_DIAMOND_YAML)
        assert hierarchy.root == "object"
        assert hierarchy.names == ("A", "B", "C", "D")
        assert hierarchy["D"].defines("greet")
        assert hierarchy["D"].operation("greet") == OperationDecl("greet", chains=True)

    def test_json(self) -> None:
        text = json.dumps({"classes": {"A": [], "B": ["A"]}})
        assert loads(text)["B"].bases == ("A",)

    def test_empty_text(self) -> None:
        assert len(loads("")) == 0

    def test_invalid_yaml(self) -> None:
        with pytest.raises(HierarchyLoadError, match="Invalid YAML"):
            loads("classes: [unclosed")

    def test_scalar_document(self) -> None:
        with pytest.raises(HierarchyLoadError, match="must be a mapping"):
            loads("just text")

    def test_duplicate_class_is_rejected(self) -> None:
        text = "classes:\n  A: []\n  B: []\n  D: [A, B]\n  D: [B, A]\n"
        with pytest.raises(HierarchyLoadError, match="found duplicate key 'D'"):
            loads(text, source="dup.yaml")

    def test_duplicate_operation_is_rejected(self) -> None:
        text = "A:\n  defines:\n    greet: chain\n    greet: stop\n"
        with pytest.raises(HierarchyLoadError, match="found duplicate key 'greet'"):
            loads(text)

    def test_merge_keys_may_be_overridden(self) -> None:
        text = (
            "A: &plain {defines: [greet]}\n"
            "B:\n"
            "  <<: *plain\n"
            "  bases: [A]\n"
            "  defines: {greet: chain}\n"
        )
        hierarchy = loads(text)
        assert hierarchy["B"].bases == ("A",)
        assert hierarchy["B"].operation("greet") == OperationDecl("greet", chains=True)

    def test_boolean_looking_class_names_stay_text(self) -> None:
        hierarchy = loads("On: []\nOff: []\nYes: ['On', 'Off']\n")
        assert hierarchy.names == ("On", "Off", "Yes")

    def test_boolean_looking_base_asks_for_quotes(self) -> None:
        with pytest.raises(HierarchyLoadError, match="quote names such as"):
            loads("On: []\nB: [On]\n")

    def test_quoted_boolean_base(self) -> None:
        assert loads("On: []\nB: ['On']\n")["B"].bases == ("On",)

    def test_logs_debug_message(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="c3mro.hierarchy.loader"):
            loads(_DIAMOND_YAML, source="diamond.yaml")
        assert "Loaded 4 class(es) from diamond.yaml" in caplog.text


class TestLoadFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "h.yaml"
        path.write_text(_DIAMOND_YAML, encoding="utf-8")
        hierarchy = load_file(path)
        assert hierarchy.names == ("A", "B", "C", "D")

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "h.yaml"
        path.write_text("A: []\n", encoding="utf-8")
        assert load_file(str(path)).names == ("A",)

    def test_root_override(self, tmp_path: Path) -> None:
        path = tmp_path / "h.yaml"
        path.write_text(_DIAMOND_YAML, encoding="utf-8")
        assert load_file(path, root=None).root is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(HierarchyLoadError, match="Cannot read file"):
            load_file(tmp_path / "missing.yaml")

    def test_errors_name_the_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("A: 3\n", encoding="utf-8")
        with pytest.raises(HierarchyLoadError) as exc_info:
            load_file(path)
        assert exc_info.value.source == str(path)

    def test_example_files_load(self, hierarchies_dir: Path) -> None:
        for path in sorted(hierarchies_dir.glob("*.yaml")):
            assert len(load_file(path)) > 0


# ===========================================================================
# from_classes
# ===========================================================================


class Animal:
    def __init__(self) -> None:
        self.sound = ""


class Walker(Animal):
    def __init__(self) -> None:
        super().__init__()

    def move(self) -> str:
        return "walk"


class Swimmer(Animal):
    def move(self) -> str:
        return "swim"

    @classmethod
    def create(cls) -> "Swimmer":
        return cls()


class Duck(Walker, Swimmer):
    pass


class TestFromClasses:
    def test_includes_all_ancestors(self) -> None:
        hierarchy = from_classes(Duck)
        assert set(hierarchy.names) == {"object", "Animal", "Walker", "Swimmer", "Duck"}

    def test_bases_before_subclasses(self) -> None:
        names = from_classes(Duck).names
        assert names.index("object") < names.index("Animal") < names.index("Walker")
        assert names.index("Swimmer") < names.index("Duck")

    def test_bases_preserve_order(self) -> None:
        hierarchy = from_classes(Duck)
        assert hierarchy["Duck"].bases == ("Walker", "Swimmer")
        assert hierarchy["Animal"].bases == ("object",)
        assert hierarchy["object"] == ClassNode("object")

    def test_default_root_is_object(self) -> None:
        assert from_classes(Duck).root == "object"
        assert from_classes(Duck, root=None).root is None

    def test_operations_detect_super_calls(self) -> None:
        hierarchy = from_classes(Duck)
        assert hierarchy["Walker"].operation("__init__") == OperationDecl("__init__", chains=True)
        assert hierarchy["Animal"].operation("__init__") == OperationDecl("__init__", chains=False)
        assert hierarchy["Walker"].defines("move")
        assert hierarchy["Swimmer"].defines("create")
        assert hierarchy["Duck"].operations == ()

    def test_multiple_classes_share_ancestors(self) -> None:
        hierarchy = from_classes(Walker, Swimmer)
        assert hierarchy.names.count("Animal") == 1

    def test_name_collision(self) -> None:
        def make() -> type:
            class Twin:
                pass

            return Twin

        with pytest.raises(HierarchyLoadError, match="Two different classes"):
            from_classes(make(), make())
