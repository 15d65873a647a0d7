"""
Tests for the structured-storage contract: DataAdaptor nodes and PhaseVector save/load.
"""

import json

import pytest

from src.config.settings import ATTR_DATA
from src.data.data_adaptor import DataFormatError, MemoryDataAdaptor
from src.physics.phase_vector import PhaseVector


# =============================================================================
# DATA ADAPTOR
# =============================================================================


class TestMemoryDataAdaptor:
    def test_attributes(self) -> None:
        node = MemoryDataAdaptor("point")
        node.set_value("x", 1.5)
        node.set_value("n", 3)
        node.set_value("good", True)
        node.set_value("label", "beam")
        assert node.has_attribute("x")
        assert not node.has_attribute("y")
        assert node.attributes() == ["x", "n", "good", "label"]
        assert node.double_value("x") == 1.5
        assert node.int_value("n") == 3
        assert node.boolean_value("good") is True
        assert node.string_value("label") == "beam"

    def test_list_value(self) -> None:
        node = MemoryDataAdaptor()
        node.set_value("wave", [1.0, 2.0, 3.0])
        assert node.string_value("wave") == "1.0 2.0 3.0"

    def test_missing_attribute(self) -> None:
        with pytest.raises(KeyError):
            MemoryDataAdaptor().string_value("nope")

    def test_typed_getters_reject_bad_text(self) -> None:
        node = MemoryDataAdaptor()
        node.set_value("v", "abc")
        with pytest.raises(DataFormatError):
            node.double_value("v")
        with pytest.raises(DataFormatError):
            node.int_value("v")
        with pytest.raises(DataFormatError):
            node.boolean_value("v")

    def test_children(self) -> None:
        root = MemoryDataAdaptor("root")
        a = root.create_child("particle")
        b = root.create_child("particle")
        root.create_child("other")
        assert root.child_adaptors("particle") == [a, b]
        assert len(root.child_adaptors()) == 3
        assert root.child_adaptor("particle") is a
        assert root.child_adaptor("missing") is None

    def test_dict_round_trip_through_json(self) -> None:
        root = MemoryDataAdaptor("root")
        root.set_value("version", 2)
        root.create_child("particle").set_value("q", -1)
        tree = json.loads(json.dumps(root.to_dict()))
        back = MemoryDataAdaptor.from_dict(tree)
        assert back.to_dict() == root.to_dict()
        assert back.child_adaptor("particle").int_value("q") == -1

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"name": "n", "attributes": []},
            {"name": "n", "children": {}},
            {"name": "n", "children": [{"attributes": {}}]},
        ],
    )
    def test_from_dict_malformed(self, data) -> None:
        with pytest.raises(DataFormatError):
            MemoryDataAdaptor.from_dict(data)


# =============================================================================
# PHASE VECTOR ARCHIVE
# =============================================================================


class TestPhaseVectorArchive:
    def test_save_writes_full_rendering(self) -> None:
        node = MemoryDataAdaptor()
        PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 6.0).save(node)
        assert node.string_value(ATTR_DATA) == "(1.0,2.0,3.0,4.0,5.0,6.0,1.0)"
        assert PhaseVector.ATTR_DATA == "values"

    def test_load_after_save_same_vector(self) -> None:
        v = PhaseVector(0.1, -0.2, 1.0 / 3.0, 4e-9, -5.5, 6.25)
        original = v.copy()
        node = MemoryDataAdaptor()
        v.save(node)
        v.set_vector("9 9 9 9 9 9")
        v.load(node)
        assert v == original
        assert v.get_elem(6) == 1.0

    def test_load_into_fresh_vector_skips_zp(self) -> None:
        node = MemoryDataAdaptor()
        PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 6.0).save(node)
        v = PhaseVector.from_adaptor(node)
        assert [v.get_elem(i) for i in range(7)] == [1.0, 2.0, 3.0, 4.0, 5.0, 0.0, 1.0]

    def test_load_uses_only_three_node_operations(self) -> None:
        class ThreeMethodNode:
            def __init__(self):
                self.attrs = {}

            def set_value(self, key, value):
                self.attrs[key] = value

            def string_value(self, key):
                return self.attrs[key]

            def has_attribute(self, key):
                return key in self.attrs

        v = PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        v.load(ThreeMethodNode())
        assert v == PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)

        node = ThreeMethodNode()
        v.save(node)
        back = PhaseVector(0.0, 0.0, 0.0, 0.0, 0.0, 6.0)
        back.load(node)
        assert back == v

    def test_load_missing_attribute_is_noop(self) -> None:
        v = PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        v.load(MemoryDataAdaptor())
        assert v == PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
        assert PhaseVector.from_adaptor(MemoryDataAdaptor()) == PhaseVector.zero()

    def test_load_malformed_values(self) -> None:
        node = MemoryDataAdaptor()
        node.set_value(ATTR_DATA, "(1,2,x,4,5,6,1)")
        with pytest.raises(DataFormatError):
            PhaseVector.from_adaptor(node)

    def test_load_too_few_tokens(self) -> None:
        node = MemoryDataAdaptor()
        node.set_value(ATTR_DATA, "(1,2,3)")
        with pytest.raises(ValueError):
            PhaseVector().load(node)

    def test_child_node_round_trip(self) -> None:
        root = MemoryDataAdaptor("beam")
        v = PhaseVector(1.0, 2.0, 3.0, 4.0, 5.0, 0.0)
        child = v.save_child(root)
        assert child.name() == PhaseVector.DATA_LABEL
        back = PhaseVector()
        back.load_child(MemoryDataAdaptor.from_dict(root.to_dict()))
        assert back == v

    def test_load_child_missing(self) -> None:
        with pytest.raises(DataFormatError):
            PhaseVector().load_child(MemoryDataAdaptor("beam"))
