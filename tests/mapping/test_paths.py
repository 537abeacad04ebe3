"""
Tests for dotted-path access and sparse assignment.
"""

import copy
import pickle

from graph_mapper.mapping.paths import (
    MISSING,
    ensure_container,
    get_path,
    is_container,
    join_path,
    set_path,
)


class TestMissing:
    """Test the MISSING sentinel."""

    def test_missing_is_falsy_and_distinct_from_none(self):
        assert not MISSING
        assert MISSING is not None
        assert repr(MISSING) == "MISSING"

    def test_missing_survives_copies(self):
        assert copy.copy(MISSING) is MISSING
        assert copy.deepcopy({"a": MISSING})["a"] is MISSING
        assert pickle.loads(pickle.dumps(MISSING)) is MISSING


class TestGetPath:
    """Test reading values at dotted paths."""

    def test_nested_value(self):
        tree = {"Person": {"Address": {"City": "Gotham"}}}
        assert get_path(tree, "Person.Address.City") == "Gotham"
        assert get_path(tree, "Person.Address") == {"City": "Gotham"}

    def test_absent_segments_are_missing(self):
        tree = {"Person": {"Address": None}}
        assert get_path(tree, "Person.Name") is MISSING
        assert get_path(tree, "Person.Address.City") is MISSING
        assert get_path(tree, "Nobody.Home") is MISSING

    def test_none_is_a_value(self):
        assert get_path({"a": None}, "a") is None

    def test_non_container_input_never_raises(self):
        assert get_path(None, "a") is MISSING
        assert get_path("text", "a.b") is MISSING
        assert get_path(42, "a") is MISSING

    def test_integer_segments_index_lists(self):
        tree = {"items": [{"id": 1}, {"id": 2}]}
        assert get_path(tree, "items.1.id") == 2
        assert get_path(tree, "items.5.id") is MISSING
        assert get_path(tree, "items.first") is MISSING

    def test_empty_path_returns_tree(self):
        tree = {"a": 1}
        assert get_path(tree, "") is tree


class TestSetPath:
    """Test sparse assignment."""

    def test_creates_intermediate_containers(self):
        tree = {}
        set_path(tree, "Person.Address.City", "Gotham")
        assert tree == {"Person": {"Address": {"City": "Gotham"}}}

    def test_keeps_existing_siblings(self):
        tree = {"Person": {"Name": "Bruce"}}
        set_path(tree, "Person.Job", "Batman")
        assert tree == {"Person": {"Name": "Bruce", "Job": "Batman"}}

    def test_missing_value_creates_nothing(self):
        tree = {}
        set_path(tree, "Person.Address.City", MISSING)
        assert tree == {}

    def test_none_is_assigned(self):
        tree = {}
        set_path(tree, "Person.Name", None)
        assert tree == {"Person": {"Name": None}}

    def test_scalar_intermediate_is_replaced(self):
        tree = {"Person": "unknown"}
        set_path(tree, "Person.Name", "Bruce")
        assert tree == {"Person": {"Name": "Bruce"}}

    def test_assigns_into_existing_lists(self):
        tree = {"items": [{"id": 1}, {"id": 2}]}
        set_path(tree, "items.1.id", 3)
        assert tree == {"items": [{"id": 1}, {"id": 3}]}


class TestHelpers:
    """Test the small path helpers."""

    def test_join_path_skips_empty_parts(self):
        assert join_path("Person", "Address") == "Person.Address"
        assert join_path(None, "Address") == "Address"
        assert join_path("Person", "") == "Person"

    def test_ensure_container(self):
        tree = {"Person": {"Name": "Bruce"}}
        container = ensure_container(tree, "Person")
        assert container is tree["Person"]

        created = ensure_container(tree, "Person.Address")
        created["City"] = "Gotham"
        assert tree == {"Person": {"Name": "Bruce", "Address": {"City": "Gotham"}}}

    def test_is_container(self):
        assert is_container({})
        assert not is_container([])
        assert not is_container("text")
        assert not is_container(None)
