"""Tests for empty-value pruning."""
from chaosflow.core.sanitize import drop_none, prune_empty


class TestPruneEmpty:
    def test_drops_empty_string_and_list(self):
        assert prune_empty({"a": "", "b": [], "c": "x"}) == {"c": "x"}

    def test_keeps_single_element_list(self):
        assert prune_empty({"namespaces": ["default"]}) == {"namespaces": ["default"]}

    def test_drops_none(self):
        assert prune_empty({"a": None, "b": 0, "c": False}) == {"b": 0, "c": False}

    def test_recurses_into_nested_mappings(self):
        data = {"spec": {"selector": {"pods": [], "namespaces": ["a"]}, "value": ""}}
        assert prune_empty(data) == {"spec": {"selector": {"namespaces": ["a"]}}}

    def test_list_elements_are_not_removed(self):
        assert prune_empty({"pairs": [["a", ""], [{"k": ""}]]}) == {"pairs": [["a", ""], [{}]]}

    def test_empty_mapping_is_kept(self):
        assert prune_empty({"selector": {"pods": []}}) == {"selector": {}}

    def test_input_not_mutated(self):
        data = {"a": "", "b": {"c": []}}
        prune_empty(data)
        assert data == {"a": "", "b": {"c": []}}


def test_drop_none_keeps_empty_values():
    data = {"a": None, "b": "", "c": [], "d": {"e": None, "f": [None]}}
    assert drop_none(data) == {"b": "", "c": [], "d": {"f": [None]}}
