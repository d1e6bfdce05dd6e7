"""Tests for prefstore.flatten — flatten_object / unflatten_object."""

from types import MappingProxyType

from prefstore.flatten import flatten_object, unflatten_object


class TestFlattenObject:
    def test_flat_passthrough(self):
        assert flatten_object({"a": 1, "b": "x"}) == {"a": 1, "b": "x"}

    def test_nested(self):
        result = flatten_object({"foo": "bar", "baz": {"foo": "bar"}})
        assert result == {"foo": "bar", "baz.foo": "bar"}

    def test_deeply_nested(self):
        result = flatten_object({"a": {"b": {"c": {"d": 1}}}})
        assert result == {"a.b.c.d": 1}

    def test_lists_are_leaves(self):
        result = flatten_object({"a": [1, {"b": 2}], "c": {"d": []}})
        assert result == {"a": [1, {"b": 2}], "c.d": []}

    def test_none_is_leaf(self):
        assert flatten_object({"a": None, "b": {"c": None}}) == {"a": None, "b.c": None}

    def test_empty_nested_dropped(self):
        assert flatten_object({"a": {}, "b": {"c": {}}, "d": 1}) == {"d": 1}

    def test_non_mapping_input(self):
        assert flatten_object(None) == {}
        assert flatten_object([1, 2]) == {}
        assert flatten_object("text") == {}

    def test_custom_separator_at_every_depth(self):
        result = flatten_object({"a": {"b": {"c": 1}}}, separator="/")
        assert result == {"a/b/c": 1}

    def test_keys_stringified(self):
        assert flatten_object({1: {2: "x"}}) == {"1.2": "x"}

    def test_read_only_mappings(self):
        frozen = MappingProxyType({"a": MappingProxyType({"b": 1})})
        assert flatten_object(frozen) == {"a.b": 1}


class TestUnflattenObject:
    def test_nested(self):
        result = unflatten_object({"foo": "bar", "baz.foo": "bar", "baz.qux": 1})
        assert result == {"foo": "bar", "baz": {"foo": "bar", "qux": 1}}

    def test_custom_separator(self):
        assert unflatten_object({"a/b": 1}, separator="/") == {"a": {"b": 1}}

    def test_deeper_key_wins_over_leaf(self):
        assert unflatten_object({"a": 1, "a.b": 2}) == {"a": {"b": 2}}
        assert unflatten_object({"a.b": 2, "a": 1}) == {"a": {"b": 2}}

    def test_non_mapping_input(self):
        assert unflatten_object(None) == {}

    def test_round_trip_is_stable(self):
        data = {
            "theme": "dark",
            "window": {"width": 800, "height": 600, "pos": {"x": 0, "y": 10}},
            "recent": ["a", "b"],
            "empty": {},
            "nothing": None,
        }
        flat = flatten_object(data)
        assert flatten_object(unflatten_object(flat)) == flat
