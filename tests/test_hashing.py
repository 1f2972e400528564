"""Tests for hashing utilities."""

import pytest

from actiongraph.hashing import hash_value


class TestHashValue:
    """Tests for hash_value function."""

    def test_hash_string(self):
        """Test hashing a string."""
        h1 = hash_value("hello")
        h2 = hash_value("hello")
        assert h1 == h2
        assert len(h1) == 64
        assert hash_value("world") != h1

    def test_hash_integer(self):
        h1 = hash_value(42)
        assert h1 == hash_value(42)
        assert hash_value(43) != h1

    def test_hash_bool_distinct_from_int(self):
        assert hash_value(True) != hash_value(1)
        assert hash_value(False) != hash_value(0)

    def test_hash_none(self):
        assert hash_value(None) == hash_value(None)

    @pytest.mark.parametrize(
        "left, right",
        [(None, "None"), (5, "5"), (True, "True"), ("abc", b"abc"), (None, b"")],
    )
    def test_scalar_types_never_collide(self, left, right):
        assert hash_value(left) != hash_value(right)

    def test_repeated_pairs(self):
        assert hash_value((("a", "1"), ("a", "2"))) != hash_value((("a", "2"),))

    def test_hash_dict_key_order(self):
        """Dict hashes ignore insertion order."""
        assert hash_value({"a": 1, "b": 2}) == hash_value({"b": 2, "a": 1})

    def test_hash_dict_values_matter(self):
        assert hash_value({"a": 1}) != hash_value({"a": 2})

    def test_hash_list_order_matters(self):
        assert hash_value([1, 2]) != hash_value([2, 1])

    def test_list_and_tuple_agree(self):
        assert hash_value([1, "a"]) == hash_value((1, "a"))

    def test_dict_differs_from_list(self):
        assert hash_value({}) != hash_value([])

    def test_nested(self):
        value = {"outer": [{"inner": (1, 2)}, None]}
        assert hash_value(value) == hash_value({"outer": [{"inner": [1, 2]}, None]})

    def test_bytes(self):
        assert hash_value(b"abc") == hash_value(b"abc")

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Unsupported type for hashing: float"):
            hash_value(1.5)

    def test_unsupported_nested_type(self):
        with pytest.raises(TypeError):
            hash_value({"a": {1, 2}})
