"""Tests for IdentityTable."""

from dataclasses import dataclass

import pytest

from cachetools import LRUCache

from actiongraph.identity import IdentityTable


@dataclass(frozen=True)
class Key:
    name: str


class TestIdentityTable:
    """Tests for IdentityTable."""

    def test_first_key_gets_base(self):
        """The first recorded key receives id 1."""
        table = IdentityTable()
        assert table.get_or_assign("a") == (1, True)

    def test_existing_key_not_new(self):
        """Re-querying a key returns its id with is_new False."""
        table = IdentityTable()
        table.get_or_assign("a")
        assert table.get_or_assign("a") == (1, False)
        assert len(table) == 1
        assert table.next_id == 2

    def test_sequential_ids(self):
        """New keys receive previous max id + 1."""
        table = IdentityTable()
        ids = [table.get_or_assign(k)[0] for k in ["a", "b", "c", "b", "d"]]
        assert ids == [1, 2, 3, 2, 4]

    def test_semantic_equality(self):
        """Equal but distinct objects share an id."""
        table = IdentityTable()
        first = Key("x")
        second = Key("x")
        assert first is not second
        assert table.get_or_assign(first)[0] == table.get_or_assign(second)[0]

    def test_custom_base(self):
        """Ids start at the configured base."""
        table = IdentityTable(base=0)
        assert table.get_or_assign("a") == (0, True)
        assert table.get_or_assign("b") == (1, True)

    def test_negative_base_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            IdentityTable(base=-1)

    def test_lookup(self):
        """lookup returns the id or None and records nothing."""
        table = IdentityTable()
        assert table.lookup("a") is None
        assert len(table) == 0
        table.get_or_assign("a")
        assert table.lookup("a") == 1
        assert "a" in table
        assert "b" not in table

    def test_discard_newest_rewinds(self):
        """Discarding the newest key hands its id out again."""
        table = IdentityTable()
        table.get_or_assign("a")
        table.get_or_assign("b")
        table.discard("b")
        assert "b" not in table
        assert table.get_or_assign("c") == (2, True)

    def test_discard_older_leaves_gap(self):
        """Discarding an older key never reuses a live id."""
        table = IdentityTable()
        table.get_or_assign("a")
        table.get_or_assign("b")
        table.discard("a")
        assert table.get_or_assign("c") == (3, True)
        assert table.get_or_assign("a") == (4, True)

    def test_discard_missing(self):
        table = IdentityTable()
        with pytest.raises(KeyError):
            table.discard("a")

    def test_custom_mapping(self):
        """Entries are stored in the provided mapping."""
        backing = {}
        table = IdentityTable(mapping=backing)
        table.get_or_assign("a")
        assert len(backing) == 1

    def test_evicting_mapping_rejected(self):
        """cachetools caches would evict keys and re-assign ids."""
        with pytest.raises(ValueError, match="must not evict"):
            IdentityTable(mapping=LRUCache(maxsize=10))

    def test_non_empty_mapping_rejected(self):
        with pytest.raises(ValueError, match="must be empty"):
            IdentityTable(mapping={"x": 1})

    def test_custom_key_function(self):
        """The key function decides which keys are equal."""
        table = IdentityTable(key=str.lower)
        assert table.get_or_assign("Java")[0] == table.get_or_assign("JAVA")[0]

    def test_unhashable_key(self):
        table = IdentityTable()
        with pytest.raises(TypeError):
            table.get_or_assign(["not", "hashable"])
