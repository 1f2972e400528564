"""Tests for SectionSink and the Sink protocol."""

import pytest

from actiongraph.protocol import Sink
from actiongraph.sink import SectionSink


class TestSectionSink:
    """Tests for SectionSink."""

    def test_is_sink(self, sink):
        assert isinstance(sink, Sink)

    def test_append_order(self, sink):
        """Iteration order equals append order."""
        for value in ["c", "a", "b"]:
            sink.append(value)
        assert list(sink) == ["c", "a", "b"]
        assert sink.snapshot() == ("c", "a", "b")

    def test_count(self, sink):
        assert sink.count() == 0
        sink.append(1)
        sink.append(1)
        assert sink.count() == 2
        assert len(sink) == 2

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            SectionSink("")

    def test_validator_failure_leaves_sink_unchanged(self):
        """A value rejected by the validator is not stored."""

        def only_ints(value):
            if not isinstance(value, int):
                raise TypeError("ints only")

        sink = SectionSink("numbers", validator=only_ints)
        sink.append(1)
        with pytest.raises(TypeError, match="ints only"):
            sink.append("two")
        assert sink.snapshot() == (1,)

    def test_snapshot_is_a_copy(self, sink):
        sink.append(1)
        snapshot = sink.snapshot()
        sink.append(2)
        assert snapshot == (1,)

    def test_repr(self, sink):
        sink.append(1)
        assert repr(sink) == "SectionSink('values', count=1)"
