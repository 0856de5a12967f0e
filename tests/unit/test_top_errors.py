"""Tests for TopErrorsTracker."""

from __future__ import annotations

from loadstats.metrics.top_errors import TopErrorsReadout, TopErrorsTracker
from loadstats.sample import Sample


class TestTopErrorsTracker:
    def test_top_orders_by_count(self):
        tracker = TopErrorsTracker()
        for c in ["A", "A", "B", "C", "A", "B"]:
            tracker.register_error(c)
        assert tracker.top(5) == [("A", 3), ("B", 2), ("C", 1)]

    def test_top_is_not_padded(self):
        tracker = TopErrorsTracker()
        tracker.register_error("only")
        assert tracker.top(5) == [("only", 1)]

    def test_empty_tracker(self):
        tracker = TopErrorsTracker()
        assert tracker.top() == []
        assert tracker.total == 0
        assert tracker.errors == 0

    def test_ties_keep_first_seen_order(self):
        tracker = TopErrorsTracker()
        for c in ["D", "B", "A", "C", "A", "B", "C", "D"]:
            tracker.register_error(c)
        assert tracker.top(5) == [("D", 2), ("B", 2), ("A", 2), ("C", 2)]

    def test_table_keeps_every_classification(self):
        tracker = TopErrorsTracker()
        for i in range(8):
            tracker.register_error(f"E{i}")
        tracker.register_error("E7")
        tracker.register_error("E7")
        assert tracker.top(5) == [("E7", 3), ("E0", 1), ("E1", 1), ("E2", 1), ("E3", 1)]
        assert len(tracker.top(10)) == 8

    def test_late_classification_can_overtake(self):
        tracker = TopErrorsTracker()
        for c in ["A", "B", "C", "D", "E", "F", "F", "F"]:
            tracker.register_error(c)
        assert tracker.top(1) == [("F", 3)]

    def test_counters(self):
        tracker = TopErrorsTracker()
        tracker.inc_total()
        tracker.inc_total()
        tracker.inc_errors()
        assert tracker.total == 2
        assert tracker.errors == 1


class TestTopErrorsTrackerSamples:
    def test_add_sample_counts_failures(self):
        tracker = TopErrorsTracker()
        tracker.add_sample(Sample(name="a", success=True, response_code="200"))
        tracker.add_sample(
            Sample(name="a", success=False, response_code="404", response_message="Not Found")
        )
        assert tracker.total == 2
        assert tracker.errors == 1
        assert tracker.top() == [("404/Not Found", 1)]

    def test_snapshot_is_a_copy(self):
        tracker = TopErrorsTracker()
        tracker.add_sample(Sample(name="a", success=False, response_code="500"))
        readout = tracker.snapshot()
        tracker.add_sample(Sample(name="a", success=False, response_code="500"))

        assert readout == TopErrorsReadout(total=1, errors=1, top=[("500", 1)])
        assert tracker.snapshot().top == [("500", 2)]
