#!/usr/bin/env python3
"""Tests for Status enum."""

from fleet import Status


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert Status.OVERDUE.value < Status.DUE_SOON.value
        assert Status.DUE_SOON.value < Status.ON_TRACK.value

    def test_three_states(self):
        assert len(Status) == 3

    def test_sort_by_value(self):
        statuses = [Status.ON_TRACK, Status.OVERDUE, Status.DUE_SOON]
        assert sorted(statuses, key=lambda s: s.value) == [
            Status.OVERDUE,
            Status.DUE_SOON,
            Status.ON_TRACK,
        ]
