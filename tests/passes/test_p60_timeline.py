"""
Unit tests for p60_build_timeline.
"""

from nate.core.context import AnnotateContext, AnnotateRequest
from nate.passes.p60_build_timeline import (
    build_timeline,
    build_timeline_pass,
    display_range,
    extract_timeline_entries,
)


def _make_context(text: str) -> AnnotateContext:
    req = AnnotateRequest(text=text)
    ctx = AnnotateContext(request=req, raw_text=text)
    ctx.narrative = text
    return ctx


THREE = "CO2 rose [2025-07-11 09:00], then [2025-07-11 10:00] and [2025-07-11 11:00]."


class TestBuildTimeline:

    def test_three_times_expanded(self):
        groups = build_timeline(THREE)

        assert len(groups) == 1
        assert groups[0].date == "2025-07-11"
        assert groups[0].times == ["09:00", "10:00", "11:00"]
        assert groups[0].collapsed is False

    def test_four_times_collapsed(self):
        groups = build_timeline(THREE + " Later [2025-07-11 12:00].")

        assert groups[0].collapsed is True
        assert groups[0].range_label == "09:00–13:00"

    def test_duplicates_removed_and_sorted(self):
        text = "[2025-07-11 11:00] [2025-07-11 09:00] [2025-07-11 11:00]"
        groups = build_timeline(text)

        assert groups[0].times == ["09:00", "11:00"]

    def test_days_sorted(self):
        text = "[2025-07-12 01:00] [2025-07-10 05:00] [2025-07-11 03:00]"
        dates = [g.date for g in build_timeline(text)]

        assert dates == ["2025-07-10", "2025-07-11", "2025-07-12"]

    def test_only_strict_citations_count(self):
        text = "[2025-07-11] [2025-07-11 9:00] 2025-07-11 10:00 [2025-07-11 10:00]-[2025-07-11 11:00]"
        groups = build_timeline(text)

        assert groups[0].times == ["10:00", "11:00"]

    def test_no_citations(self):
        assert build_timeline("Nothing cited here.") == []

    def test_custom_threshold(self):
        groups = build_timeline(THREE, collapse_threshold=3)
        assert groups[0].collapsed is True


class TestDisplayRange:

    def test_end_is_next_hour(self):
        assert display_range(["09:00", "12:00"]) == ("09:00", "13:00")

    def test_keeps_minute(self):
        assert display_range(["08:15", "10:45"]) == ("08:15", "11:45")

    def test_wraps_midnight(self):
        assert display_range(["23:30"]) == ("23:30", "00:30")


class TestExtractEntries:

    def test_order_and_duplicates_kept(self):
        entries = extract_timeline_entries("[2025-07-11 10:00] [2025-07-10 09:00] [2025-07-11 10:00]")

        assert [(e.date, e.time) for e in entries] == [
            ("2025-07-11", "10:00"),
            ("2025-07-10", "09:00"),
            ("2025-07-11", "10:00"),
        ]


class TestBuildTimelinePass:

    def test_sets_timeline(self):
        ctx = _make_context(THREE)

        build_timeline_pass(ctx)

        assert len(ctx.timeline) == 1
        assert not ctx.has_diagnostic("NO_TIMELINE")

    def test_no_timeline_diagnostic(self):
        ctx = _make_context("Nothing cited.")

        build_timeline_pass(ctx)

        assert ctx.timeline == []
        assert ctx.has_diagnostic("NO_TIMELINE")
