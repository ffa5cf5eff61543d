"""
Pass 60 — Timeline Grouping

Groups every strict "[YYYY-MM-DD HH:MM]" citation in the narrative by day.

The scan covers the whole narrative, not just the sections, so citations
inside the Direct Answer count too. Each day lists its distinct times in
ascending order, shows a display range from the first time to one hour
after the last (wrapping past midnight), and starts collapsed once it has
``collapse_threshold`` or more times.
"""

import re
from typing import Optional

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger
from nate.ir.schema_v0_1 import DayGroup, TimelineEntry
from nate.vocab.loader import get_settings

PASS_NAME = "p60_build_timeline"
log = get_pass_logger(PASS_NAME)

TIMELINE_PATTERN = re.compile(r"\[(\d{4}-\d{2}-\d{2}) (\d{2}:\d{2})\]")


def extract_timeline_entries(narrative: str) -> list[TimelineEntry]:
    """All strict citations, in order of appearance, duplicates kept."""
    return [
        TimelineEntry(date=date, time=time)
        for date, time in TIMELINE_PATTERN.findall(narrative)
    ]


def display_range(times: list[str]) -> tuple[str, str]:
    """
    Display range for a day's sorted times.

    The end is the hour after the last time, same minute:
    ["09:00", "12:00"] -> ("09:00", "13:00"), ["23:30"] -> ("23:30", "00:30").
    """
    start = times[0]
    hour, minute = times[-1].split(":")
    end = f"{(int(hour) + 1) % 24:02d}:{minute}"
    return start, end


def build_timeline(narrative: str, collapse_threshold: Optional[int] = None) -> list[DayGroup]:
    """
    Group strict timestamp citations by day.

    Args:
        narrative: Full narrative text
        collapse_threshold: Times per day at which a group starts collapsed
            (default: engine settings)

    Returns:
        DayGroups ascending by date; empty when nothing is cited
    """
    if collapse_threshold is None:
        collapse_threshold = get_settings().collapse_threshold

    days: dict[str, set[str]] = {}
    for entry in extract_timeline_entries(narrative):
        days.setdefault(entry.date, set()).add(entry.time)

    groups = []
    for date in sorted(days):
        times = sorted(days[date])
        start, end = display_range(times)
        groups.append(
            DayGroup(
                date=date,
                times=times,
                collapsed=len(times) >= collapse_threshold,
                range_start=start,
                range_end=end,
            )
        )
    return groups


def build_timeline_pass(ctx: AnnotateContext) -> AnnotateContext:
    """Populate ``ctx.timeline``."""
    settings = ctx.settings or get_settings(ctx.vocabulary)
    timeline = build_timeline(ctx.narrative, settings.collapse_threshold)
    ctx.timeline = timeline

    if not timeline:
        ctx.add_diagnostic(
            level="info",
            code="NO_TIMELINE",
            message="Narrative cites no [YYYY-MM-DD HH:MM] timestamps",
            source=PASS_NAME,
        )

    for group in timeline:
        log.debug(
            "day_grouped",
            date=group.date,
            times=len(group.times),
            collapsed=group.collapsed,
        )

    log.info(
        "timeline_built",
        days=len(timeline),
        collapsed=sum(1 for g in timeline if g.collapsed),
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="built_timeline",
        after=f"{len(timeline)} days",
    )
    return ctx
