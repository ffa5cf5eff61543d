"""
Pass 20 — Section Splitting

Partitions the narrative into named sections.

A heading is a line that opens (after an optional "#", "**", "1." / "1)"
or "-" marker) with one of the section keywords and runs to the first
colon or line break. Synonyms collapse onto one canonical section id;
repeated sections are concatenated in order of appearance.

If nothing is recognized the whole narrative becomes a single ``raw``
section, so callers always get something to present.
"""

import re
from typing import Optional

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger
from nate.ir.enums import SectionId, SectionStyle
from nate.ir.schema_v0_1 import Section

PASS_NAME = "p20_split_sections"
log = get_pass_logger(PASS_NAME)


# =============================================================================
# Section Tables
# =============================================================================

HEADING_KEYWORDS = (
    "Findings",
    "Observations",
    "Alarms",
    "Anomalies",
    "Diagnostics",
    "Cause",
    "Recommendations",
    "Actions",
)

KEYWORD_SECTIONS: dict[str, SectionId] = {
    "findings": SectionId.FINDINGS,
    "observations": SectionId.FINDINGS,
    "alarms": SectionId.ALARMS,
    "anomalies": SectionId.ALARMS,
    "spike": SectionId.ALARMS,
    "diagnostics": SectionId.DIAGNOSTICS,
    "cause": SectionId.DIAGNOSTICS,
    "recommendations": SectionId.RECOMMENDATIONS,
    "actions": SectionId.RECOMMENDATIONS,
}

# id -> (title, style)
SECTION_DISPLAY: dict[SectionId, tuple[str, SectionStyle]] = {
    SectionId.FINDINGS: ("Findings & Observations", SectionStyle.BULLET),
    SectionId.ALARMS: ("Alarms & Anomalies", SectionStyle.BULLET),
    SectionId.DIAGNOSTICS: ("Diagnostics", SectionStyle.CARD),
    SectionId.RECOMMENDATIONS: ("Recommendations", SectionStyle.NUMBERED),
    SectionId.RAW: ("Summary & Insights", SectionStyle.BULLET),
}

HEADING_PATTERN = re.compile(
    r"(?:^|\n)"                                  # start of narrative or line
    r"(?:#{1,6}|\*\*|\d+[.)]|-)?[ \t]*"          # optional heading/list marker
    r"(?P<keyword>" + "|".join(HEADING_KEYWORDS) + r")"
    r"[^\n:]*(?::|(?=\n)|\Z)",                   # rest of heading line
    re.IGNORECASE,
)


def section_for_keyword(keyword: str) -> Optional[SectionId]:
    """Map a heading keyword (any case) to its canonical section id."""
    return KEYWORD_SECTIONS.get(keyword.lower())


def make_section(section_id: SectionId, content: str, spans: list[tuple[int, int]]) -> Section:
    title, style = SECTION_DISPLAY[section_id]
    return Section(id=section_id, title=title, style=style, content=content, spans=spans)


def _trimmed_span(text: str, start: int, end: int) -> tuple[int, int]:
    """Shrink [start, end) to exclude surrounding whitespace."""
    chunk = text[start:end]
    lead = len(chunk) - len(chunk.lstrip())
    trail = len(chunk) - len(chunk.rstrip())
    if lead == len(chunk):
        return (start, start)
    return (start + lead, end - trail)


def raw_section(narrative: str) -> Section:
    """The fallback section holding the entire narrative."""
    span = _trimmed_span(narrative, 0, len(narrative))
    return make_section(SectionId.RAW, narrative[span[0]:span[1]], [span])


def split_sections(narrative: str) -> list[Section]:
    """
    Split a narrative into sections ordered by first appearance.

    Never raises. Without any non-empty recognized section the result is
    a single ``raw`` section.
    """
    matches = list(HEADING_PATTERN.finditer(narrative))

    contents: dict[SectionId, list[str]] = {}
    spans: dict[SectionId, list[tuple[int, int]]] = {}

    for index, match in enumerate(matches):
        section_id = section_for_keyword(match.group("keyword"))
        if section_id is None:
            continue

        start = match.end()
        end = matches[index + 1].start() if index + 1 < len(matches) else len(narrative)
        span = _trimmed_span(narrative, start, end)
        content = narrative[span[0]:span[1]]
        if not content:
            continue

        contents.setdefault(section_id, []).append(content)
        spans.setdefault(section_id, []).append(span)

    if not contents:
        log.debug("no_headings_recognized", headings=len(matches))
        return [raw_section(narrative)]

    return [
        make_section(section_id, "\n".join(parts), spans[section_id])
        for section_id, parts in contents.items()
    ]


def split_sections_pass(ctx: AnnotateContext) -> AnnotateContext:
    """Populate ``ctx.sections``."""
    sections = split_sections(ctx.narrative)
    ctx.sections = sections

    if len(sections) == 1 and sections[0].id == SectionId.RAW:
        ctx.add_diagnostic(
            level="info",
            code="RAW_FALLBACK",
            message="No section headings recognized; using the whole narrative",
            source=PASS_NAME,
        )

    log.info(
        "sections_split",
        sections=[s.id.value for s in sections],
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="split_sections",
        after=f"{len(sections)} sections",
    )
    return ctx
