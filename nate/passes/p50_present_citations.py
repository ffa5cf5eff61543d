"""
Pass 50 — Citation Presentation

Turns the trailing citations of each line into one artifact:

- no citations  -> nothing
- one citation  -> ``single``, labelled with the citation text
- two or more   -> ``collapsed``, labelled with the first date and carrying
                   the full ordered list so none of them is lost
"""

import re
from typing import Optional

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger
from nate.ir.enums import CitationArtifactKind
from nate.ir.schema_v0_1 import Citation, CitationArtifact

PASS_NAME = "p50_present_citations"
log = get_pass_logger(PASS_NAME)

COLLAPSED_FALLBACK_LABEL = "Time Records"

DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME = re.compile(r"(?<!\d)\d{1,2}:\d{2}(?!\d)")
BRACKETS = re.compile(r"[\[\]]")


def parse_citation(text: str) -> Citation:
    """
    Parse a bracketed citation.

    Handles "[2025-09-11 02:00]", "[2025-09-11]", "[02:00]",
    "[2025-09-11 02:00-03:00]" and "[2025-09-11 02:00]-[2025-09-11 04:00]".
    Missing parts are None.
    """
    first, _, second = text.partition("]-")

    dates = DATE.findall(first)
    times = TIME.findall(DATE.sub("", first))
    end_dates = DATE.findall(second)
    end_times = TIME.findall(DATE.sub("", second))

    end_time = end_times[0] if end_times else (times[1] if len(times) > 1 else None)

    return Citation(
        text=text,
        date=dates[0] if dates else None,
        time=times[0] if times else None,
        end_date=end_dates[0] if end_dates else None,
        end_time=end_time,
    )


def present_citations(citations: list[str]) -> Optional[CitationArtifact]:
    """Build the citation artifact for a line, or None without citations."""
    if not citations:
        return None

    if len(citations) == 1:
        return CitationArtifact(
            kind=CitationArtifactKind.SINGLE,
            label=BRACKETS.sub("", citations[0]),
            count=1,
            citations=list(citations),
        )

    first = parse_citation(citations[0])
    return CitationArtifact(
        kind=CitationArtifactKind.COLLAPSED,
        label=first.date or COLLAPSED_FALLBACK_LABEL,
        count=len(citations),
        citations=list(citations),
    )


def present_citations_pass(ctx: AnnotateContext) -> AnnotateContext:
    """Fill ``citation`` on every annotated line."""
    single = 0
    collapsed = 0

    for _, line in ctx.iter_lines():
        artifact = present_citations(line.decomposed.citations)
        line.citation = artifact
        if artifact is None:
            continue
        if artifact.kind == CitationArtifactKind.COLLAPSED:
            collapsed += 1
            log.debug("citations_collapsed", label=artifact.label, count=artifact.count)
        else:
            single += 1

    log.verbose("citations_presented", single=single, collapsed=collapsed)
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="presented_citations",
        after=f"{single} single, {collapsed} collapsed",
    )
    return ctx
