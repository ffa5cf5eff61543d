"""
Structured Output — JSON payload handed to a rendering layer.

Flattens an AnnotateResult into plain, render-ready records:
- Direct answer
- Sections -> lines -> tokens and citation artifact
- Timeline day groups with their display range
- Counts and diagnostics

Nothing here decides how anything looks; it only says what each piece is.
"""

import hashlib
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from nate import __version__
from nate.ir.enums import TokenKind
from nate.ir.schema_v0_1 import AnnotatedLine, AnnotateResult, DayGroup, Token
from nate.passes.p40_classify_tokens import split_stat_phrase


SCHEMA_VERSION = "1.0"


# ============================================================================
# Output Models
# ============================================================================

class TokenOutput(BaseModel):
    """A classified span of a line body."""

    kind: str = Field(..., description="PlainText|Bold|Metric|Value|FullTimestamp|TimeOnly|StatPhrase|DateHeading")
    text: str = Field(..., description="Verbatim source text")
    display: str = Field(..., description="Display form")
    canonical: Optional[str] = Field(None, description="Canonical metric id (Metric only)")
    stat: Optional[str] = Field(None, description="Stat word (StatPhrase only)")
    value: Optional[str] = Field(None, description="Stat value (StatPhrase only)")


class CitationOutput(BaseModel):
    """A line's citation artifact."""

    kind: str = Field(..., description="single|collapsed")
    label: str
    count: int
    citations: list[str] = Field(default_factory=list)


class LineOutput(BaseModel):
    """One annotated line."""

    index: int
    ordinal: Optional[int] = Field(None, description="Counter in numbered sections")
    source: str = Field(..., description="Trimmed source line")
    label: Optional[str] = None
    is_timestamp_label: bool = False
    date_heading: Optional[str] = None
    tokens: list[TokenOutput] = Field(default_factory=list)
    citation: Optional[CitationOutput] = None


class SectionOutput(BaseModel):
    """A section with its lines."""

    id: str = Field(..., description="findings|alarms|diagnostics|recommendations|raw")
    title: str
    style: str = Field(..., description="bullet|numbered|card")
    lines: list[LineOutput] = Field(default_factory=list)


class DayGroupOutput(BaseModel):
    """One day of the evidence timeline."""

    date: str
    times: list[str] = Field(default_factory=list)
    collapsed: bool
    range_start: str
    range_end: str
    range_label: str


class StructuredOutput(BaseModel):
    """Complete structured output from NATE."""

    # Metadata
    nate_version: str = Field(..., description="NATE version")
    schema_version: str = Field(default=SCHEMA_VERSION, description="Output schema version")
    request_id: str = Field(..., description="Unique request ID")
    input_hash: str = Field(..., description="SHA256 of the narrative")
    timestamp: datetime = Field(..., description="Processing timestamp")
    status: str

    # Content
    direct_answer: Optional[str] = None
    sections: list[SectionOutput] = Field(default_factory=list)
    timeline: list[DayGroupOutput] = Field(default_factory=list)

    # Summary
    stats: dict[str, int] = Field(default_factory=dict)
    diagnostics: list[dict] = Field(default_factory=list)


# ============================================================================
# Conversion Functions
# ============================================================================

def _token_output(token: Token) -> TokenOutput:
    out = TokenOutput(
        kind=token.kind.value,
        text=token.text,
        display=token.display,
        canonical=token.canonical,
    )
    if token.kind == TokenKind.STAT_PHRASE:
        out.stat, out.value = split_stat_phrase(token.text)
    return out


def _line_output(line: AnnotatedLine) -> LineOutput:
    citation = None
    if line.citation is not None:
        citation = CitationOutput(
            kind=line.citation.kind.value,
            label=line.citation.label,
            count=line.citation.count,
            citations=line.citation.citations,
        )

    return LineOutput(
        index=line.index,
        ordinal=line.ordinal,
        source=line.line,
        label=line.decomposed.label,
        is_timestamp_label=line.decomposed.is_timestamp_label,
        date_heading=line.decomposed.date_heading,
        tokens=[_token_output(t) for t in line.tokens],
        citation=citation,
    )


def _day_output(group: DayGroup) -> DayGroupOutput:
    return DayGroupOutput(
        date=group.date,
        times=group.times,
        collapsed=group.collapsed,
        range_start=group.range_start,
        range_end=group.range_end,
        range_label=group.range_label,
    )


def _stats(result: AnnotateResult) -> dict[str, int]:
    lines = [line for s in result.annotated_sections for line in s.lines]
    tokens = [token for line in lines for token in line.tokens]
    stats = {
        "sections": len(result.sections),
        "lines": len(lines),
        "tokens": len(tokens),
        "citations": sum(len(line.decomposed.citations) for line in lines),
        "days": len(result.timeline),
    }
    for kind in TokenKind:
        stats[f"tokens_{kind.value}"] = sum(1 for t in tokens if t.kind == kind)
    return stats


def build_structured_output(result: AnnotateResult) -> StructuredOutput:
    """
    Convert an AnnotateResult to StructuredOutput.

    This is the bridge between the internal IR and the external JSON API.
    """
    digest = hashlib.sha256(result.narrative.encode()).hexdigest()[:16]

    return StructuredOutput(
        nate_version=__version__,
        schema_version=SCHEMA_VERSION,
        request_id=result.request_id,
        input_hash=f"sha256:{digest}",
        timestamp=result.timestamp,
        status=result.status.value,
        direct_answer=result.direct_answer,
        sections=[
            SectionOutput(
                id=annotated.section.id.value,
                title=annotated.section.title,
                style=annotated.section.style.value,
                lines=[_line_output(line) for line in annotated.lines],
            )
            for annotated in result.annotated_sections
        ],
        timeline=[_day_output(g) for g in result.timeline],
        stats=_stats(result),
        diagnostics=[d.model_dump(mode="json") for d in result.diagnostics],
    )
