"""
IR Schema v0.1 — Pydantic models for the annotation Intermediate Representation.

The IR captures the structure of a narrative without interpreting it.
Every model here is plain data handed to a rendering layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from nate.ir.enums import (
    AnnotateStatus,
    CitationArtifactKind,
    DiagnosticLevel,
    SectionId,
    SectionStyle,
    TokenKind,
)

IR_VERSION = "0.1.0"


# ============================================================================
# Sections
# ============================================================================

class Section(BaseModel):
    """A named block of the narrative."""

    id: SectionId = Field(..., description="Canonical section id")
    title: str = Field(..., description="Display title for the section")
    style: SectionStyle = Field(default=SectionStyle.BULLET, description="List presentation hint")
    content: str = Field(..., description="Trimmed section content")
    spans: list[tuple[int, int]] = Field(
        default_factory=list,
        description="Character ranges of the narrative that make up this section's content",
    )


# ============================================================================
# Lines
# ============================================================================

class DecomposedLine(BaseModel):
    """
    A single line split into label, body and trailing citations.

    A date heading line carries only ``date_heading``; label, body and
    citations stay empty.
    """

    label: Optional[str] = Field(None, description="Leading label, if any")
    is_timestamp_label: bool = Field(default=False, description="Label is a timestamp")
    body: str = Field(default="", description="Remaining text passed to the token classifier")
    citations: list[str] = Field(default_factory=list, description="Trailing citations in order")
    date_heading: Optional[str] = Field(None, description="Cleaned text when the line is a date heading")

    @property
    def is_date_heading(self) -> bool:
        return self.date_heading is not None


class Token(BaseModel):
    """A classified contiguous span of body text."""

    kind: TokenKind = Field(..., description="Semantic token kind")
    text: str = Field(..., description="Verbatim span of the source text")
    display: str = Field(..., description="Display form (markers removed, spellings normalized)")
    canonical: Optional[str] = Field(None, description="Canonical vocabulary name for metrics")


# ============================================================================
# Citations
# ============================================================================

class Citation(BaseModel):
    """A parsed bracketed date/time reference."""

    text: str = Field(..., description="Citation exactly as it appeared")
    date: Optional[str] = Field(None, description="YYYY-MM-DD of the (first) reference")
    time: Optional[str] = Field(None, description="HH:MM of the (first) reference")
    end_date: Optional[str] = Field(None, description="Date of the second half of a range")
    end_time: Optional[str] = Field(None, description="Time of the second half of a range")


class CitationArtifact(BaseModel):
    """Presentation of one line's citation cluster."""

    kind: CitationArtifactKind = Field(..., description="single or collapsed")
    label: str = Field(..., description="Visible label (citation text or first date)")
    count: int = Field(..., ge=1, description="Number of citations folded into the artifact")
    citations: list[str] = Field(default_factory=list, description="All citations, for disclosure")


# ============================================================================
# Timeline
# ============================================================================

class TimelineEntry(BaseModel):
    """A (date, time) pair taken from a strict [YYYY-MM-DD HH:MM] citation."""

    date: str
    time: str


class DayGroup(BaseModel):
    """All distinct times cited for one date."""

    date: str = Field(..., description="YYYY-MM-DD")
    times: list[str] = Field(default_factory=list, description="Ascending, deduplicated HH:MM")
    collapsed: bool = Field(default=False, description="Default collapse state")
    range_start: str = Field(..., description="First cited time")
    range_end: str = Field(..., description="Hour after the last cited time")

    @property
    def range_label(self) -> str:
        return f"{self.range_start}–{self.range_end}"


# ============================================================================
# Annotated output
# ============================================================================

class AnnotatedLine(BaseModel):
    """A line of a section with its decomposition, tokens and citation artifact."""

    index: int = Field(..., description="0-based position within the section")
    line: str = Field(..., description="Trimmed source line")
    decomposed: DecomposedLine
    tokens: list[Token] = Field(default_factory=list)
    citation: Optional[CitationArtifact] = None
    ordinal: Optional[int] = Field(None, description="List counter for numbered sections")


class AnnotatedSection(BaseModel):
    """A section and its annotated lines."""

    section: Section
    lines: list[AnnotatedLine] = Field(default_factory=list)


# ============================================================================
# Trace & Diagnostics
# ============================================================================

class TraceEntry(BaseModel):
    """One step recorded by a pass."""

    id: str
    timestamp: datetime
    pass_name: str
    action: str
    before: Optional[str] = None
    after: Optional[str] = None


class Diagnostic(BaseModel):
    """A message about how the narrative was handled."""

    id: str
    level: DiagnosticLevel
    code: str = Field(..., description="Machine-readable code, e.g. RAW_FALLBACK")
    message: str
    source: str = Field(..., description="Pass or component that produced it")


# ============================================================================
# Result
# ============================================================================

class AnnotateResult(BaseModel):
    """Complete result of an annotation run."""

    request_id: str
    timestamp: datetime
    processing_duration_ms: float = 0.0

    narrative: str = Field(..., description="Narrative the passes operated on")
    direct_answer: Optional[str] = None
    sections: list[Section] = Field(default_factory=list)
    annotated_sections: list[AnnotatedSection] = Field(default_factory=list)
    timeline: list[DayGroup] = Field(default_factory=list)

    trace: list[TraceEntry] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    status: AnnotateStatus = AnnotateStatus.SUCCESS
