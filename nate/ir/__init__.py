"""
IR — Intermediate Representation

The IR is the hand-off between the annotation engine and any renderer.
"""

from nate.ir.enums import (
    AnnotateStatus,
    CitationArtifactKind,
    DiagnosticLevel,
    SectionId,
    SectionStyle,
    TokenKind,
)
from nate.ir.schema_v0_1 import (
    AnnotatedLine,
    AnnotatedSection,
    AnnotateResult,
    Citation,
    CitationArtifact,
    DayGroup,
    DecomposedLine,
    Diagnostic,
    Section,
    TimelineEntry,
    Token,
    TraceEntry,
)

__all__ = [
    # Enums
    "AnnotateStatus",
    "CitationArtifactKind",
    "DiagnosticLevel",
    "SectionId",
    "SectionStyle",
    "TokenKind",
    # Models
    "AnnotatedLine",
    "AnnotatedSection",
    "AnnotateResult",
    "Citation",
    "CitationArtifact",
    "DayGroup",
    "DecomposedLine",
    "Diagnostic",
    "Section",
    "TimelineEntry",
    "Token",
    "TraceEntry",
]
