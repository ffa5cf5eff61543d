"""
AnnotateContext — Mutable state passed between pipeline passes.

Each pass reads prior artifacts and mutates only its allowed fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from nate.ir.enums import AnnotateStatus, DiagnosticLevel
from nate.ir.schema_v0_1 import (
    AnnotatedSection,
    AnnotateResult,
    DayGroup,
    Diagnostic,
    Section,
    TraceEntry,
)
from nate.vocab.schema import EngineSettings, Vocabulary


@dataclass
class AnnotateRequest:
    """Input to the annotation pipeline."""

    text: str
    request_id: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())


@dataclass
class AnnotateContext:
    """
    Mutable context passed through pipeline passes.

    Each pass may read all fields but should only mutate
    the fields it is responsible for.
    """

    # Input
    request: AnnotateRequest
    raw_text: str
    narrative: str = ""

    # Configuration (resolved once per run; None means the loaded default)
    vocabulary: Optional[Vocabulary] = None
    settings: Optional[EngineSettings] = None

    # Annotation artifacts (populated by passes)
    direct_answer: Optional[str] = None
    sections: list[Section] = field(default_factory=list)
    annotated_sections: list[AnnotatedSection] = field(default_factory=list)
    timeline: list[DayGroup] = field(default_factory=list)

    # Trace and diagnostics
    trace: list[TraceEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    status: AnnotateStatus = AnnotateStatus.SUCCESS

    # Internal
    start_time: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_request(
        cls,
        request: AnnotateRequest,
        vocabulary: Optional[Vocabulary] = None,
        settings: Optional[EngineSettings] = None,
    ) -> "AnnotateContext":
        """Create a context from an annotation request."""
        return cls(
            request=request,
            raw_text=request.text,
            vocabulary=vocabulary,
            settings=settings,
        )

    def iter_lines(self):
        """Yield (section, annotated_line) pairs in document order."""
        for annotated in self.annotated_sections:
            for line in annotated.lines:
                yield annotated.section, line

    def has_diagnostic(self, code: str) -> bool:
        return any(d.code == code for d in self.diagnostics)

    def add_trace(self, pass_name: str, action: str, **kwargs: Any) -> None:
        """Add a trace entry."""
        self.trace.append(
            TraceEntry(
                id=str(uuid4()),
                timestamp=datetime.now(),
                pass_name=pass_name,
                action=action,
                before=kwargs.get("before"),
                after=kwargs.get("after"),
            )
        )

    def add_diagnostic(
        self,
        level: str,
        code: str,
        message: str,
        source: str,
    ) -> None:
        """Add a diagnostic message."""
        self.diagnostics.append(
            Diagnostic(
                id=str(uuid4()),
                level=DiagnosticLevel(level),
                code=code,
                message=message,
                source=source,
            )
        )

    def to_result(self) -> AnnotateResult:
        """Convert context to final AnnotateResult."""
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        return AnnotateResult(
            request_id=self.request.request_id or str(uuid4()),
            timestamp=self.start_time,
            processing_duration_ms=duration_ms,
            narrative=self.narrative or self.raw_text,
            direct_answer=self.direct_answer,
            sections=self.sections,
            annotated_sections=self.annotated_sections,
            timeline=self.timeline,
            trace=self.trace,
            diagnostics=self.diagnostics,
            status=self.status,
        )
