"""
Unit tests for the structural validators run by p80_package.
"""

from nate.core.context import AnnotateContext, AnnotateRequest
from nate.ir.enums import CitationArtifactKind, SectionId, TokenKind
from nate.ir.schema_v0_1 import CitationArtifact, Token
from nate.passes import (
    build_timeline_pass,
    classify_tokens_pass,
    decompose_lines,
    extract_direct_answer_pass,
    normalize,
    present_citations_pass,
    split_sections_pass,
)
from nate.passes.p20_split_sections import make_section
from nate.validate.citations import CitationRetentionValidator
from nate.validate.exclusivity import SectionExclusivityValidator
from nate.validate.idempotence import IdempotenceValidator
from nate.validate.partition import PartitionValidator

NARRATIVE = (
    "0) Direct Answer: Stuffy overnight.\n"
    "1) Findings:\n"
    "- CO2: 950ppm [2025-09-11 01:00], [2025-09-11 02:00].\n"
    "- Humidity: 45% [2025-09-11 03:00]\n"
    "2) Alarms:\n"
    "- 2025-09-11 02:00: spike\n"
)


def _annotated_context(text: str = NARRATIVE) -> AnnotateContext:
    """Helper to run every pass up to packaging."""
    ctx = AnnotateContext.from_request(AnnotateRequest(text=text))
    for pass_fn in (
        normalize,
        extract_direct_answer_pass,
        split_sections_pass,
        decompose_lines,
        classify_tokens_pass,
        present_citations_pass,
        build_timeline_pass,
    ):
        ctx = pass_fn(ctx)
    return ctx


class TestPartitionValidator:

    def test_passes(self):
        assert PartitionValidator().validate(_annotated_context()) == []

    def test_detects_lost_text(self):
        ctx = _annotated_context()
        ctx.annotated_sections[0].lines[0].tokens.pop()

        errors = PartitionValidator().validate(ctx)

        assert len(errors) == 1
        assert "findings line 0" in errors[0]


class TestSectionExclusivityValidator:

    def test_passes(self):
        assert SectionExclusivityValidator().validate(_annotated_context()) == []

    def test_detects_overlap(self):
        ctx = _annotated_context()
        ctx.sections[1].spans.append(ctx.sections[0].spans[0])

        errors = SectionExclusivityValidator().validate(ctx)

        assert any("overlap" in e for e in errors)

    def test_detects_out_of_range_span(self):
        ctx = _annotated_context()
        ctx.sections = [make_section(SectionId.RAW, "x", [(0, len(ctx.narrative) + 5)])]

        errors = SectionExclusivityValidator().validate(ctx)

        assert any("invalid span" in e for e in errors)


class TestCitationRetentionValidator:

    def test_passes(self):
        assert CitationRetentionValidator().validate(_annotated_context()) == []

    def test_detects_dropped_citation(self):
        ctx = _annotated_context()
        line = ctx.annotated_sections[0].lines[0]
        line.citation = CitationArtifact(
            kind=CitationArtifactKind.COLLAPSED,
            label="2025-09-11",
            count=1,
            citations=line.decomposed.citations[:1],
        )

        errors = CitationRetentionValidator().validate(ctx)

        assert len(errors) == 1

    def test_detects_missing_artifact(self):
        ctx = _annotated_context()
        ctx.annotated_sections[0].lines[1].citation = None

        assert len(CitationRetentionValidator().validate(ctx)) == 1


class TestIdempotenceValidator:

    def test_passes(self):
        assert IdempotenceValidator().validate(_annotated_context()) == []

    def test_detects_tampered_timeline(self):
        ctx = _annotated_context()
        ctx.timeline[0].times.append("23:00")

        errors = IdempotenceValidator().validate(ctx)

        assert errors == ["Timeline differs on rebuild"]

    def test_detects_tampered_direct_answer(self):
        ctx = _annotated_context()
        ctx.direct_answer = "Something else"

        assert "Direct answer differs on re-extraction" in IdempotenceValidator().validate(ctx)

    def test_tokens_are_not_rechecked(self):
        ctx = _annotated_context()
        ctx.annotated_sections[0].lines[0].tokens = [
            Token(kind=TokenKind.PLAIN_TEXT, text="x", display="x")
        ]

        assert IdempotenceValidator().validate(ctx) == []
