"""
Unit tests for early pipeline passes (p00, p10).
"""

from nate.core.context import AnnotateContext, AnnotateRequest
from nate.passes.p00_normalize import normalize, normalize_line_endings
from nate.passes.p10_extract_direct_answer import (
    extract_direct_answer,
    extract_direct_answer_pass,
)


def _make_context(text: str) -> AnnotateContext:
    """Helper to create a context with the narrative already normalized."""
    req = AnnotateRequest(text=text)
    ctx = AnnotateContext(request=req, raw_text=text)
    ctx.narrative = text
    return ctx


class TestP00Normalize:
    """Tests for p00_normalize pass."""

    def test_converts_crlf(self):
        assert normalize_line_endings("a\r\nb") == "a\nb"

    def test_converts_lone_cr(self):
        assert normalize_line_endings("a\rb\r\nc") == "a\nb\nc"

    def test_leaves_other_whitespace_alone(self):
        """Only line endings change; spacing and blank lines stay."""
        text = "  Findings:\n\n  CO2   high  "
        assert normalize_line_endings(text) == text

    def test_pass_sets_narrative(self):
        text = "Findings:\r\nCO2 high"
        req = AnnotateRequest(text=text)
        ctx = AnnotateContext(request=req, raw_text=text)

        normalize(ctx)

        assert ctx.narrative == "Findings:\nCO2 high"

    def test_adds_trace(self):
        text = "Hello world."
        req = AnnotateRequest(text=text)
        ctx = AnnotateContext(request=req, raw_text=text)

        normalize(ctx)

        assert len(ctx.trace) == 1
        assert ctx.trace[0].pass_name == "p00_normalize"

    def test_empty_input(self):
        req = AnnotateRequest(text="")
        ctx = AnnotateContext(request=req, raw_text="")

        normalize(ctx)

        assert ctx.narrative == ""


class TestP10DirectAnswer:
    """Tests for p10_extract_direct_answer."""

    def test_block_up_to_next_numbered_heading(self):
        text = "0) Direct Answer: CO2 peaked near 950 ppm around 02:00.\n1) Findings: ..."
        assert extract_direct_answer(text) == "CO2 peaked near 950 ppm around 02:00."

    def test_block_to_end_of_narrative(self):
        text = "0) Direct Answer:\nThe room was stuffy overnight.\n"
        assert extract_direct_answer(text) == "The room was stuffy overnight."

    def test_multiline_block(self):
        text = (
            "0) Direct answer\n"
            "Line one.\n"
            "Line two.\n"
            "2) Alarms\n"
            "Nothing."
        )
        assert extract_direct_answer(text) == "Line one.\nLine two."

    def test_case_insensitive_heading(self):
        text = "0) DIRECT ANSWER: yes\n1) Findings"
        assert extract_direct_answer(text) == "yes"

    def test_indented_heading(self):
        text = "Intro\n   0) Direct Answer: indented\n1) Findings"
        assert extract_direct_answer(text) == "indented"

    def test_absent_heading(self):
        assert extract_direct_answer("1) Findings: CO2 normal.") is None

    def test_blank_block_is_absent(self):
        assert extract_direct_answer("0) Direct Answer:\n   \n1) Findings: x") is None

    def test_empty_narrative(self):
        assert extract_direct_answer("") is None

    def test_pass_records_absence(self):
        ctx = _make_context("Findings: nothing to report")

        extract_direct_answer_pass(ctx)

        assert ctx.direct_answer is None
        assert ctx.has_diagnostic("NO_DIRECT_ANSWER")

    def test_pass_sets_answer(self):
        ctx = _make_context("0) Direct Answer: All good.\n1) Findings: ok")

        extract_direct_answer_pass(ctx)

        assert ctx.direct_answer == "All good."
        assert not ctx.has_diagnostic("NO_DIRECT_ANSWER")
        assert ctx.trace[-1].pass_name == "p10_extract_direct_answer"
