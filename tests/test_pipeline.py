"""
Tests for the pipeline engine and the default pipeline.
"""

from nate.core.context import AnnotateContext, AnnotateRequest
from nate.core.engine import Engine, Pipeline, annotate, setup_default_pipeline
from nate.ir.enums import AnnotateStatus, SectionId, TokenKind
from nate.passes import normalize, package, split_sections_pass

NARRATIVE = """0) Direct Answer: CO2 peaked near 950 ppm around 02:00.
1) Findings:
- CO2: rose steadily overnight [2025-09-11 01:00], [2025-09-11 02:00].
- Humidity: stable at 45%.
2) Alarms:
- 2025-09-11 02:00: CO2 spiked [2025-09-11 02:00].
3) Diagnostics:
- Airflow: Eco mode reduced airflow.
4) Recommendations:
1. Increase ventilation after 22:00.
2. Review the Eco schedule [2025-09-11 03:00].
"""


def test_annotate_request_generates_id():
    """AnnotateRequest should auto-generate an ID if not provided."""
    request = AnnotateRequest(text="Hello world")
    assert request.request_id is not None
    assert len(request.request_id) > 0


def test_context_from_request():
    request = AnnotateRequest(text="Test input")
    ctx = AnnotateContext.from_request(request)
    assert ctx.raw_text == "Test input"
    assert ctx.request == request


def test_custom_pipeline():
    engine = Engine()
    engine.register_pipeline(
        Pipeline(id="test", name="Test Pipeline", passes=[normalize, split_sections_pass, package])
    )

    result = engine.annotate(AnnotateRequest(text="Findings: all fine"), "test")

    assert result.status == AnnotateStatus.SUCCESS
    assert result.sections[0].id == SectionId.FINDINGS
    assert len(result.trace) > 0


def test_unknown_pipeline():
    engine = Engine()
    result = engine.annotate(AnnotateRequest(text="x"), "missing")

    assert result.status == AnnotateStatus.ERROR
    assert result.diagnostics[0].code == "PIPELINE_NOT_FOUND"


def test_failing_pass_is_reported():
    def explode(ctx):
        raise RuntimeError("boom")

    engine = Engine()
    engine.register_pipeline(Pipeline(id="bad", name="Bad", passes=[normalize, explode]))

    result = engine.annotate(AnnotateRequest(text="x"), "bad")

    assert result.status == AnnotateStatus.ERROR
    assert any(d.code == "PASS_ERROR" and "boom" in d.message for d in result.diagnostics)


def test_list_pipelines():
    engine = Engine()
    setup_default_pipeline(engine)
    assert engine.list_pipelines() == ["default"]


class TestDefaultPipeline:
    """End-to-end runs of the default pipeline."""

    def test_full_run(self):
        result = annotate(NARRATIVE)

        assert result.status == AnnotateStatus.SUCCESS
        assert result.direct_answer == "CO2 peaked near 950 ppm around 02:00."
        assert [s.id for s in result.sections] == [
            SectionId.FINDINGS,
            SectionId.ALARMS,
            SectionId.DIAGNOSTICS,
            SectionId.RECOMMENDATIONS,
        ]

    def test_lines_are_annotated(self):
        result = annotate(NARRATIVE)
        findings = result.annotated_sections[0]

        co2 = findings.lines[0]
        assert co2.decomposed.label == "CO2"
        assert co2.citation.count == 2
        assert co2.tokens[0].kind == TokenKind.PLAIN_TEXT

        alarm = result.annotated_sections[1].lines[0]
        assert alarm.decomposed.is_timestamp_label
        assert alarm.decomposed.body == "CO2 spiked"

    def test_recommendations_are_numbered(self):
        result = annotate(NARRATIVE)
        recommendations = result.annotated_sections[3]

        assert [line.ordinal for line in recommendations.lines] == [1, 2]

    def test_timeline(self):
        result = annotate(NARRATIVE)

        assert len(result.timeline) == 1
        day = result.timeline[0]
        assert day.date == "2025-09-11"
        assert day.times == ["01:00", "02:00", "03:00"]
        assert day.collapsed is False
        assert day.range_label == "01:00–04:00"

    def test_raw_fallback(self):
        result = annotate("Everything looked normal today.")

        assert result.status == AnnotateStatus.SUCCESS
        assert result.sections[0].id == SectionId.RAW
        codes = {d.code for d in result.diagnostics}
        assert {"RAW_FALLBACK", "NO_DIRECT_ANSWER", "NO_TIMELINE"} <= codes

    def test_crlf_narrative(self):
        result = annotate(NARRATIVE.replace("\n", "\r\n"))

        assert result.status == AnnotateStatus.SUCCESS
        assert result.direct_answer == "CO2 peaked near 950 ppm around 02:00."

    def test_empty_narrative(self):
        result = annotate("")

        assert result.status == AnnotateStatus.SUCCESS
        assert result.sections[0].id == SectionId.RAW
        assert result.annotated_sections[0].lines == []

    def test_repeatable(self):
        first = annotate(NARRATIVE)
        second = annotate(NARRATIVE)

        assert first.sections == second.sections
        assert first.annotated_sections == second.annotated_sections
        assert first.timeline == second.timeline
