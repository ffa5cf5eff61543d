"""
Tests for the structured JSON payload.
"""

import json

from nate import __version__
from nate.core.engine import annotate
from nate.output import build_structured_output

NARRATIVE = """0) Direct Answer: CO2 peaked overnight.
1) Findings:
**2025-09-11**
- CO2: median 820 ppm, peak **950ppm** [2025-09-11 01:00], [2025-09-11 02:00].
2) Recommendations:
1. Increase Ventilation [2025-09-11 03:00].
"""


def test_metadata():
    result = annotate(NARRATIVE)
    out = build_structured_output(result)

    assert out.nate_version == __version__
    assert out.request_id == result.request_id
    assert out.input_hash.startswith("sha256:")
    assert out.status == "success"
    assert out.direct_answer == "CO2 peaked overnight."


def test_sections_and_lines():
    out = build_structured_output(annotate(NARRATIVE))

    findings, recommendations = out.sections
    assert findings.id == "findings"
    assert findings.style == "bullet"
    assert findings.lines[0].date_heading == "2025-09-11"
    assert findings.lines[1].label == "CO2"
    assert findings.lines[1].citation.kind == "collapsed"
    assert findings.lines[1].citation.count == 2

    assert recommendations.style == "numbered"
    assert recommendations.lines[0].ordinal == 1
    assert recommendations.lines[0].citation.label == "2025-09-11 03:00"


def test_token_details():
    out = build_structured_output(annotate(NARRATIVE))
    tokens = out.sections[0].lines[1].tokens

    stat = next(t for t in tokens if t.kind == "StatPhrase")
    assert stat.stat == "median"
    assert stat.value == "820"

    bold = next(t for t in tokens if t.kind == "Bold")
    assert bold.display == "950ppm"

    metric = next(t for t in out.sections[1].lines[0].tokens if t.kind == "Metric")
    assert metric.canonical == "ventilation"


def test_timeline_and_stats():
    out = build_structured_output(annotate(NARRATIVE))

    assert out.timeline[0].range_label == "01:00–04:00"
    assert out.stats["sections"] == 2
    assert out.stats["citations"] == 3
    assert out.stats["days"] == 1


def test_json_round_trip():
    out = build_structured_output(annotate(NARRATIVE))
    data = json.loads(out.model_dump_json())

    assert data["sections"][0]["lines"][1]["label"] == "CO2"
    assert all("code" in d for d in data["diagnostics"])
