"""Passes — Pipeline stages for NATE annotation."""

from nate.passes.p00_normalize import normalize, normalize_line_endings
from nate.passes.p10_extract_direct_answer import (
    extract_direct_answer,
    extract_direct_answer_pass,
)
from nate.passes.p20_split_sections import split_sections, split_sections_pass
from nate.passes.p30_decompose_lines import decompose_line, decompose_lines, split_lines
from nate.passes.p40_classify_tokens import (
    classify_date_heading,
    classify_tokens,
    classify_tokens_pass,
)
from nate.passes.p50_present_citations import (
    parse_citation,
    present_citations,
    present_citations_pass,
)
from nate.passes.p60_build_timeline import (
    build_timeline,
    build_timeline_pass,
    display_range,
    extract_timeline_entries,
)
from nate.passes.p80_package import package

__all__ = [
    # Passes
    "normalize",
    "extract_direct_answer_pass",
    "split_sections_pass",
    "decompose_lines",
    "classify_tokens_pass",
    "present_citations_pass",
    "build_timeline_pass",
    "package",
    # Operations
    "normalize_line_endings",
    "extract_direct_answer",
    "split_sections",
    "split_lines",
    "decompose_line",
    "classify_tokens",
    "classify_date_heading",
    "parse_citation",
    "present_citations",
    "extract_timeline_entries",
    "display_range",
    "build_timeline",
]
