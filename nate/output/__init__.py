"""Output formatters for NATE."""

from nate.output.structured import (
    CitationOutput,
    DayGroupOutput,
    LineOutput,
    SectionOutput,
    StructuredOutput,
    TokenOutput,
    build_structured_output,
)

__all__ = [
    "CitationOutput",
    "DayGroupOutput",
    "LineOutput",
    "SectionOutput",
    "StructuredOutput",
    "TokenOutput",
    "build_structured_output",
]
