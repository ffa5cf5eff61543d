"""
Vocabulary Schema

Pydantic models for vocabulary profiles.

A profile contains:
- Metadata (name, version, description)
- Metric terms (canonical name, matched spellings, display spelling)
- Engine settings (thresholds the annotation passes read)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class MetricTerm(BaseModel):
    """A sensor metric and the spellings that refer to it."""

    canonical: str = Field(..., description="Canonical metric id (e.g. co2)")
    spellings: list[str] = Field(..., min_length=1, description="Spellings matched in text")
    display: Optional[str] = Field(None, description="Display spelling; matched text is kept if unset")

    @field_validator("spellings")
    @classmethod
    def _no_blank_spellings(cls, v: list[str]) -> list[str]:
        if any(not s.strip() for s in v):
            raise ValueError("spellings must not be blank")
        return v


class EngineSettings(BaseModel):
    """Tunable limits used by the annotation passes."""

    collapse_threshold: int = Field(
        default=4, ge=1,
        description="A day with at least this many distinct times starts collapsed",
    )
    max_label_length: int = Field(
        default=60, ge=1,
        description="Generic line labels must be shorter than this",
    )
    date_heading_max_length: int = Field(
        default=15, ge=1,
        description="Cleaned date-heading lines must be shorter than this",
    )


class VocabularyInfo(BaseModel):
    """Profile metadata."""

    name: str
    version: str = "1.0"
    description: str = ""


class Vocabulary(BaseModel):
    """A complete vocabulary profile."""

    vocabulary: VocabularyInfo
    metrics: list[MetricTerm] = Field(default_factory=list)
    settings: EngineSettings = Field(default_factory=EngineSettings)

    @property
    def name(self) -> str:
        return self.vocabulary.name

    def spellings(self) -> list[str]:
        """All matchable spellings, longest first so prefixes never shadow longer terms."""
        seen: dict[str, str] = {}
        for term in self.metrics:
            for spelling in term.spellings:
                seen.setdefault(spelling.lower(), spelling)
        return sorted(seen.values(), key=lambda s: (-len(s), s.lower()))

    def lookup(self, text: str) -> Optional[MetricTerm]:
        """Find the metric a spelling belongs to (case-insensitive)."""
        needle = text.lower()
        for term in self.metrics:
            if any(s.lower() == needle for s in term.spellings):
                return term
        return None

    def display_for(self, text: str) -> str:
        """Display spelling for matched text."""
        term = self.lookup(text)
        if term is None or term.display is None:
            return text
        return term.display
