"""
IR Enums — Section ids, token kinds, statuses and codes.

No stringly-typed constants scattered across passes.
"""

from enum import Enum


# ============================================================================
# Sections
# ============================================================================

class SectionId(str, Enum):
    """
    Canonical section identifiers.

    Heading synonyms collapse onto one of these ids. RAW is the synthetic
    fallback used when the narrative carries no recognizable headings.
    """

    FINDINGS = "findings"
    ALARMS = "alarms"
    DIAGNOSTICS = "diagnostics"
    RECOMMENDATIONS = "recommendations"
    RAW = "raw"


class SectionStyle(str, Enum):
    """List presentation hint attached to each section."""

    BULLET = "bullet"
    NUMBERED = "numbered"
    CARD = "card"


# ============================================================================
# Tokens
# ============================================================================

class TokenKind(str, Enum):
    """Semantic kind of a classified span of line text."""

    PLAIN_TEXT = "PlainText"
    BOLD = "Bold"
    METRIC = "Metric"
    VALUE = "Value"
    FULL_TIMESTAMP = "FullTimestamp"
    TIME_ONLY = "TimeOnly"
    STAT_PHRASE = "StatPhrase"
    DATE_HEADING = "DateHeading"


# ============================================================================
# Citations
# ============================================================================

class CitationArtifactKind(str, Enum):
    """How a line's citation cluster is presented."""

    SINGLE = "single"         # One reference, shown verbatim
    COLLAPSED = "collapsed"   # Two or more, folded behind a date + count


# ============================================================================
# Diagnostics & Status
# ============================================================================

class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic message."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AnnotateStatus(str, Enum):
    """Final status of an annotation run."""

    SUCCESS = "success"
    PARTIAL = "partial"   # Completed, but an invariant check failed
    ERROR = "error"       # A pass failed or the pipeline was not found
