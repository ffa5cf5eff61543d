"""
Pass 30 — Line Decomposition

Splits every section line into (label, body, citations).

Order of operations per line:
1. Strip one list marker ("*", "-", "1.", "1)") and one leading "**".
2. Date heading check: a short line that is just a date ends here.
3. Trailing citation run ("[2025-09-11 02:00], [2025-09-11 03:00].")
   is cut off the end.
4. Leading label, first match wins:
   a. "YYYY-MM-DD HH:MM" followed by a colon, whitespace or end of line
   b. "YYYY-MM-DD ... HH:MM" followed by optional "**" and a colon
   c. a short plain label followed by a colon
5. Whatever remains is the body.

Lines that fit none of this come back whole as the body.
"""

import re
from typing import Optional

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger
from nate.ir.enums import SectionStyle
from nate.ir.schema_v0_1 import AnnotatedLine, AnnotatedSection, DecomposedLine
from nate.vocab.loader import get_settings

PASS_NAME = "p30_decompose_lines"
log = get_pass_logger(PASS_NAME)


# =============================================================================
# Patterns
# =============================================================================

LIST_MARKER = re.compile(r"^(?:[*-]|\d+[.)])\s+")
LEADING_BOLD = re.compile(r"^\*\*")

DATE_HEADING_NOISE = re.compile(r"[*_:]")
DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")

# One citation: "[2025-09-11]", "[2025-09-11 02:00]" or "[...]-[...]"
CITATION = r"\[[\d\- :]+\](?:-[\[\d\- :]+\])?"
CITATION_PATTERN = re.compile(CITATION)
CITATION_SEPARATOR = re.compile(r"[,\s]*")
CITATION_CLOSING = re.compile(r"[,\s]*(?:\.[.\s]*)?")   # separators, then "." and spaces

TIMESTAMP_LABEL = re.compile(
    r"^(?P<label>\d{4}-\d{2}-\d{2} \d{2}:\d{2})"
    r"(?:[ \t]*:(?!\d)"                        # "...02:00:"
    r"|(?=\s)(?!\s*[-–]\s*\d)"                 # "...02:00 text", not a range
    r"|\Z)"
    r"\s*"
)
TIMESTAMP_RANGE_LABEL = re.compile(
    r"^(?P<label>\d{4}-\d{2}-\d{2}.*?\d{2}:\d{2})\**:\s*"
)
GENERIC_LABEL = re.compile(
    r"^(?P<label>[A-Za-z0-9 ().\-/&,]+?)(?:\*\*)?:(?!\d)\s*"
)


# =============================================================================
# Decomposition
# =============================================================================

def split_lines(content: str) -> list[str]:
    """Non-empty, trimmed lines of a section's content."""
    return [line.strip() for line in content.split("\n") if line.strip()]


def strip_list_marker(line: str) -> str:
    """Remove one list marker and one leading bold marker."""
    text = LIST_MARKER.sub("", line.strip(), count=1)
    return LEADING_BOLD.sub("", text, count=1)


def date_heading_text(text: str, max_length: int) -> Optional[str]:
    """Cleaned heading text when ``text`` is a bare date line, else None."""
    cleaned = DATE_HEADING_NOISE.sub("", text).strip()
    if DATE_PREFIX.match(cleaned) and len(cleaned) < max_length:
        return cleaned
    return None


def extract_trailing_citations(text: str) -> tuple[str, list[str]]:
    """
    Cut the trailing citation run off ``text``.

    Walks back from the last citation while the gaps between citations are
    only commas and whitespace.

    Returns (remaining text, citations in order of appearance).
    """
    matches = list(CITATION_PATTERN.finditer(text))
    if not matches or not CITATION_CLOSING.fullmatch(text, matches[-1].end()):
        return text, []

    run = [matches[-1]]
    for match in reversed(matches[:-1]):
        if not CITATION_SEPARATOR.fullmatch(text, match.end(), run[-1].start()):
            break
        run.append(match)
    run.reverse()

    citations = [match.group() for match in run]
    remaining = text[:run[0].start()].strip()
    if remaining.endswith((".", ",")):
        remaining = remaining[:-1].strip()
    return remaining, citations


def extract_label(text: str, max_length: int) -> tuple[Optional[str], bool, str]:
    """
    Split a leading label off ``text``.

    Returns (label, is_timestamp_label, remainder).
    """
    match = TIMESTAMP_LABEL.match(text)
    if match:
        return match.group("label"), True, text[match.end():].strip()

    match = TIMESTAMP_RANGE_LABEL.match(text)
    if match:
        label = match.group("label").replace("**", "").strip()
        return label, True, text[match.end():].strip()

    match = GENERIC_LABEL.match(text)
    if match and len(match.group("label")) < max_length:
        return match.group("label").strip(), False, text[match.end():].strip()

    return None, False, text


def decompose_line(
    line: str,
    max_label_length: Optional[int] = None,
    date_heading_max_length: Optional[int] = None,
) -> DecomposedLine:
    """
    Decompose one line into label, body and trailing citations.

    Limits default to the active engine settings.
    """
    if max_label_length is None or date_heading_max_length is None:
        settings = get_settings()
        if max_label_length is None:
            max_label_length = settings.max_label_length
        if date_heading_max_length is None:
            date_heading_max_length = settings.date_heading_max_length

    text = strip_list_marker(line)

    heading = date_heading_text(text, date_heading_max_length)
    if heading is not None:
        return DecomposedLine(date_heading=heading)

    text, citations = extract_trailing_citations(text)
    label, is_timestamp, body = extract_label(text, max_label_length)

    return DecomposedLine(
        label=label,
        is_timestamp_label=is_timestamp,
        body=body,
        citations=citations,
    )


# =============================================================================
# Pass
# =============================================================================

def decompose_lines(ctx: AnnotateContext) -> AnnotateContext:
    """Build ``ctx.annotated_sections`` with decomposed lines."""
    settings = ctx.settings or get_settings(ctx.vocabulary)

    annotated_sections: list[AnnotatedSection] = []
    total_lines = 0
    labelled = 0

    for section in ctx.sections:
        lines: list[AnnotatedLine] = []
        counter = 0

        for index, line in enumerate(split_lines(section.content)):
            decomposed = decompose_line(
                line,
                max_label_length=settings.max_label_length,
                date_heading_max_length=settings.date_heading_max_length,
            )

            ordinal = None
            if section.style == SectionStyle.NUMBERED and not decomposed.is_date_heading:
                counter += 1
                ordinal = counter

            if decomposed.label is not None:
                labelled += 1

            lines.append(
                AnnotatedLine(
                    index=index,
                    line=line,
                    decomposed=decomposed,
                    ordinal=ordinal,
                )
            )

        total_lines += len(lines)
        annotated_sections.append(AnnotatedSection(section=section, lines=lines))

    ctx.annotated_sections = annotated_sections

    log.info("lines_decomposed", lines=total_lines, labelled=labelled)
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="decomposed_lines",
        after=f"{total_lines} lines, {labelled} labelled",
    )
    return ctx
