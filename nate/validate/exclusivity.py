"""
Section Exclusivity Validator — No narrative character in two sections.
"""

from nate.core.context import AnnotateContext
from nate.core.contracts import Validator


class SectionExclusivityValidator(Validator):
    """Validates that section content ranges never overlap."""

    @property
    def name(self) -> str:
        return "section_exclusivity"

    def validate(self, ctx: AnnotateContext) -> list[str]:
        errors: list[str] = []

        spans = sorted(
            (start, end, section.id.value)
            for section in ctx.sections
            for start, end in section.spans
        )

        for (start, end, owner), (next_start, _, next_owner) in zip(spans, spans[1:]):
            if next_start < end:
                errors.append(
                    f"Sections '{owner}' and '{next_owner}' overlap at {next_start}-{end}"
                )

        for section in ctx.sections:
            for start, end in section.spans:
                if start < 0 or end > len(ctx.narrative) or start > end:
                    errors.append(f"Section '{section.id.value}' has invalid span {start}-{end}")

        return errors
