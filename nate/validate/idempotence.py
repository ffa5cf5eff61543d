"""
Idempotence Validator — Re-running the core operations changes nothing.
"""

from nate.core.context import AnnotateContext
from nate.core.contracts import Validator
from nate.passes.p10_extract_direct_answer import extract_direct_answer
from nate.passes.p20_split_sections import split_sections
from nate.passes.p30_decompose_lines import decompose_line
from nate.passes.p60_build_timeline import build_timeline
from nate.vocab.loader import get_settings


class IdempotenceValidator(Validator):
    """
    Validates that annotation is repeatable.

    Recomputes direct answer, sections, line decompositions and timeline
    from the narrative and compares them with what the passes produced.
    """

    @property
    def name(self) -> str:
        return "idempotence"

    def validate(self, ctx: AnnotateContext) -> list[str]:
        errors: list[str] = []
        settings = ctx.settings or get_settings(ctx.vocabulary)

        if extract_direct_answer(ctx.narrative) != ctx.direct_answer:
            errors.append("Direct answer differs on re-extraction")

        if split_sections(ctx.narrative) != ctx.sections:
            errors.append("Sections differ on re-split")

        for section, line in ctx.iter_lines():
            again = decompose_line(
                line.line,
                max_label_length=settings.max_label_length,
                date_heading_max_length=settings.date_heading_max_length,
            )
            if again != line.decomposed:
                errors.append(f"Decomposition of {section.id.value} line {line.index} differs")

        if build_timeline(ctx.narrative, settings.collapse_threshold) != ctx.timeline:
            errors.append("Timeline differs on rebuild")

        return errors
