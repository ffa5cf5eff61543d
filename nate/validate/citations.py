"""
Citation Retention Validator — Collapsing citations must not drop any.
"""

from nate.core.context import AnnotateContext
from nate.core.contracts import Validator


class CitationRetentionValidator(Validator):
    """Validates that every extracted citation survives into its artifact."""

    @property
    def name(self) -> str:
        return "citation_retention"

    def validate(self, ctx: AnnotateContext) -> list[str]:
        errors: list[str] = []

        for section, line in ctx.iter_lines():
            citations = line.decomposed.citations
            artifact = line.citation
            where = f"{section.id.value} line {line.index}"

            if not citations:
                if artifact is not None:
                    errors.append(f"Citation artifact without citations on {where}")
                continue

            if artifact is None:
                errors.append(f"{len(citations)} citations dropped on {where}")
            elif artifact.citations != citations or artifact.count != len(citations):
                errors.append(
                    f"Artifact on {where} keeps {artifact.count} of {len(citations)} citations"
                )

        return errors
