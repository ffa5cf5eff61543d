"""
Partition Validator — Token texts must rebuild each body exactly.
"""

from nate.core.context import AnnotateContext
from nate.core.contracts import Validator


class PartitionValidator(Validator):
    """Validates that no body character is lost or invented by tokenization."""

    @property
    def name(self) -> str:
        return "partition"

    def validate(self, ctx: AnnotateContext) -> list[str]:
        errors: list[str] = []

        for section, line in ctx.iter_lines():
            decomposed = line.decomposed
            if decomposed.is_date_heading:
                continue

            rebuilt = "".join(token.text for token in line.tokens)
            if rebuilt != decomposed.body:
                errors.append(
                    f"Tokens of {section.id.value} line {line.index} do not rebuild its body"
                )

        return errors
