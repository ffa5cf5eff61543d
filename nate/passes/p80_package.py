"""
Pass 80 — Packaging

Final checks before the result is returned.

Runs the structural validators over the finished context. Any failure is
recorded as an INVARIANT_VIOLATION error and downgrades a successful run
to ``partial``; the annotation itself is still returned.
"""

from nate.core.context import AnnotateContext
from nate.core.contracts import Validator
from nate.core.logging import get_pass_logger
from nate.ir.enums import AnnotateStatus
from nate.validate.citations import CitationRetentionValidator
from nate.validate.exclusivity import SectionExclusivityValidator
from nate.validate.idempotence import IdempotenceValidator
from nate.validate.partition import PartitionValidator

PASS_NAME = "p80_package"
log = get_pass_logger(PASS_NAME)

DEFAULT_VALIDATORS: list[Validator] = [
    PartitionValidator(),
    SectionExclusivityValidator(),
    CitationRetentionValidator(),
    IdempotenceValidator(),
]


def package(ctx: AnnotateContext) -> AnnotateContext:
    """
    Package the final output.

    This pass:
    - Runs the validators
    - Sets final status
    """
    log.verbose("starting_packaging")

    errors: list[str] = []
    for validator in DEFAULT_VALIDATORS:
        for error in validator.validate(ctx):
            log.warning("validation_error", validator=validator.name, error=error)
            ctx.add_diagnostic(
                level="error",
                code="INVARIANT_VIOLATION",
                message=f"{validator.name}: {error}",
                source=PASS_NAME,
            )
            errors.append(error)

    if errors and ctx.status == AnnotateStatus.SUCCESS:
        ctx.status = AnnotateStatus.PARTIAL

    log.info(
        "packaged",
        status=ctx.status.value,
        sections=len(ctx.sections),
        lines=sum(len(s.lines) for s in ctx.annotated_sections),
        days=len(ctx.timeline),
        diagnostics=len(ctx.diagnostics),
        validation_errors=len(errors),
    )

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="packaged",
        after=f"status={ctx.status.value}, errors={len(errors)}",
    )
    return ctx
