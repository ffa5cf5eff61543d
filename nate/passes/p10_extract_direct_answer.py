"""
Pass 10 — Direct Answer Extraction

Pulls the executive summary block out of the narrative.

The block is introduced by a line of the form "0) Direct Answer" (any case,
optional colon) and runs until the next line opening with "<number>)"
or the end of the narrative. Most narratives have no such block; that is
reported as absence, not as an error.
"""

import re
from typing import Optional

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger

PASS_NAME = "p10_extract_direct_answer"
log = get_pass_logger(PASS_NAME)

DIRECT_ANSWER_PATTERN = re.compile(
    r"^[ \t]*0\)[ \t]*direct[ \t]+answer[ \t]*:?"   # heading
    r"(?P<body>.*?)"                                 # block, across lines
    r"(?=^[ \t]*\d+\)|\Z)",                          # next numbered heading or end
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)


def extract_direct_answer(narrative: str) -> Optional[str]:
    """
    Return the trimmed Direct Answer block, or None if there is none.

    A heading followed by nothing but whitespace also yields None.
    """
    match = DIRECT_ANSWER_PATTERN.search(narrative)
    if not match:
        return None

    body = match.group("body").strip()
    return body or None


def extract_direct_answer_pass(ctx: AnnotateContext) -> AnnotateContext:
    """Populate ``ctx.direct_answer``."""
    answer = extract_direct_answer(ctx.narrative)
    ctx.direct_answer = answer

    if answer is None:
        log.verbose("no_direct_answer")
        ctx.add_diagnostic(
            level="info",
            code="NO_DIRECT_ANSWER",
            message="Narrative has no '0) Direct Answer' block",
            source=PASS_NAME,
        )
    else:
        log.verbose("direct_answer_found", chars=len(answer))

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="extracted_direct_answer",
        after=f"{len(answer)} chars" if answer else "absent",
    )
    return ctx
