"""
Pass 00 — Input Normalization

Normalizes line endings so every later pass can split on "\\n".
Nothing else about the narrative is touched; character offsets reported
by later passes refer to the normalized narrative.
"""

import re

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger

PASS_NAME = "p00_normalize"
log = get_pass_logger(PASS_NAME)

LINE_ENDINGS = re.compile(r"\r\n?")


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return LINE_ENDINGS.sub("\n", text)


def normalize(ctx: AnnotateContext) -> AnnotateContext:
    """Normalize the raw narrative into ``ctx.narrative``."""
    raw = ctx.raw_text
    text = normalize_line_endings(raw)

    log.verbose(
        "normalized",
        input_chars=len(raw),
        output_chars=len(text),
        lines=text.count("\n") + 1 if text else 0,
    )

    ctx.narrative = text
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="normalized_line_endings",
        before=f"{len(raw)} chars",
        after=f"{len(text)} chars",
    )
    return ctx
