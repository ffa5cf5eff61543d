"""
Pass 40 — Inline Token Classification

Splits each line body into typed tokens.

One combined pattern is scanned left to right. Its alternatives, in
precedence order:

    1. **bold**                    -> Bold
    2. 2025-09-11 02:00            -> FullTimestamp
    3. 2:00 / 02:00                -> TimeOnly
    4. vocabulary term             -> Metric
    5. ~950ppm / 20-22 / 45%       -> Value
    6. median 21.5                 -> StatPhrase

The earliest match wins; on a tie at the same position the earlier
alternative wins. Text between matches is PlainText. Concatenating the
token texts always gives back the body.

A bare date has no alternative of its own: "2025-09-11" comes out as
Value("2025-09"), "-", Value("11").
"""

import re
from functools import lru_cache
from typing import Optional

from nate.core.context import AnnotateContext
from nate.core.logging import get_pass_logger
from nate.ir.enums import TokenKind
from nate.ir.schema_v0_1 import Token
from nate.vocab.loader import get_vocabulary
from nate.vocab.schema import Vocabulary

PASS_NAME = "p40_classify_tokens"
log = get_pass_logger(PASS_NAME)


# =============================================================================
# Patterns
# =============================================================================

BOLD = r"\*\*.+?\*\*"
FULL_TIMESTAMP = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}"
TIME_ONLY = r"\b\d{1,2}:\d{2}\b"
VALUE = (
    r"(?<![A-Za-z])"
    r"(?:≈|~|>=?|<=?|approx\s)?"
    r"\d+(?:\.\d+)?(?:[\-–]\d+(?:\.\d+)?)?"
    r"(?:\s?(?:ppm|µg/m³|lux|%|°C|C)(?![A-Za-z]))?"
)
STAT_WORDS = ("median", "mean", "peak", "min", "max", "score", "val")
STAT_PHRASE = r"\b(?:" + "|".join(STAT_WORDS) + r")\s+\d+(?:\.\d+)?"

STAT_PARTS = re.compile(r"^(?P<stat>[A-Za-z]+)\s+(?P<value>.+)$")

# Group name -> token kind
_GROUP_KINDS = {
    "bold": TokenKind.BOLD,
    "timestamp": TokenKind.FULL_TIMESTAMP,
    "time": TokenKind.TIME_ONLY,
    "metric": TokenKind.METRIC,
    "value": TokenKind.VALUE,
    "stat": TokenKind.STAT_PHRASE,
}


@lru_cache(maxsize=16)
def token_pattern(spellings: tuple[str, ...]) -> re.Pattern:
    """Combined classifier pattern for a set of metric spellings."""
    if spellings:
        terms = "|".join(re.escape(s) for s in spellings)
        metric = r"(?<![A-Za-z0-9])(?:" + terms + r")(?![A-Za-z0-9])"
    else:
        metric = r"(?!)"

    return re.compile(
        rf"(?P<bold>{BOLD})"
        rf"|(?P<timestamp>{FULL_TIMESTAMP})"
        rf"|(?P<time>{TIME_ONLY})"
        rf"|(?P<metric>{metric})"
        rf"|(?P<value>{VALUE})"
        rf"|(?P<stat>{STAT_PHRASE})",
        re.IGNORECASE,
    )


# =============================================================================
# Classification
# =============================================================================

def _make_token(kind: TokenKind, text: str, vocabulary: Vocabulary) -> Token:
    if kind == TokenKind.BOLD:
        return Token(kind=kind, text=text, display=text[2:-2])
    if kind == TokenKind.METRIC:
        term = vocabulary.lookup(text)
        return Token(
            kind=kind,
            text=text,
            display=vocabulary.display_for(text),
            canonical=term.canonical if term else None,
        )
    return Token(kind=kind, text=text, display=text)


def _append(tokens: list[Token], token: Token) -> None:
    """Append, folding consecutive plain text into one token."""
    if (
        token.kind == TokenKind.PLAIN_TEXT
        and tokens
        and tokens[-1].kind == TokenKind.PLAIN_TEXT
    ):
        merged = tokens[-1].text + token.text
        tokens[-1] = Token(kind=TokenKind.PLAIN_TEXT, text=merged, display=merged)
        return
    tokens.append(token)


def classify_tokens(body: str, vocabulary: Optional[Vocabulary] = None) -> list[Token]:
    """
    Classify a line body into tokens.

    Args:
        body: Text to classify
        vocabulary: Metric vocabulary (default: the active profile)

    Returns:
        Tokens whose texts concatenate to ``body``
    """
    if not body:
        return []

    vocabulary = vocabulary or get_vocabulary()
    pattern = token_pattern(tuple(vocabulary.spellings()))

    tokens: list[Token] = []
    position = 0

    for match in pattern.finditer(body):
        if match.start() > position:
            plain = body[position:match.start()]
            _append(tokens, Token(kind=TokenKind.PLAIN_TEXT, text=plain, display=plain))

        kind = _GROUP_KINDS[match.lastgroup]
        _append(tokens, _make_token(kind, match.group(), vocabulary))
        position = match.end()

    if position < len(body):
        plain = body[position:]
        _append(tokens, Token(kind=TokenKind.PLAIN_TEXT, text=plain, display=plain))

    return tokens


def classify_date_heading(text: str) -> list[Token]:
    """A date heading line is a single DateHeading token."""
    return [Token(kind=TokenKind.DATE_HEADING, text=text, display=text)]


def split_stat_phrase(text: str) -> tuple[str, str]:
    """Split "median 21.5" into ("median", "21.5")."""
    match = STAT_PARTS.match(text)
    if not match:
        return text, ""
    return match.group("stat"), match.group("value")


# =============================================================================
# Pass
# =============================================================================

def classify_tokens_pass(ctx: AnnotateContext) -> AnnotateContext:
    """Fill ``tokens`` on every annotated line."""
    vocabulary = ctx.vocabulary or get_vocabulary()

    counts: dict[str, int] = {}
    for _, line in ctx.iter_lines():
        decomposed = line.decomposed
        if decomposed.is_date_heading:
            line.tokens = classify_date_heading(decomposed.date_heading)
        else:
            line.tokens = classify_tokens(decomposed.body, vocabulary)

        for token in line.tokens:
            counts[token.kind.value] = counts.get(token.kind.value, 0) + 1

    log.info("tokens_classified", total=sum(counts.values()), **counts)
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="classified_tokens",
        after=", ".join(f"{kind}={n}" for kind, n in sorted(counts.items())) or "none",
    )
    return ctx
