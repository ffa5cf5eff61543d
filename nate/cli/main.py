"""
NATE CLI — Command-line interface for annotation.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from nate import __version__
from nate.core.context import AnnotateRequest
from nate.core.engine import Engine, get_engine, setup_default_pipeline
from nate.ir.enums import SectionStyle, TokenKind
from nate.ir.schema_v0_1 import AnnotatedLine, AnnotateResult, DayGroup
from nate.ir.serialization import to_json
from nate.output.structured import build_structured_output
from nate.vocab.loader import get_settings, load_vocabulary


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="nate",
        description="Narrative Annotation & Timeline Engine",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"nate {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Annotate command
    annotate_parser = subparsers.add_parser("annotate", help="Annotate a narrative")
    annotate_parser.add_argument(
        "input",
        type=str,
        help="Input text or path to file (use - for stdin)",
    )
    annotate_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    annotate_parser.add_argument(
        "--format",
        choices=["text", "json", "structured", "timeline"],
        default="text",
        help="Output format: text outline (default), json (full result), structured, timeline",
    )
    annotate_parser.add_argument(
        "--vocabulary",
        type=str,
        default=None,
        help="Path to a vocabulary YAML profile (default: bundled profile or NATE_VOCABULARY)",
    )

    # Logging configuration
    annotate_parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or NATE_LOG_LEVEL env var)",
    )
    annotate_parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (pipeline,section,line,token,timeline,system). Default: all",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "annotate":
        return run_annotate(args)

    return 0


def run_annotate(args: argparse.Namespace) -> int:
    """Run the annotate command."""
    from nate.core.logging import configure_logging

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        channels=channels,
        force=True,
    )

    # Get input text
    if args.input == "-":
        text = sys.stdin.read()
    elif len(args.input) < 256 and Path(args.input).is_file():
        # Only check as path if it's short enough to be a valid path
        text = Path(args.input).read_text(encoding="utf-8")
    else:
        text = args.input

    if args.vocabulary:
        vocabulary = load_vocabulary(args.vocabulary)
        engine = Engine(vocabulary=vocabulary, settings=get_settings(vocabulary))
        setup_default_pipeline(engine)
    else:
        engine = get_engine()

    result = engine.annotate(AnnotateRequest(text=text))

    if args.format == "json":
        output = to_json(result)
    elif args.format == "structured":
        output = build_structured_output(result).model_dump_json(indent=2)
    elif args.format == "timeline":
        output = format_timeline(result.timeline)
    else:
        output = format_outline(result)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output)

    return 0 if result.status.value in ("success", "partial") else 1


# ============================================================================
# Text formatting
# ============================================================================

def _line_text(line: AnnotatedLine) -> str:
    """Token display forms, with metrics and values marked for the terminal."""
    parts = []
    for token in line.tokens:
        if token.kind in (TokenKind.METRIC, TokenKind.VALUE, TokenKind.STAT_PHRASE):
            parts.append(f"<{token.display}>")
        elif token.kind == TokenKind.BOLD:
            parts.append(f"*{token.display}*")
        else:
            parts.append(token.display)
    return "".join(parts)


def _format_line(line: AnnotatedLine, style: SectionStyle) -> str:
    decomposed = line.decomposed
    if decomposed.is_date_heading:
        return f"  == {decomposed.date_heading} =="

    if style == SectionStyle.NUMBERED:
        prefix = f"  {line.ordinal}. "
    elif style == SectionStyle.CARD:
        prefix = "  | "
    else:
        prefix = "  - "

    text = _line_text(line)
    if decomposed.label:
        marker = "@" if decomposed.is_timestamp_label else ""
        text = f"[{marker}{decomposed.label}] {text}"

    artifact = line.citation
    if artifact is not None:
        if artifact.count > 1:
            text += f"  ({artifact.label} x{artifact.count})"
        else:
            text += f"  ({artifact.label})"

    return prefix + text


def format_timeline(timeline: list[DayGroup]) -> str:
    """One block per day: date, range and count, then times unless collapsed."""
    if not timeline:
        return "No timeline available."

    lines = []
    for group in timeline:
        state = "collapsed" if group.collapsed else "expanded"
        lines.append(f"{group.date}  {group.range_label}  ({len(group.times)} times, {state})")
        if not group.collapsed:
            lines.extend(f"    {t}" for t in group.times)
    return "\n".join(lines)


def format_outline(result: AnnotateResult) -> str:
    """Readable outline of an annotation result."""
    lines = []

    if result.direct_answer:
        lines.append("=" * 60)
        lines.append("DIRECT ANSWER")
        lines.append("=" * 60)
        lines.append(result.direct_answer)
        lines.append("")

    for annotated in result.annotated_sections:
        section = annotated.section
        lines.append("=" * 60)
        lines.append(section.title.upper())
        lines.append("=" * 60)
        lines.extend(_format_line(line, section.style) for line in annotated.lines)
        lines.append("")

    lines.append("=" * 60)
    lines.append("TIMELINE")
    lines.append("=" * 60)
    lines.append(format_timeline(result.timeline))

    problems = [d for d in result.diagnostics if d.level.value != "info"]
    if problems:
        lines.append("")
        lines.append("--- Diagnostics ---")
        for diag in problems:
            lines.append(f"[{diag.level.value}] {diag.code}: {diag.message}")

    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
