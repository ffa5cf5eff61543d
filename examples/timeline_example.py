#!/usr/bin/env python3
"""
Timeline Example

Demonstrates:
- Annotating a narrative with the default pipeline
- Reading sections, labels and citation artifacts
- Browsing the day-grouped timeline with CollapseState

Usage:
    python examples/timeline_example.py
"""

from nate.core.context import AnnotateRequest
from nate.core.engine import Engine, setup_default_pipeline
from nate.ir.enums import TokenKind
from nate.state import CollapseState


def main():
    narrative = """0) Direct Answer: CO2 rose overnight and peaked near 950 ppm around 02:00.
1) Findings:
**2025-09-11**
- CO2: climbed from 600 ppm to 950ppm [2025-09-11 00:00], [2025-09-11 01:00], [2025-09-11 02:00].
- Humidity: rose to 65% [2025-09-11 02:30].
2) Alarms:
- 2025-09-11 02:00: CO2 spike while Ventilation was in Eco mode [2025-09-11 02:00].
3) Recommendations:
1. Raise the minimum air exchange rate between 00:00 and 06:00.
2. Re-check the Eco schedule [2025-09-12 23:30].
"""

    print("=" * 70)
    print("                       NATE TIMELINE EXAMPLE")
    print("=" * 70)

    engine = Engine()
    setup_default_pipeline(engine)
    result = engine.annotate(AnnotateRequest(text=narrative))

    print(f"\nStatus: {result.status.value}")
    print(f"Direct answer: {result.direct_answer}")

    for annotated in result.annotated_sections:
        print(f"\n{annotated.section.title} ({annotated.section.style.value})")
        for line in annotated.lines:
            if line.decomposed.is_date_heading:
                print(f"   -- {line.decomposed.date_heading} --")
                continue
            metrics = [t.display for t in line.tokens if t.kind == TokenKind.METRIC]
            cited = f"{line.citation.label} x{line.citation.count}" if line.citation else "-"
            print(f"   label={line.decomposed.label!r:22} metrics={metrics} cited={cited}")

    # Collapse state belongs to the viewer, not to the result
    state = CollapseState.from_timeline(result.timeline)

    print("\nTimeline (defaults):")
    for group in result.timeline:
        mark = "+" if state.is_collapsed(group.date) else "-"
        print(f"   [{mark}] {group.date} {group.range_label} ({len(group.times)} times)")

    for group in result.timeline:
        if state.is_collapsed(group.date):
            state.toggle(group.date)

    print("\nTimeline (after expanding):")
    for group in result.timeline:
        print(f"   [-] {group.date}: {', '.join(group.times)}")


if __name__ == "__main__":
    main()
