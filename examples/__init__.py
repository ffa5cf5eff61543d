"""
NATE Examples

Example scripts:

- timeline_example.py: Annotate a narrative, then browse its evidence
  timeline with caller-owned collapse state

Usage:
    python examples/timeline_example.py
"""
