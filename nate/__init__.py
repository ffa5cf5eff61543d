"""
NATE — Narrative Annotation & Timeline Engine

A deterministic text pipeline that turns a free-text environmental
analysis narrative into named sections, decomposed lines, classified
inline tokens, citation artifacts and a grouped evidence timeline.

The narrative is treated as data. Nothing is inferred about its meaning.
"""

__version__ = "0.1.0"
__ir_version__ = "0.1.0"
