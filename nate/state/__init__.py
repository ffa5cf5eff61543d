"""Presentation state owned by callers, never by the engine."""

from nate.state.collapse import CollapseState

__all__ = ["CollapseState"]
