"""
CollapseState — Caller-owned expand/collapse toggles for timeline days.

The timeline carries each day's default (``DayGroup.collapsed``). Whatever
a viewer does afterwards lives here, keyed by date, and is never written
back into the DayGroups.
"""

from dataclasses import dataclass, field

from nate.ir.schema_v0_1 import DayGroup


@dataclass
class CollapseState:
    """Per-date collapse flags seeded from a timeline."""

    collapsed: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_timeline(cls, groups: list[DayGroup]) -> "CollapseState":
        """Seed one flag per day from the computed defaults."""
        return cls(collapsed={group.date: group.collapsed for group in groups})

    def is_collapsed(self, date: str) -> bool:
        """Current flag for ``date``; unknown dates are expanded."""
        return self.collapsed.get(date, False)

    def toggle(self, date: str) -> bool:
        """Flip ``date`` and return its new state."""
        if date not in self.collapsed:
            raise KeyError(f"No timeline day for {date}")
        self.collapsed[date] = not self.collapsed[date]
        return self.collapsed[date]

    def expand_all(self) -> None:
        for date in self.collapsed:
            self.collapsed[date] = False

    def collapse_all(self) -> None:
        for date in self.collapsed:
            self.collapsed[date] = True

    def as_dict(self) -> dict[str, bool]:
        return dict(self.collapsed)
