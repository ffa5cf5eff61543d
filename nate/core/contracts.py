"""
Contracts — Type definitions and interfaces for pipeline components.
"""

from abc import ABC, abstractmethod

from nate.core.context import AnnotateContext


class Validator(ABC):
    """Abstract base for validators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Validator name for diagnostics."""
        ...

    @abstractmethod
    def validate(self, ctx: AnnotateContext) -> list[str]:
        """
        Validate the context.

        Returns:
            List of error messages (empty if valid)
        """
        ...
