"""
IR Serialization — JSON import/export for annotation results.
"""

from pathlib import Path
from typing import Union

from nate.ir.schema_v0_1 import AnnotateResult


def to_json(result: AnnotateResult, indent: int = 2) -> str:
    """Serialize an AnnotateResult to JSON string."""
    return result.model_dump_json(indent=indent)


def from_json(json_str: str) -> AnnotateResult:
    """Deserialize an AnnotateResult from JSON string."""
    return AnnotateResult.model_validate_json(json_str)


def save(result: AnnotateResult, path: Union[str, Path]) -> None:
    """Save an AnnotateResult to a JSON file."""
    Path(path).write_text(to_json(result), encoding="utf-8")


def load(path: Union[str, Path]) -> AnnotateResult:
    """Load an AnnotateResult from a JSON file."""
    return from_json(Path(path).read_text(encoding="utf-8"))
