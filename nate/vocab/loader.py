"""
Vocabulary Loader

Load and validate vocabulary profiles from YAML files.

Profiles live in ``nate/vocab/configs/<name>.yaml``. ``NATE_VOCABULARY``
may name a bundled profile or point at a YAML file on disk.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml

from nate.core.logging import LogChannel, get_logger
from nate.vocab.schema import EngineSettings, Vocabulary

CONFIGS_DIR = Path(__file__).parent / "configs"
DEFAULT_PROFILE = "default"

# Env var -> EngineSettings field
SETTINGS_ENV = {
    "NATE_COLLAPSE_THRESHOLD": "collapse_threshold",
    "NATE_MAX_LABEL_LENGTH": "max_label_length",
    "NATE_DATE_HEADING_MAX_LENGTH": "date_heading_max_length",
}

log = get_logger(LogChannel.SYSTEM)

# Profile cache
_vocabularies: dict[str, Vocabulary] = {}


def load_vocabulary(path: Path | str) -> Vocabulary:
    """
    Load a vocabulary profile from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the profile is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Vocabulary file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    vocabulary = Vocabulary.model_validate(data)
    log.verbose(
        "vocabulary_loaded",
        name=vocabulary.name,
        metrics=len(vocabulary.metrics),
        path=str(path),
    )
    return vocabulary


def get_vocabulary(name: Optional[str] = None) -> Vocabulary:
    """
    Get a vocabulary by profile name or path, loading it on first use.

    Args:
        name: Profile name or YAML path (default: NATE_VOCABULARY or "default")
    """
    name = name or os.environ.get("NATE_VOCABULARY") or DEFAULT_PROFILE

    if name in _vocabularies:
        return _vocabularies[name]

    vocabulary = load_vocabulary(_resolve_path(name))
    _vocabularies[name] = vocabulary
    return vocabulary


def clear_vocabulary_cache() -> None:
    """Clear the vocabulary cache."""
    _vocabularies.clear()


def get_settings(vocabulary: Optional[Vocabulary] = None) -> EngineSettings:
    """
    Engine settings from the vocabulary profile, with environment overrides.

    Malformed overrides are logged and ignored.
    """
    vocabulary = vocabulary or get_vocabulary()
    values = vocabulary.settings.model_dump()

    for env_name, field_name in SETTINGS_ENV.items():
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        try:
            value = int(raw)
        except ValueError:
            log.warning("invalid_setting_override", variable=env_name, value=raw)
            continue
        if value < 1:
            log.warning("invalid_setting_override", variable=env_name, value=raw)
            continue
        values[field_name] = value

    return EngineSettings.model_validate(values)


def _resolve_path(name: str) -> Path:
    bundled = CONFIGS_DIR / f"{name}.yaml"
    if bundled.exists():
        return bundled

    candidate = Path(name)
    if candidate.suffix in (".yaml", ".yml"):
        return candidate

    raise FileNotFoundError(
        f"Vocabulary '{name}' not found. Checked:\n"
        f"  - {bundled}\n"
        f"  - {candidate}"
    )
