"""Vocabulary — metric terms and engine settings loaded from YAML profiles."""

from nate.vocab.loader import (
    clear_vocabulary_cache,
    get_settings,
    get_vocabulary,
    load_vocabulary,
)
from nate.vocab.schema import EngineSettings, MetricTerm, Vocabulary

__all__ = [
    "EngineSettings",
    "MetricTerm",
    "Vocabulary",
    "clear_vocabulary_cache",
    "get_settings",
    "get_vocabulary",
    "load_vocabulary",
]
