"""
Tests for vocabulary profiles and engine settings.
"""

import pytest
from pydantic import ValidationError

from nate.vocab import (
    EngineSettings,
    MetricTerm,
    clear_vocabulary_cache,
    get_settings,
    get_vocabulary,
    load_vocabulary,
)
from nate.vocab.loader import CONFIGS_DIR


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_vocabulary_cache()
    yield
    clear_vocabulary_cache()


class TestDefaultProfile:

    def test_loads(self):
        vocab = get_vocabulary()

        assert vocab.name == "default"
        assert vocab.lookup("co2").canonical == "co2"

    def test_cached(self):
        assert get_vocabulary() is get_vocabulary()

    def test_co2_display(self):
        vocab = get_vocabulary()

        assert vocab.display_for("CO2") == "CO₂"
        assert vocab.display_for("CO₂") == "CO₂"
        assert vocab.display_for("Humidity") == "Humidity"

    def test_spellings_longest_first(self):
        spellings = get_vocabulary().spellings()

        assert spellings.index("Temperature") < spellings.index("Temp")
        lengths = [len(s) for s in spellings]
        assert lengths == sorted(lengths, reverse=True)

    def test_default_settings(self):
        settings = get_vocabulary().settings

        assert settings.collapse_threshold == 4
        assert settings.max_label_length == 60
        assert settings.date_heading_max_length == 15


class TestLoading:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vocabulary(tmp_path / "missing.yaml")

    def test_invalid_profile(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vocabulary:\n  name: bad\nmetrics:\n  - canonical: x\n    spellings: []\n")

        with pytest.raises(ValidationError):
            load_vocabulary(path)

    def test_profile_from_path(self, tmp_path):
        path = tmp_path / "radon.yaml"
        path.write_text(
            "vocabulary:\n  name: radon\n"
            "metrics:\n  - canonical: radon\n    spellings: [Radon, Rn]\n"
            "settings:\n  collapse_threshold: 2\n"
        )

        vocab = get_vocabulary(str(path))

        assert vocab.name == "radon"
        assert vocab.settings.collapse_threshold == 2
        assert vocab.settings.max_label_length == 60

    def test_env_selects_profile(self, monkeypatch):
        monkeypatch.setenv("NATE_VOCABULARY", str(CONFIGS_DIR / "default.yaml"))
        assert get_vocabulary().name == "default"

    def test_unknown_profile(self):
        with pytest.raises(FileNotFoundError):
            get_vocabulary("no_such_profile")

    def test_blank_spelling_rejected(self):
        with pytest.raises(ValidationError):
            MetricTerm(canonical="x", spellings=["  "])


class TestSettings:

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NATE_COLLAPSE_THRESHOLD", "6")
        assert get_settings().collapse_threshold == 6

    def test_malformed_override_ignored(self, monkeypatch):
        monkeypatch.setenv("NATE_MAX_LABEL_LENGTH", "sixty")
        assert get_settings().max_label_length == 60

    def test_out_of_range_override_ignored(self, monkeypatch):
        monkeypatch.setenv("NATE_COLLAPSE_THRESHOLD", "0")
        assert get_settings().collapse_threshold == 4

    def test_settings_must_be_positive(self):
        with pytest.raises(ValidationError):
            EngineSettings(collapse_threshold=0)
