"""Tests for Settings loading from the environment."""

import pytest
from pydantic import ValidationError

from countryref.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.data_dir is None
        assert settings.min_letter == 5
        assert settings.verbose is True
        assert settings.log_level == "INFO"

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COUNTRYREF_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("COUNTRYREF_MIN_LETTER", "3")
        monkeypatch.setenv("COUNTRYREF_VERBOSE", "false")
        monkeypatch.setenv("COUNTRYREF_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)
        assert settings.data_dir == tmp_path
        assert settings.min_letter == 3
        assert settings.verbose is False
        assert settings.log_level == "DEBUG"

    def test_empty_values_ignored(self, monkeypatch):
        monkeypatch.setenv("COUNTRYREF_MIN_LETTER", "")
        assert Settings(_env_file=None).min_letter == 5

    def test_negative_min_letter_rejected(self, monkeypatch):
        monkeypatch.setenv("COUNTRYREF_MIN_LETTER", "-1")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_field_names_accepted(self):
        settings = Settings(_env_file=None, min_letter=2, verbose=False)
        assert settings.min_letter == 2
        assert settings.verbose is False


def test_get_settings_cached():
    assert get_settings() is get_settings()
