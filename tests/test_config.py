"""Tests for settings."""

import os

import pytest
from pydantic import ValidationError

from author_attribution.config import Settings


class TestSettings:
    """Test defaults, environment overrides and validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.max_sentence_length == 96
        assert (settings.min_rating, settings.max_rating) == (0.2, 0.7)
        assert settings.unseen_token_rating == 0.2
        assert settings.no_token_rating == 0.4
        assert settings.zero_count_policy == "both"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("AA_MAX_SENTENCE_LENGTH", "120")
        monkeypatch.setenv("AA_ZERO_COUNT_POLICY", "fixed")
        settings = Settings()
        assert settings.max_sentence_length == 120
        assert settings.zero_count_policy == "fixed"

    def test_inverted_bounds(self):
        with pytest.raises(ValidationError):
            Settings(min_rating=0.8, max_rating=0.7)

    def test_tail_larger_than_cap(self):
        with pytest.raises(ValidationError):
            Settings(max_ratings=50, tail_ratings=30)

    def test_unknown_policy(self):
        with pytest.raises(ValidationError):
            Settings(zero_count_policy="sometimes")

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("AA_MAX_SENTENCE_LENGTH=10\n", encoding="utf-8")
        assert Settings().max_sentence_length == 10
        assert Settings(_env_file=None).max_sentence_length == 96

    def test_environment_cleared(self, settings):
        assert not [name for name in os.environ if name.upper().startswith("AA_")]
        assert settings == Settings(_env_file=None)
