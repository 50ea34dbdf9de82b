"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from ai_notes.config import (
    Config,
    ProviderConfig,
    SummarizerConfig,
    get_config,
    load_config_from_yaml,
    reload_config,
    set_config,
)


class TestProviderConfig:
    """Tests for ProviderConfig."""

    def test_keys_from_environment(self, monkeypatch):
        """Test that credentials are read from unprefixed variables."""
        monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf-env")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        config = ProviderConfig()

        assert config.huggingface_api_key == "hf-env"
        assert config.openai_api_key == "sk-env"

    def test_blank_key_is_none(self):
        """Test that whitespace-only keys count as missing."""
        assert ProviderConfig(openai_api_key="   ").openai_api_key is None

    def test_default_models(self):
        """Test the default Hugging Face model order."""
        assert ProviderConfig().huggingface_models[0] == "facebook/bart-large-cnn"


class TestSummarizerConfig:
    """Tests for SummarizerConfig."""

    def test_defaults(self):
        """Test default summarizer settings."""
        config = SummarizerConfig()

        assert config.min_input_length == 100
        assert config.max_input_length == 50_000
        assert config.max_attempts == 2
        assert config.first_sentence_bonus == 1.8
        assert config.last_sentence_bonus == 1.3

    def test_style_normalized(self):
        """Test that the default style is lowercased."""
        assert SummarizerConfig(default_style="Bullet").default_style == "bullet"

    def test_invalid_style(self):
        """Test that unknown styles are rejected."""
        with pytest.raises(ValidationError):
            SummarizerConfig(default_style="verbose")

    def test_bounds_must_be_ordered(self):
        """Test that the minimum input length must be below the maximum."""
        with pytest.raises(ValidationError):
            SummarizerConfig(min_input_length=500, max_input_length=100)

    def test_environment_prefix(self, monkeypatch):
        """Test SUMMARIZER_ prefixed overrides."""
        monkeypatch.setenv("SUMMARIZER_MAX_ATTEMPTS", "3")

        assert SummarizerConfig().max_attempts == 3


class TestGlobalConfig:
    """Tests for the global configuration helpers."""

    def test_get_config_is_cached(self):
        """Test that get_config returns the same instance."""
        assert get_config() is get_config()

    def test_set_config(self):
        """Test replacing the global configuration."""
        config = Config(app_name="Custom")
        set_config(config)

        assert get_config() is config


class TestLoadConfigFromYaml:
    """Tests for load_config_from_yaml."""

    def test_load_sections(self, tmp_path):
        """Test that YAML sections override defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "app_name: Notes From YAML\n"
            "summarizer:\n"
            "  max_attempts: 3\n"
            "  default_style: detailed\n"
            "web:\n"
            "  rate_limit_max_requests: 5\n"
            "database:\n"
            "  path: ':memory:'\n",
            encoding="utf-8",
        )

        config = load_config_from_yaml(str(config_file))

        assert config.app_name == "Notes From YAML"
        assert config.summarizer.max_attempts == 3
        assert config.summarizer.default_style == "detailed"
        assert config.web.rate_limit_max_requests == 5
        assert config.database.path == ":memory:"
        assert config.web.batch_max_notes == 10

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml(str(tmp_path / "missing.yaml"))


class TestReloadConfig:
    """Tests for reload_config."""

    def test_reload_without_yaml(self, tmp_path, monkeypatch):
        """Test that reload falls back to environment defaults."""
        monkeypatch.chdir(tmp_path)
        old = get_config()

        config = reload_config()

        assert config is not old
        assert get_config() is config

    def test_reload_from_yaml(self, tmp_path, monkeypatch):
        """Test that reload picks up config/config.yaml."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text(
            "web:\n  summary_cache_minutes: 5\n", encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        config = reload_config()

        assert config.web.summary_cache_minutes == 5
