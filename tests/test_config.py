"""Tests for config module."""

import pytest

from fieldlog.config import Config, load_config

ENV_KEYS = [
    "LEXICON_PATH",
    "MIN_UNIT_LENGTH",
    "TIME_STEP_MINUTES",
    "MAX_WORKERS",
    "OUTPUT_DIR",
    "VERBOSE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_config_values(self):
        """Verify default Config dataclass values."""
        config = Config()
        assert config.lexicon_path == ""
        assert config.min_unit_length == 20
        assert config.time_step_minutes == 10
        assert config.max_workers == 1
        assert config.output_dir == "./output/"
        assert config.verbose is False

    def test_load_config_matches_defaults(self):
        """Verify load_config with no env vars equals the dataclass defaults."""
        assert load_config() == Config()


class TestEnvOverrides:
    """Test that environment variables override defaults."""

    def test_lexicon_path_override(self, monkeypatch):
        monkeypatch.setenv("LEXICON_PATH", "/etc/fieldlog/lexicon.yml")
        assert load_config().lexicon_path == "/etc/fieldlog/lexicon.yml"

    def test_min_unit_length_override(self, monkeypatch):
        monkeypatch.setenv("MIN_UNIT_LENGTH", "40")
        assert load_config().min_unit_length == 40

    def test_time_step_override(self, monkeypatch):
        monkeypatch.setenv("TIME_STEP_MINUTES", "15")
        assert load_config().time_step_minutes == 15

    def test_max_workers_override(self, monkeypatch):
        monkeypatch.setenv("MAX_WORKERS", "4")
        assert load_config().max_workers == 4

    def test_output_dir_override(self, monkeypatch):
        monkeypatch.setenv("OUTPUT_DIR", "/tmp/logs/")
        assert load_config().output_dir == "/tmp/logs/"

    def test_non_integer_raises(self, monkeypatch):
        monkeypatch.setenv("MAX_WORKERS", "many")
        with pytest.raises(ValueError):
            load_config()


class TestBoolParsing:
    """Test boolean environment variable parsing."""

    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", "ON"])
    def test_truthy(self, monkeypatch, value):
        monkeypatch.setenv("VERBOSE", value)
        assert load_config().verbose is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", ""])
    def test_falsy(self, monkeypatch, value):
        monkeypatch.setenv("VERBOSE", value)
        assert load_config().verbose is False
