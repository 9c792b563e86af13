"""Integration tests for configuration module."""

from pathlib import Path

import pytest

from tuneit.config import (
    AppConfig,
    ConfigurationError,
    SalaryVocabulary,
    load_config,
    validate_config_file,
)
from tuneit.config.environment import DEFAULT_DATABASE_URL, load_environment_config
from tuneit.salary import SalaryParser

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, clean_env):
        """Test loading a valid configuration file."""
        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        salary = app_config.salary
        assert salary.currency_symbols["C$"] == "CAD"
        assert "£" in salary.currency_symbols
        assert salary.period_keywords["hour"] == ["hour", "hourly", "hr"]
        assert salary.known_periods == frozenset({"hour", "year"})
        assert salary.missing_value_labels == ["not provided", "doe"]

        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "json"
        assert env_config.database_url == DEFAULT_DATABASE_URL

    def test_loaded_vocabulary_drives_parser(self, clean_env):
        """Test the configured vocabulary changes parser behaviour."""
        app_config, _ = load_config(FIXTURES_DIR / "valid_config.yaml")
        parser = SalaryParser(app_config.salary)

        assert parser.normalize({"range": "DOE"}) is None
        assert parser.detect_period("$500 per day") is None
        assert parser.detect_period("$40 hourly") == "hour"

    def test_load_minimal_config(self, clean_env):
        """Test loading a minimal configuration with defaults."""
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.logging.level == "WARNING"
        assert app_config.logging.format == "key-value"
        assert app_config.salary == SalaryVocabulary()

    def test_defaults_without_config_file(self, clean_env, tmp_path, monkeypatch):
        """Test the built-in defaults apply when no config.yaml exists."""
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config == AppConfig()

    def test_default_config_file_is_found(self, clean_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("logging:\n  level: ERROR\n")

        app_config, _ = load_config()

        assert app_config.logging.level == "ERROR"

    def test_empty_config_file(self, clean_env, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        app_config, _ = load_config(config_file)

        assert app_config == AppConfig()

    def test_config_file_not_found(self, clean_env):
        """Test error when config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value).lower()

    def test_invalid_yaml_syntax(self, tmp_path, clean_env):
        """Test error when YAML syntax is invalid."""
        invalid_yaml = tmp_path / "invalid.yaml"
        invalid_yaml.write_text("salary:\n  currency_codes: ['USD\n    invalid yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(invalid_yaml)

        assert "parse" in str(exc_info.value).lower()

    def test_top_level_must_be_mapping(self, tmp_path, clean_env):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- salary\n- logging\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "mapping" in str(exc_info.value)

    def test_undecodable_config_file(self, tmp_path, clean_env):
        """Test a file that is not UTF-8 is reported as a configuration error."""
        config_file = tmp_path / "config.yaml"
        config_file.write_bytes(b"salary:\n  currency_words:\n    \xff: USD\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "read" in str(exc_info.value).lower()

    def test_default_logging_values_are_strings(self):
        """Test defaults come back as plain strings, like values read from YAML."""
        logging_config = AppConfig().logging

        assert type(logging_config.level) is str
        assert type(logging_config.format) is str
        assert (logging_config.level, logging_config.format) == ("INFO", "key-value")


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_unknown_currency_code(self, clean_env):
        """Test mappings must point at codes listed in currency_codes."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_unknown_currency.yaml")

        assert "BTC" in str(exc_info.value)

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_log_level.yaml")

        assert "logging -> level" in str(exc_info.value)

    def test_duplicate_period_keyword_warns(self, clean_env):
        """Test a keyword listed under two periods loads with a warning."""
        with pytest.warns(UserWarning, match="shift"):
            app_config, _ = load_config(FIXTURES_DIR / "duplicate_period_keyword.yaml")

        parser = SalaryParser(app_config.salary)
        assert parser.detect_period("$200 per shift") == "hour"

    def test_vocabulary_normalization(self):
        vocabulary = SalaryVocabulary(
            currency_codes=[" usd ", "USD", "gbp"],
            currency_symbols={"$": "usd"},
            currency_words={" Dollars ": "usd"},
            display_symbols={"USD": "$"},
            period_keywords={"Year": ["Annual", "annual"]},
        )

        assert vocabulary.currency_codes == ["USD", "GBP"]
        assert vocabulary.currency_symbols == {"$": "USD"}
        assert vocabulary.currency_words == {"dollars": "USD"}
        assert vocabulary.period_keywords == {"year": ["year", "annual"]}


class TestEnvironmentVariables:
    """Test environment variable loading and validation."""

    def test_defaults(self, clean_env):
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.log_format is None
        assert env_config.environment == "local"
        assert env_config.database_url == DEFAULT_DATABASE_URL

    def test_overrides(self, monkeypatch, clean_env):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.log_format == "json"
        assert env_config.environment == "staging"
        assert env_config.database_url == "sqlite:///:memory:"

    def test_invalid_values(self, monkeypatch, clean_env):
        """Test every invalid variable is reported at once."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        monkeypatch.setenv("LOG_FORMAT", "xml")
        monkeypatch.setenv("DATABASE_URL", "  ")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        error_msg = str(exc_info.value)
        assert "LOG_LEVEL" in error_msg
        assert "LOG_FORMAT" in error_msg
        assert "DATABASE_URL" in error_msg


class TestConfigurationHelpers:
    """Test configuration helper functions."""

    def test_validate_config_file_utility(self, capsys):
        """Test the standalone config validation utility."""
        assert validate_config_file(FIXTURES_DIR / "valid_config.yaml") is True
        assert validate_config_file(FIXTURES_DIR / "invalid_unknown_currency.yaml") is False

        assert "BTC" in capsys.readouterr().out


# Pytest fixtures
@pytest.fixture
def clean_env(monkeypatch):
    """Remove TuneIt environment variables so tests see only what they set."""
    for name in ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
