"""Unit tests for configuration management."""

import json
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from nrn_test_util.config import (
    Config,
    CsvConfig,
    GenerationConfig,
    LoggingConfig,
    OperationLoggingConfig,
    get_csv_config,
    get_generation_config,
    get_logging_config,
    get_operation_logging_config,
    load_config,
)
from nrn_test_util.config.manager import ENV_PREFIX, _ENV_OVERRIDES, _parse_bool
from nrn_test_util.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove NRN_TEST_* overrides from the environment."""
    for suffix, *_ in _ENV_OVERRIDES:
        monkeypatch.delenv(f"{ENV_PREFIX}{suffix}", raising=False)


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""

    def _write(content) -> Path:
        path = tmp_path / "config.json"
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


class TestConfigModels:
    """Test pydantic configuration models."""

    def test_defaults(self):
        """Test the root model has a default for every section."""
        config = Config()

        assert config.generation.min_birth_date == date(1900, 1, 1)
        assert config.generation.max_birth_date is None
        assert config.generation.seed is None
        assert config.generation.count == 1
        assert config.generation.formatted is False
        assert config.csv.column == "national_register_number"
        assert config.csv.delimiter == ","
        assert config.logging.level == "INFO"
        assert config.logging.log_file == Path("logs/nrn-test-util.log")
        assert config.logging.redact_pii is False
        assert config.operation_logging.csv_log_level == "INFO"

    def test_generation_dates_parsed_from_strings(self):
        """Test ISO strings become dates."""
        generation = GenerationConfig(min_birth_date="2000-01-01", max_birth_date="2010-12-31")

        assert generation.min_birth_date == date(2000, 1, 1)
        assert generation.max_birth_date == date(2010, 12, 31)

    def test_generation_rejects_dates_before_1900(self):
        """Test the register's earliest date is enforced."""
        with pytest.raises(ValidationError, match="can't be before 1900-01-01"):
            GenerationConfig(min_birth_date="1899-12-31")

    def test_generation_rejects_inverted_range(self):
        """Test min_birth_date must not be after max_birth_date."""
        with pytest.raises(ValidationError, match="cannot be after max_birth_date"):
            GenerationConfig(min_birth_date="2005-01-01", max_birth_date="1997-12-31")

    def test_generation_allows_single_day_range(self):
        """Test equal bounds are accepted."""
        generation = GenerationConfig(min_birth_date="2000-01-01", max_birth_date="2000-01-01")

        assert generation.min_birth_date == generation.max_birth_date

    @pytest.mark.parametrize("count", [0, -1, 100_001])
    def test_generation_count_bounds(self, count):
        """Test count must be between 1 and 100000."""
        with pytest.raises(ValidationError):
            GenerationConfig(count=count)

    @pytest.mark.parametrize("delimiter", ["", ";;"])
    def test_csv_delimiter_single_character(self, delimiter):
        """Test the delimiter is one character."""
        with pytest.raises(ValidationError):
            CsvConfig(delimiter=delimiter)

    def test_csv_column_not_empty(self):
        """Test an empty column name is rejected."""
        with pytest.raises(ValidationError):
            CsvConfig(column="")

    def test_log_level_uppercased(self):
        """Test log levels are case-insensitive."""
        assert LoggingConfig(level="debug").level == "DEBUG"
        assert OperationLoggingConfig(csv_log_level="warning").csv_log_level == "WARNING"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError, match="Invalid log level"):
            LoggingConfig(level="VERBOSE")
        with pytest.raises(ValidationError, match="Invalid log level"):
            OperationLoggingConfig(generate_log_level="LOUD")


class TestLoadConfig:
    """Test load_config."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing config file falls back to defaults."""
        config = load_config(tmp_path / "missing.json")

        assert config == Config()

    def test_load_from_file(self, config_file):
        """Test values from a JSON file."""
        # Arrange
        path = config_file(
            {
                "generation": {"min_birth_date": "2000-01-01", "seed": 42, "count": 5},
                "csv": {"column": "nrn", "delimiter": ";"},
                "logging": {"level": "debug", "redact_pii": True},
            }
        )

        # Act
        config = load_config(path)

        # Assert
        assert config.generation.min_birth_date == date(2000, 1, 1)
        assert config.generation.seed == 42
        assert config.generation.count == 5
        assert config.csv.column == "nrn"
        assert config.csv.delimiter == ";"
        assert config.logging.level == "DEBUG"
        assert config.logging.redact_pii is True
        assert config.operation_logging == OperationLoggingConfig()

    def test_partial_file_keeps_defaults(self, config_file):
        """Test missing sections get their defaults."""
        config = load_config(config_file({"csv": {"column": "nrn"}}))

        assert config.csv.column == "nrn"
        assert config.csv.delimiter == ","
        assert config.generation == GenerationConfig()

    def test_invalid_json(self, config_file):
        """Test malformed JSON raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Invalid JSON in config file"):
            load_config(config_file('{"generation": {'))

    def test_non_object_root(self, config_file):
        """Test a JSON array root is rejected."""
        with pytest.raises(ConfigurationError, match="must contain a JSON object"):
            load_config(config_file([1, 2, 3]))

    def test_invalid_values(self, config_file):
        """Test schema violations raise ConfigurationError with a fix."""
        path = config_file({"generation": {"min_birth_date": "1850-01-01"}})

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "Configuration validation failed" in str(exc_info.value)
        assert "Fix:" in str(exc_info.value)

    def test_env_overrides_file(self, config_file, monkeypatch):
        """Test environment variables take precedence over the file."""
        # Arrange
        path = config_file({"generation": {"seed": 1}, "logging": {"level": "INFO"}})
        monkeypatch.setenv("NRN_TEST_SEED", "99")
        monkeypatch.setenv("NRN_TEST_COUNT", "7")
        monkeypatch.setenv("NRN_TEST_FORMATTED", "yes")
        monkeypatch.setenv("NRN_TEST_MAX_BIRTH_DATE", "2010-12-31")
        monkeypatch.setenv("NRN_TEST_CSV_DELIMITER", ";")
        monkeypatch.setenv("NRN_TEST_LOG_LEVEL", "warning")
        monkeypatch.setenv("NRN_TEST_REDACT_PII", "true")
        monkeypatch.setenv("NRN_TEST_OP_LOG_CSV_LEVEL", "DEBUG")

        # Act
        config = load_config(path)

        # Assert
        assert config.generation.seed == 99
        assert config.generation.count == 7
        assert config.generation.formatted is True
        assert config.generation.max_birth_date == date(2010, 12, 31)
        assert config.csv.delimiter == ";"
        assert config.logging.level == "WARNING"
        assert config.logging.redact_pii is True
        assert config.operation_logging.csv_log_level == "DEBUG"

    def test_env_override_without_file(self, tmp_path, monkeypatch):
        """Test overrides apply on top of the defaults."""
        monkeypatch.setenv("NRN_TEST_CSV_COLUMN", "ssn")

        config = load_config(tmp_path / "missing.json")

        assert config.csv.column == "ssn"

    def test_env_invalid_number(self, tmp_path, monkeypatch):
        """Test a non-numeric seed raises ConfigurationError."""
        monkeypatch.setenv("NRN_TEST_SEED", "abc")

        with pytest.raises(ConfigurationError, match="Invalid value for NRN_TEST_SEED"):
            load_config(tmp_path / "missing.json")

    def test_env_invalid_date_range(self, tmp_path, monkeypatch):
        """Test overrides are validated like file values."""
        monkeypatch.setenv("NRN_TEST_MIN_BIRTH_DATE", "2005-01-01")
        monkeypatch.setenv("NRN_TEST_MAX_BIRTH_DATE", "1997-12-31")

        with pytest.raises(ConfigurationError, match="cannot be after max_birth_date"):
            load_config(tmp_path / "missing.json")


class TestHelpers:
    """Test section getters and boolean parsing."""

    def test_section_getters(self):
        """Test each getter returns its section."""
        config = Config()

        assert get_generation_config(config) is config.generation
        assert get_csv_config(config) is config.csv
        assert get_logging_config(config) is config.logging
        assert get_operation_logging_config(config) is config.operation_logging

    @pytest.mark.parametrize(
        "value,expected",
        [("true", True), ("TRUE", True), ("1", True), ("yes", True), ("on", True),
         ("false", False), ("0", False), ("no", False), ("off", False)],
    )
    def test_parse_bool(self, value, expected):
        """Test boolean parsing is case-insensitive."""
        assert _parse_bool(value) is expected
