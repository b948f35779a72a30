"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading and management functionality,
including support for JSON configuration files, environment variable overrides,
and configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from nrn_test_util.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from nrn_test_util.config.schema import (
    Config,
    CsvConfig,
    GenerationConfig,
    LoggingConfig,
    OperationLoggingConfig,
)
from nrn_test_util.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "NRN_TEST_"

# (environment suffix, section, field, converter)
_ENV_OVERRIDES = [
    ("MIN_BIRTH_DATE", "generation", "min_birth_date", str),
    ("MAX_BIRTH_DATE", "generation", "max_birth_date", str),
    ("SEED", "generation", "seed", int),
    ("COUNT", "generation", "count", int),
    ("FORMATTED", "generation", "formatted", "bool"),
    ("CSV_COLUMN", "csv", "column", str),
    ("CSV_DELIMITER", "csv", "delimiter", str),
    ("LOG_LEVEL", "logging", "level", str),
    ("LOG_FILE", "logging", "log_file", str),
    ("REDACT_PII", "logging", "redact_pii", "bool"),
    ("OP_LOG_GENERATE_LEVEL", "operation_logging", "generate_log_level", str),
    ("OP_LOG_VALIDATE_LEVEL", "operation_logging", "validate_log_level", str),
    ("OP_LOG_CSV_LEVEL", "operation_logging", "csv_log_level", str),
]


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (NRN_TEST_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> seed = config.generation.seed
    """
    # Load .env file if present in project root
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format. See documentation for details."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Raises:
        ConfigurationError: If JSON is malformed or the file cannot be read
    """
    if not config_path.exists():
        logger.info(
            f"Config file not found: {config_path}. Using default configuration."
        )
        # Deep copy of defaults to avoid mutation
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check file permissions and path"
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file must contain a JSON object: {config_path}\n"
            f"Fix: Wrap the sections in {{ ... }}"
        )

    logger.info(f"Loaded configuration from {config_path}")
    return config_dict


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with NRN_TEST_ prefix.

    Environment variables follow the pattern: NRN_TEST_<FIELD>
    For example: NRN_TEST_SEED, NRN_TEST_LOG_LEVEL, NRN_TEST_OP_LOG_CSV_LEVEL

    Raises:
        ConfigurationError: If a numeric override is not a number
    """
    for suffix, section, field, converter in _ENV_OVERRIDES:
        raw = os.getenv(f"{ENV_PREFIX}{suffix}")
        if not raw:
            continue

        if converter == "bool":
            value: Any = _parse_bool(raw)
        else:
            try:
                value = converter(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {ENV_PREFIX}{suffix}: {raw!r}\n"
                    f"Fix: Provide a whole number"
                ) from e

        section_dict = config_dict.get(section)
        if not isinstance(section_dict, dict):
            section_dict = config_dict[section] = {}
        section_dict[field] = value
        logger.debug(f"Override: {field} from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string (case-insensitive)."""
    return value.lower() in ("true", "1", "yes", "on")


def get_generation_config(config: Config) -> GenerationConfig:
    """Get random generation configuration."""
    return config.generation


def get_csv_config(config: Config) -> CsvConfig:
    """Get CSV batch file configuration."""
    return config.csv


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration.

    Example:
        >>> config = load_config()
        >>> logging_cfg = get_logging_config(config)
        >>> log_level = logging_cfg.level
    """
    return config.logging


def get_operation_logging_config(config: Config) -> OperationLoggingConfig:
    """Get per-operation logging configuration."""
    return config.operation_logging
