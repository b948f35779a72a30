"""Logging configuration and logger factory for the NRN Test Utility.

This module provides centralized logging configuration with support for:
- Console and file handlers with different log levels
- Log rotation to prevent unbounded file growth
- Register number redaction via custom formatters
- Environment variable configuration
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .formatters import PIIRedactingFormatter

if TYPE_CHECKING:
    from ..config.schema import OperationLoggingConfig

# Constants
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = Path("logs") / "nrn-test-util.log"
MAX_LOG_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

VALID_LEVELS = "DEBUG, INFO, WARNING, ERROR, CRITICAL"

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []

# Operation-specific logger names
OPERATION_LOGGERS = {
    "generate": "nrn_test_util.generate",
    "validate": "nrn_test_util.validate",
    "csv": "nrn_test_util.csv",
}

logger = logging.getLogger(__name__)


def _numeric_level(level: str, what: str = "log level") -> int:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid {what}: {level}. Must be one of: {VALID_LEVELS}")
    return numeric_level


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    redact_pii: bool = False,
) -> None:
    """Configure logging for the NRN Test Utility.

    Sets up both console and file handlers with appropriate log levels and formatting.
    This function is idempotent - it can be called multiple times safely.

    Args:
        level: Log level for console output (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               File handler always uses DEBUG level.
        log_file: Path to log file. If None, uses DEFAULT_LOG_FILE or
                 NRN_TEST_LOG_FILE environment variable if set.
        redact_pii: Whether to redact register numbers from logs

    Raises:
        ValueError: If invalid log level is provided
        RuntimeError: If log directory cannot be created

    Example:
        >>> configure_logging(level="DEBUG", redact_pii=True)
        >>> configure_logging(level="INFO", log_file=Path("custom/app.log"))
    """
    numeric_level = _numeric_level(level)

    if log_file is None:
        env_log_file = os.environ.get("NRN_TEST_LOG_FILE")
        log_file = Path(env_log_file) if env_log_file else DEFAULT_LOG_FILE

    log_dir = log_file.parent
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(
            f"Failed to create log directory: {log_dir}. "
            f"Ensure write permissions are available. Error: {e}"
        ) from e

    root_logger = logging.getLogger()

    # Reconfiguring: drop our previous handlers to avoid duplicates
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        PIIRedactingFormatter(fmt=DEFAULT_LOG_FORMAT, redact_pii=redact_pii)
    )
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    try:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=MAX_LOG_FILE_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PIIRedactingFormatter(fmt=DEFAULT_LOG_FORMAT, redact_pii=redact_pii)
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)
    except OSError as e:
        root_logger.warning(
            f"Failed to create file handler for {log_file}: {e}. "
            f"Logging to console only."
        )


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for the specified module.

    Args:
        module_name: Name of the module, typically __name__

    Returns:
        Logger instance for the module
    """
    return logging.getLogger(module_name)


def get_operation_logger(operation: str) -> logging.Logger:
    """Get a logger for a specific operation type.

    Operation loggers enable per-operation log level configuration.
    Supported operations: generate, validate, csv.

    Args:
        operation: Operation type

    Returns:
        Logger instance for the operation

    Raises:
        ValueError: If operation is not a recognized type

    Example:
        >>> logger = get_operation_logger("generate")
        >>> logger.info("Generated 10 register numbers")
    """
    if operation not in OPERATION_LOGGERS:
        raise ValueError(
            f"Unknown operation: {operation}. "
            f"Must be one of: {', '.join(OPERATION_LOGGERS.keys())}"
        )
    return logging.getLogger(OPERATION_LOGGERS[operation])


def configure_operation_logging(
    generate_log_level: str = "INFO",
    validate_log_level: str = "INFO",
    csv_log_level: str = "INFO",
) -> None:
    """Configure logging levels for each operation type.

    Args:
        generate_log_level: Log level for number generation
        validate_log_level: Log level for validation and inspection
        csv_log_level: Log level for CSV batch processing

    Raises:
        ValueError: If any log level is invalid
    """
    levels = {
        "generate": generate_log_level,
        "validate": validate_log_level,
        "csv": csv_log_level,
    }

    for operation, level in levels.items():
        numeric_level = _numeric_level(level, what=f"log level for {operation}")
        logger_name = OPERATION_LOGGERS[operation]
        logging.getLogger(logger_name).setLevel(numeric_level)
        logger.debug("Set %s logger level to %s", logger_name, level.upper())


def configure_operation_logging_from_config(config: "OperationLoggingConfig") -> None:
    """Configure operation logging from an OperationLoggingConfig object."""
    configure_operation_logging(
        generate_log_level=config.generate_log_level,
        validate_log_level=config.validate_log_level,
        csv_log_level=config.csv_log_level,
    )


def set_operation_log_level(operation: str, level: str) -> None:
    """Set log level for a specific operation at runtime.

    Args:
        operation: Operation type (generate, validate, csv)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Raises:
        ValueError: If operation or level is invalid
    """
    operation_logger = get_operation_logger(operation)
    operation_logger.setLevel(_numeric_level(level))
    logger.debug("Set %s logger level to %s", operation_logger.name, level.upper())
