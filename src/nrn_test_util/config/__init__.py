"""Config module.

This module provides configuration management functionality.
"""

from nrn_test_util.config.manager import (
    get_csv_config,
    get_generation_config,
    get_logging_config,
    get_operation_logging_config,
    load_config,
)
from nrn_test_util.config.schema import (
    Config,
    CsvConfig,
    GenerationConfig,
    LoggingConfig,
    OperationLoggingConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_generation_config",
    "get_csv_config",
    "get_logging_config",
    "get_operation_logging_config",
    # Configuration models
    "Config",
    "GenerationConfig",
    "CsvConfig",
    "LoggingConfig",
    "OperationLoggingConfig",
]
