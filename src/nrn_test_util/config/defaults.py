"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Default configuration dictionary
# This is used as a fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "generation": {
        # Earliest birth date the register supports
        "min_birth_date": "1900-01-01",
        # No upper bound: today's date is used
        "max_birth_date": None,
        # Random output unless a seed is configured
        "seed": None,
        "count": 1,
        "formatted": False,
    },
    "csv": {
        "column": "national_register_number",
        "delimiter": ",",
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/nrn-test-util.log",
        # Do not redact register numbers by default (user must opt-in)
        "redact_pii": False,
    },
    "operation_logging": {
        "generate_log_level": "INFO",
        "validate_log_level": "INFO",
        "csv_log_level": "INFO",
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
