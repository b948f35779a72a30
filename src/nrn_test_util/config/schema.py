"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Earliest birth date a register number can encode
REGISTER_MIN_BIRTH_DATE = date(1900, 1, 1)


def _validate_level(v: str) -> str:
    v_upper = v.upper()
    if v_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )
    return v_upper


class GenerationConfig(BaseModel):
    """Configuration for random register number generation.

    Attributes:
        min_birth_date: Earliest random birth date
        max_birth_date: Latest random birth date (None means today)
        seed: Seed for reproducible output
        count: Default number of register numbers per run
        formatted: Print numbers as YY.MM.DD-XXX.CC

    Example:
        >>> generation = GenerationConfig(min_birth_date=date(2000, 1, 1), seed=42)
    """

    min_birth_date: date = Field(
        default=REGISTER_MIN_BIRTH_DATE,
        description="Earliest random birth date"
    )
    max_birth_date: Optional[date] = Field(
        default=None,
        description="Latest random birth date, today when unset"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for reproducible generation"
    )
    count: int = Field(
        default=1,
        ge=1,
        le=100_000,
        description="Register numbers generated per run"
    )
    formatted: bool = Field(
        default=False,
        description="Output YY.MM.DD-XXX.CC instead of 11 digits"
    )

    @field_validator("min_birth_date")
    @classmethod
    def validate_min_birth_date(cls, v: date) -> date:
        """Reject dates the register cannot encode.

        Raises:
            ValueError: If the date is before 1900-01-01
        """
        if v < REGISTER_MIN_BIRTH_DATE:
            raise ValueError(
                f"min_birth_date can't be before {REGISTER_MIN_BIRTH_DATE.isoformat()}"
            )
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> "GenerationConfig":
        """Validate min_birth_date is not after max_birth_date.

        Raises:
            ValueError: If min_birth_date > max_birth_date
        """
        if self.max_birth_date is not None and self.min_birth_date > self.max_birth_date:
            raise ValueError(
                f"min_birth_date ({self.min_birth_date}) cannot be after "
                f"max_birth_date ({self.max_birth_date}). "
                f"Fix: Set min_birth_date <= max_birth_date."
            )
        return self


class CsvConfig(BaseModel):
    """Configuration for CSV batch files.

    Attributes:
        column: Column holding register numbers
        delimiter: Field delimiter
    """

    column: str = Field(
        default="national_register_number",
        min_length=1,
        description="Column holding register numbers"
    )
    delimiter: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="CSV field delimiter"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_pii: Whether to redact register numbers from logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/nrn-test-util.log"),
        description="Log file path"
    )
    redact_pii: bool = Field(
        default=False,
        description="Redact register numbers from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level and return it uppercased."""
        return _validate_level(v)


class OperationLoggingConfig(BaseModel):
    """Per-operation logging configuration.

    Attributes:
        generate_log_level: Log level for number generation
        validate_log_level: Log level for validation and inspection
        csv_log_level: Log level for CSV batch processing
    """

    generate_log_level: str = "INFO"
    validate_log_level: str = "INFO"
    csv_log_level: str = "INFO"

    @field_validator("generate_log_level", "validate_log_level", "csv_log_level")
    @classmethod
    def validate_operation_log_level(cls, v: str) -> str:
        """Validate operation-specific log level and return it uppercased."""
        return _validate_level(v)


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        generation: Random generation configuration
        csv: CSV batch file configuration
        logging: Logging configuration
        operation_logging: Per-operation logging configuration

    Example:
        >>> config = Config(generation=GenerationConfig(seed=42))
        >>> config.generation.seed
        42
        >>> config.csv.column
        'national_register_number'
    """

    generation: GenerationConfig = GenerationConfig()
    csv: CsvConfig = CsvConfig()
    logging: LoggingConfig = LoggingConfig()
    operation_logging: OperationLoggingConfig = OperationLoggingConfig()
