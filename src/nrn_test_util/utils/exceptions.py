"""Custom exception classes for the NRN Test Utility.

All exceptions inherit from NRNTestUtilError to allow catching all custom exceptions.
"""


class NRNTestUtilError(Exception):
    """Base exception for all NRN Test Utility custom exceptions."""

    pass


class ValidationError(NRNTestUtilError):
    """Raised when input data cannot be validated.

    Examples:
        - CSV file without the register number column
        - Empty CSV file
    """

    pass


class ConfigurationError(NRNTestUtilError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid configuration file format
        - Configuration value out of range
    """

    pass


class RegisterNumberRangeError(NRNTestUtilError, ValueError):
    """Raised when a register number cannot be built from the given arguments.

    These are caller errors, not malformed input: a birth date before
    1900-01-01, a sequence number outside 1-998, or a date range whose
    minimum lies after its maximum.

    Attributes:
        argument: Name of the offending argument
    """

    def __init__(self, message: str, argument: str) -> None:
        super().__init__(message)
        self.argument = argument
