"""Batch validation for register numbers loaded from CSV.

This module validates every row with actionable messages, collecting all
issues before reporting so users can fix multiple problems at once.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import pandas as pd

from nrn_test_util.logging_audit import get_operation_logger
from nrn_test_util.register_number.codec import (
    REGISTER_NUMBER_LENGTH,
    has_valid_birth_date,
    is_valid,
    normalize,
)


logger = get_operation_logger("csv")

# Issues listed per section in the text report
REPORT_ISSUE_LIMIT = 20


class IssueSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """Individual validation issue with context and suggested fix.

    Attributes:
        row_number: 1-indexed row number (including header) for user readability
        column_name: Name of the column with the issue
        severity: ERROR or WARNING level
        message: Description of what's wrong
        suggestion: Actionable guidance on how to fix the issue
    """

    row_number: int
    column_name: str
    severity: IssueSeverity
    message: str
    suggestion: str

    def to_dict(self) -> dict:
        return {
            "row_number": self.row_number,
            "column_name": self.column_name,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass
class BatchValidationResult:
    """Batch validation results with statistics and issues.

    Attributes:
        total_rows: Total number of data rows processed
        valid_rows: Number of rows with no errors (warnings OK)
        error_rows: Number of rows with at least one error
        warning_rows: Number of rows with at least one warning
        duplicate_numbers: Register numbers that appear multiple times
        all_errors: List of all error-level issues
        all_warnings: List of all warning-level issues
    """

    total_rows: int
    valid_rows: int
    error_rows: int
    warning_rows: int
    duplicate_numbers: list[str] = field(default_factory=list)
    all_errors: list[ValidationIssue] = field(default_factory=list)
    all_warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if any error-level issues exist."""
        return len(self.all_errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if any warning-level issues exist."""
        return len(self.all_warnings) > 0

    def format_report(self) -> str:
        """Format validation results as human-readable report.

        Returns:
            Multi-line string with validation summary and detailed issues
        """
        lines = []
        lines.append("=" * 60)
        lines.append("REGISTER NUMBER VALIDATION REPORT")
        lines.append("=" * 60)
        lines.append("")

        lines.append("SUMMARY:")
        lines.append(f"  Total rows: {self.total_rows}")
        lines.append(f"  Valid rows: {self.valid_rows}")
        lines.append(f"  Rows with errors: {self.error_rows}")
        lines.append(f"  Rows with warnings: {self.warning_rows}")
        lines.append("")

        if self.duplicate_numbers:
            lines.append("BATCH STATISTICS:")
            lines.append(
                f"  Duplicate register numbers: {len(self.duplicate_numbers)}"
            )
            lines.append("")

        for title, issues in (("ERRORS", self.all_errors), ("WARNINGS", self.all_warnings)):
            if not issues:
                continue
            lines.append(f"{title} ({len(issues)}):")
            for issue in issues[:REPORT_ISSUE_LIMIT]:
                lines.append(
                    f"  Row {issue.row_number} [{issue.column_name}]: {issue.message}"
                )
                lines.append(f"    → {issue.suggestion}")
            if len(issues) > REPORT_ISSUE_LIMIT:
                lines.append(
                    f"  ... and {len(issues) - REPORT_ISSUE_LIMIT} more {title.lower()}"
                )
            lines.append("")

        lines.append("=" * 60)
        if not self.has_errors and not self.has_warnings:
            lines.append("RESULT: ✓ All validations passed")
        elif not self.has_errors:
            lines.append("RESULT: ✓ Validation passed with warnings")
        else:
            lines.append("RESULT: ✗ Validation failed - please fix errors above")
        lines.append("=" * 60)

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Export validation results as structured dictionary for JSON serialization."""
        return {
            "total_rows": self.total_rows,
            "valid_rows": self.valid_rows,
            "error_rows": self.error_rows,
            "warning_rows": self.warning_rows,
            "duplicate_numbers": self.duplicate_numbers,
            "errors": [e.to_dict() for e in self.all_errors],
            "warnings": [w.to_dict() for w in self.all_warnings],
        }


def describe_invalid(candidate: str) -> tuple[str, str]:
    """Explain why a register number is invalid.

    Args:
        candidate: Value rejected by is_valid

    Returns:
        Tuple of (message, suggestion)
    """
    digits = normalize(candidate)

    if len(digits) != REGISTER_NUMBER_LENGTH:
        return (
            f"Expected {REGISTER_NUMBER_LENGTH} digits, found {len(digits)}: {candidate}",
            "Use format YYMMDDXXXCC or YY.MM.DD-XXX.CC",
        )
    if not has_valid_birth_date(digits):
        return (
            f"Birth date part {digits[:6]} is not a valid YYMMDD date: {candidate}",
            "Check the month (01-12) and day of the birth date",
        )
    return (
        f"Checksum {digits[9:]} does not match: {candidate}",
        "Check for typos; the last two digits must be 97 - (first 9 digits mod 97)",
    )


def validate_register_numbers(df: pd.DataFrame, column: str) -> BatchValidationResult:
    """Validate every register number in a DataFrame column.

    Collects all errors and warnings before returning (not fail-fast):

    - ERROR: empty value, or a value rejected by is_valid
    - WARNING: valid but not in the plain 11-digit form
    - WARNING: register number already seen on an earlier row

    Args:
        df: DataFrame from read_register_numbers
        column: Column holding the register numbers

    Returns:
        BatchValidationResult containing all errors, warnings, and statistics

    Raises:
        ValueError: If the column is missing
    """
    logger.info("Validation started")

    if column not in df.columns:
        raise ValueError(f"DataFrame missing required column: {column}")

    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    first_seen: dict[str, int] = {}
    occurrences: dict[str, int] = defaultdict(int)

    for position, raw in enumerate(df[column].tolist()):
        row_num = position + 2  # +2 for 1-indexed + header row
        value = "" if pd.isna(raw) else str(raw).strip()

        if value == "":
            errors.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=column,
                    severity=IssueSeverity.ERROR,
                    message="Missing register number",
                    suggestion="Fill in the register number or remove the row",
                )
            )
            continue

        if not is_valid(value):
            message, suggestion = describe_invalid(value)
            errors.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=column,
                    severity=IssueSeverity.ERROR,
                    message=message,
                    suggestion=suggestion,
                )
            )
            continue

        digits = normalize(value)
        if value != digits:
            warnings.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=column,
                    severity=IssueSeverity.WARNING,
                    message=f"Register number is not in plain 11-digit form: {value}",
                    suggestion=f"Store it as {digits}",
                )
            )

        occurrences[digits] += 1
        if digits in first_seen:
            warnings.append(
                ValidationIssue(
                    row_number=row_num,
                    column_name=column,
                    severity=IssueSeverity.WARNING,
                    message=f"Duplicate register number (first seen on row {first_seen[digits]})",
                    suggestion="Remove the duplicate row or assign a different number",
                )
            )
        else:
            first_seen[digits] = row_num

    total_rows = len(df)
    error_rows = len({e.row_number for e in errors})
    result = BatchValidationResult(
        total_rows=total_rows,
        valid_rows=total_rows - error_rows,
        error_rows=error_rows,
        warning_rows=len({w.row_number for w in warnings}),
        duplicate_numbers=[n for n, c in occurrences.items() if c > 1],
        all_errors=errors,
        all_warnings=warnings,
    )

    logger.info(
        f"Validation complete: {len(errors)} errors, {len(warnings)} warnings"
    )
    return result


def export_invalid_rows(
    df: pd.DataFrame, result: BatchValidationResult, output_path: Path
) -> None:
    """Export rows with validation errors to separate CSV file.

    Args:
        df: Original DataFrame
        result: BatchValidationResult containing error information
        output_path: Path where error CSV should be written

    Raises:
        ValueError: If no errors exist in the result
        FileNotFoundError: If output_path parent directory doesn't exist
    """
    logger.info(f"Exporting invalid rows to {output_path}")

    if not result.has_errors:
        raise ValueError("No validation errors to export")

    if not output_path.parent.exists():
        raise FileNotFoundError(
            f"Output directory does not exist: {output_path.parent}"
        )

    messages: dict[int, list[str]] = defaultdict(list)
    for error in result.all_errors:
        messages[error.row_number].append(error.message)

    row_numbers = sorted(messages)
    error_df = df.iloc[[r - 2 for r in row_numbers]].copy()
    error_df["errors"] = ["; ".join(messages[r]) for r in row_numbers]

    error_df.to_csv(output_path, index=False, encoding="utf-8")
    logger.info(f"Exported {len(error_df)} invalid rows to {output_path}")
