"""CSV-related CLI commands for the NRN Test Utility.

This module provides CLI commands for validating register numbers stored in
CSV files.
"""

import json as json_lib
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click

from nrn_test_util.config import CsvConfig, get_csv_config
from nrn_test_util.csv_parser.parser import read_register_numbers
from nrn_test_util.csv_parser.validator import export_invalid_rows, validate_register_numbers
from nrn_test_util.logging_audit import get_operation_logger, log_audit_event
from nrn_test_util.utils.exceptions import ValidationError

logger = get_operation_logger("csv")


@click.group()
def csv() -> None:
    """CSV file operations and validation commands."""
    pass


@csv.command("validate")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option("--column", help="Column holding register numbers (default: from config)")
@click.option(
    "--export-errors",
    type=click.Path(path_type=Path),
    help="Export invalid rows to CSV file",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.pass_context
def validate_csv_command(
    ctx: click.Context,
    file: Path,
    column: Optional[str],
    export_errors: Optional[Path],
    json_output: bool,
) -> None:
    """Validate every register number in a CSV file.

    Reports invalid numbers (wrong length, impossible birth date, checksum
    mismatch) as errors, and punctuated or duplicate numbers as warnings.

    Exits with code 0 for success (warnings are OK), code 1 for validation errors.

    Examples:

        # Basic validation with color-coded output
        nrn-test-util csv validate numbers.csv

        # Numbers in another column, invalid rows exported
        nrn-test-util csv validate people.csv --column nrn --export-errors invalid.csv

        # Output validation results in JSON format for automation
        nrn-test-util csv validate numbers.csv --json
    """
    csv_config = (
        get_csv_config(ctx.obj["config"]) if ctx.obj and "config" in ctx.obj else CsvConfig()
    )
    column = column or csv_config.column

    # Suppress console logging when JSON output is requested
    root_logger = logging.getLogger()
    console_handler = None
    original_level = None

    if json_output:
        for handler in root_logger.handlers:
            if type(handler) is logging.StreamHandler:
                console_handler = handler
                original_level = handler.level
                handler.setLevel(logging.CRITICAL + 1)
                break

    start = time.time()
    try:
        logger.info(f"Validating CSV file: {file}")
        df = read_register_numbers(file, column=column, delimiter=csv_config.delimiter)
        result = validate_register_numbers(df, column)

        if json_output:
            click.echo(json_lib.dumps(result.to_dict(), indent=2))
        elif result.has_errors:
            click.secho(result.format_report(), fg="red", err=True)
        elif result.has_warnings:
            click.secho(result.format_report(), fg="yellow")
        else:
            click.secho(result.format_report(), fg="green")

        log_audit_event(
            "CSV_VALIDATED",
            {
                "status": "failure" if result.has_errors else "success",
                "input_file": file,
                "record_count": result.total_rows,
                "valid_count": result.valid_rows,
                "error_count": len(result.all_errors),
                "duration": time.time() - start,
            },
        )

        if result.has_errors:
            if export_errors:
                export_invalid_rows(df, result, export_errors)
                if not json_output:
                    click.echo(f"\nInvalid rows exported to: {export_errors}")
            logger.error("Validation failed with errors")
            sys.exit(1)

        logger.info("Validation complete. Exit code: 0")

    except ValidationError as e:
        click.secho(f"Validation Error: {e}", fg="red", err=True)
        logger.error(f"Validation error: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        click.secho(f"File not found: {e}", fg="red", err=True)
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg="red", err=True)
        logger.exception("Unexpected error during CSV validation")
        sys.exit(1)
    finally:
        if json_output and console_handler and original_level is not None:
            console_handler.setLevel(original_level)
