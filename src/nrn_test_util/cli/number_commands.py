"""Single register number CLI commands.

This module provides the ``validate``, ``inspect`` and ``format`` commands
that work on register numbers given on the command line.
"""

import json as json_lib
import sys

import click

from nrn_test_util.csv_parser.validator import describe_invalid
from nrn_test_util.logging_audit import get_operation_logger
from nrn_test_util.register_number.codec import REGISTER_NUMBER_LENGTH, is_valid, normalize
from nrn_test_util.register_number.extraction import (
    decode,
    to_formatted,
    try_extract_biological_sex,
    try_extract_birth_date,
)

logger = get_operation_logger("validate")


@click.command("validate")
@click.argument("numbers", nargs=-1, required=True)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
def validate_numbers(numbers: tuple[str, ...], json_output: bool) -> None:
    """Validate one or more register numbers.

    Accepts plain (90022742191) and formatted (90.02.27-421.91) numbers.
    Exits with code 0 when every number is valid, code 1 otherwise.

    Examples:

        nrn-test-util validate 90022742191

        nrn-test-util validate 90.02.27-421.91 90022742192 --json
    """
    results = []
    for number in numbers:
        valid = is_valid(number)
        reason = None if valid else describe_invalid(number)[0]
        results.append({"number": number, "valid": valid, "reason": reason})
        logger.debug(f"Validated register number: valid={valid}")

    if json_output:
        click.echo(json_lib.dumps(results, indent=2))
    else:
        for result in results:
            if result["valid"]:
                click.secho(f"✓ {result['number']}: valid", fg="green")
            else:
                click.secho(f"✗ {result['number']}: {result['reason']}", fg="red")

    invalid_count = sum(1 for r in results if not r["valid"])
    logger.info(f"Validated {len(results)} register number(s), {invalid_count} invalid")
    if invalid_count:
        sys.exit(1)


@click.command("inspect")
@click.argument("number")
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
def inspect_number(number: str, json_output: bool) -> None:
    """Show the fields encoded in a register number.

    Invalid numbers are still inspected on a best-effort basis: the sex
    comes from the sequence number and the birth century is guessed from the
    checksum. A valid number whose date does not exist in the century its
    checksum selects has no birth date.

    Examples:

        nrn-test-util inspect 90.02.27-421.91

        nrn-test-util inspect 00010100105 --json
    """
    digits = normalize(number)
    if len(digits) != REGISTER_NUMBER_LENGTH:
        click.secho(
            f"Error: expected {REGISTER_NUMBER_LENGTH} digits, found {len(digits)}",
            fg="red",
            err=True,
        )
        sys.exit(1)

    details = decode(digits)
    if details is not None:
        info = details.to_dict()
        info["valid"] = True
    else:
        has_birth_date, birth_date = try_extract_birth_date(digits)
        _, sex = try_extract_biological_sex(digits)
        info = {
            "number": digits,
            "formatted": to_formatted(digits),
            "birth_date": birth_date.isoformat() if has_birth_date else None,
            "sequence_number": int(digits[6:9]),
            "biological_sex": sex.value if sex else None,
            "checksum": int(digits[9:]),
            "valid": is_valid(digits),
        }

    if json_output:
        click.echo(json_lib.dumps(info, indent=2))
        return

    status = click.style("valid", fg="green") if info["valid"] else click.style(
        "invalid (fields below are best effort)", fg="yellow"
    )
    click.echo(f"Register number: {info['formatted']}")
    click.echo(f"  Status:          {status}")
    click.echo(f"  Birth date:      {info['birth_date'] or 'not a valid date'}")
    click.echo(f"  Sequence number: {info['sequence_number']:03d}")
    click.echo(f"  Sex:             {info['biological_sex']}")
    click.echo(f"  Checksum:        {info['checksum']:02d}")


@click.command("format")
@click.argument("numbers", nargs=-1, required=True)
def format_numbers(numbers: tuple[str, ...]) -> None:
    """Print register numbers as YY.MM.DD-XXX.CC.

    Values that are not 11 characters long are printed unchanged. No
    validation is performed.

    Example:

        nrn-test-util format 90022742191
    """
    for number in numbers:
        click.echo(to_formatted(number))
