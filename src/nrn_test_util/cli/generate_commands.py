"""Register number generation CLI command.

This module provides the ``generate`` command, which synthesizes valid
register numbers for test data and prints them or writes them to CSV.
"""

import random
import sys
import time
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click

from nrn_test_util.config import GenerationConfig, get_generation_config
from nrn_test_util.csv_parser.parser import write_register_numbers
from nrn_test_util.logging_audit import get_operation_logger, log_audit_event
from nrn_test_util.models.register_number import BiologicalSex
from nrn_test_util.register_number.extraction import to_formatted
from nrn_test_util.register_number.generator import (
    generate_register_number,
    generate_register_numbers,
)
from nrn_test_util.utils.exceptions import RegisterNumberRangeError

logger = get_operation_logger("generate")

DATE_FORMATS = ["%Y-%m-%d"]


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _generation_config(ctx: click.Context) -> GenerationConfig:
    if ctx.obj and "config" in ctx.obj:
        return get_generation_config(ctx.obj["config"])
    return GenerationConfig()


@click.command("generate")
@click.option(
    "--birth-date",
    type=click.DateTime(formats=DATE_FORMATS),
    help="Fixed birth date (YYYY-MM-DD, on or after 1900-01-01)",
)
@click.option(
    "--sequence-number",
    type=int,
    help="Fixed sequence number (1-998); odd for male, even for female",
)
@click.option(
    "--sex",
    type=click.Choice([s.value for s in BiologicalSex], case_sensitive=False),
    help="Biological sex to encode",
)
@click.option(
    "--min-date",
    type=click.DateTime(formats=DATE_FORMATS),
    help="Earliest random birth date (default: from config, 1900-01-01)",
)
@click.option(
    "--max-date",
    type=click.DateTime(formats=DATE_FORMATS),
    help="Latest random birth date (default: today)",
)
@click.option("--count", type=click.IntRange(min=1), help="How many numbers to generate")
@click.option("--seed", type=int, help="Seed for reproducible generation")
@click.option("--formatted", is_flag=True, help="Output as YY.MM.DD-XXX.CC")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write numbers with decoded fields to this CSV file",
)
@click.pass_context
def generate(
    ctx: click.Context,
    birth_date: Optional[datetime],
    sequence_number: Optional[int],
    sex: Optional[str],
    min_date: Optional[datetime],
    max_date: Optional[datetime],
    count: Optional[int],
    seed: Optional[int],
    formatted: bool,
    output: Optional[Path],
) -> None:
    """Generate valid Belgian national register numbers.

    Any field that is not given is drawn at random: birth dates uniformly
    between the minimum and maximum date, sequence numbers between 1 and 998.

    Examples:

        # One random register number
        nrn-test-util generate

        # Ten women born in the 2000s, reproducible
        nrn-test-util generate --count 10 --sex female --min-date 2000-01-01 --seed 42

        # A specific person
        nrn-test-util generate --birth-date 1990-02-27 --sequence-number 421

        # Write to CSV with decoded columns
        nrn-test-util generate --count 100 --output numbers.csv
    """
    config = _generation_config(ctx)
    seed = seed if seed is not None else config.seed
    formatted = formatted or config.formatted
    fixed_birth_date = _as_date(birth_date)
    biological_sex = BiologicalSex(sex.lower()) if sex else None

    if sequence_number is not None and biological_sex is not None:
        raise click.UsageError("--sequence-number and --sex cannot be combined")
    if sequence_number is not None and count not in (None, 1):
        raise click.UsageError("--sequence-number only generates a single number")
    if fixed_birth_date is not None and (min_date is not None or max_date is not None):
        raise click.UsageError("--birth-date cannot be combined with --min-date or --max-date")
    if count is None:
        count = 1 if sequence_number is not None else config.count

    min_birth_date = _as_date(min_date)
    max_birth_date = _as_date(max_date)
    if fixed_birth_date is None:
        min_birth_date = min_birth_date or config.min_birth_date
        max_birth_date = max_birth_date or config.max_birth_date

    start = time.time()
    try:
        if sequence_number is not None:
            rng = random.Random(seed) if seed is not None else None
            numbers = [
                generate_register_number(
                    birth_date=fixed_birth_date,
                    sequence_number=sequence_number,
                    min_date=min_birth_date,
                    max_date=max_birth_date,
                    rng=rng,
                )
            ]
        else:
            numbers = generate_register_numbers(
                count,
                birth_date=fixed_birth_date,
                sex=biological_sex,
                min_date=min_birth_date,
                max_date=max_birth_date,
                seed=seed,
            )

        if output:
            write_register_numbers(numbers, output, formatted=formatted)
            click.secho(f"Wrote {len(numbers)} register number(s) to {output}", fg="green")
        else:
            for number in numbers:
                click.echo(to_formatted(number) if formatted else number)

        log_audit_event(
            "NUMBERS_GENERATED",
            {
                "status": "success",
                "record_count": len(numbers),
                "output_file": output or "stdout",
                "seed": seed,
                "duration": time.time() - start,
            },
        )

    except RegisterNumberRangeError as e:
        click.secho(f"Invalid {e.argument.replace('_', ' ')}: {e}", fg="red", err=True)
        logger.error(f"Generation rejected: {e}")
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        logger.error(f"Generation failed: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        logger.error(f"Output path not found: {e}")
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg="red", err=True)
        logger.exception("Unexpected error during generation")
        sys.exit(1)
