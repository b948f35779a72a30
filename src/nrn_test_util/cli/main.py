"""Main CLI entry point for the NRN Test Utility.

This module provides the main Click command group for the nrn-test-util CLI.
"""

from pathlib import Path
from typing import Optional

import click

from nrn_test_util import __version__
from nrn_test_util.cli.csv_commands import csv
from nrn_test_util.cli.generate_commands import generate
from nrn_test_util.cli.number_commands import format_numbers, inspect_number, validate_numbers
from nrn_test_util.config import (
    get_csv_config,
    get_generation_config,
    get_logging_config,
    get_operation_logging_config,
    load_config,
)
from nrn_test_util.logging_audit import configure_logging, configure_operation_logging_from_config
from nrn_test_util.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="nrn-test-util")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.option(
    "--redact-pii",
    is_flag=True,
    help="Redact national register numbers from logs",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
    redact_pii: bool,
) -> None:
    """NRN Test Utility - Belgian national register numbers for test data.

    Generates, validates, inspects and formats national register numbers
    (YY.MM.DD-XXX.CC).

    Common usage:

        # Generate five random register numbers
        nrn-test-util generate --count 5

        # Validate a number
        nrn-test-util validate 90.02.27-421.91

        # Show birth date and sex of a number
        nrn-test-util inspect 90022742191

        # Validate a CSV file of numbers
        nrn-test-util csv validate numbers.csv

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        ctx.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["redact_pii"] = redact_pii
    ctx.obj["log_file"] = log_file

    # Precedence: CLI flags > config file > defaults
    logging_config = get_logging_config(config_obj)
    log_level = "DEBUG" if verbose else logging_config.level
    log_file_path = log_file if log_file else logging_config.log_file
    redact_pii_setting = redact_pii if redact_pii else logging_config.redact_pii

    configure_logging(
        level=log_level, log_file=log_file_path, redact_pii=redact_pii_setting
    )
    if not verbose:
        configure_operation_logging_from_config(get_operation_logging_config(config_obj))


cli.add_command(generate)
cli.add_command(validate_numbers)
cli.add_command(inspect_number)
cli.add_command(format_numbers)
cli.add_command(csv)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        nrn-test-util config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)
    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)

    generation = get_generation_config(config_obj)
    csv_config = get_csv_config(config_obj)
    logging_config = get_logging_config(config_obj)
    click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
    click.echo(f"\nConfiguration file: {config_file}")

    click.echo("\nGeneration:")
    click.echo(f"  Min birth date: {generation.min_birth_date}")
    click.echo(f"  Max birth date: {generation.max_birth_date or 'today'}")
    click.echo(f"  Seed:           {generation.seed if generation.seed is not None else 'random'}")
    click.echo(f"  Count:          {generation.count}")
    click.echo(f"  Formatted:      {generation.formatted}")

    click.echo("\nCSV:")
    click.echo(f"  Column:         {csv_config.column}")
    click.echo(f"  Delimiter:      {csv_config.delimiter!r}")

    click.echo("\nLogging:")
    click.echo(f"  Level:          {logging_config.level}")
    click.echo(f"  Log file:       {logging_config.log_file}")
    click.echo(f"  Redact PII:     {logging_config.redact_pii}")


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"nrn-test-util version {__version__}")


if __name__ == "__main__":
    cli()
