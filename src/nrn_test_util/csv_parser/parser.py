"""CSV reading and writing for register number batches.

This module loads candidate register numbers from CSV files for batch
validation, and writes generated numbers out together with their decoded
fields.
"""

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from nrn_test_util.register_number.extraction import decode, to_formatted
from nrn_test_util.utils.exceptions import ValidationError


logger = logging.getLogger(__name__)

DEFAULT_COLUMN = "national_register_number"

# Columns written next to each generated number
GENERATED_COLUMNS = [
    DEFAULT_COLUMN,
    "birth_date",
    "biological_sex",
    "sequence_number",
]


def read_register_numbers(
    file_path: Path, column: str = DEFAULT_COLUMN, delimiter: str = ","
) -> pd.DataFrame:
    """Load register numbers from a CSV file.

    All columns are read as strings so leading zeros survive, and empty
    cells stay empty strings instead of NaN.

    Args:
        file_path: Path to CSV file
        column: Column holding the register numbers
        delimiter: Field delimiter

    Returns:
        DataFrame with every column of the file

    Raises:
        FileNotFoundError: If CSV file does not exist
        ValidationError: If the file cannot be parsed, is empty or lacks the column
    """
    logger.info(f"Loading CSV from {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    try:
        df = pd.read_csv(
            file_path,
            encoding="utf-8",
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError as e:
        raise ValidationError(f"CSV file is empty: {file_path}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Failed to read CSV file {file_path}. Ensure file is valid CSV with UTF-8 encoding. Error: {e}"
        ) from e

    if column not in df.columns:
        raise ValidationError(
            f"Missing required column '{column}'. "
            f"Found columns: {', '.join(map(str, df.columns)) or 'none'}"
        )

    if df.empty:
        raise ValidationError(f"CSV file has no data rows: {file_path}")

    logger.info(f"Loaded {len(df)} row(s) from {file_path}")
    return df


def write_register_numbers(
    numbers: Iterable[str], output_path: Path, formatted: bool = False
) -> pd.DataFrame:
    """Write generated register numbers with their decoded fields.

    Args:
        numbers: Valid, unformatted register numbers
        output_path: Destination CSV file
        formatted: Write numbers as YY.MM.DD-XXX.CC

    Returns:
        The DataFrame that was written

    Raises:
        ValueError: If one of the numbers is not valid
        FileNotFoundError: If output_path parent directory doesn't exist
    """
    if not output_path.parent.exists():
        raise FileNotFoundError(
            f"Output directory does not exist: {output_path.parent}"
        )

    rows = []
    for number in numbers:
        details = decode(number)
        if details is None:
            raise ValueError(f"Refusing to export invalid register number: {number}")
        rows.append(
            {
                DEFAULT_COLUMN: to_formatted(details.number) if formatted else details.number,
                "birth_date": details.birth_date.isoformat(),
                "biological_sex": details.biological_sex.value,
                "sequence_number": details.sequence_number,
            }
        )

    df = pd.DataFrame(rows, columns=GENERATED_COLUMNS)
    df.to_csv(output_path, index=False, encoding="utf-8")
    logger.info(f"Wrote {len(df)} register number(s) to {output_path}")
    return df
