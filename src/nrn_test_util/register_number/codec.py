"""Checksum codec for Belgian national register numbers.

A register number has the shape YYMMDD-XXX-CC:

- YYMMDD: birth date with a two-digit year
- XXX: sequence number (001-998), odd for men and even for women
- CC: checksum, 97 - (dividend mod 97)

The dividend is the first nine digits read as an integer. For people born
after 1999 a ``2`` is prepended, which is the only way to tell the 1900s and
2000s apart: validation tries both readings and accepts whichever matches.
"""

import re
from datetime import date, datetime
from typing import Any, Optional

from nrn_test_util.utils.exceptions import RegisterNumberRangeError


REGISTER_NUMBER_LENGTH = 11
BIRTH_DATE_LENGTH = 6
CHECKSUM_OFFSET = 9
DIVISOR = 97

SEQUENCE_NUMBER_MIN = 1
SEQUENCE_NUMBER_MAX = 998

MIN_BIRTH_DATE = date(1900, 1, 1)

CENTURY_1900 = 1900
CENTURY_2000 = 2000

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize(candidate: Any) -> str:
    """Strip every character that is not an ASCII digit.

    Args:
        candidate: Raw input, formatted or not

    Returns:
        The digits only, or an empty string for non-string input
    """
    if not isinstance(candidate, str):
        return ""
    return _NON_DIGITS.sub("", candidate)


def compute_checksum(first_nine: str, born_after_1999: bool) -> int:
    """Compute the checksum over the first nine digits.

    Args:
        first_nine: YYMMDD followed by the 3-digit sequence number
        born_after_1999: Use the 10-digit dividend with a leading 2

    Returns:
        Checksum in the range 1-97
    """
    dividend = int(f"2{first_nine}" if born_after_1999 else first_nine)
    return DIVISOR - dividend % DIVISOR


def parse_birth_date(digits: str, century: int) -> Optional[date]:
    """Read YYMMDD as a date in the given century, or None if it does not exist."""
    try:
        return date(century + int(digits[0:2]), int(digits[2:4]), int(digits[4:6]))
    except ValueError:
        return None


def has_valid_birth_date(digits: str) -> bool:
    """Check YYMMDD is a calendar date in either the 1900s or the 2000s.

    Century is only decided by the checksum, so February 29th of year 00
    passes here (2000 is a leap year, 1900 is not).
    """
    if not digits[0:BIRTH_DATE_LENGTH].isdigit():
        return False
    return (
        parse_birth_date(digits, CENTURY_1900) is not None
        or parse_birth_date(digits, CENTURY_2000) is not None
    )


def match_century(digits: str) -> Optional[int]:
    """Resolve the birth century of a normalized register number.

    Args:
        digits: Exactly 11 ASCII digits

    Returns:
        1900 if the pre-2000 checksum matches, 2000 if the post-1999 checksum
        matches, None when neither does
    """
    first_nine = digits[:CHECKSUM_OFFSET]
    actual = int(digits[CHECKSUM_OFFSET:])

    if compute_checksum(first_nine, born_after_1999=False) == actual:
        return CENTURY_1900
    if compute_checksum(first_nine, born_after_1999=True) == actual:
        return CENTURY_2000
    return None


def is_valid(candidate: Any) -> bool:
    """Validate a Belgian national register number.

    Formatted input such as ``90.02.27-421.91`` is accepted since all
    non-digit characters are dropped first. Never raises.

    Args:
        candidate: Register number to validate, formatted or not

    Returns:
        True if the birth date part is a real date and the checksum matches
        either the pre-2000 or the post-1999 reading

    Example:
        >>> is_valid("90022742191")
        True
        >>> is_valid("90.02.27-421.91")
        True
        >>> is_valid("90022742192")
        False
    """
    digits = normalize(candidate)

    if len(digits) != REGISTER_NUMBER_LENGTH:
        return False

    if not has_valid_birth_date(digits):
        return False

    return match_century(digits) is not None


def encode(birth_date: date, sequence_number: int) -> str:
    """Build a register number from a birth date and sequence number.

    Args:
        birth_date: Birth date, on or after 1900-01-01. A datetime is reduced
                    to its date.
        sequence_number: Sequence number between 1 and 998 (inclusive).
                         Odd for men, even for women.

    Returns:
        Unformatted 11-digit register number

    Raises:
        RegisterNumberRangeError: If the birth date is before 1900-01-01 or
            the sequence number is outside 1-998

    Example:
        >>> encode(date(1990, 2, 27), 421)
        '90022742191'
    """
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()

    if birth_date < MIN_BIRTH_DATE:
        raise RegisterNumberRangeError(
            f"Birth date can't be before {MIN_BIRTH_DATE.isoformat()}, "
            f"got {birth_date.isoformat()}",
            argument="birth_date",
        )

    if not SEQUENCE_NUMBER_MIN <= sequence_number <= SEQUENCE_NUMBER_MAX:
        raise RegisterNumberRangeError(
            f"Sequence number should be (inclusive) between {SEQUENCE_NUMBER_MIN} "
            f"and {SEQUENCE_NUMBER_MAX}, got {sequence_number}",
            argument="sequence_number",
        )

    birth_date_part = birth_date.strftime("%y%m%d")
    sequence_part = f"{sequence_number:03d}"
    checksum = compute_checksum(
        f"{birth_date_part}{sequence_part}",
        born_after_1999=birth_date.year >= CENTURY_2000,
    )

    return f"{birth_date_part}{sequence_part}{checksum:02d}"
