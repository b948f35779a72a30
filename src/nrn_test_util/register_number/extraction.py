"""Field extraction and display formatting for register numbers.

The ``try_extract_*`` helpers only check the shape of the input. They do not
validate the checksum, so callers that need certainty must call
:func:`~nrn_test_util.register_number.codec.is_valid` first. :func:`decode`
is the strict variant and only returns fields for valid numbers.
"""

import logging
import re
from datetime import date
from typing import Any, Optional

from nrn_test_util.models.register_number import BiologicalSex, RegisterNumberDetails
from nrn_test_util.register_number.codec import (
    CENTURY_1900,
    CENTURY_2000,
    CHECKSUM_OFFSET,
    REGISTER_NUMBER_LENGTH,
    compute_checksum,
    is_valid,
    match_century,
    normalize,
    parse_birth_date,
)


logger = logging.getLogger(__name__)

# Index of the last digit of the sequence number
SEX_DIGIT_INDEX = 8

_ELEVEN_DIGITS = re.compile(r"^[0-9]{11}$")


def _is_well_shaped(candidate: Any) -> bool:
    return isinstance(candidate, str) and _ELEVEN_DIGITS.match(candidate) is not None


def try_extract_biological_sex(candidate: Any) -> tuple[bool, Optional[BiologicalSex]]:
    """Extract the biological sex from an unformatted register number.

    Only the parity of the digit at index 8 matters, so a number with a
    corrupted checksum still yields its sex.

    Args:
        candidate: 11-digit register number

    Returns:
        (True, sex) on success, (False, None) if the input is not 11 digits
    """
    if not _is_well_shaped(candidate):
        return False, None

    return True, BiologicalSex.from_digit(int(candidate[SEX_DIGIT_INDEX]))


def try_extract_birth_date(candidate: Any) -> tuple[bool, Optional[date]]:
    """Extract the birth date from an unformatted register number.

    The century is guessed from the checksum: if the pre-2000 checksum
    matches the last two digits the year is 19YY, otherwise it is 20YY. The
    post-1999 checksum is not checked, so a number matching neither reading
    still reports a 2000s birth date.

    Args:
        candidate: 11-digit register number

    Returns:
        (True, birth_date) on success, (False, None) if the input is not 11
        digits or does not start with a real date
    """
    if not _is_well_shaped(candidate):
        return False, None

    if (
        parse_birth_date(candidate, CENTURY_1900) is None
        and parse_birth_date(candidate, CENTURY_2000) is None
    ):
        return False, None

    pre_2000_checksum = compute_checksum(candidate[:CHECKSUM_OFFSET], born_after_1999=False)
    if f"{pre_2000_checksum:02d}" == candidate[CHECKSUM_OFFSET:]:
        century = CENTURY_1900
    else:
        century = CENTURY_2000

    birth_date = parse_birth_date(candidate, century)
    if birth_date is None:
        # 29 February of year 00 read as 1900
        return False, None

    return True, birth_date


def to_formatted(candidate: Any) -> Any:
    """Format a register number as YY.MM.DD-XXX.CC.

    Does not check validity: any 11-character string is re-punctuated.

    Args:
        candidate: Unformatted register number

    Returns:
        The formatted number, or the input unchanged when it is None, blank
        or not exactly 11 characters long

    Example:
        >>> to_formatted("90022742191")
        '90.02.27-421.91'
    """
    if not isinstance(candidate, str) or not candidate.strip():
        return candidate
    if len(candidate) != REGISTER_NUMBER_LENGTH:
        return candidate

    return (
        f"{candidate[0:2]}.{candidate[2:4]}.{candidate[4:6]}"
        f"-{candidate[6:9]}.{candidate[9:11]}"
    )


def decode(candidate: Any) -> Optional[RegisterNumberDetails]:
    """Decode every field of a valid register number.

    Args:
        candidate: Register number, formatted or not

    Returns:
        RegisterNumberDetails, or None if the number is not valid
    """
    if not is_valid(candidate):
        return None

    digits = normalize(candidate)
    century = match_century(digits)
    birth_date = parse_birth_date(digits, century)
    if birth_date is None:
        logger.debug("Checksum matched a century where the birth date does not exist")
        return None

    sequence_number = int(digits[6:CHECKSUM_OFFSET])
    return RegisterNumberDetails(
        number=digits,
        birth_date=birth_date,
        sequence_number=sequence_number,
        biological_sex=BiologicalSex.from_digit(sequence_number),
        checksum=int(digits[CHECKSUM_OFFSET:]),
        born_after_1999=century == CENTURY_2000,
    )
