"""Random register number generation for test data.

This module synthesizes valid register numbers for test scenarios. Birth
dates and sequence numbers are drawn uniformly; the codec computes the
checksum. A shared random source guarded by a lock keeps the module safe for
concurrent callers, and any ``random.Random`` can be injected for
reproducible output.
"""

import logging
import random
import threading
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from nrn_test_util.models.register_number import BiologicalSex
from nrn_test_util.register_number.codec import (
    MIN_BIRTH_DATE,
    SEQUENCE_NUMBER_MAX,
    SEQUENCE_NUMBER_MIN,
    encode,
)
from nrn_test_util.utils.exceptions import RegisterNumberRangeError


logger = logging.getLogger(__name__)

# Maximum attempts to generate a unique number before giving up
MAX_GENERATION_ATTEMPTS = 1000

_randomizer = random.Random()
_randomizer_lock = threading.Lock()


def _randint(low: int, high: int, rng: Optional[random.Random]) -> int:
    if rng is not None:
        return rng.randint(low, high)
    with _randomizer_lock:
        return _randomizer.randint(low, high)


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


def generate_sequence_number(
    sex: Optional[BiologicalSex] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """Draw a sequence number between 1 and 998.

    Args:
        sex: Optional sex to encode. An odd draw is bumped up for FEMALE and
             an even draw lowered for MALE, which keeps it within bounds.
        rng: Optional random source, defaults to the shared one

    Returns:
        Sequence number whose parity matches ``sex`` when given
    """
    sequence_number = _randint(SEQUENCE_NUMBER_MIN, SEQUENCE_NUMBER_MAX, rng)

    if sex is BiologicalSex.FEMALE and sequence_number % 2 != 0:
        sequence_number += 1
    elif sex is BiologicalSex.MALE and sequence_number % 2 == 0:
        sequence_number -= 1

    return sequence_number


def generate_birth_date(
    min_date: Optional[date] = None,
    max_date: Optional[date] = None,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> date:
    """Draw a birth date uniformly from an inclusive range.

    Args:
        min_date: Earliest date, defaults to 1900-01-01
        max_date: Latest date, defaults to ``today``
        rng: Optional random source, defaults to the shared one
        today: Current date, defaults to today in UTC

    Returns:
        Random date in [min_date, max_date]

    Raises:
        RegisterNumberRangeError: If min_date is after max_date
    """
    if min_date is None:
        min_date = MIN_BIRTH_DATE
    if max_date is None:
        max_date = today if today is not None else _today_utc()

    if min_date > max_date:
        raise RegisterNumberRangeError(
            f"Minimum date {min_date.isoformat()} can't be after "
            f"maximum date {max_date.isoformat()}",
            argument="min_date",
        )

    span = (max_date - min_date).days
    return min_date + timedelta(days=_randint(0, span, rng))


def generate_register_number(
    birth_date: Optional[date] = None,
    sequence_number: Optional[int] = None,
    sex: Optional[BiologicalSex] = None,
    min_date: Optional[date] = None,
    max_date: Optional[date] = None,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> str:
    """Generate a valid register number, randomizing whatever is not given.

    Args:
        birth_date: Fixed birth date (on or after 1900-01-01)
        sequence_number: Fixed sequence number (1-998)
        sex: Sex to encode in a random sequence number
        min_date: Lower bound for a random birth date
        max_date: Upper bound for a random birth date
        rng: Optional random source, defaults to the shared one
        today: Current date used as default upper bound

    Returns:
        Unformatted 11-digit register number

    Raises:
        ValueError: If sequence_number and sex, or birth_date and a date
            range, are combined
        RegisterNumberRangeError: If a value is out of range

    Example:
        >>> generate_register_number(birth_date=date(1990, 2, 27), sequence_number=421)
        '90022742191'
    """
    if sequence_number is not None and sex is not None:
        raise ValueError("Pass either sequence_number or sex, not both")
    if birth_date is not None and (min_date is not None or max_date is not None):
        raise ValueError("Pass either birth_date or a min_date/max_date range, not both")

    if birth_date is None:
        birth_date = generate_birth_date(min_date, max_date, rng=rng, today=today)
    if sequence_number is None:
        sequence_number = generate_sequence_number(sex, rng=rng)

    return encode(birth_date, sequence_number)


def generate_register_numbers(
    count: int,
    birth_date: Optional[date] = None,
    sex: Optional[BiologicalSex] = None,
    min_date: Optional[date] = None,
    max_date: Optional[date] = None,
    seed: Optional[int] = None,
    unique: bool = True,
    today: Optional[date] = None,
) -> list[str]:
    """Generate a batch of register numbers.

    Args:
        count: Number of register numbers to generate
        birth_date: Fixed birth date for every number
        sex: Sex to encode in every number
        min_date: Lower bound for random birth dates
        max_date: Upper bound for random birth dates
        seed: Optional seed. The same seed produces the same batch across runs.
        unique: Regenerate on collision so the batch has no duplicates
        today: Current date used as default upper bound

    Returns:
        List of ``count`` unformatted register numbers

    Raises:
        ValueError: If count is negative, or a unique number could not be
            found after MAX_GENERATION_ATTEMPTS (the requested range is too
            narrow for the batch size)
        RegisterNumberRangeError: If a value is out of range
    """
    if count < 0:
        raise ValueError(f"Count must be zero or positive, got {count}")

    rng = random.Random(seed) if seed is not None else None
    if seed is not None:
        logger.info(f"Using seed {seed} for deterministic generation")

    numbers: list[str] = []
    seen: set[str] = set()

    for _ in range(count):
        attempts = 0
        while True:
            number = generate_register_number(
                birth_date=birth_date,
                sex=sex,
                min_date=min_date,
                max_date=max_date,
                rng=rng,
                today=today,
            )
            if not unique or number not in seen:
                break

            attempts += 1
            if attempts >= MAX_GENERATION_ATTEMPTS:
                raise ValueError(
                    f"Unable to generate a unique register number after "
                    f"{MAX_GENERATION_ATTEMPTS} attempts ({len(numbers)} of {count} generated). "
                    "Widen the birth date range or lower the count."
                )
            logger.debug(f"Collision on generated number, retrying (attempt {attempts})")

        seen.add(number)
        numbers.append(number)

    logger.debug(f"Generated {len(numbers)} register numbers")
    return numbers
