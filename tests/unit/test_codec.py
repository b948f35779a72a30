"""Unit tests for the register number checksum codec."""

import random
from datetime import date, datetime, timedelta

import pytest

from nrn_test_util.register_number.codec import (
    CENTURY_1900,
    CENTURY_2000,
    compute_checksum,
    encode,
    has_valid_birth_date,
    is_valid,
    match_century,
    normalize,
)
from nrn_test_util.register_number.extraction import decode, try_extract_birth_date
from nrn_test_util.utils.exceptions import NRNTestUtilError, RegisterNumberRangeError


class TestIsValid:
    """Test suite for is_valid."""

    @pytest.mark.parametrize(
        "number",
        [
            "90022742191",
            "80052600458",
            "82061878947",
            "85110500261",
            "99123199841",
        ],
    )
    def test_valid_pre_2000_numbers(self, number: str) -> None:
        """Test numbers of people born before 2000 are valid."""
        assert is_valid(number) is True

    @pytest.mark.parametrize(
        "number",
        [
            "00010100105",  # 2000-01-01
            "17050412381",  # 2017-05-04
            "20061550026",  # 2020-06-15
            "24022999837",  # 2024-02-29
        ],
    )
    def test_valid_post_1999_numbers(self, number: str) -> None:
        """Test numbers validated through the post-1999 checksum."""
        assert is_valid(number) is True

    @pytest.mark.parametrize(
        "number",
        ["90.02.27-421.91", "80.05.26-004.58", "82.06.18-789.47", " 900227 421 91 "],
    )
    def test_formatted_input_is_valid(self, number: str) -> None:
        """Test non-digit characters are ignored."""
        assert is_valid(number) is True

    def test_formatted_and_plain_agree(self) -> None:
        """Test punctuation does not change the outcome."""
        assert is_valid("90.02.27-421.91") == is_valid("90022742191") == True  # noqa: E712

    @pytest.mark.parametrize(
        "number",
        [
            "12345678910",
            "12345621748",
            "12345621777",
            "Test",
            "00000000000",
            "99999999999",
            "!@#!@%^@^@$^&@$^@sdfasdf",
            "$^@#^@##$44",
            "15435#$%4354dfsg",
            "90022742192",
            "",
            "9002274219",
            "900227421911",
        ],
    )
    def test_invalid_numbers(self, number: str) -> None:
        """Test malformed input is rejected."""
        assert is_valid(number) is False

    def test_off_by_one_checksum_is_invalid(self) -> None:
        """Test a checksum one higher than expected is rejected."""
        assert is_valid("90022742191") is True
        assert is_valid("90022742192") is False

    def test_invalid_month_with_matching_checksum(self) -> None:
        """Test month 13 is rejected even when the checksum matches."""
        assert compute_checksum("901327421", born_after_1999=False) == 71
        assert is_valid("90132742171") is False

    def test_invalid_day_with_matching_checksum(self) -> None:
        """Test day 32 is rejected even when the checksum matches."""
        assert compute_checksum("900232421", born_after_1999=False) == 38
        assert is_valid("90023242138") is False

    @pytest.mark.parametrize("value", [None, 90022742191, 9.0, ["90022742191"], b"90022742191"])
    def test_non_string_input_returns_false(self, value) -> None:
        """Test non-string input never raises."""
        assert is_valid(value) is False

    def test_both_centuries_accepted_for_same_digits(self) -> None:
        """Test the same YYMMDD and sequence validates with either checksum."""
        born_1917 = "17050412352"
        born_2017 = "17050412381"

        assert born_1917[:9] == born_2017[:9]
        assert is_valid(born_1917) is True
        assert is_valid(born_2017) is True

    def test_checksum_of_97(self) -> None:
        """Test a dividend divisible by 97 gives checksum 97."""
        assert compute_checksum("050101567", born_after_1999=False) == 97
        assert is_valid("05010156797") is True

    def test_leading_zero_checksum(self) -> None:
        """Test a single-digit checksum is written with a leading zero."""
        assert compute_checksum("000101001", born_after_1999=True) == 5
        assert is_valid("00010100105") is True
        assert is_valid("0001010015") is False


class TestEncode:
    """Test suite for encode."""

    @pytest.mark.parametrize(
        "birth_date,sequence_number,expected",
        [
            (date(1990, 2, 27), 421, "90022742191"),
            (date(1980, 5, 26), 4, "80052600458"),
            (date(2000, 1, 1), 1, "00010100105"),
            (date(1900, 1, 1), 1, "00010100173"),
            (date(1917, 5, 4), 123, "17050412352"),
            (date(2017, 5, 4), 123, "17050412381"),
            (date(2024, 2, 29), 998, "24022999837"),
            (date(1905, 1, 1), 567, "05010156797"),
        ],
    )
    def test_encode_known_values(
        self, birth_date: date, sequence_number: int, expected: str
    ) -> None:
        """Test encode against hand-checked register numbers."""
        # Act
        result = encode(birth_date, sequence_number)

        # Assert
        assert result == expected
        assert is_valid(result) is True

    def test_encode_2000_01_01_round_trips_birth_date(self) -> None:
        """Test the first day of 2000 is recovered by extraction."""
        # Act
        number = encode(date(2000, 1, 1), 1)

        # Assert
        assert len(number) == 11
        assert is_valid(number) is True
        assert try_extract_birth_date(number) == (True, date(2000, 1, 1))

    def test_encode_accepts_datetime(self) -> None:
        """Test a datetime is reduced to its date."""
        assert encode(datetime(1990, 2, 27, 13, 45), 421) == "90022742191"

    @pytest.mark.parametrize(
        "birth_date",
        [date(1899, 12, 31), date(1850, 6, 15), date(1800, 1, 1), date(1500, 3, 20)],
    )
    def test_encode_rejects_birth_date_before_1900(self, birth_date: date) -> None:
        """Test dates before 1900-01-01 raise a range error naming the minimum."""
        with pytest.raises(RegisterNumberRangeError) as exc_info:
            encode(birth_date, 1)

        assert "1900-01-01" in str(exc_info.value)
        assert exc_info.value.argument == "birth_date"

    @pytest.mark.parametrize("sequence_number", [0, 999, 10234, -50])
    def test_encode_rejects_sequence_number_out_of_range(self, sequence_number: int) -> None:
        """Test sequence numbers outside 1-998 raise a range error naming the bounds."""
        with pytest.raises(RegisterNumberRangeError) as exc_info:
            encode(date(1998, 1, 1), sequence_number)

        assert "between 1 and 998" in str(exc_info.value)
        assert exc_info.value.argument == "sequence_number"

    def test_range_error_is_value_error(self) -> None:
        """Test the range error can be caught as ValueError or the package base error."""
        with pytest.raises(ValueError):
            encode(date(1998, 1, 1), 999)
        with pytest.raises(NRNTestUtilError):
            encode(date(1899, 12, 31), 1)

    @pytest.mark.parametrize("sequence_number", [1, 998])
    def test_encode_sequence_number_bounds(self, sequence_number: int) -> None:
        """Test both ends of the sequence range are accepted."""
        number = encode(date(1998, 1, 1), sequence_number)
        assert number[6:9] == f"{sequence_number:03d}"
        assert is_valid(number) is True

    def test_round_trip_random_dates(self) -> None:
        """Test encode output always validates and decodes back to its fields."""
        # Arrange
        rng = random.Random(20240229)
        first = date(1900, 1, 1)
        span = (date(2099, 12, 31) - first).days

        for _ in range(2000):
            birth_date = first + timedelta(days=rng.randint(0, span))
            sequence_number = rng.randint(1, 998)

            # Act
            number = encode(birth_date, sequence_number)
            details = decode(number)

            # Assert
            assert is_valid(number), f"{number} ({birth_date}, {sequence_number})"
            assert details is not None
            assert details.birth_date == birth_date
            assert details.sequence_number == sequence_number
            assert details.born_after_1999 == (birth_date.year >= 2000)


class TestChecksumHelpers:
    """Test suite for the checksum helpers."""

    def test_compute_checksum_pre_2000(self) -> None:
        """Test the 9-digit dividend."""
        assert compute_checksum("900227421", born_after_1999=False) == 91

    def test_compute_checksum_post_1999(self) -> None:
        """Test the 10-digit dividend with a leading 2."""
        assert compute_checksum("900227421", born_after_1999=True) == 23

    def test_checksums_of_both_centuries_never_coincide(self) -> None:
        """Test the two readings differ, so the century is never ambiguous."""
        rng = random.Random(7)
        for _ in range(500):
            digits = f"{rng.randint(0, 999_999_999):09d}"
            assert compute_checksum(digits, False) != compute_checksum(digits, True)

    @pytest.mark.parametrize(
        "number,expected",
        [
            ("90022742191", CENTURY_1900),
            ("00010100105", CENTURY_2000),
            ("00010100173", CENTURY_1900),
            ("90022742192", None),
        ],
    )
    def test_match_century(self, number: str, expected) -> None:
        """Test century resolution follows the two-attempt rule."""
        assert match_century(number) == expected

    def test_normalize_strips_non_digits(self) -> None:
        """Test punctuation and whitespace are dropped."""
        assert normalize("90.02.27-421.91") == "90022742191"
        assert normalize(None) == ""

    @pytest.mark.parametrize(
        "digits,expected",
        [
            ("900227", True),
            ("000229", True),  # 2000 is a leap year
            ("010229", False),  # neither 1901 nor 2001 is
            ("901327", False),
            ("900100", False),
            ("900431", False),
        ],
    )
    def test_has_valid_birth_date(self, digits: str, expected: bool) -> None:
        """Test the YYMMDD check accepts a date existing in either century."""
        assert has_valid_birth_date(digits) is expected
