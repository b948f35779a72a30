"""Register number data model.

This module defines the value types shared by the codec, the generator and
the CLI when talking about a Belgian national register number.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class BiologicalSex(Enum):
    """Biological sex as recorded in the national register.

    Encoded by the last digit of the sequence number: even for female,
    odd for male.
    """

    FEMALE = "female"
    MALE = "male"

    @classmethod
    def from_digit(cls, digit: int) -> "BiologicalSex":
        """Classify the last digit of a sequence number."""
        return cls.FEMALE if digit % 2 == 0 else cls.MALE


@dataclass(frozen=True)
class RegisterNumberDetails:
    """Fields decoded from a valid national register number.

    Attributes:
        number: Normalized 11-digit register number
        birth_date: Birth date, century resolved through the checksum
        sequence_number: Sequence (follow) number, 1-998
        biological_sex: Sex derived from the sequence number parity
        checksum: Two-digit checksum value (1-97)
        born_after_1999: Whether the post-1999 checksum matched
    """

    number: str
    birth_date: date
    sequence_number: int
    biological_sex: BiologicalSex
    checksum: int
    born_after_1999: bool

    @property
    def formatted(self) -> str:
        """Display form YY.MM.DD-XXX.CC."""
        n = self.number
        return f"{n[0:2]}.{n[2:4]}.{n[4:6]}-{n[6:9]}.{n[9:11]}"

    def to_dict(self) -> dict:
        """Export as a JSON-serializable dictionary."""
        return {
            "number": self.number,
            "formatted": self.formatted,
            "birth_date": self.birth_date.isoformat(),
            "sequence_number": self.sequence_number,
            "biological_sex": self.biological_sex.value,
            "checksum": self.checksum,
            "born_after_1999": self.born_after_1999,
        }
