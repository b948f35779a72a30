"""Register number module.

This module provides the checksum codec, field extraction and random
generation for Belgian national register numbers.
"""

from nrn_test_util.register_number.codec import encode, is_valid
from nrn_test_util.register_number.extraction import (
    decode,
    to_formatted,
    try_extract_biological_sex,
    try_extract_birth_date,
)
from nrn_test_util.register_number.generator import (
    generate_birth_date,
    generate_register_number,
    generate_register_numbers,
    generate_sequence_number,
)

__all__ = [
    # Codec
    "encode",
    "is_valid",
    # Extraction and formatting
    "decode",
    "to_formatted",
    "try_extract_biological_sex",
    "try_extract_birth_date",
    # Test data generation
    "generate_birth_date",
    "generate_register_number",
    "generate_register_numbers",
    "generate_sequence_number",
]
