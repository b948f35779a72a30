"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across all test suites
(unit and integration tests).
"""

import logging
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def src_dir(project_root: Path) -> Path:
    """
    Return the src directory path.

    Args:
        project_root: Project root directory fixture.

    Returns:
        Path: Absolute path to the src directory.
    """
    return project_root / "src"


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """
    Remove handlers installed by configure_logging during a test.

    The CLI configures the root logger; leaving its handlers behind would
    make later tests write to closed CliRunner streams.
    """
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)


@pytest.fixture
def in_tmp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Run the test from an empty temporary directory.

    Keeps default log files and config lookups out of the repository.

    Returns:
        Path: The temporary working directory.
    """
    monkeypatch.chdir(tmp_path)
    for name in ("NRN_TEST_LOG_FILE", "NRN_TEST_SEED", "NRN_TEST_COUNT", "NRN_TEST_FORMATTED"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def valid_numbers() -> list[str]:
    """
    Return valid register numbers covering both centuries.

    Returns:
        list[str]: Unformatted, valid register numbers.
    """
    return [
        "90022742191",  # 1990-02-27, 421, male
        "80052600458",  # 1980-05-26, 004, female
        "82061878947",  # 1982-06-18, 789, male
        "00010100105",  # 2000-01-01, 001, male
        "17050412381",  # 2017-05-04, 123, male
        "85110500261",  # 1985-11-05, 002, female
    ]


@pytest.fixture
def sample_csv_file(tmp_path: Path, valid_numbers: list[str]) -> Path:
    """
    Write a CSV file holding only valid register numbers.

    Returns:
        Path: Path to the CSV file.
    """
    csv_file = tmp_path / "numbers.csv"
    lines = ["name,national_register_number"]
    lines += [f"person{i},{number}" for i, number in enumerate(valid_numbers)]
    csv_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return csv_file
