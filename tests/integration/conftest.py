"""Integration-test fixtures.

Integration tests go through the real CSV reader, batch driver and report
formatter; nothing is mocked.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


@pytest.fixture
def basic_csv() -> Path:
    return FIXTURES / "basic.csv"


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str], Path]:
    """Write CSV text to a temp file and return its path."""

    def _write(text: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
