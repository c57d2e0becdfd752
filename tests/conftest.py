"""Shared test fixtures."""

import pytest

from src.pe_account.domain.models import AccountMap
from src.pe_ledger.engine.ledger import Ledger


@pytest.fixture
def ledger() -> Ledger:
    """Fresh ledger with invariant assertions on."""
    return Ledger(verify_invariants=True)


@pytest.fixture
def accounts() -> AccountMap:
    return {}
