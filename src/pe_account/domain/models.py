"""Domain models for pe_account: pure dataclasses, no I/O."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.pe_common.amounts import ledger_context

AccountId = int


@dataclass
class Account:
    """Per-client balances. Mutated only by the ledger after validation.

    Every sum runs in ledger_context() so large and tiny amounts add exactly.
    """

    client: AccountId
    _available: Decimal = field(default_factory=Decimal)
    _held: Decimal = field(default_factory=Decimal)
    _locked: bool = False

    @property
    def available(self) -> Decimal:
        return self._available

    @property
    def held(self) -> Decimal:
        return self._held

    @property
    def total(self) -> Decimal:
        with ledger_context():
            return self._available + self._held

    @property
    def locked(self) -> bool:
        return self._locked

    # --- mutations (callers validate first) ---

    def credit(self, amount: Decimal) -> None:
        with ledger_context():
            self._available += amount

    def debit(self, amount: Decimal) -> None:
        with ledger_context():
            self._available -= amount

    def hold(self, amount: Decimal) -> None:
        """Move funds from available to held."""
        with ledger_context():
            self._available -= amount
            self._held += amount

    def release(self, amount: Decimal) -> None:
        """Move funds from held back to available."""
        with ledger_context():
            self._held -= amount
            self._available += amount

    def add_held(self, amount: Decimal) -> None:
        with ledger_context():
            self._held += amount

    def remove_held(self, amount: Decimal) -> None:
        with ledger_context():
            self._held -= amount

    def lock(self) -> None:
        self._locked = True


AccountMap = dict[AccountId, Account]
