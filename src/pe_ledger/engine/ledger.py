"""Ledger — transaction history plus the instruction state machine.

Every handler validates fully before touching any balance, so a rejected
instruction leaves accounts and records exactly as they were.
"""
import logging
from decimal import Decimal

from config.settings import settings
from src.pe_account.domain.invariants import check_account_invariants
from src.pe_account.domain.models import Account, AccountMap
from src.pe_common.enums import DisputeStatus, TransactionKind
from src.pe_common.errors import (
    AccountLockedError,
    AccountNotFoundError,
    AmountMissingError,
    AmountNotPositiveError,
    DuplicateTransactionIdError,
    InsufficientFundsError,
    ProcessingError,
    TransactionNotDisputableError,
    TransactionNotDisputedError,
    TransactionNotFoundError,
    TransactionOwnerMismatchError,
)
from src.pe_ledger.domain.models import (
    Chargeback,
    Deposit,
    Dispute,
    Instruction,
    Resolve,
    TransactionId,
    TransactionRecord,
    Withdrawal,
)

logger = logging.getLogger(__name__)


def _validate_amount(instruction: Deposit | Withdrawal) -> Decimal:
    if instruction.amount is None:
        raise AmountMissingError(instruction.tx, instruction.client)
    if instruction.amount <= 0:
        raise AmountNotPositiveError(instruction.tx, instruction.client, instruction.amount)
    return instruction.amount


def _ensure_unlocked(account: Account, tx: TransactionId) -> None:
    if account.locked:
        raise AccountLockedError(tx, account.client)


class Ledger:
    def __init__(self, verify_invariants: bool | None = None) -> None:
        self._records: dict[TransactionId, TransactionRecord] = {}
        self._verify = settings.VERIFY_INVARIANTS if verify_invariants is None else verify_invariants

    def __len__(self) -> int:
        return len(self._records)

    def get(self, tx: TransactionId) -> TransactionRecord | None:
        return self._records.get(tx)

    def process(self, instruction: Instruction, accounts: AccountMap) -> ProcessingError | None:
        """Apply one instruction. Returns the rejection, or None on success."""
        try:
            account = self._dispatch(instruction, accounts)
        except ProcessingError as e:
            logger.info("Rejected %s tx=%s client=%s: %s", instruction.type.value, instruction.tx,
                        instruction.client, e)
            return e

        logger.debug("Applied %s tx=%s client=%s", instruction.type.value, instruction.tx, instruction.client)
        if self._verify:
            violations = check_account_invariants(account)
            assert not violations, "; ".join(violations)
        return None

    def _dispatch(self, instruction: Instruction, accounts: AccountMap) -> Account:
        if isinstance(instruction, Deposit):
            return self._deposit(instruction, accounts)
        if isinstance(instruction, Withdrawal):
            return self._withdraw(instruction, accounts)
        if isinstance(instruction, Dispute):
            return self._dispute(instruction, accounts)
        if isinstance(instruction, Resolve):
            return self._resolve(instruction, accounts)
        if isinstance(instruction, Chargeback):
            return self._chargeback(instruction, accounts)
        raise TypeError(f"Unsupported instruction: {instruction!r}")

    # ------------------------------------------------------------------
    # Deposit / withdrawal
    # ------------------------------------------------------------------

    def _deposit(self, instruction: Deposit, accounts: AccountMap) -> Account:
        amount = _validate_amount(instruction)
        self._ensure_new_tx(instruction.tx, instruction.client)
        account = accounts.get(instruction.client)
        if account is not None:
            _ensure_unlocked(account, instruction.tx)
        else:
            account = accounts[instruction.client] = Account(client=instruction.client)

        account.credit(amount)
        self._insert(instruction.tx, instruction.client, TransactionKind.DEPOSIT, amount)
        return account

    def _withdraw(self, instruction: Withdrawal, accounts: AccountMap) -> Account:
        amount = _validate_amount(instruction)
        self._ensure_new_tx(instruction.tx, instruction.client)
        account = accounts.get(instruction.client)
        if account is None:
            raise AccountNotFoundError(instruction.tx, instruction.client)
        _ensure_unlocked(account, instruction.tx)
        if amount > account.available:
            raise InsufficientFundsError(instruction.tx, instruction.client, amount, account.available)

        account.debit(amount)
        self._insert(instruction.tx, instruction.client, TransactionKind.WITHDRAWAL, amount)
        return account

    def _ensure_new_tx(self, tx: TransactionId, client: int) -> None:
        if tx in self._records:
            raise DuplicateTransactionIdError(tx, client)

    def _insert(self, tx: TransactionId, client: int, kind: TransactionKind, amount: Decimal) -> None:
        self._records[tx] = TransactionRecord(id=tx, client=client, kind=kind, amount=amount)

    # ------------------------------------------------------------------
    # Dispute lifecycle: CLEAN → DISPUTED → {RESOLVED | CHARGED_BACK}
    # ------------------------------------------------------------------

    def _dispute(self, instruction: Dispute, accounts: AccountMap) -> Account:
        record, account = self._lookup(instruction, accounts)
        if record.dispute_status is not DisputeStatus.CLEAN:
            raise TransactionNotDisputableError(record.id, account.client, record.dispute_status.value)

        if record.kind is TransactionKind.DEPOSIT:
            if record.amount > account.available:
                raise InsufficientFundsError(
                    record.id, account.client, record.amount, account.available, operation="hold"
                )
            account.hold(record.amount)
        else:
            # Withdrawn funds already left available; held carries the claim.
            account.add_held(record.amount)
        record.dispute_status = DisputeStatus.DISPUTED
        return account

    def _resolve(self, instruction: Resolve, accounts: AccountMap) -> Account:
        record, account = self._lookup(instruction, accounts)
        self._ensure_disputed(record, account, "resolve")

        if record.kind is TransactionKind.DEPOSIT:
            account.release(record.amount)
        else:
            account.remove_held(record.amount)
        record.dispute_status = DisputeStatus.RESOLVED
        return account

    def _chargeback(self, instruction: Chargeback, accounts: AccountMap) -> Account:
        record, account = self._lookup(instruction, accounts)
        self._ensure_disputed(record, account, "charge back")

        # held funds leave the account for either kind
        account.remove_held(record.amount)
        account.lock()
        record.dispute_status = DisputeStatus.CHARGED_BACK
        logger.info("Account #%s locked by chargeback of tx=%s", account.client, record.id)
        return account

    def _lookup(
        self, instruction: Dispute | Resolve | Chargeback, accounts: AccountMap
    ) -> tuple[TransactionRecord, Account]:
        record = self._records.get(instruction.tx)
        if record is None:
            raise TransactionNotFoundError(instruction.tx, instruction.client)
        if record.client != instruction.client:
            raise TransactionOwnerMismatchError(instruction.tx, instruction.client, record.client)
        account = accounts.get(record.client)
        if account is None:
            raise TransactionNotFoundError(instruction.tx, instruction.client)
        _ensure_unlocked(account, instruction.tx)
        return record, account

    @staticmethod
    def _ensure_disputed(record: TransactionRecord, account: Account, action: str) -> None:
        if record.dispute_status is not DisputeStatus.DISPUTED:
            raise TransactionNotDisputedError(record.id, account.client, record.dispute_status.value, action)
