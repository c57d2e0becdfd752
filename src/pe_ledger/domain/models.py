"""Ledger domain models: typed instructions and transaction records."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from src.pe_account.domain.models import AccountId
from src.pe_common.enums import DisputeStatus, InstructionType, TransactionKind

TransactionId = int


@dataclass(frozen=True)
class Deposit:
    client: AccountId
    tx: TransactionId
    amount: Decimal | None

    type = InstructionType.DEPOSIT


@dataclass(frozen=True)
class Withdrawal:
    client: AccountId
    tx: TransactionId
    amount: Decimal | None

    type = InstructionType.WITHDRAWAL


@dataclass(frozen=True)
class Dispute:
    client: AccountId
    tx: TransactionId

    type = InstructionType.DISPUTE


@dataclass(frozen=True)
class Resolve:
    client: AccountId
    tx: TransactionId

    type = InstructionType.RESOLVE


@dataclass(frozen=True)
class Chargeback:
    client: AccountId
    tx: TransactionId

    type = InstructionType.CHARGEBACK


Instruction = Union[Deposit, Withdrawal, Dispute, Resolve, Chargeback]


@dataclass
class TransactionRecord:
    """Accepted deposit or withdrawal. Only dispute_status changes after insert."""

    id: TransactionId
    client: AccountId
    kind: TransactionKind
    amount: Decimal
    dispute_status: DisputeStatus = DisputeStatus.CLEAN
