"""Global enums — values match the `type` column of the instruction CSV."""

from enum import Enum


class InstructionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def requires_amount(self) -> bool:
        return self in (InstructionType.DEPOSIT, InstructionType.WITHDRAWAL)


class TransactionKind(str, Enum):
    """Kinds of instruction that leave a record in the ledger."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class DisputeStatus(str, Enum):
    """Dispute lifecycle: CLEAN → DISPUTED → {RESOLVED | CHARGED_BACK}"""
    CLEAN = "CLEAN"
    DISPUTED = "DISPUTED"
    RESOLVED = "RESOLVED"
    CHARGED_BACK = "CHARGED_BACK"
