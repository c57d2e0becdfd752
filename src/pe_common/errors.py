"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Input / parsing
  2xxx: Amount
  3xxx: Account
  4xxx: Transaction

Everything below ProcessingError is a logical failure raised by the ledger
state machine. RecordParseError never reaches the ledger. InputSourceError is
the only fatal one.
"""

from decimal import Decimal

from src.pe_common.amounts import amount_to_display


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# --- 1xxx: Input / parsing ---

class RecordParseError(AppError):
    def __init__(self, record: int, line: int, detail: str) -> None:
        self.record = record
        self.line = line
        self.detail = detail
        super().__init__(1001, f"Record {record} (line {line}): {detail}")


class InputSourceError(AppError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(1002, f"Cannot read instruction source: {detail}")


# --- Ledger failures ---

class ProcessingError(AppError):
    """A well-formed instruction that the ledger rejected."""

    def __init__(self, code: int, message: str, tx: int, client: int | None = None) -> None:
        self.tx = tx
        self.client = client
        super().__init__(code, message)


# --- 2xxx: Amount ---

class AmountMissingError(ProcessingError):
    def __init__(self, tx: int, client: int) -> None:
        super().__init__(
            2001, f"Transaction #{tx} for account #{client} requires a defined amount", tx, client
        )


class AmountNotPositiveError(ProcessingError):
    def __init__(self, tx: int, client: int, amount: Decimal) -> None:
        self.amount = amount
        super().__init__(
            2002,
            f"Transaction #{tx} for account #{client} requires a positive amount, "
            f"got {amount_to_display(amount)}",
            tx,
            client,
        )


# --- 3xxx: Account ---

class AccountNotFoundError(ProcessingError):
    def __init__(self, tx: int, client: int) -> None:
        super().__init__(
            3001, f"Transaction #{tx} can't withdraw from unknown account #{client}", tx, client
        )


class AccountLockedError(ProcessingError):
    def __init__(self, tx: int, client: int) -> None:
        super().__init__(3002, f"Transaction #{tx} rejected: account #{client} is locked", tx, client)


class InsufficientFundsError(ProcessingError):
    """`operation` is "withdraw" for withdrawals and "hold" for deposit disputes."""

    def __init__(
        self, tx: int, client: int, requested: Decimal, available: Decimal, operation: str = "withdraw"
    ) -> None:
        self.requested = requested
        self.available = available
        self.operation = operation
        super().__init__(
            3003,
            f"Transaction #{tx} for account #{client} can't {operation} "
            f"{amount_to_display(requested)} due to insufficient funds",
            tx,
            client,
        )


# --- 4xxx: Transaction ---

class DuplicateTransactionIdError(ProcessingError):
    def __init__(self, tx: int, client: int) -> None:
        super().__init__(
            4001, f"Transaction #{tx} for account #{client} reuses an existing transaction id", tx, client
        )


class TransactionNotFoundError(ProcessingError):
    def __init__(self, tx: int, client: int | None = None, message: str | None = None) -> None:
        super().__init__(4002, message or f"Transaction #{tx} not found", tx, client)


class TransactionOwnerMismatchError(TransactionNotFoundError):
    """Referenced transaction exists but belongs to another account."""

    def __init__(self, tx: int, client: int, owner: int) -> None:
        self.owner = owner
        super().__init__(tx, client, f"Transaction #{tx} not found for account #{client}")
        self.code = 4003


class TransactionNotDisputableError(ProcessingError):
    def __init__(self, tx: int, client: int, status: str) -> None:
        self.status = status
        super().__init__(
            4004, f"Transaction #{tx} for account #{client} can't be disputed while {status}", tx, client
        )


class TransactionNotDisputedError(ProcessingError):
    def __init__(self, tx: int, client: int, status: str, action: str) -> None:
        self.status = status
        self.action = action
        super().__init__(
            4005,
            f"Transaction #{tx} for account #{client} can't {action}: not under dispute ({status})",
            tx,
            client,
        )

