"""Pydantic schema for one raw instruction row."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticCustomError

from src.pe_common.amounts import MAX_AMOUNT, MAX_FRACTION_DIGITS, fraction_digits
from src.pe_common.enums import InstructionType
from src.pe_ledger.domain.models import (
    Chargeback,
    Deposit,
    Dispute,
    Instruction,
    Resolve,
    Withdrawal,
)

# Error types whose message already reads as a full sentence
_SENTENCE_ERRORS = {
    "unknown_type",
    "amount_missing",
    "amount_not_positive",
    "amount_too_large",
    "amount_too_precise",
}


class InstructionRow(BaseModel):
    type: InstructionType
    client: int = Field(..., gt=0, description="Client (account) id")
    tx: int = Field(..., gt=0, description="Transaction id")
    amount: Decimal | None = Field(
        default=None, description="Required and > 0 for deposit/withdrawal, ignored otherwise"
    )

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return InstructionType(value)
            except ValueError:
                raise PydanticCustomError(
                    "unknown_type", "{value} is an unknown type", {"value": value}
                ) from None
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _drop_ignored_amount(cls, value: Any, info: ValidationInfo) -> Any:
        kind = info.data.get("type")
        if value == "" or (kind is not None and not kind.requires_amount):
            return None
        return value

    @model_validator(mode="after")
    def _amount_rules(self) -> "InstructionRow":
        if self.type.requires_amount:
            if self.amount is None:
                raise PydanticCustomError("amount_missing", "Transaction requires a defined amount")
            if self.amount <= 0:
                raise PydanticCustomError("amount_not_positive", "Transaction requires a positive amount")
            if self.amount > MAX_AMOUNT:
                raise PydanticCustomError(
                    "amount_too_large",
                    "Transaction amount exceeds {max_amount}",
                    {"max_amount": f"{MAX_AMOUNT:f}"},
                )
            if fraction_digits(self.amount) > MAX_FRACTION_DIGITS:
                raise PydanticCustomError(
                    "amount_too_precise",
                    "Transaction amount has more than {places} fractional digits",
                    {"places": MAX_FRACTION_DIGITS},
                )
        return self

    def to_instruction(self) -> Instruction:
        if self.type is InstructionType.DEPOSIT:
            return Deposit(client=self.client, tx=self.tx, amount=self.amount)
        if self.type is InstructionType.WITHDRAWAL:
            return Withdrawal(client=self.client, tx=self.tx, amount=self.amount)
        if self.type is InstructionType.DISPUTE:
            return Dispute(client=self.client, tx=self.tx)
        if self.type is InstructionType.RESOLVE:
            return Resolve(client=self.client, tx=self.tx)
        return Chargeback(client=self.client, tx=self.tx)


def describe_validation_error(exc: ValidationError) -> str:
    """One-line summary: 'client: Field required; tx: Input should be ...'."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        if err["type"] in _SENTENCE_ERRORS or not loc:
            parts.append(err["msg"])
        else:
            parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
