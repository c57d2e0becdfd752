"""Pydantic schema for one rendered account line."""

from pydantic import BaseModel

from src.pe_account.domain.models import Account
from src.pe_common.amounts import DEFAULT_DECIMAL_PLACES, amount_to_output

OUTPUT_COLUMNS = ("client", "available", "held", "total", "locked")


class AccountStateRow(BaseModel):
    client: int
    available: str
    held: str
    total: str
    locked: bool

    @classmethod
    def from_account(cls, account: Account, places: int = DEFAULT_DECIMAL_PLACES) -> "AccountStateRow":
        return cls(
            client=account.client,
            available=amount_to_output(account.available, places),
            held=amount_to_output(account.held, places),
            total=amount_to_output(account.total, places),
            locked=account.locked,
        )

    def to_csv_fields(self) -> list[str]:
        return [
            str(self.client),
            self.available,
            self.held,
            self.total,
            "true" if self.locked else "false",
        ]
