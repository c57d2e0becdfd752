import csv
from collections.abc import Iterable
from typing import TextIO

from src.pe_account.domain.models import AccountMap
from src.pe_common.amounts import DEFAULT_DECIMAL_PLACES
from src.pe_common.errors import AppError
from src.pe_report.schemas import OUTPUT_COLUMNS, AccountStateRow


def render_accounts(accounts: AccountMap, out: TextIO, places: int = DEFAULT_DECIMAL_PLACES) -> None:
    """Write the header line, then one line per account in map order."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(OUTPUT_COLUMNS)
    for account in accounts.values():
        writer.writerow(AccountStateRow.from_account(account, places).to_csv_fields())


def render_failures(failures: Iterable[AppError], out: TextIO) -> None:
    for failure in failures:
        out.write(f"{failure}\n")
