"""Feeds an instruction stream through the ledger in order."""
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.pe_account.domain.models import AccountMap
from src.pe_common.errors import AppError
from src.pe_ledger.domain.models import Instruction
from src.pe_ledger.engine.ledger import Ledger

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Final state of one run. accounts is in first-seen order."""

    accounts: AccountMap
    failures: list[AppError] = field(default_factory=list)
    applied: int = 0


class BatchDriver:
    def __init__(self, ledger: Ledger | None = None, accounts: AccountMap | None = None) -> None:
        self.ledger = ledger if ledger is not None else Ledger()
        self.accounts: AccountMap = accounts if accounts is not None else {}
        self._failures: list[AppError] = []
        self._applied = 0

    def feed(self, item: Instruction | AppError) -> AppError | None:
        """Process one stream item. Parse failures pass straight to the failure list."""
        if isinstance(item, AppError):
            failure: AppError | None = item
        else:
            failure = self.ledger.process(item, self.accounts)
            if failure is None:
                self._applied += 1
        if failure is not None:
            self._failures.append(failure)
        return failure

    def run(self, items: Iterable[Instruction | AppError]) -> BatchResult:
        for item in items:
            self.feed(item)
        result = self.result()
        logger.info(
            "Batch done: applied=%d, failed=%d, accounts=%d",
            result.applied,
            len(result.failures),
            len(result.accounts),
        )
        return result

    def result(self) -> BatchResult:
        return BatchResult(accounts=self.accounts, failures=list(self._failures), applied=self._applied)


def process_instructions(
    items: Iterable[Instruction | AppError], accounts: AccountMap | None = None
) -> BatchResult:
    """Run a whole stream against a fresh ledger."""
    return BatchDriver(accounts=accounts).run(items)
