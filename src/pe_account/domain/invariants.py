"""Account balance invariant check, run after every committed transition."""

import logging

from src.pe_account.domain.models import Account
from src.pe_common.amounts import ledger_context

logger = logging.getLogger(__name__)


def check_account_invariants(account: Account) -> list[str]:
    """Check balance invariants. Returns list of violation strings.

    INV-1: available >= 0
    INV-2: held >= 0
    INV-3: total == available + held
    """
    violations: list[str] = []
    available = account.available
    held = account.held

    if available < 0:
        violations.append(f"INV-1 violated: account #{account.client} available={available} < 0")
    if held < 0:
        violations.append(f"INV-2 violated: account #{account.client} held={held} < 0")
    with ledger_context():
        expected_total = available + held
    if account.total != expected_total:
        violations.append(
            f"INV-3 violated: account #{account.client} total={account.total} "
            f"!= available({available}) + held({held})"
        )

    for msg in violations:
        logger.error(msg)
    if not violations:
        logger.debug("Invariants OK: account=%s, available=%s, held=%s", account.client, available, held)
    return violations
