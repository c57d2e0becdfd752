"""Payments engine entry point.

Run with: python -m src.main transactions.csv > accounts.csv

Account states go to stdout, accumulated failures to stderr afterwards.
Exit status: 0 after a full pass (even with failed records), 1 when the
source can't be read, 2 on bad arguments.
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from config.settings import settings
from src.pe_batch.driver import BatchDriver, BatchResult
from src.pe_common.errors import InputSourceError
from src.pe_ingest.csv_reader import read_instructions
from src.pe_report.formatter import render_accounts, render_failures

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payments-engine",
        description=f"{settings.APP_NAME}: apply a CSV of payment instructions and print account states",
    )
    parser.add_argument("path", help="CSV file with columns type,client,tx,amount")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def process_file(path: str) -> BatchResult:
    """Run the whole file through a fresh ledger. Raises InputSourceError."""
    try:
        with open(path, encoding="utf-8", newline="") as stream:
            return BatchDriver().run(read_instructions(stream, delimiter=settings.CSV_DELIMITER))
    except OSError as e:
        raise InputSourceError(f"{path}: {e.strerror or e}") from e


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    try:
        result = process_file(args.path)
    except InputSourceError as e:
        logger.debug("Aborted before output", exc_info=True)
        print(e, file=sys.stderr)
        return 1

    render_accounts(result.accounts, sys.stdout, places=settings.AMOUNT_DECIMAL_PLACES)
    render_failures(result.failures, sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
