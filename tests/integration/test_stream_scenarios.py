"""End-to-end scenarios: CSV text → reader → batch driver → accounts/failures."""

import io
from decimal import Decimal

from src.pe_batch.driver import BatchResult, process_instructions
from src.pe_common.errors import RecordParseError
from src.pe_ingest.csv_reader import read_instructions


def _run(text: str) -> BatchResult:
    return process_instructions(read_instructions(io.StringIO(text)))


class TestScenarios:
    def test_regular_transactions(self) -> None:
        result = _run(
            """type,client,tx,amount
            deposit, 1, 1, 1
            deposit, 1, 2, 1
            withdrawal, 1, 3, 0.5"""
        )
        assert result.accounts[1].available == Decimal("1.5")
        assert result.failures == []

    def test_dispute(self) -> None:
        result = _run(
            """type,client,tx,amount
            deposit,1,1,1.0001
            dispute, 1, 1"""
        )
        account = result.accounts[1]
        assert account.available == 0
        assert account.held == Decimal("1.0001")
        assert account.held == account.total
        assert result.failures == []

    def test_resolve(self) -> None:
        result = _run(
            """type,client,tx,amount
            deposit,1,1,1.0001
            dispute, 1, 1,
            resolve, 1, 1"""
        )
        account = result.accounts[1]
        assert account.available == Decimal("1.0001")
        assert account.held == 0
        assert account.available == account.total
        assert result.failures == []

    def test_chargeback(self) -> None:
        result = _run(
            """type,client,tx,amount
            deposit,1,1,1.0001
            dispute, 1, 1,
            chargeback, 1, 1"""
        )
        account = result.accounts[1]
        assert account.available == 0
        assert account.held == 0
        assert account.locked is True
        assert result.failures == []

    def test_logic_errors(self) -> None:
        result = _run(
            """type,client,tx,amount
            deposit,1,1,1.0001
            deposit, 2, 2, 2.1000
            deposit, 1, 3, 2.0
            withdrawal, 1, 4, 1.5
            withdrawal, 2, 5, 3.0,
            dispute, 2, 5"""
        )
        assert result.accounts[1].available == Decimal("1.5001")
        assert result.accounts[2].available == Decimal("2.1")
        assert [str(f) for f in result.failures] == [
            "Transaction #5 for account #2 can't withdraw $3 due to insufficient funds",
            "Transaction #5 not found",
        ]

    def test_parse_errors_do_not_stop_stream(self) -> None:
        result = _run(
            """type,client,tx,amount
            invalid,0
            unknown,1,1
            deposit,1,1,-1.001
            deposit,1,1,
            deposit,1,1,1.0001
            deposit, 2, 2, 3.3"""
        )
        assert result.accounts[1].total == Decimal("1.0001")
        assert result.accounts[2].total == Decimal("3.3")
        assert len(result.failures) == 4
        assert all(isinstance(f, RecordParseError) for f in result.failures)
        assert str(result.failures[1]) == "Record 2 (line 3): unknown is an unknown type"
        assert str(result.failures[2]) == "Record 3 (line 4): Transaction requires a positive amount"
        assert str(result.failures[3]) == "Record 4 (line 5): Transaction requires a defined amount"

    def test_lock_finality_across_stream(self) -> None:
        result = _run(
            """type,client,tx,amount
            deposit,1,1,5
            deposit,1,2,3
            dispute,1,2
            chargeback,1,2
            deposit,1,3,100
            withdrawal,1,4,1
            dispute,1,1
            resolve,1,1
            chargeback,1,1"""
        )
        account = result.accounts[1]
        assert account.locked is True
        assert account.available == Decimal("5")
        assert account.held == 0
        assert len(result.failures) == 5
