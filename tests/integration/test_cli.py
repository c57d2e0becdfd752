"""CLI contract: one positional path, accounts on stdout, failures on stderr."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from config.settings import settings
from src.main import main


class TestMain:
    def test_basic_file(self, basic_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(basic_csv)]) == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == [
            "client,available,held,total,locked",
            "1,1.5001,0.0000,1.5001,false",
            "2,2.1000,0.0000,2.1000,false",
        ]
        assert "Transaction #5 for account #2 can't withdraw $3 due to insufficient funds" in captured.err
        assert "Transaction #5 not found" in captured.err

    def test_failures_follow_stream_order(
        self, write_csv: Callable[..., Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = write_csv("type,client,tx,amount\ndispute,1,9\nbogus,1,1\nwithdrawal,1,2,1\n")
        assert main([str(path)]) == 0
        err_lines = [line for line in capsys.readouterr().err.splitlines() if line.startswith(("Transaction", "Record"))]
        assert err_lines == [
            "Transaction #9 not found",
            "Record 2 (line 3): bogus is an unknown type",
            "Transaction #2 can't withdraw from unknown account #1",
        ]

    def test_locked_rendered_true(self, write_csv: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
        path = write_csv("type,client,tx,amount\ndeposit,1,1,1.0001\ndispute,1,1\nchargeback,1,1\n")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "1,0.0000,0.0000,0.0000,true"

    def test_decimal_places_setting(
        self, write_csv: Callable[..., Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = write_csv("type,client,tx,amount\ndeposit,1,1,1.005\n")
        with patch.object(settings, "AMOUNT_DECIMAL_PLACES", 2):
            assert main([str(path)]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "1,1.00,0.00,1.00,false"

    def test_large_and_tiny_deposits_rendered_exactly(
        self, write_csv: Callable[..., Path], capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = write_csv("type,client,tx,amount\ndeposit,1,1,10000000000000000000000000\ndeposit,1,2,0.0001\n")
        assert main([str(path)]) == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == [
            "client,available,held,total,locked",
            "1,10000000000000000000000000.0001,0.0000,10000000000000000000000000.0001,false",
        ]
        assert "Traceback" not in captured.err

    @pytest.mark.parametrize("argv", [[], ["a.csv", "b.csv"]])
    def test_wrong_argument_count(self, argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2
        assert capsys.readouterr().out == ""

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "nope.csv")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cannot read instruction source" in captured.err

    def test_undecodable_file_produces_no_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "binary.csv"
        path.write_bytes(b"type,client,tx,amount\ndeposit,1,1,1\n\xff\xfe\xfd\n")
        assert main([str(path)]) == 1
        assert capsys.readouterr().out == ""
