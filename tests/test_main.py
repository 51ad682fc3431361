import sys
import os
import io
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from account_writer import format_decimal, write_accounts
from main import main
from models import AccountState


class TestAccountWriter:
    def test_format_decimal_keeps_precision(self):
        assert format_decimal(Decimal("1.0")) == "1.0"
        assert format_decimal(Decimal("1.2345")) == "1.2345"
        assert format_decimal(Decimal("-1.0")) == "-1.0"

    def test_format_decimal_never_scientific(self):
        assert format_decimal(Decimal("1E+2")) == "100"
        assert format_decimal(Decimal("0E-8")) == "0.00000000"

    def test_write_accounts(self):
        out = io.StringIO()
        write_accounts(
            [
                AccountState(1, Decimal("1.5"), Decimal("0"), Decimal("1.5"), False),
                AccountState(2, Decimal("-1.0"), Decimal("1.0"), Decimal("0.0"), True),
            ],
            out,
        )
        assert out.getvalue() == (
            "client,available,held,total,locked\n"
            "1,1.5,0,1.5,false\n"
            "2,-1.0,1.0,0.0,true\n"
        )


class TestMain:
    def test_no_arguments(self, capsys):
        assert main([]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Usage" in captured.err

    def test_too_many_arguments(self, capsys):
        assert main(["a.csv", "b.csv"]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Too many arguments" in captured.err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.csv")]) == 1
        assert capsys.readouterr().out == ""

    def test_decode_error_aborts_without_output(self, tmp_path, capsys):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("type,client,tx,amount\ndeposit,1,1,1.0\ndispute,1,1,5\n")

        assert main([str(csv_file)]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_utf8_aborts_without_output(self, tmp_path, capsys):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_bytes(b"type,client,tx,amount\ndeposit,1,1,\xff\xfe1.0\n")

        assert main([str(csv_file)]) == 1
        assert capsys.readouterr().out == ""

    def test_report(self, tmp_path, capsys):
        csv_file = tmp_path / "input.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 2, 2, 2.0",
            "deposit, 1, 1, 1.0",
            "deposit, 1, 3, 2.0",
            "withdrawal, 1, 4, 1.5",
            "withdrawal, 2, 5, 3.0",
            "deposit, 3, 6, 1.0",
            "dispute, 3, 6,",
            "chargeback, 3, 6,",
        ]))

        assert main([str(csv_file)]) == 0
        assert capsys.readouterr().out == (
            "client,available,held,total,locked\n"
            "1,1.5,0,1.5,false\n"
            "2,2.0,0,2.0,false\n"
            "3,0.0,0.0,0.0,true\n"
        )
