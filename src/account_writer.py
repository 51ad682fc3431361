import csv
from decimal import Decimal
from typing import Iterable, TextIO

from models import AccountState

HEADER = ("client", "available", "held", "total", "locked")


def format_decimal(value: Decimal) -> str:
    """Plain notation, keeping every digit the arithmetic produced."""
    return f"{value:f}"


def write_accounts(accounts: Iterable[AccountState], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for account in accounts:
        writer.writerow((
            account.client_id,
            format_decimal(account.available),
            format_decimal(account.held),
            format_decimal(account.total),
            str(account.locked).lower(),
        ))
