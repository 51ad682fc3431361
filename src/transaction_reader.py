import csv
import re
from decimal import Decimal
from typing import Dict, Iterator, Optional, TextIO

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from exceptions import TransactionDecodeError
from models import Transaction, TransactionType

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
UNSIGNED_INTEGER = re.compile(r"[0-9]+")


class TransactionRow(BaseModel):
    """One CSV record, validated before it becomes a Transaction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: TransactionType = Field(..., description="Transaction type tag")
    client: int = Field(..., ge=0, le=MAX_CLIENT_ID, description="Client identifier")
    tx: int = Field(..., ge=0, le=MAX_TRANSACTION_ID, description="Transaction identifier")
    amount: Optional[Decimal] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Required for deposits and withdrawals, absent otherwise",
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("client", "tx", mode="before")
    @classmethod
    def integer_literal(cls, v):
        if isinstance(v, str) and not UNSIGNED_INTEGER.fullmatch(v):
            raise ValueError("must be an unsigned integer")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def empty_amount_is_absent(cls, v):
        if isinstance(v, str) and v == "":
            return None
        return v

    def to_transaction(self) -> Transaction:
        return Transaction(
            transaction_type=self.type,
            client_id=self.client,
            transaction_id=self.tx,
            amount=self.amount,
        )


def _describe(error: ValueError) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'row'}: {err['msg']}"
            for err in error.errors()
        )
    return str(error)


def parse_row(row: Dict[str, str], line: Optional[int] = None) -> Transaction:
    """Decode one already-split CSV record into a Transaction."""
    try:
        return TransactionRow.model_validate(row).to_transaction()
    except ValueError as e:
        raise TransactionDecodeError(_describe(e), line=line, row=row) from e


def _decode_records(reader) -> Iterator[Transaction]:
    header = next(reader, None)
    if header is None:
        return
    fields = [name.strip() for name in header]

    for record in reader:
        if not record:
            continue
        if len(record) > len(fields):
            raise TransactionDecodeError(
                f"expected at most {len(fields)} fields, found {len(record)}",
                line=reader.line_num,
            )
        row = {name: value.strip() for name, value in zip(fields, record)}
        yield parse_row(row, line=reader.line_num)


def read_transactions(stream: TextIO) -> Iterator[Transaction]:
    """
    Lazily decode transactions from CSV text.

    The first record is the header. Whitespace around headers and values is
    ignored, blank lines are skipped and a missing trailing amount column is
    treated as an absent amount. The first malformed record, including text
    that cannot be decoded or split into fields, raises TransactionDecodeError.
    """
    reader = csv.reader(stream)
    try:
        yield from _decode_records(reader)
    except (UnicodeDecodeError, csv.Error) as e:
        raise TransactionDecodeError(f"unreadable CSV input: {e}", line=reader.line_num) from e
