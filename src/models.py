from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class TransactionStatus(Enum):
    DEPOSITED = "deposited"
    WITHDRAWN = "withdrawn"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __post_init__(self):
        if self.transaction_type.carries_amount:
            if self.amount is None:
                raise ValueError(f"amount is required for '{self.transaction_type.value}' transactions")
            if self.amount < 0:
                raise ValueError(f"amount must not be negative, got {self.amount}")
        elif self.amount is not None:
            raise ValueError(f"amount must not be provided for '{self.transaction_type.value}' transactions")

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class TransactionState:
    """
    History of a deposit or withdrawal, kept to validate later disputes.
    client_id and amount are only retained while the funds can still be disputed
    or are held (DEPOSITED and DISPUTED).
    """

    status: TransactionStatus
    client_id: Optional[int] = None
    amount: Optional[Decimal] = None

    @classmethod
    def deposited(cls, client_id: int, amount: Decimal) -> "TransactionState":
        return cls(TransactionStatus.DEPOSITED, client_id, amount)

    @classmethod
    def withdrawn(cls) -> "TransactionState":
        return cls(TransactionStatus.WITHDRAWN)

    @classmethod
    def disputed(cls, client_id: int, amount: Decimal) -> "TransactionState":
        return cls(TransactionStatus.DISPUTED, client_id, amount)

    @classmethod
    def resolved(cls) -> "TransactionState":
        return cls(TransactionStatus.RESOLVED)

    @classmethod
    def charged_back(cls) -> "TransactionState":
        return cls(TransactionStatus.CHARGED_BACK)


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount

    def lock(self) -> None:
        self.locked = True

    def to_state(self) -> "AccountState":
        return AccountState(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )


@dataclass(frozen=True)
class AccountState:
    """Point-in-time view of an account, as reported to callers."""

    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@dataclass
class ProcessingStats:
    applied: int = 0
    rejected: int = 0

    def record(self, applied: bool) -> None:
        if applied:
            self.applied += 1
        else:
            self.rejected += 1

    @property
    def processed(self) -> int:
        return self.applied + self.rejected
