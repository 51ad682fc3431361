"""Exception hierarchy for the payments engine."""

from typing import Dict, Optional


class PaymentsEngineError(Exception):
    """Base exception for all payments engine errors."""


class TransactionDecodeError(PaymentsEngineError):
    """Raised when an input record cannot be decoded into a transaction."""

    def __init__(self, reason: str, line: Optional[int] = None, row: Optional[Dict[str, str]] = None):
        self.reason = reason
        self.line = line
        self.row = row
        location = f"line {line}: " if line is not None else ""
        super().__init__(f"{location}{reason}")


class AccountingInvariantError(PaymentsEngineError):
    """Raised when engine state is internally inconsistent. Always a bug."""


class UsageError(PaymentsEngineError):
    """Raised for invalid command-line usage."""
