import logging
from typing import List, Optional, TextIO

from accounting_engine import AccountingEngine
from models import AccountState, ProcessingStats
from settings import Settings, get_settings
from transaction_reader import read_transactions

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Feeds decoded transactions into the accounting engine strictly in input order
    and reports the resulting account states.
    Business-rule rejections are counted and discarded; decode errors propagate.
    """

    def __init__(self, engine: Optional[AccountingEngine] = None, settings: Optional[Settings] = None):
        self._engine = engine if engine is not None else AccountingEngine()
        self._settings = settings if settings is not None else get_settings()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> List[AccountState]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing transactions from {filepath}")
        with open(filepath, "r", encoding="utf-8", newline="") as f:
            return self.process_stream(f)

    def process_stream(self, stream: TextIO) -> List[AccountState]:
        for transaction in read_transactions(stream):
            self._stats.record(self._engine.handle(transaction))

        logger.info(f"Applied: {self._stats.applied}, Rejected: {self._stats.rejected}")

        accounts = self._engine.snapshot()
        if self._settings.sort_output:
            accounts.sort(key=lambda account: account.client_id)
        return accounts
