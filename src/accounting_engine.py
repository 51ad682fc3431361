import logging
import threading
from decimal import Decimal
from typing import List, Optional

from exceptions import AccountingInvariantError
from models import AccountState, ClientAccount, Transaction, TransactionState, TransactionStatus, TransactionType
from state_manager import StateManager

logger = logging.getLogger(__name__)


class AccountingEngine:
    """
    Applies transactions to client accounts, one at a time, in the order given.

    Disputes can only be raised on deposits. Once an account is locked by a
    chargeback no further deposits or withdrawals are accepted for it, but
    disputes, resolves and chargebacks are still processed.
    """

    def __init__(self, state: Optional[StateManager] = None):
        self._state = state if state is not None else StateManager()
        self._lock = threading.Lock()

    def handle(self, transaction: Transaction) -> bool:
        """
        Apply a single transaction.

        Returns True if it was applied and False if it was rejected. Rejected
        transactions leave every account and the transaction history unchanged.
        """
        with self._lock:
            match transaction.transaction_type:
                case TransactionType.DEPOSIT:
                    applied = self._handle_deposit(transaction)
                case TransactionType.WITHDRAWAL:
                    applied = self._handle_withdrawal(transaction)
                case TransactionType.DISPUTE:
                    applied = self._handle_dispute(transaction)
                case TransactionType.RESOLVE:
                    applied = self._handle_resolve(transaction)
                case TransactionType.CHARGEBACK:
                    applied = self._handle_chargeback(transaction)

        if not applied:
            logger.debug(f"Rejected {transaction}")
        return applied

    def snapshot(self) -> List[AccountState]:
        """Current state of every account ever referenced."""
        with self._lock:
            return [account.to_state() for account in self._state.get_all_accounts()]

    def _handle_deposit(self, transaction: Transaction) -> bool:
        account = self._state.get_or_create_account(transaction.client_id)
        if account.locked:
            return False

        state = TransactionState.deposited(transaction.client_id, transaction.amount)
        if not self._state.record_new_transaction(transaction.transaction_id, state):
            return False

        account.credit(transaction.amount)
        return True

    def _handle_withdrawal(self, transaction: Transaction) -> bool:
        account = self._state.get_or_create_account(transaction.client_id)
        if account.locked or account.available < transaction.amount:
            return False

        if not self._state.record_new_transaction(transaction.transaction_id, TransactionState.withdrawn()):
            return False

        account.debit(transaction.amount)
        return True

    def _handle_dispute(self, transaction: Transaction) -> bool:
        amount = self._claim(transaction, TransactionStatus.DEPOSITED)
        if amount is None:
            return False

        self._account_for(transaction).hold(amount)
        self._state.update_transaction(
            transaction.transaction_id,
            TransactionState.disputed(transaction.client_id, amount),
        )
        return True

    def _handle_resolve(self, transaction: Transaction) -> bool:
        amount = self._claim(transaction, TransactionStatus.DISPUTED)
        if amount is None:
            return False

        self._account_for(transaction).release_hold(amount)
        self._state.update_transaction(transaction.transaction_id, TransactionState.resolved())
        return True

    def _handle_chargeback(self, transaction: Transaction) -> bool:
        amount = self._claim(transaction, TransactionStatus.DISPUTED)
        if amount is None:
            return False

        account = self._account_for(transaction)
        account.remove_held(amount)
        account.lock()
        self._state.update_transaction(transaction.transaction_id, TransactionState.charged_back())
        return True

    def _claim(self, transaction: Transaction, expected: TransactionStatus) -> Optional[Decimal]:
        """
        Amount of the referenced transaction if it is in the expected status and
        belongs to the requesting client, otherwise None.
        """
        original = self._state.get_transaction(transaction.transaction_id)
        if original is None or original.status != expected:
            return None
        if original.client_id != transaction.client_id:
            return None
        return original.amount

    def _account_for(self, transaction: Transaction) -> ClientAccount:
        account = self._state.get_account(transaction.client_id)
        if account is None:
            raise AccountingInvariantError(
                f"tx {transaction.transaction_id} is recorded for client {transaction.client_id} but the account does not exist"
            )
        return account
