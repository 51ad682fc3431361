from typing import Dict, List, Optional

from models import ClientAccount, TransactionState


class StateManager:
    """
    In-memory state: client accounts and the transaction history needed
    to validate disputes, resolves and chargebacks.
    Not synchronized; the owning engine serializes access.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, TransactionState] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        account = self._accounts.get(client_id)
        if account is None:
            account = self._accounts[client_id] = ClientAccount(client_id=client_id)
        return account

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def record_new_transaction(self, transaction_id: int, state: TransactionState) -> bool:
        """
        Store state for a transaction id that has never been seen.
        Returns False, leaving history untouched, if the id is already recorded.
        """
        return self._transactions.setdefault(transaction_id, state) is state

    def get_transaction(self, transaction_id: int) -> Optional[TransactionState]:
        """Retrieve recorded transaction state by ID."""
        return self._transactions.get(transaction_id)

    def update_transaction(self, transaction_id: int, state: TransactionState) -> None:
        """Move an already recorded transaction to its next state."""
        self._transactions[transaction_id] = state

    def get_all_accounts(self) -> List[ClientAccount]:
        """Return all accounts in first-seen order."""
        return list(self._accounts.values())
