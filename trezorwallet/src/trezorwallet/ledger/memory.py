"""
In-memory ledger used by callers that already hold the records.
"""

from __future__ import annotations

from loguru import logger

from trezorwallet.errors import LedgerLookupError
from trezorwallet.ledger.base import LedgerRepository
from trezorwallet.models import (
    Account,
    AddressRecord,
    TransactionInputRecord,
    TransactionOutputRecord,
    TransactionWithInOut,
)


class InMemoryLedger(LedgerRepository):
    """
    Dict backed ledger.

    Outputs and inputs are kept in insertion order so repeated reads of an
    unchanged ledger return identical lists.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.addresses: dict[str, dict[str, AddressRecord]] = {}
        self.transactions: dict[str, dict[str, TransactionWithInOut]] = {}

    def add_account(self, account: Account) -> None:
        self.accounts[account.id] = account
        self.addresses.setdefault(account.id, {})
        self.transactions.setdefault(account.id, {})

    def add_address(self, address: AddressRecord) -> None:
        self._require_account(address.account)
        self.addresses[address.account][address.address] = address

    def add_transaction(self, account_id: str, tx: TransactionWithInOut) -> None:
        self._require_account(account_id)
        self.transactions[account_id][tx.tx.txid] = tx
        logger.debug(
            f"Ledger {account_id}: added {tx.tx.txid[:16]}... "
            f"({len(tx.vin)} inputs, {len(tx.vout)} outputs)"
        )

    def get_account(self, account_id: str) -> Account:
        return self._require_account(account_id)

    def get_my_outputs(self, account_id: str) -> list[TransactionOutputRecord]:
        self._require_account(account_id)
        mine = self.addresses[account_id]
        return [
            txout
            for tx in self.transactions[account_id].values()
            for txout in tx.vout
            if txout.address is not None and txout.address in mine
        ]

    def get_inputs(self, account_id: str) -> list[TransactionInputRecord]:
        self._require_account(account_id)
        return [txin for tx in self.transactions[account_id].values() for txin in tx.vin]

    def get_address(self, account_id: str, address: str) -> AddressRecord:
        self._require_account(account_id)
        record = self.addresses[account_id].get(address)
        if record is None:
            raise LedgerLookupError(f"Address {address} not found in account {account_id}")
        return record

    def get_addresses(self, account_id: str, change: bool) -> list[AddressRecord]:
        self._require_account(account_id)
        chain = [a for a in self.addresses[account_id].values() if a.change == change]
        return sorted(chain, key=lambda a: a.index)

    def get_transaction(self, account_id: str, txid: str) -> TransactionWithInOut:
        self._require_account(account_id)
        tx = self.transactions[account_id].get(txid)
        if tx is None:
            raise LedgerLookupError(f"Transaction {txid} not found in account {account_id}")
        return tx

    def _require_account(self, account_id: str) -> Account:
        account = self.accounts.get(account_id)
        if account is None:
            raise LedgerLookupError(f"Account {account_id} not found")
        return account
