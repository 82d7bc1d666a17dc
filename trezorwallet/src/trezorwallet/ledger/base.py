"""
Read-only ledger repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from trezorwallet.models import (
    Account,
    AddressRecord,
    TransactionInputRecord,
    TransactionOutputRecord,
    TransactionWithInOut,
)


class LedgerRepository(ABC):
    """
    Abstract access to the wallet's local ledger.

    Implementations only need to be safe for concurrent reads; the composer
    never writes. Lookups of records that must exist raise LedgerLookupError.
    """

    @abstractmethod
    def get_account(self, account_id: str) -> Account:
        """Get account by id"""

    @abstractmethod
    def get_my_outputs(self, account_id: str) -> list[TransactionOutputRecord]:
        """Get all outputs ever received by addresses of the account"""

    @abstractmethod
    def get_inputs(self, account_id: str) -> list[TransactionInputRecord]:
        """Get all inputs of transactions touching the account"""

    @abstractmethod
    def get_address(self, account_id: str, address: str) -> AddressRecord:
        """Get a derived address record of the account"""

    @abstractmethod
    def get_addresses(self, account_id: str, change: bool) -> list[AddressRecord]:
        """Get the external or change chain of the account, ordered by index"""

    @abstractmethod
    def get_transaction(self, account_id: str, txid: str) -> TransactionWithInOut:
        """Get a transaction with its inputs and outputs"""
