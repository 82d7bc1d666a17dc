"""
Exceptions raised while composing a transaction.
"""

from __future__ import annotations


class ComposeError(Exception):
    """Base class for transaction composition failures."""

    pass


class InsufficientFundsError(ComposeError):
    """The available UTXOs cannot cover the outputs plus the mining fee."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: need {required}, have {available}")

    @property
    def shortfall(self) -> int:
        return self.required - self.available


class NoFreshChangeAddressError(ComposeError):
    """The account has no unused change address left."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"No fresh change address available for account {account_id}")


class LedgerLookupError(ComposeError):
    """A record the caller referenced does not exist in the ledger."""

    pass
