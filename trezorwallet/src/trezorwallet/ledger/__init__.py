"""
Ledger repositories.

Available implementations:
- InMemoryLedger: records held in memory (tests, precomputed snapshots)
"""

from trezorwallet.ledger.base import LedgerRepository
from trezorwallet.ledger.memory import InMemoryLedger

__all__ = [
    "InMemoryLedger",
    "LedgerRepository",
]
