"""
trezorwallet - Transaction composition for a hardware-signed Bitcoin wallet

Selects coins from the local ledger and prepares unsigned transactions for
the signing device.
"""

__version__ = "0.1.0"

from trezorwallet.compose import (
    ComposedTransaction,
    ComposeResult,
    TransactionComposer,
)
from trezorwallet.config import ComposerConfig
from trezorwallet.constants import DUST_THRESHOLD
from trezorwallet.errors import (
    ComposeError,
    InsufficientFundsError,
    LedgerLookupError,
    NoFreshChangeAddressError,
)
from trezorwallet.ledger import InMemoryLedger, LedgerRepository

__all__ = [
    "ComposeError",
    "ComposeResult",
    "ComposedTransaction",
    "ComposerConfig",
    "DUST_THRESHOLD",
    "InMemoryLedger",
    "InsufficientFundsError",
    "LedgerLookupError",
    "LedgerRepository",
    "NoFreshChangeAddressError",
    "TransactionComposer",
]
