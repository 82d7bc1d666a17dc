"""
Transaction composition for the signing device.
"""

from trezorwallet.compose.change import ChangePolicy, FreshChangeAddressProvider
from trezorwallet.compose.coin_selector import (
    CoinSelector,
    SelectionResult,
    calculate_fee,
    estimate_tx_vsize,
)
from trezorwallet.compose.composer import (
    ComposedTransaction,
    ComposeResult,
    TransactionComposer,
)
from trezorwallet.compose.messages import (
    InputScriptType,
    OutputScriptType,
    TransactionType,
    TxInputType,
    TxOutputBinType,
    TxOutputType,
)
from trezorwallet.compose.tx_builder import TransactionBuilder, encode_referenced_transaction

__all__ = [
    "ChangePolicy",
    "CoinSelector",
    "ComposeResult",
    "ComposedTransaction",
    "FreshChangeAddressProvider",
    "InputScriptType",
    "OutputScriptType",
    "SelectionResult",
    "TransactionBuilder",
    "TransactionComposer",
    "TransactionType",
    "TxInputType",
    "TxOutputBinType",
    "TxOutputType",
    "calculate_fee",
    "encode_referenced_transaction",
    "estimate_tx_vsize",
]
