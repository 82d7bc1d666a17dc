"""
UTXO set resolution from the local ledger.
"""

from __future__ import annotations

from loguru import logger

from trezorwallet.ledger.base import LedgerRepository
from trezorwallet.models import Account, TransactionOutputRecord


class UtxoResolver:
    """Finds unspent outputs by matching the account's outputs with its inputs."""

    def __init__(self, ledger: LedgerRepository):
        self.ledger = ledger

    def resolve(self, account: Account) -> list[TransactionOutputRecord]:
        my_outputs = self.ledger.get_my_outputs(account.id)
        spent = {(txin.prev_txid, txin.prev_vout) for txin in self.ledger.get_inputs(account.id)}

        utxos = [txout for txout in my_outputs if txout.outpoint not in spent]

        logger.debug(
            f"Account {account.id}: {len(utxos)} unspent of {len(my_outputs)} received outputs"
        )
        return utxos

    def get_balance(self, account: Account) -> int:
        """Sum of unspent output values in satoshis"""
        return sum(utxo.value for utxo in self.resolve(account))
