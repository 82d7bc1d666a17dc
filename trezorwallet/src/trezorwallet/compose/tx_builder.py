"""
Builds signing device transaction messages.

- TransactionBuilder: the unsigned transaction spending the selected UTXOs
- encode_referenced_transaction: previous transactions that legacy inputs
  spend from, which the device needs to verify input amounts
"""

from __future__ import annotations

from trezorwallet.compose.messages import (
    InputScriptType,
    TransactionType,
    TxInputType,
    TxOutputBinType,
    TxOutputType,
)
from trezorwallet.ledger.base import LedgerRepository
from trezorwallet.models import Account, TransactionOutputRecord, TransactionWithInOut


def txid_to_prev_hash(txid: str) -> bytes:
    """The device takes txids in the same byte order they are displayed in."""
    prev_hash = bytes.fromhex(txid)
    if len(prev_hash) != 32:
        raise ValueError(f"Invalid txid: {txid}")
    return prev_hash


class TransactionBuilder:
    def __init__(self, ledger: LedgerRepository):
        self.ledger = ledger

    def create_inputs(
        self, account: Account, utxos: list[TransactionOutputRecord]
    ) -> list[TxInputType]:
        """Map UTXOs to device inputs signed with the account's keys."""
        inputs = []
        for utxo in utxos:
            if utxo.address is None:
                raise ValueError(f"UTXO {utxo.txid}:{utxo.n} has no address")
            address = self.ledger.get_address(account.id, utxo.address)

            if account.legacy:
                txin = TxInputType(
                    address_n=address.get_path(account),
                    prev_hash=txid_to_prev_hash(utxo.txid),
                    prev_index=utxo.n,
                    script_type=InputScriptType.SPENDADDRESS,
                )
            else:
                # Segwit signatures commit to the spent amount
                txin = TxInputType(
                    address_n=address.get_path(account),
                    prev_hash=txid_to_prev_hash(utxo.txid),
                    prev_index=utxo.n,
                    script_type=InputScriptType.SPENDP2SHWITNESS,
                    amount=utxo.value,
                )
            inputs.append(txin)
        return inputs

    def build(
        self,
        account: Account,
        utxos: list[TransactionOutputRecord],
        outputs: list[TxOutputType],
    ) -> TransactionType:
        """
        Build the unsigned transaction.

        Outputs are kept in the given order (target first, change last) so the
        device shows them the way the user entered them.
        """
        inputs = self.create_inputs(account, utxos)
        return TransactionType(
            inputs=inputs,
            outputs=list(outputs),
            inputs_cnt=len(inputs),
            outputs_cnt=len(outputs),
        )


def encode_referenced_transaction(tx: TransactionWithInOut) -> TransactionType:
    """
    Convert a stored transaction into the form the device uses for previous
    transactions. Version and lock time must match the original so the device
    computes the same txid.
    """
    inputs = [
        TxInputType(
            prev_hash=txid_to_prev_hash(txin.prev_txid),
            prev_index=txin.prev_vout,
            script_sig=bytes.fromhex(txin.script_sig),
            sequence=txin.sequence,
        )
        for txin in tx.vin
    ]
    bin_outputs = [
        TxOutputBinType(amount=txout.value, script_pubkey=bytes.fromhex(txout.script_pubkey))
        for txout in tx.vout
    ]
    return TransactionType(
        version=tx.tx.version,
        lock_time=tx.tx.locktime,
        inputs=inputs,
        bin_outputs=bin_outputs,
        inputs_cnt=len(inputs),
        outputs_cnt=len(bin_outputs),
    )
