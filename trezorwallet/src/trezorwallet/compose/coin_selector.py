"""
Coin selection and fee estimation.

Selection is largest-first: candidates are sorted by value (descending, ties
by outpoint) and accumulated until they cover the outputs plus the fee of a
transaction with that many inputs. The fee is re-estimated after every added
input since each input grows the transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from trezorwallet.address import output_size_for_address, varint_size
from trezorwallet.compose.messages import OutputScriptType, TxOutputType
from trezorwallet.constants import (
    DUST_THRESHOLD,
    P2PKH_INPUT_SIZE,
    P2PKH_OUTPUT_SIZE,
    P2SH_OUTPUT_SIZE,
    P2SH_P2WPKH_INPUT_SIZE,
    P2SH_P2WPKH_WITNESS_SIZE,
    P2TR_OUTPUT_SIZE,
    P2WPKH_OUTPUT_SIZE,
    SEGWIT_MARKER_WEIGHT,
    TX_VERSION_LOCKTIME_SIZE,
    WITNESS_SCALE_FACTOR,
)
from trezorwallet.errors import InsufficientFundsError
from trezorwallet.models import TransactionOutputRecord

# Sizes of outputs paying to a derivation path (no address to decode)
OUTPUT_SIZE_BY_SCRIPT_TYPE: dict[OutputScriptType, int] = {
    OutputScriptType.PAYTOADDRESS: P2PKH_OUTPUT_SIZE,
    OutputScriptType.PAYTOSCRIPTHASH: P2SH_OUTPUT_SIZE,
    OutputScriptType.PAYTOP2SHWITNESS: P2SH_OUTPUT_SIZE,
    OutputScriptType.PAYTOWITNESS: P2WPKH_OUTPUT_SIZE,
    OutputScriptType.PAYTOTAPROOT: P2TR_OUTPUT_SIZE,
}


def change_script_type(segwit: bool) -> OutputScriptType:
    return OutputScriptType.PAYTOP2SHWITNESS if segwit else OutputScriptType.PAYTOADDRESS


def estimate_output_size(output: TxOutputType) -> int:
    """Serialized size of an output in bytes."""
    if output.address:
        return output_size_for_address(output.address)
    try:
        return OUTPUT_SIZE_BY_SCRIPT_TYPE[output.script_type]
    except KeyError:
        raise ValueError(f"Cannot estimate size of {output.script_type.name} output") from None


def estimate_tx_vsize(num_inputs: int, output_sizes: list[int], segwit: bool) -> int:
    """
    Estimate the virtual size of a transaction.

    Legacy transactions spend P2PKH inputs and have no witness, so the
    virtual size equals the serialized size. Segwit-compatible transactions
    spend P2SH-P2WPKH inputs: their base part is weighted 4x and the witness
    (plus marker and flag) 1x, and the virtual size is the weight / 4
    rounded up.

    Args:
        num_inputs: Number of inputs
        output_sizes: Serialized size of each output
        segwit: True for P2SH-P2WPKH inputs, False for P2PKH inputs

    Returns:
        Virtual size in vbytes
    """
    base_size = (
        TX_VERSION_LOCKTIME_SIZE
        + varint_size(num_inputs)
        + varint_size(len(output_sizes))
        + sum(output_sizes)
    )

    if not segwit:
        return base_size + num_inputs * P2PKH_INPUT_SIZE

    base_size += num_inputs * P2SH_P2WPKH_INPUT_SIZE
    witness_size = SEGWIT_MARKER_WEIGHT + num_inputs * P2SH_P2WPKH_WITNESS_SIZE
    weight = base_size * WITNESS_SCALE_FACTOR + witness_size
    return (weight + WITNESS_SCALE_FACTOR - 1) // WITNESS_SCALE_FACTOR


def check_fee_rate(fee_rate: int) -> None:
    """Fee rates are whole sat/vbyte; fractional rates are rejected, not rounded."""
    if isinstance(fee_rate, bool) or not isinstance(fee_rate, int):
        raise ValueError(f"Fee rate must be an integer sat/vbyte: {fee_rate!r}")
    if fee_rate < 0:
        raise ValueError(f"Fee rate must not be negative: {fee_rate}")


def calculate_fee(vsize: int, fee_rate: int) -> int:
    """Mining fee in satoshis for an integer fee rate in sat/vbyte."""
    return vsize * fee_rate


@dataclass
class SelectionResult:
    """Result of coin selection"""

    utxos: list[TransactionOutputRecord]
    fee: int
    target_value: int
    # False when the fee was estimated without a change output
    allow_change: bool = True

    @property
    def total_value(self) -> int:
        return sum(utxo.value for utxo in self.utxos)

    @property
    def change_value(self) -> int:
        return self.total_value - self.target_value - self.fee


class CoinSelector:
    """Largest-first coin selector for single-account transactions."""

    DUST_THRESHOLD = DUST_THRESHOLD

    def select(
        self,
        utxo_set: list[TransactionOutputRecord],
        outputs: list[TxOutputType],
        fee_rate: int,
        segwit: bool,
    ) -> SelectionResult:
        """
        Select UTXOs covering the outputs and the mining fee.

        The fee is first estimated for the transaction including a change
        output. If the selected inputs cannot cover that but can cover the
        transaction without change, the cheaper fee is used and the result is
        marked ``allow_change=False``: the remainder did not pay for a change
        output and ends up in the fee.

        Args:
            utxo_set: Candidate unspent outputs
            outputs: Desired outputs (without change)
            fee_rate: Fee rate in sat/vbyte
            segwit: Whether the account spends P2SH-P2WPKH inputs

        Returns:
            Selected UTXOs and the fee in satoshis

        Raises:
            InsufficientFundsError: If all candidates together are not enough
            ValueError: On a negative or non-integer fee rate, or non-positive
                output amounts
        """
        check_fee_rate(fee_rate)
        if not outputs:
            raise ValueError("At least one output is required")
        for output in outputs:
            if output.amount <= 0:
                raise ValueError(f"Output amount must be positive: {output.amount}")

        target = sum(output.amount for output in outputs)
        output_sizes = [estimate_output_size(output) for output in outputs]
        sizes_with_change = output_sizes + [
            OUTPUT_SIZE_BY_SCRIPT_TYPE[change_script_type(segwit)]
        ]

        candidates = sorted(utxo_set, key=lambda u: (-u.value, u.txid, u.n))

        selected: list[TransactionOutputRecord] = []
        total = 0
        for utxo in candidates:
            selected.append(utxo)
            total += utxo.value

            vsize = estimate_tx_vsize(len(selected), sizes_with_change, segwit)
            fee = calculate_fee(vsize, fee_rate)
            if total >= target + fee:
                logger.debug(
                    f"Selected {len(selected)} inputs ({total} sat) for {target} sat, fee {fee}"
                )
                return SelectionResult(utxos=selected, fee=fee, target_value=target)

            vsize = estimate_tx_vsize(len(selected), output_sizes, segwit)
            fee = calculate_fee(vsize, fee_rate)
            if total >= target + fee:
                logger.debug(
                    f"Selected {len(selected)} inputs ({total} sat) for {target} sat, "
                    f"fee {fee} without change"
                )
                return SelectionResult(
                    utxos=selected, fee=fee, target_value=target, allow_change=False
                )

        fee = calculate_fee(estimate_tx_vsize(len(selected), output_sizes, segwit), fee_rate)
        logger.warning(
            f"Insufficient funds: {len(candidates)} UTXOs worth {total} sat, "
            f"need {target} sat + {fee} sat fee"
        )
        raise InsufficientFundsError(required=target + fee, available=total)
