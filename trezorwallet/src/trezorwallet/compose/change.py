"""
Change output policy.
"""

from __future__ import annotations

from loguru import logger

from trezorwallet.compose.coin_selector import change_script_type
from trezorwallet.compose.messages import TxOutputType
from trezorwallet.constants import DUST_THRESHOLD
from trezorwallet.errors import NoFreshChangeAddressError
from trezorwallet.ledger.base import LedgerRepository
from trezorwallet.models import (
    Account,
    AddressRecord,
    TransactionOutputRecord,
    find_first_fresh_index,
)


class FreshChangeAddressProvider:
    """
    Returns the next unused change address.

    That is the first address after the last one that ever received funds, so
    a gap left in the chain is never filled.
    """

    def __init__(self, ledger: LedgerRepository):
        self.ledger = ledger

    def get_fresh_change_address(self, account: Account) -> AddressRecord:
        chain = self.ledger.get_addresses(account.id, change=True)
        index = find_first_fresh_index(chain)
        if index < len(chain):
            return chain[index]
        # Address discovery keeps a gap of unused addresses on both chains
        raise NoFreshChangeAddressError(account.id)


class ChangePolicy:
    """Adds a change output when the leftover value is worth spending later."""

    def __init__(
        self,
        address_provider: FreshChangeAddressProvider,
        dust_threshold: int = DUST_THRESHOLD,
    ):
        self.address_provider = address_provider
        self.dust_threshold = dust_threshold

    def maybe_add_change(
        self,
        account: Account,
        inputs: list[TransactionOutputRecord],
        outputs: list[TxOutputType],
        fee: int,
        allow_change: bool = True,
    ) -> list[TxOutputType]:
        """
        Return the outputs, extended with a change output if it is not dust.

        Change below the dust threshold is left to the miners, and so is any
        leftover when ``allow_change`` is False (the fee did not include a
        change output).
        """
        inputs_value = sum(utxo.value for utxo in inputs)
        outputs_value = sum(output.amount for output in outputs)
        change_value = inputs_value - outputs_value - fee

        if not allow_change:
            logger.debug(f"Fee estimated without change, adding {change_value} sat to the fee")
            return list(outputs)

        if change_value < self.dust_threshold:
            logger.debug(
                f"Change {change_value} sat below dust threshold {self.dust_threshold}, "
                f"adding it to the fee"
            )
            return list(outputs)

        change_address = self.address_provider.get_fresh_change_address(account)
        logger.debug(
            f"Change {change_value} sat to {change_address.get_path_string(account)}"
        )

        change_output = TxOutputType(
            address_n=change_address.get_path(account),
            amount=change_value,
            script_type=change_script_type(account.is_segwit),
        )
        return [*outputs, change_output]
