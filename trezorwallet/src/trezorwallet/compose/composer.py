"""
Transaction composer.

Builds an unsigned transaction paying a single target address from the UTXOs
of one account, ready to be signed by the device:

    resolve UTXOs -> select coins -> add change -> build inputs/outputs
    -> (legacy accounts) encode referenced previous transactions

Composition only reads the ledger. It runs synchronously; callers on an event
loop can use compose_async() to run it in a worker thread.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from trezorwallet.compose.change import ChangePolicy, FreshChangeAddressProvider
from trezorwallet.compose.coin_selector import CoinSelector, check_fee_rate
from trezorwallet.compose.messages import OutputScriptType, TransactionType, TxOutputType
from trezorwallet.compose.tx_builder import TransactionBuilder, encode_referenced_transaction
from trezorwallet.config import ComposerConfig
from trezorwallet.errors import InsufficientFundsError
from trezorwallet.ledger.base import LedgerRepository
from trezorwallet.models import Account, TransactionOutputRecord
from trezorwallet.wallet.utxo import UtxoResolver


@dataclass
class ComposedTransaction:
    """An unsigned transaction and the previous transactions it references"""

    transaction: TransactionType
    referenced_transactions: dict[str, TransactionType] = field(default_factory=dict)
    fee: int = 0
    change_value: int = 0

    @property
    def has_change(self) -> bool:
        return self.change_value > 0


@dataclass
class ComposeResult:
    """
    Outcome of try_compose().

    Insufficient funds is an expected outcome of user input (amount or fee
    rate too high) and is reported here instead of raised.
    """

    ok: bool
    composed: ComposedTransaction | None = None
    error: str | None = None
    shortfall: int = 0


class TransactionComposer:
    """
    Composes single-destination transactions with a custom fee rate.
    """

    def __init__(
        self,
        ledger: LedgerRepository,
        config: ComposerConfig | None = None,
        coin_selector: CoinSelector | None = None,
        change_policy: ChangePolicy | None = None,
        builder: TransactionBuilder | None = None,
    ):
        self.ledger = ledger
        self.config = config or ComposerConfig()
        self.resolver = UtxoResolver(ledger)
        self.coin_selector = coin_selector or CoinSelector()
        self.change_policy = change_policy or ChangePolicy(
            FreshChangeAddressProvider(ledger), dust_threshold=self.config.dust_threshold
        )
        self.builder = builder or TransactionBuilder(ledger)

    def compose(
        self, account_id: str, address: str, amount: int, fee_rate: int | None = None
    ) -> ComposedTransaction:
        """
        Compose a new transaction.

        Args:
            account_id: Account to spend UTXOs from
            address: Target Bitcoin address
            amount: Amount in satoshis to send to the target address
            fee_rate: Mining fee in sat/vbyte, defaults to the configured rate

        Returns:
            The unsigned transaction and, for legacy accounts, the referenced
            previous transactions keyed by txid

        Raises:
            InsufficientFundsError: If the account cannot cover amount + fee
            NoFreshChangeAddressError: If change is needed but no unused
                change address exists
            LedgerLookupError: If the account or one of its records is missing
            ValueError: On invalid address, amount or fee rate
        """
        if fee_rate is None:
            fee_rate = self.config.default_fee_rate
        check_fee_rate(fee_rate)
        if fee_rate > self.config.max_fee_rate:
            raise ValueError(f"Fee rate {fee_rate} exceeds maximum {self.config.max_fee_rate}")

        account = self.ledger.get_account(account_id)
        utxo_set = self.resolver.resolve(account)

        outputs = [
            TxOutputType(
                address=address,
                amount=amount,
                script_type=OutputScriptType.PAYTOADDRESS,
            )
        ]

        selection = self.coin_selector.select(utxo_set, outputs, fee_rate, account.is_segwit)

        outputs = self.change_policy.maybe_add_change(
            account, selection.utxos, outputs, selection.fee, allow_change=selection.allow_change
        )

        transaction = self.builder.build(account, selection.utxos, outputs)

        referenced: dict[str, TransactionType] = {}
        if account.legacy:
            referenced = self.get_referenced_transactions(account, selection.utxos)

        change_value = sum(o.amount for o in outputs if o.is_change)
        fee = selection.total_value - sum(o.amount for o in outputs)

        logger.info(
            f"Composed transaction for account {account_id}: "
            f"{transaction.inputs_cnt} inputs, {transaction.outputs_cnt} outputs, "
            f"amount {amount} sat, fee {fee} sat"
        )

        return ComposedTransaction(
            transaction=transaction,
            referenced_transactions=referenced,
            fee=fee,
            change_value=change_value,
        )

    def try_compose(
        self, account_id: str, address: str, amount: int, fee_rate: int | None = None
    ) -> ComposeResult:
        """Like compose(), but reports insufficient funds in the result."""
        try:
            composed = self.compose(account_id, address, amount, fee_rate)
        except InsufficientFundsError as e:
            return ComposeResult(ok=False, error=str(e), shortfall=e.shortfall)
        return ComposeResult(ok=True, composed=composed)

    async def compose_async(
        self, account_id: str, address: str, amount: int, fee_rate: int | None = None
    ) -> ComposedTransaction:
        """Run compose() in a worker thread."""
        return await asyncio.to_thread(self.compose, account_id, address, amount, fee_rate)

    def get_referenced_transactions(
        self, account: Account, utxos: list[TransactionOutputRecord]
    ) -> dict[str, TransactionType]:
        """Previous transactions of the spent UTXOs, one per txid."""
        referenced: dict[str, TransactionType] = {}
        for utxo in utxos:
            if utxo.txid in referenced:
                continue
            tx = self.ledger.get_transaction(account.id, utxo.txid)
            referenced[utxo.txid] = encode_referenced_transaction(tx)
        return referenced
