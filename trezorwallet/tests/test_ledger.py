"""
Tests for the in-memory ledger and UTXO resolution.
"""

from __future__ import annotations

import pytest
from conftest import FOREIGN_ADDRESS, change_address, funding_tx

from trezorwallet.errors import LedgerLookupError
from trezorwallet.ledger import InMemoryLedger
from trezorwallet.models import (
    Account,
    TransactionInputRecord,
    TransactionOutputRecord,
    TransactionRecord,
    TransactionWithInOut,
)
from trezorwallet.wallet.utxo import UtxoResolver

TXID_A = "a" * 64
TXID_B = "b" * 64
TXID_C = "c" * 64


def spending_tx(account: Account, txid: str, spends: list[tuple[str, int]], change: int):
    return TransactionWithInOut(
        tx=TransactionRecord(txid=txid),
        vin=[
            TransactionInputRecord(
                txid=txid, account=account.id, prev_txid=prev_txid, prev_vout=prev_vout, n=i
            )
            for i, (prev_txid, prev_vout) in enumerate(spends)
        ],
        vout=[
            TransactionOutputRecord(
                txid=txid, account=account.id, n=0, value=10_000, address=FOREIGN_ADDRESS
            ),
            TransactionOutputRecord(
                txid=txid,
                account=account.id,
                n=1,
                value=change,
                address=f"{account.id}-change-0",
            ),
        ],
    )


class TestInMemoryLedger:
    def test_unknown_account(self) -> None:
        ledger = InMemoryLedger()
        with pytest.raises(LedgerLookupError, match="Account missing not found"):
            ledger.get_account("missing")

    def test_unknown_address(self, legacy_ledger: InMemoryLedger) -> None:
        with pytest.raises(LedgerLookupError):
            legacy_ledger.get_address("legacy", "nope")

    def test_unknown_transaction(self, legacy_ledger: InMemoryLedger) -> None:
        with pytest.raises(LedgerLookupError):
            legacy_ledger.get_transaction("legacy", TXID_A)

    def test_add_address_requires_account(self, legacy_account: Account) -> None:
        ledger = InMemoryLedger()
        with pytest.raises(LedgerLookupError):
            ledger.add_address(change_address(legacy_account, 0))

    def test_addresses_ordered_by_index(self, legacy_account: Account) -> None:
        ledger = InMemoryLedger()
        ledger.add_account(legacy_account)
        for i in (2, 0, 1):
            ledger.add_address(change_address(legacy_account, i))
        chain = ledger.get_addresses("legacy", change=True)
        assert [a.index for a in chain] == [0, 1, 2]
        assert ledger.get_addresses("legacy", change=False) == []

    def test_my_outputs_exclude_foreign(
        self, legacy_ledger: InMemoryLedger, legacy_account: Account
    ) -> None:
        tx = funding_tx(legacy_account, TXID_A, [50_000])
        legacy_ledger.add_transaction("legacy", tx)
        legacy_ledger.add_transaction(
            "legacy", spending_tx(legacy_account, TXID_B, [(TXID_A, 0)], change=39_000)
        )

        outputs = legacy_ledger.get_my_outputs("legacy")
        assert [(o.txid, o.n) for o in outputs] == [(TXID_A, 0), (TXID_B, 1)]


class TestUtxoResolver:
    def test_empty_ledger(self, legacy_ledger: InMemoryLedger, legacy_account: Account) -> None:
        assert UtxoResolver(legacy_ledger).resolve(legacy_account) == []

    def test_spent_outputs_are_excluded(
        self, legacy_ledger: InMemoryLedger, legacy_account: Account
    ) -> None:
        legacy_ledger.add_transaction("legacy", funding_tx(legacy_account, TXID_A, [50_000, 7_000]))
        legacy_ledger.add_transaction(
            "legacy", spending_tx(legacy_account, TXID_B, [(TXID_A, 0)], change=39_000)
        )

        utxos = UtxoResolver(legacy_ledger).resolve(legacy_account)

        assert [u.outpoint for u in utxos] == [(TXID_A, 1), (TXID_B, 1)]
        assert [u.value for u in utxos] == [7_000, 39_000]

    def test_same_txid_different_index_not_spent(
        self, legacy_ledger: InMemoryLedger, legacy_account: Account
    ) -> None:
        legacy_ledger.add_transaction("legacy", funding_tx(legacy_account, TXID_A, [1_000, 2_000]))
        legacy_ledger.add_transaction(
            "legacy", spending_tx(legacy_account, TXID_B, [(TXID_A, 1)], change=0)
        )

        utxos = UtxoResolver(legacy_ledger).resolve(legacy_account)

        assert (TXID_A, 0) in [u.outpoint for u in utxos]
        assert (TXID_A, 1) not in [u.outpoint for u in utxos]

    def test_resolve_is_idempotent(
        self, legacy_ledger: InMemoryLedger, legacy_account: Account
    ) -> None:
        for txid in (TXID_C, TXID_A, TXID_B):
            legacy_ledger.add_transaction("legacy", funding_tx(legacy_account, txid, [3_000, 400]))
        resolver = UtxoResolver(legacy_ledger)

        assert resolver.resolve(legacy_account) == resolver.resolve(legacy_account)

    def test_balance(self, legacy_ledger: InMemoryLedger, legacy_account: Account) -> None:
        legacy_ledger.add_transaction("legacy", funding_tx(legacy_account, TXID_A, [50_000, 7_000]))
        legacy_ledger.add_transaction(
            "legacy", spending_tx(legacy_account, TXID_B, [(TXID_A, 0)], change=39_000)
        )

        assert UtxoResolver(legacy_ledger).get_balance(legacy_account) == 46_000
