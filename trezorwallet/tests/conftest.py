"""
Pytest configuration and fixtures for trezorwallet tests.
"""

from __future__ import annotations

import pytest

from trezorwallet.ledger import InMemoryLedger
from trezorwallet.models import (
    Account,
    AddressRecord,
    TransactionInputRecord,
    TransactionOutputRecord,
    TransactionRecord,
    TransactionWithInOut,
)

# Known valid mainnet addresses
P2PKH_ADDRESS = "1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2"
P2SH_ADDRESS = "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy"
P2WPKH_ADDRESS = "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"

FOREIGN_ADDRESS = "foreign-address"

P2PKH_SCRIPT = "76a914" + "11" * 20 + "88ac"
P2SH_SCRIPT = "a914" + "22" * 20 + "87"
SCRIPT_SIG = "47" + "30" * 71 + "21" + "02" * 33


def receive_address(account: Account, index: int, total_received: int = 0) -> AddressRecord:
    return AddressRecord(
        address=f"{account.id}-recv-{index}",
        account=account.id,
        change=False,
        index=index,
        total_received=total_received,
    )


def change_address(account: Account, index: int, total_received: int = 0) -> AddressRecord:
    return AddressRecord(
        address=f"{account.id}-change-{index}",
        account=account.id,
        change=True,
        index=index,
        total_received=total_received,
    )


def funding_tx(
    account: Account,
    txid: str,
    values: list[int],
    address: str | None = None,
    version: int = 1,
    locktime: int = 0,
) -> TransactionWithInOut:
    """A transaction from a foreign wallet paying ``values`` to the account."""
    address = address or f"{account.id}-recv-0"
    script = P2PKH_SCRIPT if account.legacy else P2SH_SCRIPT
    return TransactionWithInOut(
        tx=TransactionRecord(txid=txid, version=version, locktime=locktime),
        vin=[
            TransactionInputRecord(
                txid=txid,
                account=account.id,
                prev_txid="f" * 64,
                prev_vout=3,
                script_sig=SCRIPT_SIG,
                sequence=0xFFFFFFFE,
            )
        ],
        vout=[
            TransactionOutputRecord(
                txid=txid,
                account=account.id,
                n=n,
                value=value,
                address=address,
                script_pubkey=script,
            )
            for n, value in enumerate(values)
        ],
    )


@pytest.fixture
def legacy_account() -> Account:
    return Account(id="legacy", legacy=True)


@pytest.fixture
def segwit_account() -> Account:
    return Account(id="segwit", legacy=False)


def make_ledger(account: Account) -> InMemoryLedger:
    ledger = InMemoryLedger()
    ledger.add_account(account)
    for i in range(3):
        ledger.add_address(receive_address(account, i, total_received=100_000 if i == 0 else 0))
        ledger.add_address(change_address(account, i))
    return ledger


@pytest.fixture
def legacy_ledger(legacy_account: Account) -> InMemoryLedger:
    return make_ledger(legacy_account)


@pytest.fixture
def segwit_ledger(segwit_account: Account) -> InMemoryLedger:
    return make_ledger(segwit_account)
