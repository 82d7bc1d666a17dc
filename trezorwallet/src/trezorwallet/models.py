"""
Wallet ledger records.

These mirror what the wallet stores locally after syncing: accounts, the
transactions touching them, and the derived addresses of each account.
The composer only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from trezorwallet.constants import (
    DEFAULT_SEQUENCE,
    HARDENED,
    PURPOSE_LEGACY,
    PURPOSE_P2SH_SEGWIT,
)


@dataclass(frozen=True)
class Account:
    """
    A BIP44 (legacy) or BIP49 (P2SH-wrapped segwit) account.

    Derivation path: m/{purpose}'/{coin_type}'/{account_index}'
    """

    id: str
    legacy: bool
    account_index: int = 0
    network: str = "mainnet"
    label: str = ""
    xpub: str = ""

    @property
    def purpose(self) -> int:
        return PURPOSE_LEGACY if self.legacy else PURPOSE_P2SH_SEGWIT

    @property
    def coin_type(self) -> int:
        return 0 if self.network == "mainnet" else 1

    @property
    def is_segwit(self) -> bool:
        return not self.legacy

    def get_path(self) -> list[int]:
        """Account-level derivation path with hardened components"""
        return [
            self.purpose | HARDENED,
            self.coin_type | HARDENED,
            self.account_index | HARDENED,
        ]


@dataclass(frozen=True)
class TransactionRecord:
    txid: str
    version: int = 1
    locktime: int = 0
    block_height: int | None = None


@dataclass(frozen=True)
class TransactionInputRecord:
    """An input of a transaction touching the account.

    ``txid`` is the spending transaction, ``prev_txid``/``prev_vout`` the
    outpoint it spends.
    """

    txid: str
    account: str
    prev_txid: str
    prev_vout: int
    script_sig: str = ""
    sequence: int = DEFAULT_SEQUENCE
    n: int = 0


@dataclass(frozen=True)
class TransactionOutputRecord:
    txid: str
    account: str
    n: int
    value: int
    address: str | None = None
    script_pubkey: str = ""

    @property
    def outpoint(self) -> tuple[str, int]:
        return self.txid, self.n


@dataclass
class TransactionWithInOut:
    """A transaction together with all of its inputs and outputs, in order"""

    tx: TransactionRecord
    vin: list[TransactionInputRecord] = field(default_factory=list)
    vout: list[TransactionOutputRecord] = field(default_factory=list)


@dataclass(frozen=True)
class AddressRecord:
    address: str
    account: str
    change: bool
    index: int
    total_received: int = 0
    label: str | None = None

    @property
    def is_fresh(self) -> bool:
        return self.total_received == 0

    def get_path(self, account: Account) -> list[int]:
        """Full derivation path: account path + chain + index"""
        return account.get_path() + [1 if self.change else 0, self.index]

    def get_path_string(self, account: Account) -> str:
        """Human readable path (e.g., m/49'/0'/0'/1/5)."""
        parts = []
        for component in self.get_path(account):
            if component & HARDENED:
                parts.append(f"{component & ~HARDENED}'")
            else:
                parts.append(str(component))
        return "m/" + "/".join(parts)


def find_first_fresh_index(addresses: list[AddressRecord]) -> int:
    """
    Index of the first fresh address in a chain.

    Addresses before the last one that ever received funds are considered
    used even if they never received anything themselves.
    """
    last_used_index = -1
    for i, address in enumerate(addresses):
        if address.total_received > 0:
            last_used_index = i
    return last_used_index + 1
