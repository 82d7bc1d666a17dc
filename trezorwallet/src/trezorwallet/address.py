"""
Address and script helpers for output size estimation.
"""

from __future__ import annotations

import base58
import bech32

BECH32_HRPS = ("bcrt", "bc", "tb")


def varint_size(n: int) -> int:
    """Length in bytes of the varint encoding of n."""
    if n < 0xFD:
        return 1
    if n <= 0xFFFF:
        return 3
    if n <= 0xFFFFFFFF:
        return 5
    return 9


def address_to_scriptpubkey(address: str) -> bytes:
    """
    Convert a Bitcoin address to scriptPubKey.

    Supports:
    - P2WPKH (bc1q..., tb1q..., bcrt1q...)
    - P2WSH (bc1q... 62 chars, tb1q... 62 chars)
    - P2TR (bc1p...)
    - P2PKH (1..., m..., n...)
    - P2SH (3..., 2...)

    Raises:
        ValueError: If the address cannot be decoded
    """
    lowered = address.lower()
    for hrp in BECH32_HRPS:
        if lowered.startswith(hrp + "1"):
            witver, witprog = bech32.decode(hrp, address)
            if witver is None or witprog is None:
                raise ValueError(f"Invalid bech32 address: {address}")

            program = bytes(witprog)
            if witver == 0 and len(program) == 20:
                # P2WPKH: OP_0 <20-byte-pubkeyhash>
                return bytes([0x00, 0x14]) + program
            if witver == 0 and len(program) == 32:
                # P2WSH: OP_0 <32-byte-scripthash>
                return bytes([0x00, 0x20]) + program
            if witver == 1 and len(program) == 32:
                # P2TR: OP_1 <32-byte-pubkey>
                return bytes([0x51, 0x20]) + program
            raise ValueError(f"Unsupported witness program in {address}")

    try:
        decoded = base58.b58decode_check(address)
    except ValueError as e:
        raise ValueError(f"Invalid base58 address: {address}") from e

    version = decoded[0]
    payload = decoded[1:]
    if len(payload) != 20:
        raise ValueError(f"Invalid address payload length: {address}")

    if version in (0x00, 0x6F):  # Mainnet/Testnet P2PKH
        # P2PKH: OP_DUP OP_HASH160 <20-byte-pubkeyhash> OP_EQUALVERIFY OP_CHECKSIG
        return bytes([0x76, 0xA9, 0x14]) + payload + bytes([0x88, 0xAC])
    elif version in (0x05, 0xC4):  # Mainnet/Testnet P2SH
        # P2SH: OP_HASH160 <20-byte-scripthash> OP_EQUAL
        return bytes([0xA9, 0x14]) + payload + bytes([0x87])

    raise ValueError(f"Unknown address version: {version}")


def output_size_for_script(script: bytes) -> int:
    """Serialized size of an output paying to ``script``."""
    return 8 + varint_size(len(script)) + len(script)


def output_size_for_address(address: str) -> int:
    return output_size_for_script(address_to_scriptpubkey(address))
