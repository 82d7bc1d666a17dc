"""
Bitcoin size and dust constants used by coin selection.

Sizes are in bytes of the serialized transaction. Inputs spending P2SH-wrapped
P2WPKH are split into the part counted in the base transaction and the part
that lives in the witness (discounted 4x when computing virtual size).
"""

from __future__ import annotations

# Standard P2PKH dust limit in Bitcoin Core
DUST_THRESHOLD = 546  # satoshis

# Hardened derivation offset (BIP32)
HARDENED = 0x80000000

# BIP44 / BIP49 purposes
PURPOSE_LEGACY = 44
PURPOSE_P2SH_SEGWIT = 49

# Version (4) + locktime (4); input and output counts are varints on top
TX_VERSION_LOCKTIME_SIZE = 8

# Segwit marker and flag, counted as witness data
SEGWIT_MARKER_WEIGHT = 2

WITNESS_SCALE_FACTOR = 4

# Outpoint (36) + scriptSig length (1) + scriptSig (107) + sequence (4)
# scriptSig: <72-byte DER signature + push> <33-byte compressed pubkey + push>
P2PKH_INPUT_SIZE = 148

# Outpoint (36) + scriptSig length (1) + scriptSig (23) + sequence (4)
# scriptSig pushes the 22-byte P2WPKH redeem script
P2SH_P2WPKH_INPUT_SIZE = 64

# Item count (1) + signature (1 + 72) + pubkey (1 + 33)
P2SH_P2WPKH_WITNESS_SIZE = 108

# Value (8) + script length (1) + script
P2PKH_OUTPUT_SIZE = 34
P2SH_OUTPUT_SIZE = 32
P2WPKH_OUTPUT_SIZE = 31
P2WSH_OUTPUT_SIZE = 43
P2TR_OUTPUT_SIZE = 43

DEFAULT_SEQUENCE = 0xFFFFFFFF
