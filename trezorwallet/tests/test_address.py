"""
Tests for address decoding and output sizes.
"""

from __future__ import annotations

import pytest
from conftest import P2PKH_ADDRESS, P2SH_ADDRESS, P2WPKH_ADDRESS

from trezorwallet.address import (
    address_to_scriptpubkey,
    output_size_for_address,
    output_size_for_script,
    varint_size,
)


class TestVarintSize:
    def test_single_byte(self) -> None:
        assert varint_size(0) == 1
        assert varint_size(252) == 1

    def test_three_bytes(self) -> None:
        assert varint_size(253) == 3
        assert varint_size(0xFFFF) == 3

    def test_five_bytes(self) -> None:
        assert varint_size(65536) == 5

    def test_nine_bytes(self) -> None:
        assert varint_size(4294967296) == 9


class TestAddressToScriptPubKey:
    def test_p2pkh_mainnet(self) -> None:
        script = address_to_scriptpubkey(P2PKH_ADDRESS)
        assert script[:3] == bytes([0x76, 0xA9, 0x14])
        assert script[-2:] == bytes([0x88, 0xAC])
        assert len(script) == 25

    def test_p2sh_mainnet(self) -> None:
        script = address_to_scriptpubkey(P2SH_ADDRESS)
        assert script[:2] == bytes([0xA9, 0x14])
        assert script[-1] == 0x87
        assert len(script) == 23

    def test_p2wpkh_mainnet(self) -> None:
        script = address_to_scriptpubkey(P2WPKH_ADDRESS)
        assert script[:2] == bytes([0x00, 0x14])
        assert len(script) == 22

    def test_p2wpkh_testnet(self) -> None:
        script = address_to_scriptpubkey("tb1qw508d6qejxtdg4y5r3zarvary0c5xw7kxpjzsx")
        assert len(script) == 22

    def test_p2wpkh_regtest(self) -> None:
        script = address_to_scriptpubkey("bcrt1qw508d6qejxtdg4y5r3zarvary0c5xw7kygt080")
        assert len(script) == 22

    def test_p2wsh_mainnet(self) -> None:
        address = "bc1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0gdcccefvpysxf3qccfmv3"
        script = address_to_scriptpubkey(address)
        assert script[:2] == bytes([0x00, 0x20])
        assert len(script) == 34

    def test_invalid_bech32(self) -> None:
        with pytest.raises(ValueError, match="Invalid bech32"):
            address_to_scriptpubkey("bc1invalid")

    def test_invalid_base58_checksum(self) -> None:
        with pytest.raises(ValueError):
            address_to_scriptpubkey("1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN3")


class TestOutputSize:
    def test_sizes_by_address_type(self) -> None:
        assert output_size_for_address(P2PKH_ADDRESS) == 34
        assert output_size_for_address(P2SH_ADDRESS) == 32
        assert output_size_for_address(P2WPKH_ADDRESS) == 31

    def test_size_for_script(self) -> None:
        assert output_size_for_script(b"\x6a") == 10
