"""
Signing device transaction messages.

Field names, optionality and enum values follow the device's bitcoin
TransactionType schema. Fields left as None are not sent to the device, so
the device applies its own defaults (e.g. version and lock_time of a freshly
composed transaction).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, model_validator


class InputScriptType(IntEnum):
    SPENDADDRESS = 0
    SPENDMULTISIG = 1
    EXTERNAL = 2
    SPENDWITNESS = 3
    SPENDP2SHWITNESS = 4
    SPENDTAPROOT = 5


class OutputScriptType(IntEnum):
    PAYTOADDRESS = 0
    PAYTOSCRIPTHASH = 1
    PAYTOMULTISIG = 2
    PAYTOOPRETURN = 3
    PAYTOWITNESS = 4
    PAYTOP2SHWITNESS = 5
    PAYTOTAPROOT = 6


class _DeviceMessage(BaseModel):
    def to_dict(self) -> dict[str, Any]:
        """Fields that are set, with bytes kept as bytes."""
        return self.model_dump(exclude_none=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Fields that are set, with bytes rendered as hex."""
        return self.model_dump(mode="json", exclude_none=True)


class TxInputType(_DeviceMessage):
    address_n: list[int] = Field(default_factory=list)
    prev_hash: bytes = Field(..., min_length=32, max_length=32)
    prev_index: int = Field(..., ge=0)
    script_sig: bytes | None = None
    sequence: int | None = Field(default=None, ge=0, le=0xFFFFFFFF)
    script_type: InputScriptType | None = None
    amount: int | None = Field(default=None, ge=0)

    @field_serializer("prev_hash", "script_sig", when_used="json")
    def serialize_hex(self, v: bytes | None) -> str | None:
        return v.hex() if v is not None else None


class TxOutputType(_DeviceMessage):
    address: str | None = None
    address_n: list[int] = Field(default_factory=list)
    amount: int = Field(..., ge=0)
    script_type: OutputScriptType = OutputScriptType.PAYTOADDRESS

    @model_validator(mode="after")
    def check_destination(self) -> TxOutputType:
        """Exactly one of address / address_n identifies where the output pays."""
        if bool(self.address) == bool(self.address_n):
            raise ValueError("Output needs either address or address_n, not both")
        return self

    @property
    def is_change(self) -> bool:
        return bool(self.address_n)


class TxOutputBinType(_DeviceMessage):
    amount: int = Field(..., ge=0)
    script_pubkey: bytes

    @field_serializer("script_pubkey", when_used="json")
    def serialize_hex(self, v: bytes) -> str:
        return v.hex()


class TransactionType(_DeviceMessage):
    """
    A transaction as presented to the signing device.

    Freshly composed transactions carry ``outputs``; previous transactions
    referenced by legacy inputs carry ``bin_outputs`` and their original
    version and lock_time.
    """

    version: int | None = None
    inputs: list[TxInputType] = Field(default_factory=list)
    bin_outputs: list[TxOutputBinType] = Field(default_factory=list)
    outputs: list[TxOutputType] = Field(default_factory=list)
    lock_time: int | None = None
    inputs_cnt: int = Field(..., ge=0)
    outputs_cnt: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> TransactionType:
        if self.inputs_cnt != len(self.inputs):
            raise ValueError(f"inputs_cnt {self.inputs_cnt} != {len(self.inputs)} inputs")
        if self.outputs and self.bin_outputs:
            raise ValueError("Transaction has both outputs and bin_outputs")
        n_outputs = len(self.outputs) + len(self.bin_outputs)
        if self.outputs_cnt != n_outputs:
            raise ValueError(f"outputs_cnt {self.outputs_cnt} != {n_outputs} outputs")
        return self
