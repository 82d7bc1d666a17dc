"""
Configuration for the transaction composer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from trezorwallet.constants import DUST_THRESHOLD


class ComposerConfig(BaseModel):
    """Configuration for composing transactions."""

    # Fee settings (sat/vbyte)
    default_fee_rate: int = Field(default=10, ge=0)
    max_fee_rate: int = Field(
        default=1_000, ge=0, description="Reject fee rates above this (fat finger guard)"
    )

    # Change smaller than this is added to the fee
    dust_threshold: int = Field(default=DUST_THRESHOLD, ge=0)

    @model_validator(mode="after")
    def check_fee_rates(self) -> ComposerConfig:
        if self.default_fee_rate > self.max_fee_rate:
            raise ValueError(
                f"default_fee_rate {self.default_fee_rate} exceeds max_fee_rate "
                f"{self.max_fee_rate}"
            )
        return self
