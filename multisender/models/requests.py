"""Pydantic models for the quote/address HTTP API."""

from pydantic import BaseModel, Field, model_validator

from multisender.constants import DEFAULT_SALT_LABEL, MAX_FEE_PERCENTAGE
from multisender.models.types import Address, Bytes32, Uint256


class QuoteRequest(BaseModel):
    """A batch to price before sending it.

    Recipients are plain strings so that malformed or zero addresses are
    reported with the same reasons the contracts use.
    """

    recipients: list[str]
    amounts: list[Uint256]
    fee_percentage: int | None = Field(
        default=None,
        alias="feePercentage",
        ge=0,
        le=MAX_FEE_PERCENTAGE,
        description="Rate in hundredths of a percent. Defaults to the contract default.",
    )
    vip: bool = Field(default=False, description="Price the batch for a fee-exempt sender.")

    model_config = {"populate_by_name": True}

    @property
    def amounts_int(self) -> list[int]:
        return [int(a) for a in self.amounts]


class QuoteResponse(BaseModel):
    """Payment required for a batch."""

    total_amount: Uint256 = Field(alias="totalAmount")
    fee: Uint256
    required_amount: Uint256 = Field(alias="requiredAmount")
    recipient_count: int = Field(alias="recipientCount")
    fee_percentage: int = Field(alias="feePercentage")

    model_config = {"populate_by_name": True}


class AddressRequest(BaseModel):
    """Factory and salt (or salt label) to predict an instance address for."""

    factory: Address
    salt: Bytes32 | None = None
    label: str | None = Field(
        default=None,
        description="Salt label; the salt is keccak256(label). Defaults to the release label.",
    )

    @model_validator(mode="after")
    def _salt_or_label(self) -> "AddressRequest":
        if self.salt is not None and self.label is not None:
            raise ValueError("Provide either salt or label, not both")
        if self.salt is None and self.label is None:
            self.label = DEFAULT_SALT_LABEL
        return self


class AddressResponse(BaseModel):
    """Predicted MultiSender address."""

    factory: Address
    salt: Bytes32
    address: Address
    init_code_hash: Bytes32 = Field(alias="initCodeHash")

    model_config = {"populate_by_name": True}
