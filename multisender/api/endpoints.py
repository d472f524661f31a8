"""API endpoints: batch quotes and CREATE2 address prediction."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from multisender.contracts.batch import validate_batch
from multisender.contracts.factory import compute_multi_sender_address
from multisender.contracts.multi_sender import MultiSender
from multisender.create2 import salt_from_label
from multisender.errors import Revert
from multisender.fees import DEFAULT_FEE_CONFIG, FeeConfig, FeeQuote, calculate_fee
from multisender.models.requests import (
    AddressRequest,
    AddressResponse,
    QuoteRequest,
    QuoteResponse,
)
from multisender.models.types import normalize_salt, to_checksum_address

logger = structlog.get_logger()

router = APIRouter()


def get_fee_config() -> FeeConfig:
    """Dependency provider for the fee configuration used by /quote.

    Override this in tests to quote against another configuration:
        app.dependency_overrides[get_fee_config] = lambda: config
    """
    return DEFAULT_FEE_CONFIG


@router.post("/quote")
async def quote(
    request: QuoteRequest,
    config: FeeConfig = Depends(get_fee_config),
) -> QuoteResponse:
    """Validate a batch and price it the way MultiSender would.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Batch rejected by the contract rules: 422 with the revert reason
    """
    fee_percentage = (
        config.default_fee_percentage if request.fee_percentage is None else request.fee_percentage
    )
    try:
        batch = validate_batch(
            request.recipients,
            request.amounts_int,
            label=MultiSender.NAME,
            max_recipients=config.max_recipients,
        )
        fee = 0 if request.vip else calculate_fee(batch.total_amount, fee_percentage, config)
        result = FeeQuote(total_amount=batch.total_amount, fee=fee)
        required = result.required_amount
    except Revert as err:
        logger.info("quote_rejected", reason=err.reason, recipient_count=len(request.recipients))
        raise HTTPException(status_code=422, detail=err.reason) from err

    logger.debug(
        "quote_computed",
        recipient_count=batch.recipient_count,
        total_amount=batch.total_amount,
        fee=fee,
    )
    return QuoteResponse(
        total_amount=str(batch.total_amount),
        fee=str(fee),
        required_amount=str(required),
        recipient_count=batch.recipient_count,
        fee_percentage=0 if request.vip else fee_percentage,
    )


@router.post("/address")
async def address(request: AddressRequest) -> AddressResponse:
    """Predict where a factory deploys the MultiSender for a salt."""
    if request.salt is not None:
        salt = normalize_salt(request.salt)
    else:
        salt = salt_from_label(request.label or "")
    predicted = compute_multi_sender_address(request.factory, salt)
    logger.debug("address_computed", factory=request.factory, salt=salt, address=predicted)
    return AddressResponse(
        factory=to_checksum_address(request.factory),
        salt=salt,
        address=to_checksum_address(predicted),
        init_code_hash="0x" + MultiSender.init_code_hash().hex(),
    )
