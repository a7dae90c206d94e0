import logging

from fastapi import APIRouter, Depends, Query
from sacco_api.dependencies import get_client
from sacco_api.models import (
    FinalizeTransferBody,
    InitiateTransferBody,
    TransferActionBody,
    ValidateRecipientBody,
    success,
)
from sacco_sdk import BitnobClient, ValidationError


log = logging.getLogger(__name__)

router = APIRouter()


@router.post("/transfers")
def initiate_transfer(
    body: InitiateTransferBody,
    client: BitnobClient = Depends(get_client),
) -> dict:
    record = client.initiate_transfer(
        amount=body.amount,
        currency=body.currency,
        recipient=body.recipient,
        reason=body.reason,
    )

    return success("Transfer initiated successfully", record.to_wire())


@router.get("/transfers")
def transfer_history(
    limit: int = Query(10),
    offset: int = Query(0),
    client: BitnobClient = Depends(get_client),
) -> dict:
    return success(
        "Transfer history retrieved successfully",
        client.get_transfer_history(limit=limit, offset=offset),
    )


@router.post("/transfers/finalize")
def finalize_transfer(
    body: FinalizeTransferBody,
    client: BitnobClient = Depends(get_client),
) -> dict:
    record = client.finalize_transfer(body.transaction_reference, body.otp)

    return success("Transfer completed successfully", record.to_wire())


@router.post("/transfers/validate-recipient")
def validate_recipient(
    body: ValidateRecipientBody,
    client: BitnobClient = Depends(get_client),
) -> dict:
    result = client.validate_recipient(body.recipient, body.currency)

    return success("Recipient validated successfully", result.to_wire())


@router.get("/transfers/{reference}")
def transfer_status(
    reference: str,
    client: BitnobClient = Depends(get_client),
) -> dict:
    return success(
        "Transfer status retrieved successfully",
        client.get_transfer_status(reference),
    )


@router.post("/transfers/{reference}")
def transfer_action(
    reference: str,
    body: TransferActionBody,
    client: BitnobClient = Depends(get_client),
) -> dict:
    if body.action != "cancel":
        raise ValidationError('Only "cancel" action is supported', error="Invalid action")

    log.info("Cancel requested for transfer %s", reference)

    return success(
        "Transfer cancelled successfully",
        client.cancel_transfer(reference),
    )
