from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestBody(BaseModel):
    """Request bodies are loose on purpose; the SDK validates the values."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class InitiateTransferBody(RequestBody):
    amount: str | None = None
    currency: str | None = None
    recipient: str | None = None
    reason: str | None = None


class FinalizeTransferBody(RequestBody):
    transaction_reference: str | None = None
    otp: str | None = None


class ValidateRecipientBody(RequestBody):
    recipient: str | None = None
    currency: str | None = None


class TransferActionBody(RequestBody):
    action: str | None = None


def success(message: str, data: Any = None) -> dict[str, Any]:
    return {"success": True, "message": message, "data": data}
