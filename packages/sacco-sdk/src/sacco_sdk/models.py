from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from sacco_sdk.types import Currency, TransferStatus, WebhookEventKind


class BitnobModel(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown fields are kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class TransferRequest(BitnobModel):
    model_config = ConfigDict(frozen=True)

    amount: str
    currency: Currency
    recipient: str
    reason: str | None = None


class TransferRecord(BitnobModel):
    transaction_reference: str
    status: TransferStatus | str = TransferStatus.PENDING
    requires_otp: bool = False
    amount: str | None = None
    currency: str | None = None
    recipient: str | None = None
    estimated_fee: str | None = None
    final_amount: str | None = None
    created_at: str | None = None
    completed_at: str | None = None
    transaction_hash: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value

        try:
            return TransferStatus(value.strip().lower())
        except ValueError:
            return value

    @model_validator(mode="after")
    def _pending_otp_needs_confirmation(self) -> "TransferRecord":
        # A pending transfer that asks for an OTP is waiting on the user
        if self.requires_otp and self.status == TransferStatus.PENDING:
            self.status = TransferStatus.REQUIRES_CONFIRMATION
        return self

    @property
    def needs_confirmation(self) -> bool:
        return self.status == TransferStatus.REQUIRES_CONFIRMATION


class FinalizationRequest(BitnobModel):
    transaction_reference: str
    otp: str


class RecipientValidation(BitnobModel):
    recipient: str
    currency: Currency
    valid: bool
    details: dict[str, Any] = Field(default_factory=dict)


class WebhookEvent(BaseModel):
    kind: WebhookEventKind
    data: Any = None
