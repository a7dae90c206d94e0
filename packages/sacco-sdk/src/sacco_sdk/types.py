from enum import StrEnum


class Currency(StrEnum):
    USD = "USD"
    BTC = "BTC"
    EUR = "EUR"
    GBP = "GBP"
    NGN = "NGN"


class TransferStatus(StrEnum):
    PENDING = "pending"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class WebhookEventKind(StrEnum):
    CARD_CREATED = "card.created"
    CARD_TOPUP = "card.topup"
    CARD_TRANSACTION = "card.transaction"
    CARD_FROZEN = "card.frozen"
    CARD_UNFROZEN = "card.unfrozen"
    TRANSFER_INITIATED = "transfer.initiated"
    TRANSFER_COMPLETED = "transfer.completed"
    TRANSFER_FAILED = "transfer.failed"
