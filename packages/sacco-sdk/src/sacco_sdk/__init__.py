from sacco_sdk.client import BitnobClient
from sacco_sdk.config import BitnobConfig, get_bitnob_config
from sacco_sdk.exceptions import (
    BitnobApiError,
    ConfigurationError,
    CredentialsRejected,
    OtpVerificationFailed,
    RecipientValidationFailed,
    SaccoError,
    SignatureVerificationFailed,
    TransferFinalizationFailed,
    TransferInitiationFailed,
    TransportError,
    ValidationError,
)
from sacco_sdk.models import RecipientValidation, TransferRecord, WebhookEvent
from sacco_sdk.types import Currency, TransferStatus, WebhookEventKind
from sacco_sdk.webhooks import (
    SIGNATURE_HEADERS,
    EventHandler,
    EventRouter,
    WebhookVerifier,
    sign,
)
