"""Bitnob webhook verification and event dispatch.

Bitnob signs the raw request body with HMAC-SHA256 using the shared webhook
secret and sends the hex digest in ``x-bitnob-signature`` (older integrations
use ``x-signature``), optionally prefixed with ``sha256=``. Only a body that
passes ``WebhookVerifier.verify`` may be handed to ``EventRouter.process``.
"""

import hashlib
import hmac
import logging
import re
from typing import Any

from sacco_sdk.exceptions import ConfigurationError, SignatureVerificationFailed
from sacco_sdk.models import WebhookEvent
from sacco_sdk.types import WebhookEventKind


log = logging.getLogger(__name__)

SIGNATURE_HEADERS = ("x-bitnob-signature", "x-signature")
SIGNATURE_PREFIX = "sha256="

_SIGNATURE_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


def sign(secret: str, raw_body: bytes | str) -> str:
    """Return the hex HMAC-SHA256 of a body, as Bitnob computes it."""

    if isinstance(raw_body, str):
        raw_body = raw_body.encode()

    return hmac.new(secret.encode(), raw_body, hashlib.sha256).hexdigest()


class WebhookVerifier:
    """Checks webhook signatures against the shared secret."""

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ConfigurationError(
                "Webhook secret is required", missing=["BITNOB_WEBHOOK_SECRET"]
            )

        self._secret = secret

    def verify(self, raw_body: bytes | str, signature: str | None) -> bool:
        """Return whether ``signature`` is the body's HMAC; never raises."""

        if not signature:
            return False

        provided_hex = signature.strip().removeprefix(SIGNATURE_PREFIX)

        if not _SIGNATURE_PATTERN.fullmatch(provided_hex):
            log.warning("Webhook signature is not a SHA-256 hex digest")
            return False

        provided = bytes.fromhex(provided_hex)
        expected = bytes.fromhex(sign(self._secret, raw_body))

        return hmac.compare_digest(expected, provided)

    def require_valid(self, raw_body: bytes | str, signature: str | None) -> None:
        if not self.verify(raw_body, signature):
            raise SignatureVerificationFailed(
                "The webhook signature did not match the payload"
            )


class EventHandler:
    """Bookkeeping for verified webhook events.

    The default implementation only logs. Subclass it to update balances and
    transaction history; methods must tolerate events arriving out of order
    (``transfer.completed`` before ``transfer.initiated``) and being
    delivered more than once.
    """

    def on_card_created(self, data: Any) -> None:
        log.info("Card created: %s", data)

    def on_card_topup(self, data: Any) -> None:
        log.info("Card topped up: %s", data)

    def on_card_transaction(self, data: Any) -> None:
        log.info("Card transaction: %s", data)

    def on_card_frozen(self, data: Any) -> None:
        log.info("Card frozen: %s", data)

    def on_card_unfrozen(self, data: Any) -> None:
        log.info("Card unfrozen: %s", data)

    def on_transfer_initiated(self, data: Any) -> None:
        log.info("Transfer initiated: %s", data)

    def on_transfer_completed(self, data: Any) -> None:
        log.info("Transfer completed: %s", data)

    def on_transfer_failed(self, data: Any) -> None:
        log.info("Transfer failed: %s", data)


HANDLER_METHODS: dict[WebhookEventKind, str] = {
    WebhookEventKind.CARD_CREATED: "on_card_created",
    WebhookEventKind.CARD_TOPUP: "on_card_topup",
    WebhookEventKind.CARD_TRANSACTION: "on_card_transaction",
    WebhookEventKind.CARD_FROZEN: "on_card_frozen",
    WebhookEventKind.CARD_UNFROZEN: "on_card_unfrozen",
    WebhookEventKind.TRANSFER_INITIATED: "on_transfer_initiated",
    WebhookEventKind.TRANSFER_COMPLETED: "on_transfer_completed",
    WebhookEventKind.TRANSFER_FAILED: "on_transfer_failed",
}


class EventRouter:
    """Routes verified webhook payloads to an ``EventHandler``."""

    def __init__(self, handler: EventHandler | None = None) -> None:
        self._handler = handler if handler is not None else EventHandler()

    @staticmethod
    def parse(payload: Any) -> WebhookEvent | None:
        """Parse ``{"event": ..., "data": ...}``; ``None`` for anything unroutable."""

        if not isinstance(payload, dict):
            log.warning("Discarding webhook payload of type %s", type(payload).__name__)
            return None

        raw_kind = payload.get("event")

        try:
            kind = WebhookEventKind(raw_kind)
        except ValueError:
            log.warning("Unhandled webhook event: %s", raw_kind)
            return None

        return WebhookEvent(kind=kind, data=payload.get("data"))

    def process(self, payload: Any) -> WebhookEventKind | None:
        """Dispatch one payload and return the kind handled, if any.

        Handler failures are logged and swallowed so the webhook is still
        acknowledged; Bitnob redelivers unacknowledged webhooks.
        """

        event = self.parse(payload)

        if event is None:
            return None

        log.info("Processing webhook event: %s", event.kind)
        handler = getattr(self._handler, HANDLER_METHODS[event.kind])

        try:
            handler(event.data)

        except Exception:
            log.exception("Handler for webhook event %s failed", event.kind)

        return event.kind
