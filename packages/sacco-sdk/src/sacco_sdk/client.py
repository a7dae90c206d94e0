"""Bitnob REST API client.

Uses a curl_cffi session with bearer-token authentication. Remote failures are
classified here, once, into the typed errors in ``sacco_sdk.exceptions``.
"""

import logging
import uuid
from typing import Any, TypeVar
from urllib.parse import quote

import pydantic
from curl_cffi.requests import RequestsError, Session
from sacco_sdk.config import BitnobConfig
from sacco_sdk.exceptions import (
    BitnobApiError,
    CredentialsRejected,
    OtpVerificationFailed,
    RecipientValidationFailed,
    TransferFinalizationFailed,
    TransferInitiationFailed,
    TransportError,
    ValidationError,
)
from sacco_sdk.models import (
    BitnobModel,
    FinalizationRequest,
    RecipientValidation,
    TransferRecord,
    TransferRequest,
)
from sacco_sdk.validation import (
    check_otp,
    check_reference,
    normalize_amount,
    normalize_currency,
    normalize_recipient,
    require_fields,
)


log = logging.getLogger(__name__)

TRANSFERS_PATH = "/api/v1/transfers"

# Substrings (lower-cased) that mark a 4xx as a domain failure the user can fix
_RECIPIENT_FAILURE_MARKERS = ("recipient", "invalid", "not found")
_OTP_FAILURE_MARKERS = ("otp", "invalid", "expired")

_M = TypeVar("_M", bound=BitnobModel)


def _mentions(message: str, markers: tuple[str, ...]) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in markers)


def _unwrap(body: dict[str, Any]) -> Any:
    """Return the ``data`` member of Bitnob's ``{success, message, data}`` envelope."""

    data = body.get("data")
    return data if data is not None else body


class BitnobClient:
    """Bitnob REST API client.

    One instance per process; configuration is passed in and never read from
    the environment here.
    """

    def __init__(self, config: BitnobConfig) -> None:
        self._base_url = config.base_url.rstrip("/")
        self._secret_key = config.secret_key

        self._session = Session(timeout=config.timeout)

    # -- low-level ---------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "authorization": f"Bearer {self._secret_key}",
            "content-type": "application/json",
            "x-request-id": str(uuid.uuid4()),
        }

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON body.

        Raises ``TransportError`` when no response arrives or Bitnob answers
        5xx, ``CredentialsRejected`` on 401/403, and ``BitnobApiError`` for
        any other error status.
        """

        log.info("Bitnob request: %s %s", method, path)

        try:
            resp = self._session.request(
                method,
                f"{self._base_url}{path}",
                json=json,
                params=params,
                headers=self._headers(),
            )

        except RequestsError as exc:
            log.error("Bitnob request %s %s failed: %s", method, path, exc)
            raise TransportError(None, "Could not reach the payment provider") from exc

        log.info("Bitnob response: %s %s -> %d", method, path, resp.status_code)

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            body = {} if body is None else {"data": body}

        if resp.status_code >= 400:
            message = str(
                body.get("message")
                or body.get("error")
                or resp.text[:500]
                or f"HTTP {resp.status_code}"
            )

            if resp.status_code >= 500:
                log.error("Bitnob server error on %s %s: %s", method, path, message)
                raise TransportError(resp.status_code, message)

            if resp.status_code in (401, 403):
                log.error(
                    "Bitnob rejected our credentials on %s %s: %s", method, path, message
                )
                raise CredentialsRejected(resp.status_code, message)

            raise BitnobApiError(resp.status_code, message)

        return body

    def _parse(self, model: type[_M], data: Any) -> _M:
        try:
            return model.model_validate(data)

        except pydantic.ValidationError as exc:
            log.error("Unexpected %s payload from Bitnob: %s", model.__name__, exc)
            raise BitnobApiError(
                None, "Unexpected response from the payment provider"
            ) from exc

    # -- transfers ---------------------------------------------------------

    def validate_recipient(self, recipient: str, currency: str) -> RecipientValidation:
        """Check a recipient (email, phone or wallet address) against Bitnob's directory."""

        require_fields("Recipient and currency are required fields", recipient, currency)
        code = normalize_currency(currency)
        recipient = normalize_recipient(recipient)

        try:
            body = self._request(
                "POST",
                f"{TRANSFERS_PATH}/validate-recipient",
                json={"recipient": recipient, "currency": code.value},
            )

        except (TransportError, CredentialsRejected):
            raise

        except BitnobApiError as exc:
            if _mentions(exc.message, _RECIPIENT_FAILURE_MARKERS):
                log.warning("Recipient rejected by Bitnob: %s", exc.message)
                raise RecipientValidationFailed(exc.status_code, exc.message) from exc

            raise

        data = _unwrap(body)
        details = data if isinstance(data, dict) else {"result": data}
        valid = details.get("valid", details.get("isValid", body.get("success", True)))

        return RecipientValidation(
            recipient=recipient,
            currency=code,
            valid=bool(valid),
            details=details,
        )

    def initiate_transfer(
        self,
        amount: str,
        currency: str,
        recipient: str,
        reason: str | None = None,
    ) -> TransferRecord:
        """Submit a transfer.

        Args:
            amount: Positive decimal amount, as a string.
            currency: One of USD, BTC, EUR, GBP, NGN (any case).
            recipient: Email, phone number or wallet address.
            reason: Optional note shown to the recipient.

        The returned record's ``needs_confirmation`` tells the caller whether
        ``finalize_transfer`` must be called with an OTP before funds move.
        """

        require_fields(
            "Amount, currency, and recipient are required fields",
            amount,
            currency,
            recipient,
        )

        request = TransferRequest(
            amount=normalize_amount(amount),
            currency=normalize_currency(currency),
            recipient=normalize_recipient(recipient),
            reason=reason.strip() if reason and reason.strip() else None,
        )

        try:
            body = self._request("POST", TRANSFERS_PATH, json=request.to_wire())

        except (TransportError, CredentialsRejected):
            raise

        except BitnobApiError as exc:
            log.warning("Transfer initiation rejected by Bitnob: %s", exc)
            raise TransferInitiationFailed(exc.status_code, exc.message) from exc

        record = self._parse(TransferRecord, _unwrap(body))

        log.info(
            "Transfer %s initiated, status=%s",
            record.transaction_reference,
            record.status,
        )

        return record

    def finalize_transfer(self, transaction_reference: str, otp: str) -> TransferRecord:
        """Complete a transfer that is waiting on a one-time code."""

        require_fields(
            "Transaction reference and OTP are required fields",
            transaction_reference,
            otp,
        )

        request = FinalizationRequest(
            transaction_reference=check_reference(transaction_reference),
            otp=check_otp(otp),
        )

        try:
            body = self._request(
                "POST", f"{TRANSFERS_PATH}/finalize", json=request.to_wire()
            )

        except (TransportError, CredentialsRejected):
            raise

        except BitnobApiError as exc:
            log.warning(
                "Finalization of %s rejected by Bitnob: %s",
                request.transaction_reference,
                exc,
            )

            if _mentions(exc.message, _OTP_FAILURE_MARKERS):
                raise OtpVerificationFailed(exc.status_code, exc.message) from exc

            raise TransferFinalizationFailed(exc.status_code, exc.message) from exc

        data = _unwrap(body)

        if isinstance(data, dict):
            data.setdefault("transactionReference", request.transaction_reference)

        record = self._parse(TransferRecord, data)

        log.info(
            "Transfer %s finalized, status=%s",
            record.transaction_reference,
            record.status,
        )

        return record

    def get_transfer_status(self, transaction_reference: str) -> dict[str, Any]:
        reference = quote(check_reference(transaction_reference), safe="")

        return _unwrap(self._request("GET", f"{TRANSFERS_PATH}/{reference}"))

    def cancel_transfer(self, transaction_reference: str) -> dict[str, Any]:
        """Ask Bitnob to cancel a transfer; safe to call with a stale local view."""

        reference = quote(check_reference(transaction_reference), safe="")
        log.info("Cancelling transfer %s", reference)

        return _unwrap(self._request("POST", f"{TRANSFERS_PATH}/{reference}/cancel"))

    def get_transfer_history(self, limit: int = 10, offset: int = 0) -> Any:
        if limit < 1:
            raise ValidationError("limit must be a positive integer")

        if offset < 0:
            raise ValidationError("offset must not be negative")

        return _unwrap(
            self._request(
                "GET", TRANSFERS_PATH, params={"limit": limit, "offset": offset}
            )
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "BitnobClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
