"""HTTP client for the Village SACCO API server."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from sacco_client.exceptions import ApiError


log = logging.getLogger(__name__)


class SaccoApiClient:
    """Client for the Village SACCO REST API server.

    Successful calls return the ``data`` member of the server's
    ``{success, message, data}`` envelope. Error envelopes are raised as
    ``ApiError``.
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            headers={"X-API-Key": api_key},
            timeout=timeout,
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self._client.request(method, path, **kwargs)

        content_type = resp.headers.get("content-type", "")
        body = resp.json() if content_type.startswith("application/json") else None

        if resp.status_code >= 400:
            if isinstance(body, dict):
                error = body.get("error", "Request failed")
                message = body.get("message", resp.text)
            else:
                error, message = "Request failed", resp.text

            log.warning("%s %s -> %d: %s", method, path, resp.status_code, message)
            raise ApiError(resp.status_code, error, message)

        if isinstance(body, dict) and "data" in body:
            return body["data"]

        return body

    # -- Transfer operations --

    def validate_recipient(self, recipient: str, currency: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/api/transfers/validate-recipient",
            json={"recipient": recipient, "currency": currency},
        )

    def initiate_transfer(
        self,
        amount: str,
        currency: str,
        recipient: str,
        reason: str | None = None,
    ) -> dict[str, Any]:
        payload = {"amount": amount, "currency": currency, "recipient": recipient}

        if reason:
            payload["reason"] = reason

        return self._request("POST", "/api/transfers", json=payload)

    def finalize_transfer(self, transaction_reference: str, otp: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/api/transfers/finalize",
            json={"transactionReference": transaction_reference, "otp": otp},
        )

    def get_transfer(self, transaction_reference: str) -> dict[str, Any] | None:
        try:
            return self._request(
                "GET", f"/api/transfers/{quote(transaction_reference, safe='')}"
            )

        except ApiError as e:
            if e.status_code == 404:
                return None

            raise

    def cancel_transfer(self, transaction_reference: str) -> dict[str, Any]:
        return self._request(
            "POST",
            f"/api/transfers/{quote(transaction_reference, safe='')}",
            json={"action": "cancel"},
        )

    def get_transfer_history(self, limit: int = 10, offset: int = 0) -> Any:
        return self._request(
            "GET", "/api/transfers", params={"limit": limit, "offset": offset}
        )

    # -- Server --

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/api/health")

    def close(self) -> None:
        self._client.close()
