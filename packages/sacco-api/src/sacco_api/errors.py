"""Render every failure as ``{"success": false, "error": ..., "message": ...}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sacco_sdk.exceptions import (
    BitnobApiError,
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


log = logging.getLogger(__name__)


class Unauthorized(SaccoError):
    error = "Authentication required"


def envelope(error: str, message: str) -> dict:
    return {"success": False, "error": error, "message": message}


def http_status(exc: SaccoError) -> int:
    if isinstance(
        exc,
        (
            ValidationError,
            RecipientValidationFailed,
            TransferInitiationFailed,
            OtpVerificationFailed,
        ),
    ):
        return 400

    if isinstance(exc, (SignatureVerificationFailed, Unauthorized)):
        return 401

    if isinstance(exc, TransferFinalizationFailed):
        return 500

    # Upstream outages and our own rejected provider credentials are server faults
    if isinstance(exc, (TransportError, CredentialsRejected)):
        return 502

    if isinstance(exc, BitnobApiError):
        status = exc.status_code or 502
        return status if 400 <= status < 500 and status not in (401, 403) else 502

    return 500


def _display_message(exc: SaccoError) -> str:
    if isinstance(exc, (TransportError, CredentialsRejected)):
        return "The payment provider is unavailable, please try again later"

    return exc.message


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SaccoError)
    async def sacco_error_handler(request: Request, exc: SaccoError) -> JSONResponse:
        status_code = http_status(exc)

        if status_code >= 500:
            log.error("%s %s failed: %r", request.method, request.url.path, exc)
        else:
            log.warning("%s %s rejected: %s", request.method, request.url.path, exc)

        return JSONResponse(
            status_code=status_code,
            content=envelope(exc.error, _display_message(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )

        return JSONResponse(
            status_code=400,
            content=envelope("Validation failed", problems or "Request body is invalid"),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unexpected error on %s %s", request.method, request.url.path)

        return JSONResponse(
            status_code=500,
            content=envelope("Internal server error", "An unexpected error occurred"),
        )
