import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sacco_api.dependencies import get_event_router, get_verifier
from sacco_api.errors import envelope
from sacco_sdk import SIGNATURE_HEADERS, EventRouter, WebhookVerifier


log = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _signature(request: Request) -> str:
    for header in SIGNATURE_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return ""


@router.get("/webhook")
def webhook_status() -> dict:
    return {
        "message": "Bitnob webhook endpoint is active",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/webhook", response_model=None)
async def receive_webhook(
    request: Request,
    verifier: WebhookVerifier = Depends(get_verifier),
    events: EventRouter = Depends(get_event_router),
) -> dict | JSONResponse:
    raw_body = await request.body()
    signature = _signature(request)

    log.info(
        "Received webhook: has_signature=%s body_length=%d",
        bool(signature),
        len(raw_body),
    )

    # Raises SignatureVerificationFailed, rendered as 401 before any parsing
    verifier.require_valid(raw_body, signature)

    try:
        payload = json.loads(raw_body)

    except ValueError:
        log.exception("Verified webhook body is not valid JSON")
        return JSONResponse(
            status_code=500,
            content=envelope("Failed to process webhook", "Webhook body is not valid JSON"),
        )

    # Handlers may block on bookkeeping I/O
    await run_in_threadpool(events.process, payload)

    return {"success": True, "message": "Webhook processed successfully"}
