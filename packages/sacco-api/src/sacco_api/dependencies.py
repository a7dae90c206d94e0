import secrets

from fastapi import Header, Request
from sacco_sdk import BitnobClient, EventRouter, WebhookVerifier
from sacco_api.errors import Unauthorized


def get_client(request: Request) -> BitnobClient:
    return request.app.state.client


def get_verifier(request: Request) -> WebhookVerifier:
    return request.app.state.verifier


def get_event_router(request: Request) -> EventRouter:
    return request.app.state.events


def verify_api_key(request: Request, x_api_key: str | None = Header(default=None)) -> None:
    if x_api_key is None:
        raise Unauthorized("Missing X-API-Key header")

    if not secrets.compare_digest(
        x_api_key.encode(), request.app.state.api_key.encode()
    ):
        raise Unauthorized("Invalid API key")
