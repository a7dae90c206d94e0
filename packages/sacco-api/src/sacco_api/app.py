from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from sacco_api.config import get_server_config
from sacco_api.errors import install_error_handlers
from sacco_api.routes import health_router, router, webhook_router
from sacco_sdk import (
    BitnobClient,
    EventHandler,
    EventRouter,
    WebhookVerifier,
    get_bitnob_config,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = get_server_config()
    bitnob_config = get_bitnob_config()

    app.state.server_config = config
    app.state.api_key = config.api_key

    app.state.client = BitnobClient(bitnob_config)
    app.state.verifier = WebhookVerifier(bitnob_config.webhook_secret)
    app.state.events = EventRouter(app.state.event_handler)

    try:
        yield

    finally:
        app.state.client.close()


def create_app(handler: EventHandler | None = None) -> FastAPI:
    """Build the server; ``handler`` receives verified webhook events.

    Without a handler, events are only logged.
    """

    app = FastAPI(title="Village SACCO API", lifespan=lifespan)
    app.state.event_handler = handler

    install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(webhook_router)
    app.include_router(router)

    return app
