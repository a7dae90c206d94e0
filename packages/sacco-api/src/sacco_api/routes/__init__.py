from fastapi import APIRouter, Depends
from sacco_api.dependencies import verify_api_key
from sacco_api.routes import health, transfers, webhook

health_router = health.router

# Authenticated by its HMAC signature, not by API key
webhook_router = webhook.router

router = APIRouter(prefix="/api", dependencies=[Depends(verify_api_key)])

router.include_router(transfers.router)
