import os
from dataclasses import dataclass

from sacco_sdk.config import require_env


@dataclass(frozen=True)
class ServerConfig:
    api_key: str
    host: str = "0.0.0.0"
    port: int = 8730


def get_server_config() -> ServerConfig:
    """Get API server configuration from environment variables.

    Expected env vars: SACCO_API_KEY (required),
    SACCO_SERVER_HOST, SACCO_SERVER_PORT (optional)
    """

    values = require_env("SACCO_API_KEY")

    return ServerConfig(
        api_key=values["SACCO_API_KEY"],
        host=os.environ.get("SACCO_SERVER_HOST", "0.0.0.0"),
        port=int(os.environ.get("SACCO_SERVER_PORT", "8730")),
    )
