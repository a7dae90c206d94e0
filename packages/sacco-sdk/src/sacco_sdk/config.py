"""Configuration from environment variables."""

import os
from dataclasses import dataclass

from sacco_sdk.exceptions import ConfigurationError


DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class BitnobConfig:
    base_url: str
    secret_key: str
    webhook_secret: str
    timeout: float = DEFAULT_TIMEOUT


def require_env(*names: str) -> dict[str, str]:
    """Read required environment variables, reporting every missing one at once.

    Blank values count as missing.
    """

    values = {name: os.environ.get(name, "").strip() for name in names}
    missing = [name for name, value in values.items() if not value]

    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}",
            missing=missing,
        )

    return values


def get_bitnob_config() -> BitnobConfig:
    """Get Bitnob API configuration from environment variables.

    Expected env vars: BITNOB_BASE_URL, BITNOB_SECRET_KEY,
    BITNOB_WEBHOOK_SECRET (required), BITNOB_TIMEOUT (optional, seconds)
    """

    values = require_env("BITNOB_BASE_URL", "BITNOB_SECRET_KEY", "BITNOB_WEBHOOK_SECRET")
    raw_timeout = os.environ.get("BITNOB_TIMEOUT", "").strip()

    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"BITNOB_TIMEOUT must be a number, got {raw_timeout!r}") from None

    if not 0 < timeout < float("inf"):
        raise ConfigurationError(f"BITNOB_TIMEOUT must be positive, got {raw_timeout!r}")

    return BitnobConfig(
        base_url=values["BITNOB_BASE_URL"].rstrip("/"),
        secret_key=values["BITNOB_SECRET_KEY"],
        webhook_secret=values["BITNOB_WEBHOOK_SECRET"],
        timeout=timeout,
    )
