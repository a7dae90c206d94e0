import logging

import uvicorn

from sacco_api.config import get_server_config
from sacco_sdk import get_bitnob_config

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    config = get_server_config()
    # Fail before binding the socket if Bitnob settings are missing
    get_bitnob_config()

    uvicorn.run(
        "sacco_api.app:create_app",
        host=config.host,
        port=config.port,
        factory=True,
    )
