"""
Run the product API with uvicorn.

Usage:
    uv run python server.py
"""

import logging

import uvicorn

from backend.api import create_app
from backend.config import AppConfig

logger = logging.getLogger(__name__)


def main() -> None:
    config = AppConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(message)s")
    app = create_app(config)
    logger.info("Product API running at http://%s:%d/", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
