"""
Training Admin Service Entry Point.

Loads configuration, builds the FastAPI application (which validates the
Supabase credentials and wires every service) and serves it with uvicorn.

Usage::

    python main.py
"""

from __future__ import annotations

import sys

import uvicorn

from training_admin.api import create_app
from training_admin.config import ConfigurationError, get_config
from training_admin.logger import StructuredLogger, get_logger


def main() -> None:
    """Application entry point: wire dependencies and serve HTTP."""
    logger: StructuredLogger = get_logger("main")
    logger.info("Starting Training Admin...")

    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables)
    # ------------------------------------------------------------------
    config = get_config()

    # ------------------------------------------------------------------
    # 2. Application (fails fast on missing Supabase credentials)
    # ------------------------------------------------------------------
    try:
        app = create_app(config=config)
    except ConfigurationError as exc:
        logger.critical("Startup aborted: %s", exc)
        sys.exit(1)

    # ------------------------------------------------------------------
    # 3. Serve (blocks until shutdown)
    # ------------------------------------------------------------------
    logger.info("Listening on %s:%d", config.API_HOST, config.API_PORT)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT, log_level="info")
    logger.info("Training Admin shut down.")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
