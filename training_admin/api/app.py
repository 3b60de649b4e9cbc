"""
Application Factory.

Bootstraps the dependency graph via constructor injection and returns a
configured FastAPI application.  Configuration is validated here, so a
missing Supabase URL or service-role key stops the process at startup
with a ``ConfigurationError``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from training_admin import __version__
from training_admin.api import routes
from training_admin.config import AppConfig, get_config
from training_admin.database import SupabaseAdmin
from training_admin.logger import StructuredLogger, get_logger
from training_admin.models.enums import ErrorCode
from training_admin.models.service_models import Failure
from training_admin.services import ServiceContainer, create_services


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg', 'invalid value')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request."


def create_app(
    config: Optional[AppConfig] = None,
    services: Optional[ServiceContainer] = None,
    logger: Optional[StructuredLogger] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration; defaults to ``get_config()``.
        services: Pre-built services (tests); when omitted they are wired
            from a validated ``SupabaseAdmin``.
        logger: Logger for the HTTP layer; defaults to ``get_logger("api")``.

    Raises:
        ConfigurationError: If ``services`` is omitted and the Supabase
            configuration is incomplete.
    """
    config = config or get_config()
    logger = logger or get_logger("api")

    if services is None:
        admin = SupabaseAdmin(config=config, logger=get_logger("database"))
        services = create_services(admin=admin)

    app = FastAPI(
        title="Training Admin",
        version=__version__,
        description="User provisioning and administration over Supabase",
    )
    app.state.config = config
    app.state.services = services

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        logger.warning(
            "Rejected %s %s: %s", request.method, request.url.path, message,
            extra={"event": "REQUEST_REJECTED"},
        )
        failure = Failure.of(ErrorCode.VALIDATION_ERROR, message, status.HTTP_400_BAD_REQUEST)
        return routes.render_result(failure)

    @app.get("/health", tags=["System"])
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    app.include_router(routes.router)

    logger.info("Training Admin API configured.", extra={"supabase_url": config.SUPABASE_URL})
    return app
