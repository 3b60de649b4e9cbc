"""HTTP layer: FastAPI application factory, routes and dependencies."""

from training_admin.api.app import create_app

__all__ = ["create_app"]
