"""ASGI application factory and dependencies for the ExpiryAlert server."""

from expiryalert.server.app import app, create_app

__all__ = ["app", "create_app"]
