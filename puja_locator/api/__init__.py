"""HTTP API for the Puja Locator."""

from .app_factory import create_app

__all__ = ["create_app"]
