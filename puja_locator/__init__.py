"""Top-level package for the Puja Locator backend."""

from .api.app_factory import create_app
from .pipelines.locator_pipeline import LocatorPipeline

__all__ = ["create_app", "LocatorPipeline"]
