"""Pipeline orchestrators."""

from .locator_pipeline import LocatorPipeline, explicit_coordinate

__all__ = ["LocatorPipeline", "explicit_coordinate"]
