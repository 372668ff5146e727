"""Custom exception hierarchy for the Puja Locator domain."""

from __future__ import annotations


class LocatorError(RuntimeError):
    """Base error for failures outside the fail-soft location core."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"message": str(self)}
        if self.details:
            payload["details"] = self.details
        return payload


class FeedError(LocatorError):
    """Raised when the puja spreadsheet cannot be fetched or decoded."""
