"""Exception taxonomy shared by the orchestrators, tools and routers."""

from __future__ import annotations


class CareerSyncError(Exception):
    """Base class for all service errors surfaced to users."""


class ValidationError(CareerSyncError):
    """Local, user-correctable input problem detected before any network call."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class DocumentReadError(CareerSyncError):
    """An uploaded document could not be converted to text."""


class ProfileBackendError(CareerSyncError):
    """The hosted auth / profile backend rejected or failed a request."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code
