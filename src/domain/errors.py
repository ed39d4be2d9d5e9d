"""Errors raised while mirroring auth users into the profile store."""
from __future__ import annotations


class ProfileSyncError(Exception):
    """Base class for profile sync failures."""


class UnsupportedEventError(ProfileSyncError):
    def __init__(self, event: str | None) -> None:
        super().__init__("Only INSERT events are handled")
        self.event = event


class MalformedEventError(ProfileSyncError):
    pass


class ProfileStoreError(ProfileSyncError):
    """The profile store rejected or failed the write.

    ``message`` carries the store's own error text unchanged so callers can
    surface it.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
