"""
Errors raised while fetching and aggregating a player's games.
"""
from typing import Optional


class RecapError(Exception):
    """Base class for recap failures surfaced to the caller."""


class SubjectNotFound(RecapError):
    """The player does not exist on Chess.com."""

    def __init__(self, username: str):
        super().__init__(f"User not found: {username}")
        self.username = username


class UpstreamUnavailable(RecapError):
    """A Chess.com request failed or returned an unusable payload."""

    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"Chess.com request failed: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.url = url
        self.reason = reason
