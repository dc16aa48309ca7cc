"""
Errors raised during the login handshake.
"""

from typing import Optional


class TwitterLoginError(Exception):
    """Base class for all handshake errors."""


class ConfigurationError(TwitterLoginError):
    """Consumer credentials are missing or invalid."""


class InvalidArgument(TwitterLoginError, ValueError):
    """A handshake operation was called with a bad argument."""


class InvalidState(TwitterLoginError):
    """A handshake operation was called out of order."""


class TokenMismatch(TwitterLoginError):
    """The callback token does not match the stored request token."""


class AuthorizationDenied(TwitterLoginError):
    """The user declined to authorize the application."""


class TransportError(TwitterLoginError):
    """The HTTP request could not be completed."""


class ProtocolError(TwitterLoginError):
    """The provider answered with an unexpected status or payload."""

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[bytes] = None):
        super().__init__(message)
        self.status = status
        self.body = body
