"""
Twitter Login
-------------
Three-legged OAuth 1.0a sign-in with Twitter.
"""

from .core import AiohttpTransport, OAuth1Signer, OAuthHandshake
from .exceptions import (
    AuthorizationDenied,
    ConfigurationError,
    InvalidArgument,
    InvalidState,
    ProtocolError,
    TokenMismatch,
    TransportError,
    TwitterLoginError,
)
from .models import AccessToken, ConsumerCredentials, HandshakeStage, RequestToken
from .platforms import TwitterOAuth

__version__ = "1.0.0"
__all__ = [
    'AccessToken',
    'AiohttpTransport',
    'AuthorizationDenied',
    'ConfigurationError',
    'ConsumerCredentials',
    'HandshakeStage',
    'InvalidArgument',
    'InvalidState',
    'OAuth1Signer',
    'OAuthHandshake',
    'ProtocolError',
    'RequestToken',
    'TokenMismatch',
    'TransportError',
    'TwitterLoginError',
    'TwitterOAuth',
]
