"""
Core OAuth 1.0a functionality.
"""

from .oauth_base import OAuthHandshake, parse_form
from .signer import OAuth1Signer, percent_encode
from .transport import AiohttpTransport, HttpTransport

__all__ = [
    'AiohttpTransport',
    'HttpTransport',
    'OAuth1Signer',
    'OAuthHandshake',
    'parse_form',
    'percent_encode',
]
