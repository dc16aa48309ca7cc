"""
Provider-specific handshakes.
"""

from .twitter import TwitterOAuth

__all__ = ['TwitterOAuth']
