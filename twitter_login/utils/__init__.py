"""
Utility modules for the Twitter login handshake.
"""

from .logger import get_logger, mask

__all__ = [
    'get_logger',
    'mask'
]
