from .oauth_models import (
    AccessToken,
    ConsumerCredentials,
    HandshakeStage,
    HttpResponse,
    RequestToken,
)

__all__ = [
    'AccessToken',
    'ConsumerCredentials',
    'HandshakeStage',
    'HttpResponse',
    'RequestToken',
]
