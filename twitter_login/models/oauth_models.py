from enum import Enum
from typing import NamedTuple
from pydantic import BaseModel, ConfigDict, Field

class ConsumerCredentials(BaseModel):
    """Key/secret pair identifying the application to the provider."""
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    secret: str = Field(min_length=1, repr=False)

class RequestToken(NamedTuple):
    """Temporary token issued before the user authorizes the application."""
    key: str
    secret: str

class AccessToken(NamedTuple):
    """Long-lived token issued once the user has authorized the application."""
    key: str
    secret: str

class HandshakeStage(str, Enum):
    """Where a handshake currently stands."""
    EMPTY = "empty"
    REQUEST_TOKEN_ISSUED = "request_token_issued"
    ACCESS_TOKEN_ISSUED = "access_token_issued"

class HttpResponse(NamedTuple):
    """Status code and raw body returned by a transport."""
    status: int
    body: bytes
