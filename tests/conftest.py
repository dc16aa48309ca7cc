import os

# Keep test runs from writing log files
os.environ['LOG_FILE'] = ''
os.environ.setdefault('LOG_LEVEL', 'DEBUG')

import pytest
from typing import Dict, List, NamedTuple, Optional
from urllib.parse import unquote
from oauthlib.oauth1.rfc5849.utils import parse_authorization_header
from twitter_login import TwitterOAuth
from twitter_login.models import HttpResponse

def header_params(header: str) -> Dict[str, str]:
    return {key: unquote(value) for key, value in parse_authorization_header(header)}

class SentRequest(NamedTuple):
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]

    @property
    def oauth(self) -> Dict[str, str]:
        """Authorization header parameters, unescaped."""
        return header_params(self.headers["Authorization"])

class FakeTransport:
    """Replays canned responses and records every request sent."""

    def __init__(self, responses: Optional[List] = None):
        self.responses = list(responses or [])
        self.calls: List[SentRequest] = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    async def send(self, method, url, headers, body=None):
        self.calls.append(SentRequest(method, url, headers, body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

def ok_response(body) -> HttpResponse:
    if isinstance(body, str):
        body = body.encode('utf-8')
    return HttpResponse(status=200, body=body)

REQUEST_TOKEN_BODY = "oauth_callback_confirmed=true&oauth_token=ABC&oauth_token_secret=XYZ"
ACCESS_TOKEN_BODY = "oauth_token=AT&oauth_token_secret=ATS"
PROFILE_BODY = '{"id":"1","screen_name":"x"}'

@pytest.fixture
def transport():
    """Provide an empty fake transport."""
    return FakeTransport()

@pytest.fixture
def handshake(transport):
    """Provide a TwitterOAuth bound to the fake transport."""
    return TwitterOAuth(key="consumer_key", secret="consumer_secret", transport=transport)

@pytest.fixture
def ok():
    """Provide a builder for 200 responses."""
    return ok_response

@pytest.fixture
def canned():
    """Provide the canned provider responses for a successful handshake."""
    return {
        'request_token': ok_response(REQUEST_TOKEN_BODY),
        'access_token': ok_response(ACCESS_TOKEN_BODY),
        'profile': ok_response(PROFILE_BODY),
    }
