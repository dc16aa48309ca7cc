from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit
import hmac
import json

from ..exceptions import (
    AuthorizationDenied,
    ConfigurationError,
    InvalidArgument,
    InvalidState,
    ProtocolError,
    TokenMismatch,
)
from ..models.oauth_models import (
    AccessToken,
    ConsumerCredentials,
    HandshakeStage,
    HttpResponse,
    RequestToken,
)
from ..utils.logger import get_logger, mask
from .signer import OAuth1Signer
from .transport import AiohttpTransport, HttpTransport

logger = get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

def parse_form(body: bytes) -> Dict[str, str]:
    """Decode an ``application/x-www-form-urlencoded`` response body."""
    return dict(parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True))

class OAuthHandshake(ABC):
    """
    Three-legged OAuth 1.0a login handshake.

    One instance drives one handshake: ``begin_handshake`` obtains a request
    token and returns the URL to send the user to, ``complete_handshake``
    trades the token and verifier from the provider's redirect for an access
    token and then fetches the user's profile.

    Instances are not safe for concurrent use; allocate one per in-flight
    handshake.
    """

    REQUEST_TOKEN_URL: str
    AUTHENTICATE_URL: str
    ACCESS_TOKEN_URL: str

    def __init__(self, key: str, secret: str, transport: Optional[HttpTransport] = None):
        if not isinstance(key, str) or not key:
            logger.error("Consumer key is missing")
            raise ConfigurationError("Consumer key is required")
        if not isinstance(secret, str) or not secret:
            logger.error("Consumer secret is missing")
            raise ConfigurationError("Consumer secret is required")

        self.credentials = ConsumerCredentials(key=key, secret=secret)
        self.signer = OAuth1Signer(self.credentials)
        self.transport = transport or AiohttpTransport()
        # Extract base platform name without 'OAuth' suffix
        self.platform_name = self.__class__.__name__.lower().replace('oauth', '')

        self._request_token: Optional[RequestToken] = None
        self._access_token: Optional[AccessToken] = None

    @property
    def stage(self) -> HandshakeStage:
        if self._access_token is not None:
            return HandshakeStage.ACCESS_TOKEN_ISSUED
        if self._request_token is not None:
            return HandshakeStage.REQUEST_TOKEN_ISSUED
        return HandshakeStage.EMPTY

    @property
    def access_token(self) -> Optional[AccessToken]:
        """Access token obtained by the last completed exchange, if any."""
        return self._access_token

    def reset(self) -> None:
        """Forget any token held by this handshake."""
        self._request_token = None
        self._access_token = None

    def authorization_url(self, token: str) -> str:
        """URL the user is sent to in order to authorize the request token."""
        return f"{self.AUTHENTICATE_URL}?{urlencode({'oauth_token': token})}"

    async def begin_handshake(self, callback_url: str) -> str:
        """
        Obtain a request token and build the user's redirect target.

        Args:
            callback_url: Where the provider sends the user after
                authentication, or ``"oob"`` for out-of-band

        Returns:
            str: Authentication URL carrying the request token

        Raises:
            InvalidArgument: callback_url is not a non-empty string
            TransportError: The request could not be sent
            ProtocolError: Unexpected status, unconfirmed callback or
                missing token in the response
        """
        if not isinstance(callback_url, str) or not callback_url:
            logger.error("Authentication callback url was not defined")
            raise InvalidArgument("Authentication callback url was not defined")

        self.reset()
        logger.debug(f"Requesting {self.platform_name} request token, callback: {callback_url}")

        response = await self._send_signed(
            "POST",
            self.REQUEST_TOKEN_URL,
            oauth_params={"oauth_callback": callback_url},
        )
        self._expect_ok(response, "request token")

        body = parse_form(response.body)
        if body.get("oauth_callback_confirmed", "").lower() != "true":
            logger.error("Provider did not confirm the authentication callback")
            raise ProtocolError("Authentication callback was not confirmed", response.status, response.body)

        key, secret = self._token_pair(body, response, "request token")
        self._request_token = RequestToken(key, secret)
        logger.debug(f"Obtained request token: {mask(key)}")

        return self.authorization_url(key)

    async def complete_handshake(self, token: str, verifier: str) -> Dict[str, Any]:
        """
        Exchange the authorized request token for an access token, then
        fetch and return the user's profile.

        Args:
            token: ``oauth_token`` from the provider's redirect
            verifier: ``oauth_verifier`` from the provider's redirect

        Returns:
            Dict: Profile as returned by the provider

        Raises:
            InvalidArgument: token or verifier is not a non-empty string
            InvalidState: No request token is pending
            TokenMismatch: token is not the pending request token
            TransportError: A request could not be sent
            ProtocolError: Unexpected status or payload from the provider
        """
        if not isinstance(token, str) or not token:
            logger.error("Token was not defined")
            raise InvalidArgument("Token was not defined")
        if not isinstance(verifier, str) or not verifier:
            logger.error("Verifier was not defined")
            raise InvalidArgument("Verifier was not defined")

        request_token = self._request_token
        if request_token is None:
            logger.error(f"No pending request token (stage: {self.stage.value})")
            raise InvalidState("begin_handshake must succeed before complete_handshake")

        if not hmac.compare_digest(request_token.key.encode('utf-8'), token.encode('utf-8')):
            logger.error(f"Tokens do not match. Expected: {mask(request_token.key)}, Got: {mask(token)}")
            raise TokenMismatch("Tokens do not match")

        logger.debug(f"Exchanging request token {mask(token)} for access token")
        response = await self._send_signed(
            "POST",
            f"{self.ACCESS_TOKEN_URL}?{urlencode({'oauth_verifier': verifier})}",
            token=request_token,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        self._expect_ok(response, "access token")

        key, secret = self._token_pair(parse_form(response.body), response, "access token")
        self._access_token = AccessToken(key, secret)
        self._request_token = None
        logger.debug(f"Obtained access token: {mask(key)}")

        return await self.fetch_profile()

    async def complete_from_callback(self, redirect_url: str) -> Dict[str, Any]:
        """
        Complete the handshake from the URL (or query string) the provider
        redirected the user to.
        """
        if not isinstance(redirect_url, str) or not redirect_url:
            raise InvalidArgument("Redirect url was not defined")

        query = urlsplit(redirect_url).query if "?" in redirect_url else redirect_url
        params = dict(parse_qsl(query, keep_blank_values=True))

        if "denied" in params:
            logger.warning(f"User denied authorization for token {mask(params['denied'])}")
            raise AuthorizationDenied("User denied the authorization request")

        token = params.get("oauth_token")
        verifier = params.get("oauth_verifier")
        if not token or not verifier:
            logger.error(f"Redirect is missing oauth parameters. Keys: {list(params.keys())}")
            raise InvalidArgument("Redirect url does not carry oauth_token and oauth_verifier")

        return await self.complete_handshake(token, verifier)

    @abstractmethod
    async def fetch_profile(self) -> Dict[str, Any]:
        """Validate the access token and return the user's profile."""
        pass

    async def _send_signed(self,
                           method: str,
                           url: str,
                           token: Optional[Union[RequestToken, AccessToken]] = None,
                           oauth_params: Optional[Dict[str, str]] = None,
                           headers: Optional[Dict[str, str]] = None,
                           body: Optional[bytes] = None) -> HttpResponse:
        request_headers = dict(headers or {})
        request_headers["Authorization"] = self.signer.authorization_header(
            method,
            url,
            token=token.key if token else None,
            token_secret=token.secret if token else None,
            oauth_params=oauth_params,
        )
        logger.debug(f"Sending {method} {url}")
        return await self.transport.send(method, url, request_headers, body)

    def _expect_ok(self, response: HttpResponse, step: str) -> None:
        if response.status != 200:
            logger.error(f"{step} request failed with status {response.status}")
            raise ProtocolError(
                f"Unexpected status {response.status} from {step} endpoint",
                response.status,
                response.body,
            )

    def _token_pair(self, body: Dict[str, str], response: HttpResponse, step: str) -> Tuple[str, str]:
        key = body.get("oauth_token")
        secret = body.get("oauth_token_secret")
        if not key or not secret:
            logger.error(f"{step} response is missing fields. Keys: {list(body.keys())}")
            raise ProtocolError(f"Missing oauth_token or oauth_token_secret in {step} response",
                                response.status, response.body)
        return key, secret

    def _parse_json(self, response: HttpResponse) -> Dict[str, Any]:
        try:
            payload = json.loads(response.body)
        except ValueError as e:
            logger.error(f"Failed to parse profile response: {str(e)}")
            raise ProtocolError("Profile response is not valid JSON", response.status, response.body) from e

        if not isinstance(payload, dict):
            logger.error(f"Profile response is a {type(payload).__name__}, expected an object")
            raise ProtocolError("Profile response is not a JSON object", response.status, response.body)
        return payload
