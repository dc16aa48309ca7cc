from typing import Any, Dict, Optional
from urllib.parse import urlencode

from ..config import Settings, get_settings
from ..core.oauth_base import FORM_CONTENT_TYPE, OAuthHandshake
from ..core.transport import AiohttpTransport, HttpTransport
from ..exceptions import InvalidState
from ..utils.logger import get_logger

logger = get_logger(__name__)

REQUEST_TOKEN_ENDPOINT = "https://api.twitter.com/oauth/request_token"
AUTHENTICATION_ENDPOINT = "https://api.twitter.com/oauth/authenticate"
ACCESS_TOKEN_ENDPOINT = "https://api.twitter.com/oauth/access_token"
VALIDATE_CREDENTIALS_ENDPOINT = "https://api.twitter.com/1.1/account/verify_credentials.json"

class TwitterOAuth(OAuthHandshake):
    """Sign in with Twitter over OAuth 1.0a."""

    REQUEST_TOKEN_URL = REQUEST_TOKEN_ENDPOINT
    AUTHENTICATE_URL = AUTHENTICATION_ENDPOINT
    ACCESS_TOKEN_URL = ACCESS_TOKEN_ENDPOINT

    @classmethod
    def from_settings(cls,
                      settings: Optional[Settings] = None,
                      transport: Optional[HttpTransport] = None) -> "TwitterOAuth":
        """Build a handshake from the consumer credentials in settings."""
        settings = settings or get_settings()
        return cls(
            key=settings.TWITTER_CONSUMER_KEY,
            secret=settings.TWITTER_CONSUMER_SECRET,
            transport=transport or AiohttpTransport(timeout=settings.HTTP_TIMEOUT),
        )

    async def fetch_profile(self) -> Dict[str, Any]:
        """
        Fetch the authenticated user's profile, email included when the app
        is allowed to read it.

        Returns:
            Dict: ``verify_credentials`` payload, unmodified

        Raises:
            InvalidState: No access token has been obtained yet
            TransportError: The request could not be sent
            ProtocolError: Unexpected status or a body that is not a JSON object
        """
        access_token = self.access_token
        if access_token is None:
            logger.error(f"No access token to validate (stage: {self.stage.value})")
            raise InvalidState("complete_handshake must succeed before fetch_profile")

        response = await self._send_signed(
            "GET",
            f"{VALIDATE_CREDENTIALS_ENDPOINT}?{urlencode({'include_email': 'true'})}",
            token=access_token,
            headers={
                "Content-Type": FORM_CONTENT_TYPE,
                "Accept": "application/json",
            },
        )
        self._expect_ok(response, "verify credentials")

        profile = self._parse_json(response)
        logger.debug(f"Validated credentials for @{profile.get('screen_name', '<unknown>')}")
        return profile
