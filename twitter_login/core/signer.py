import base64
import hashlib
import hmac
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from oauthlib.common import generate_nonce, generate_timestamp
from oauthlib.oauth1.rfc5849 import signature, utils
from oauthlib.oauth1.rfc5849.parameters import prepare_headers

from ..models.oauth_models import ConsumerCredentials

Params = List[Tuple[str, str]]

def percent_encode(value) -> str:
    """RFC 3986 percent encoding as required by OAuth 1.0a."""
    return utils.escape(str(value))

class OAuth1Signer:
    """
    Builds OAuth 1.0a ``Authorization`` headers signed with HMAC-SHA1.

    The signer is bound to one set of consumer credentials and holds no other
    state: every call produces a fresh nonce and timestamp unless they are
    supplied, so two calls with the same inputs yield the same signature.
    """

    SIGNATURE_METHOD = "HMAC-SHA1"
    VERSION = "1.0"

    def __init__(self, credentials: ConsumerCredentials):
        self.credentials = credentials

    def oauth_params(self,
                     token: Optional[str] = None,
                     extra: Optional[Dict[str, str]] = None,
                     nonce: Optional[str] = None,
                     timestamp: Optional[str] = None) -> Params:
        """Protocol parameters for one request, without the signature."""
        params = [
            ("oauth_consumer_key", self.credentials.key),
            ("oauth_nonce", nonce or generate_nonce()),
            ("oauth_signature_method", self.SIGNATURE_METHOD),
            ("oauth_timestamp", str(timestamp or generate_timestamp())),
            ("oauth_version", self.VERSION),
        ]
        if token:
            params.append(("oauth_token", token))
        if extra:
            params.extend(extra.items())
        return params

    def signature_base_string(self,
                              method: str,
                              url: str,
                              oauth_params: Params,
                              body_params: Optional[Iterable[Tuple[str, str]]] = None) -> str:
        """
        Assemble the signature base string.

        Args:
            method: HTTP method, any case
            url: Full request URL; its query parameters are signed too
            oauth_params: Protocol parameters (``oauth_signature`` excluded)
            body_params: Form-encoded body parameters, if any

        Returns:
            ``METHOD&encoded-base-uri&encoded-normalized-parameters``
        """
        params = signature.collect_parameters(
            uri_query=urlsplit(url).query,
            body=list(body_params or []),
        )
        params.extend(oauth_params)
        normalized = signature.normalize_parameters(params)
        return signature.signature_base_string(method, signature.base_string_uri(url), normalized)

    def signing_key(self, token_secret: Optional[str] = None) -> str:
        return f"{percent_encode(self.credentials.secret)}&{percent_encode(token_secret or '')}"

    def sign(self, base_string: str, token_secret: Optional[str] = None) -> str:
        """HMAC-SHA1 over the base string, base64 encoded."""
        digest = hmac.new(
            self.signing_key(token_secret).encode('utf-8'),
            base_string.encode('utf-8'),
            hashlib.sha1,
        ).digest()
        return base64.b64encode(digest).decode('utf-8')

    def authorization_header(self,
                             method: str,
                             url: str,
                             token: Optional[str] = None,
                             token_secret: Optional[str] = None,
                             oauth_params: Optional[Dict[str, str]] = None,
                             body_params: Optional[Iterable[Tuple[str, str]]] = None,
                             nonce: Optional[str] = None,
                             timestamp: Optional[str] = None) -> str:
        """Signed ``Authorization`` header value for a single request."""
        params = self.oauth_params(token=token, extra=oauth_params, nonce=nonce, timestamp=timestamp)
        base_string = self.signature_base_string(method, url, params, body_params)
        params.append(("oauth_signature", self.sign(base_string, token_secret)))
        return prepare_headers(params)["Authorization"]
