"""GitHub OAuth2 authorization-code flow."""

import logging
from collections.abc import Sequence
from enum import Enum

import httpx
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri, prepare_token_request

from repogate.config import ConfigurationError, Settings
from repogate.constants import GITHUB_AUTHORIZE_URL, GITHUB_TOKEN_URL
from repogate.utils.secrets import mask_token

logger = logging.getLogger(__name__)


class AuthErrorKind(str, Enum):
    """Why a code exchange failed."""

    INVALID_CODE = "invalid_code"
    NETWORK_FAILURE = "network_failure"


class AuthError(Exception):
    """Code exchange failed. The user has to restart from the authorization URL."""

    def __init__(self, kind: AuthErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)


class OAuthFlow:
    """Builds authorization URLs and trades authorization codes for tokens.

    Usage:
        flow = OAuthFlow.from_settings(settings, http_client)
        url = flow.build_authorization_url(["public_repo"])
        token = await flow.exchange_code_for_token(code)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        http_client: httpx.AsyncClient,
        redirect_uri: str | None = None,
        authorize_url: str = GITHUB_AUTHORIZE_URL,
        token_url: str = GITHUB_TOKEN_URL,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.authorize_url = authorize_url
        self.token_url = token_url
        self._http = http_client

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.AsyncClient) -> "OAuthFlow":
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            redirect_uri=settings.redirect_uri,
            http_client=http_client,
        )

    def build_authorization_url(self, scopes: Sequence[str]) -> str:
        """Build the provider URL the user is sent to in order to grant access.

        The result depends only on configuration and ``scopes``.

        Raises:
            ConfigurationError: if no client id is configured.
        """
        if not self.client_id:
            raise ConfigurationError("CLIENT_ID must be specified")
        return prepare_grant_uri(
            self.authorize_url,
            client_id=self.client_id,
            response_type="code",
            redirect_uri=self.redirect_uri,
            scope=list(scopes) or None,
        )

    async def exchange_code_for_token(self, code: str) -> str:
        """Exchange an authorization code for a bearer access token.

        Makes exactly one request to the token endpoint. Codes are single-use,
        so failures are never retried.

        Args:
            code: Authorization code from the callback query string. Surrounding
                whitespace is stripped.

        Returns:
            The access token.

        Raises:
            AuthError: INVALID_CODE if the provider rejects the code,
                NETWORK_FAILURE on transport errors and timeouts.
        """
        code = (code or "").strip()
        if not code:
            raise AuthError(AuthErrorKind.INVALID_CODE, "empty authorization code")

        body = prepare_token_request(
            "authorization_code",
            code=code,
            redirect_uri=self.redirect_uri,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )

        try:
            response = await self._http.post(
                self.token_url,
                content=body,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
            )
        except httpx.HTTPError as e:
            logger.warning(f"Token exchange transport failure: {e!r}")
            raise AuthError(AuthErrorKind.NETWORK_FAILURE, str(e)) from e

        if response.status_code >= 500:
            raise AuthError(
                AuthErrorKind.NETWORK_FAILURE, f"token endpoint returned {response.status_code}"
            )
        if response.status_code != 200:
            raise AuthError(
                AuthErrorKind.INVALID_CODE, f"token endpoint returned {response.status_code}"
            )

        try:
            token_result = response.json()
        except ValueError as e:
            raise AuthError(AuthErrorKind.NETWORK_FAILURE, "malformed token response") from e

        if not isinstance(token_result, dict):
            raise AuthError(AuthErrorKind.NETWORK_FAILURE, "malformed token response")

        # GitHub reports a bad code with HTTP 200 and an error payload
        if "error" in token_result:
            raise AuthError(
                AuthErrorKind.INVALID_CODE,
                token_result.get("error_description") or token_result["error"],
            )

        access_token = token_result.get("access_token")
        if not access_token or not isinstance(access_token, str):
            raise AuthError(AuthErrorKind.INVALID_CODE, "no access token received")

        logger.info(f"Obtained access token {mask_token(access_token)}")
        return access_token
