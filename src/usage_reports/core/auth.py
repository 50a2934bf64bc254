"""Request authenticators.

Each authenticator adds credentials to the headers of an outgoing request.
:class:`IAMAuthenticator` exchanges an IBM Cloud API key for an IAM access
token and keeps it cached until it is close to expiry.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from abc import ABC, abstractmethod

import httpx
from pydantic import BaseModel, Field

from usage_reports.config import Settings, get_settings, parse_bool, read_service_properties
from usage_reports.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


class Authenticator(ABC):
    """Base class for authenticators."""

    AUTHTYPE_IAM = "iam"
    AUTHTYPE_BEARERTOKEN = "bearerToken"
    AUTHTYPE_BASIC = "basic"
    AUTHTYPE_NOAUTH = "noAuth"

    @abstractmethod
    async def authenticate(self, headers: dict[str, str]) -> None:
        """Add credentials to the request headers in place."""

    @abstractmethod
    def authentication_type(self) -> str:
        """Return the authentication type name."""

    def validate(self) -> None:
        """Check the configuration, raising ValueError when it is invalid."""


class NoAuthAuthenticator(Authenticator):
    """Authenticator that sends no credentials."""

    async def authenticate(self, headers: dict[str, str]) -> None:
        return None

    def authentication_type(self) -> str:
        return self.AUTHTYPE_NOAUTH


class BearerTokenAuthenticator(Authenticator):
    """Authenticator for a bearer token managed by the caller."""

    def __init__(self, bearer_token: str) -> None:
        self.bearer_token = bearer_token
        self.validate()

    def validate(self) -> None:
        if not self.bearer_token:
            raise ValueError("bearer_token must be provided")

    def set_bearer_token(self, bearer_token: str) -> None:
        """Replace the token, e.g. after the caller refreshed it."""
        self.bearer_token = bearer_token
        self.validate()

    async def authenticate(self, headers: dict[str, str]) -> None:
        headers["Authorization"] = f"Bearer {self.bearer_token}"

    def authentication_type(self) -> str:
        return self.AUTHTYPE_BEARERTOKEN


class BasicAuthenticator(Authenticator):
    """HTTP Basic authenticator."""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password
        self.validate()

    def validate(self) -> None:
        if not self.username or not self.password:
            raise ValueError("username and password must be provided")

    async def authenticate(self, headers: dict[str, str]) -> None:
        credentials = f"{self.username}:{self.password}".encode()
        headers["Authorization"] = f"Basic {base64.b64encode(credentials).decode()}"

    def authentication_type(self) -> str:
        return self.AUTHTYPE_BASIC


class IAMTokenResponse(BaseModel):
    """Token response from the IAM token endpoint."""

    access_token: str = Field(..., description="Access token")
    refresh_token: str | None = Field(None, description="Refresh token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(default=3600, description="Token lifetime in seconds")
    expiration: int | None = Field(None, description="Expiry as a Unix timestamp")

    model_config = {"extra": "allow"}


class IAMAuthenticator(Authenticator):
    """Authenticator exchanging an API key for IAM access tokens.

    The token is fetched on first use and refreshed once 80% of its
    lifetime has passed. Concurrent requests share a single refresh.
    """

    GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
    TOKEN_PATH = "/identity/token"
    REFRESH_FRACTION = 0.8

    def __init__(
        self,
        apikey: str,
        url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        scope: str | None = None,
        disable_ssl_verification: bool = False,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the IAM authenticator.

        Args:
            apikey: IBM Cloud API key.
            url: IAM base URL. Defaults to settings.
            client_id: Optional client ID for Basic auth on the token request.
            client_secret: Secret paired with client_id.
            scope: Optional space-separated scopes.
            disable_ssl_verification: Skip TLS verification for token requests.
            http_client: Optional HTTP client for testing.
            settings: SDK settings (uses default if not provided).
        """
        self._settings = settings or get_settings()
        self.apikey = apikey
        self.url = (url or self._settings.iam_url).rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.disable_ssl_verification = disable_ssl_verification
        self._http_client = http_client
        self._token: IAMTokenResponse | None = None
        self._expiration_time = 0.0
        self._refresh_time = 0.0
        self._lock = asyncio.Lock()
        self.validate()

    def validate(self) -> None:
        if not self.apikey:
            raise ValueError("apikey must be provided")
        if bool(self.client_id) != bool(self.client_secret):
            raise ValueError("client_id and client_secret must be provided together")

    def authentication_type(self) -> str:
        return self.AUTHTYPE_IAM

    @property
    def token_endpoint(self) -> str:
        """Get the IAM token endpoint URL."""
        return f"{self.url}{self.TOKEN_PATH}"

    async def authenticate(self, headers: dict[str, str]) -> None:
        token = await self.get_token()
        headers["Authorization"] = f"Bearer {token}"

    async def get_token(self) -> str:
        """Return a valid access token, fetching a new one when needed."""
        if self._needs_refresh():
            async with self._lock:
                # Double-check after acquiring lock
                if self._needs_refresh():
                    self._save_token(await self.request_token())
        if self._token is None:
            raise AuthenticationError(0, "No IAM access token available")
        return self._token.access_token

    def _needs_refresh(self) -> bool:
        if self._token is None:
            return True
        now = time.time()
        return now >= self._expiration_time or now >= self._refresh_time

    def _save_token(self, token: IAMTokenResponse) -> None:
        now = time.time()
        self._token = token
        self._expiration_time = float(token.expiration or now + token.expires_in)
        self._refresh_time = self._expiration_time - token.expires_in * (1 - self.REFRESH_FRACTION)
        logger.debug("Obtained IAM access token valid for %d seconds", token.expires_in)

    async def request_token(self) -> IAMTokenResponse:
        """POST the API key to the IAM token endpoint.

        Returns:
            Parsed token response.

        Raises:
            AuthenticationError: If the token request fails.
        """
        data = {
            "grant_type": self.GRANT_TYPE,
            "apikey": self.apikey,
            "response_type": "cloud_iam",
        }
        if self.scope:
            data["scope"] = self.scope

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
        auth = (self.client_id, self.client_secret) if self.client_id and self.client_secret else None

        try:
            if self._http_client:
                response = await self._http_client.post(
                    self.token_endpoint,
                    data=data,
                    headers=headers,
                    auth=auth,
                )
            else:
                async with httpx.AsyncClient(verify=not self.disable_ssl_verification) as client:
                    response = await client.post(
                        self.token_endpoint,
                        data=data,
                        headers=headers,
                        auth=auth,
                        timeout=self._settings.iam_token_timeout_seconds,
                    )
        except httpx.RequestError as e:
            logger.error("HTTP error calling IAM token endpoint: %s", e)
            raise AuthenticationError(0, f"HTTP error calling IAM token endpoint: {e}") from e

        if response.status_code != 200:
            logger.error("IAM token request failed: status=%d", response.status_code)
            raise AuthenticationError(response.status_code, http_response=response)

        try:
            return IAMTokenResponse(**response.json())
        except ValueError as e:
            raise AuthenticationError(
                response.status_code,
                f"Invalid IAM token response: {e}",
                http_response=response,
            ) from e


def get_authenticator_from_environment(
    service_name: str,
    credentials_file: str | None = None,
) -> Authenticator:
    """Build an authenticator from the external service properties.

    ``<SERVICE>_AUTH_TYPE`` selects the type; it defaults to IAM when
    ``<SERVICE>_APIKEY`` is set.

    Raises:
        ValueError: If no usable configuration was found.
    """
    properties = read_service_properties(service_name, credentials_file)

    auth_type = properties.get("AUTH_TYPE", "").lower()
    if not auth_type and properties.get("APIKEY"):
        auth_type = Authenticator.AUTHTYPE_IAM

    if auth_type == Authenticator.AUTHTYPE_IAM:
        return IAMAuthenticator(
            apikey=properties.get("APIKEY", ""),
            url=properties.get("AUTH_URL"),
            client_id=properties.get("CLIENT_ID"),
            client_secret=properties.get("CLIENT_SECRET"),
            scope=properties.get("SCOPE"),
            disable_ssl_verification=parse_bool(properties.get("AUTH_DISABLE_SSL")),
        )
    if auth_type == Authenticator.AUTHTYPE_BEARERTOKEN.lower():
        return BearerTokenAuthenticator(properties.get("BEARER_TOKEN", ""))
    if auth_type == Authenticator.AUTHTYPE_BASIC:
        return BasicAuthenticator(properties.get("USERNAME", ""), properties.get("PASSWORD", ""))
    if auth_type == Authenticator.AUTHTYPE_NOAUTH.lower():
        return NoAuthAuthenticator()

    if not auth_type:
        raise ValueError(f"No authentication configuration found for service '{service_name}'")
    raise ValueError(f"Unsupported authentication type: {auth_type}")
