"""Base service: request preparation, sending, retries and decoding."""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass, field
from typing import Any, Generic, Self, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from usage_reports.config import Settings, get_settings, parse_bool, read_service_properties
from usage_reports.core.auth import Authenticator
from usage_reports.core.errors import ApiError
from usage_reports.core.models import ApiModel
from usage_reports.version import __version__

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=ApiModel)

SDK_NAME = "usage-reports-sdk"
SDK_ANALYTICS_HEADER = "X-IBMCloud-SDK-Analytics"


@dataclass
class DetailedResponse(Generic[T]):
    """Result of a service operation together with HTTP response details."""

    result: T
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class PreparedRequest:
    """A request ready to be authenticated and sent."""

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] | None = None


def get_sdk_headers(service_name: str, service_version: str, operation_id: str) -> dict[str, str]:
    """Build the per-operation SDK analytics header."""
    return {
        SDK_ANALYTICS_HEADER: (
            f"service_name={service_name};"
            f"service_version={service_version};"
            f"operation_id={operation_id}"
        )
    }


def require(value: Any, name: str) -> None:
    """Raise ValueError when a required argument is missing."""
    if value is None or value == "":
        raise ValueError(f"{name} must be provided")


def _encode_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_encode_param(v) for v in value)
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None


def _is_retryable(exc: BaseException) -> bool:
    if not isinstance(exc, ApiError):
        return False
    if exc.code == 0 or exc.code == 429:
        return True
    return 500 <= exc.code < 600 and exc.code != 501


class BaseService:
    """Common behaviour of the service clients.

    Subclasses set ``DEFAULT_SERVICE_URL`` and ``DEFAULT_SERVICE_NAME`` and
    implement operations with :meth:`prepare_request` and :meth:`send`.
    """

    DEFAULT_SERVICE_URL = ""
    DEFAULT_SERVICE_NAME = ""

    def __init__(
        self,
        authenticator: Authenticator,
        service_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        disable_ssl_verification: bool = False,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            authenticator: Authenticator adding credentials to each request.
            service_url: Base URL of the service. Defaults to DEFAULT_SERVICE_URL.
            http_client: Optional HTTP client, e.g. for testing. A client
                passed in is not closed by :meth:`close`.
            disable_ssl_verification: Skip TLS verification on the owned client.
            settings: SDK settings (uses default if not provided).
        """
        if authenticator is None:
            raise ValueError("authenticator must be provided")

        self._settings = settings or get_settings()
        self.authenticator = authenticator
        self.service_url = ""
        self.set_service_url(service_url or self.DEFAULT_SERVICE_URL)
        self.default_headers: dict[str, str] = {}
        self.disable_ssl_verification = disable_ssl_verification
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self.max_retries = 0
        self.retry_interval = self._settings.retry_interval_seconds

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_service_url(self, service_url: str) -> None:
        """Point the service at another base URL, e.g. a private endpoint."""
        if not service_url:
            raise ValueError("service_url must be provided")
        self.service_url = service_url.rstrip("/")

    def set_default_headers(self, headers: dict[str, str]) -> None:
        """Set headers sent with every request of this service."""
        self.default_headers = dict(headers)

    def set_http_client(self, http_client: httpx.AsyncClient) -> None:
        """Use a caller-managed HTTP client. It is not closed by :meth:`close`."""
        self._http_client = http_client
        self._owns_http_client = False

    def enable_retries(self, max_retries: int | None = None, retry_interval: float | None = None) -> None:
        """Retry throttled, failed and unreachable requests.

        Args:
            max_retries: Retries after the first attempt. Defaults to settings.
            retry_interval: Upper bound in seconds for the wait between
                attempts. Defaults to settings.
        """
        self.max_retries = self._settings.max_retries if max_retries is None else max_retries
        self.retry_interval = (
            self._settings.retry_interval_seconds if retry_interval is None else retry_interval
        )
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")

    def disable_retries(self) -> None:
        """Send each request once."""
        self.max_retries = 0

    def configure_service(self, service_name: str, credentials_file: str | None = None) -> None:
        """Apply the external properties of ``service_name``."""
        properties = read_service_properties(service_name, credentials_file)

        if properties.get("URL"):
            self.set_service_url(properties["URL"])
        if "DISABLE_SSL" in properties:
            self.disable_ssl_verification = parse_bool(properties["DISABLE_SSL"])
        if parse_bool(properties.get("ENABLE_RETRIES")):
            max_retries = properties.get("MAX_RETRIES")
            retry_interval = properties.get("RETRY_INTERVAL")
            self.enable_retries(
                max_retries=int(max_retries) if max_retries else None,
                retry_interval=float(retry_interval) if retry_interval else None,
            )

    @property
    def user_agent(self) -> str:
        """User-Agent sent with every request."""
        return f"{SDK_NAME}/{__version__} (python {platform.python_version()})"

    # ------------------------------------------------------------------
    # HTTP client lifecycle
    # ------------------------------------------------------------------

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._settings.request_timeout_seconds,
                verify=not self.disable_ssl_verification,
            )
            self._owns_http_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def prepare_request(
        self,
        method: str,
        path: str,
        *,
        path_params: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str | None] | None = None,
        json: dict[str, Any] | None = None,
    ) -> PreparedRequest:
        """Build a request against the service URL.

        Path parameters are percent-encoded into ``path``; ``None`` values
        are dropped from the query, the headers and the JSON body.
        """
        if path_params:
            path = path.format(**{k: quote(str(v), safe="") for k, v in path_params.items()})

        request_headers = {"User-Agent": self.user_agent}
        request_headers.update(self.default_headers)
        if headers:
            request_headers.update({k: v for k, v in headers.items() if v is not None})

        query = {k: _encode_param(v) for k, v in (params or {}).items() if v is not None}

        body = None
        if json is not None:
            body = {k: getattr(v, "value", v) for k, v in json.items() if v is not None}

        return PreparedRequest(
            method=method.upper(),
            url=f"{self.service_url}{path}",
            params=query,
            headers=request_headers,
            json=body,
        )

    async def send(
        self,
        request: PreparedRequest,
        response_model: type[M] | None = None,
    ) -> DetailedResponse[Any]:
        """Send a prepared request, retrying when retries are enabled.

        Args:
            request: The request to send.
            response_model: Model to validate a JSON object result into.

        Returns:
            DetailedResponse with the decoded result.

        Raises:
            ApiError: On a non-2xx status, a transport failure or an
                undecodable response body.
            AuthenticationError: If credentials could not be obtained.
        """
        if self.max_retries <= 0:
            response = await self._send_once(request)
        else:
            retrying = AsyncRetrying(
                stop=stop_after_attempt(self.max_retries + 1),
                wait=self._retry_wait,
                retry=retry_if_exception(_is_retryable),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            )
            async for attempt in retrying:
                with attempt:
                    response = await self._send_once(request)

        if response_model is not None:
            response.result = self._validate_result(response, response_model)
        return response

    @staticmethod
    def _validate_result(response: DetailedResponse[Any], response_model: type[M]) -> Any:
        result = response.result
        if isinstance(result, dict):
            try:
                return response_model.model_validate(result)
            except ValidationError as e:
                raise ApiError(
                    response.status_code,
                    f"Error processing the HTTP response: {e}",
                ) from e

        # CSV text and empty bodies pass through; any other JSON value cannot be the model
        if result is not None and "json" in response.headers.get("content-type", ""):
            raise ApiError(
                response.status_code,
                f"Error processing the HTTP response: expected a JSON object, got {type(result).__name__}",
            )
        return result

    def _retry_wait(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, ApiError):
            retry_after = _parse_retry_after(exc.headers.get("Retry-After"))
            if retry_after is not None:
                return min(retry_after, self.retry_interval)
        backoff = wait_exponential(multiplier=1, max=self.retry_interval)
        return backoff(retry_state)

    async def _send_once(self, request: PreparedRequest) -> DetailedResponse[Any]:
        headers = dict(request.headers)
        await self.authenticator.authenticate(headers)

        client = self._get_http_client()
        logger.debug("Sending %s %s", request.method, request.url)

        try:
            response = await client.request(
                request.method,
                request.url,
                params=request.params,
                headers=headers,
                json=request.json,
            )
        except httpx.RequestError as e:
            logger.error("HTTP error calling %s %s: %s", request.method, request.url, e)
            raise ApiError(0, f"HTTP error calling {request.url}: {e}") from e

        logger.debug(
            "Received status=%d for %s %s",
            response.status_code,
            request.method,
            request.url,
        )

        if not response.is_success:
            error = ApiError(response.status_code, http_response=response)
            logger.error(
                "Request failed: %s %s status=%d error=%s",
                request.method,
                request.url,
                response.status_code,
                error.message,
            )
            raise error

        return DetailedResponse(
            result=self._decode_body(response),
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None

        content_type = response.headers.get("Content-Type", "")
        if "json" not in content_type:
            return response.text

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                response.status_code,
                f"Error processing the HTTP response: {e}",
                http_response=response,
            ) from e
