"""Pytest configuration and fixtures."""

import os

import httpx
import pytest

# Set test environment variables before importing SDK modules
os.environ["IBM_CREDENTIALS_FILE"] = "/nonexistent/ibm-credentials.env"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"

SERVICE_PREFIXES = ("USAGE_REPORTS_", "PARTNER_USAGE_REPORTS_")


@pytest.fixture(autouse=True)
def clean_service_environment(monkeypatch):
    """Keep service properties of the developer environment out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith(SERVICE_PREFIXES):
            monkeypatch.delenv(key)


@pytest.fixture
def test_settings():
    """Provide test settings."""
    from usage_reports.config import Settings

    return Settings(
        iam_url="https://iam.test.cloud.ibm.com",
        request_timeout_seconds=5.0,
        max_retries=2,
        retry_interval_seconds=0.0,
        log_level="DEBUG",
    )


class FakeServer:
    """Serves queued responses through httpx.MockTransport and records requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception] = []

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self.responses.extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def server():
    """Provide a fake HTTP server."""
    return FakeServer()


@pytest.fixture
def usage_reports(server, test_settings):
    """Create a Usage Reports client backed by the fake server."""
    from usage_reports.core import NoAuthAuthenticator
    from usage_reports.usage_reports_v4 import UsageReportsV4

    return UsageReportsV4(
        authenticator=NoAuthAuthenticator(),
        http_client=server.client(),
        settings=test_settings,
    )


@pytest.fixture
def partner_usage_reports(server, test_settings):
    """Create a Partner Usage Reports client backed by the fake server."""
    from usage_reports.core import NoAuthAuthenticator
    from usage_reports.partner_usage_reports_v1 import PartnerUsageReportsV1

    return PartnerUsageReportsV1(
        authenticator=NoAuthAuthenticator(),
        http_client=server.client(),
        settings=test_settings,
    )
