"""Core service runtime: authentication, requests, errors and pagination."""

from usage_reports.core.auth import (
    Authenticator,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    IAMAuthenticator,
    IAMTokenResponse,
    NoAuthAuthenticator,
    get_authenticator_from_environment,
)
from usage_reports.core.errors import ApiError, AuthenticationError, PagerExhaustedError
from usage_reports.core.models import ApiModel
from usage_reports.core.pagination import OperationPager, Pager, get_query_param
from usage_reports.core.service import (
    BaseService,
    DetailedResponse,
    PreparedRequest,
    get_sdk_headers,
    require,
)

__all__ = [
    # Authenticators
    "Authenticator",
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "IAMAuthenticator",
    "IAMTokenResponse",
    "NoAuthAuthenticator",
    "get_authenticator_from_environment",
    # Errors
    "ApiError",
    "AuthenticationError",
    "PagerExhaustedError",
    # Models
    "ApiModel",
    # Pagination
    "OperationPager",
    "Pager",
    "get_query_param",
    # Service
    "BaseService",
    "DetailedResponse",
    "PreparedRequest",
    "get_sdk_headers",
    "require",
]
