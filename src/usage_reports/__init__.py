"""Client SDK for the IBM Cloud usage reports APIs."""

from usage_reports.core import (
    ApiError,
    AuthenticationError,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    DetailedResponse,
    IAMAuthenticator,
    NoAuthAuthenticator,
    Pager,
    PagerExhaustedError,
    get_authenticator_from_environment,
)
from usage_reports.partner_usage_reports_v1 import GetResourceUsageReportPager, PartnerUsageReportsV1
from usage_reports.usage_reports_v4 import (
    GetReportsSnapshotPager,
    GetResourceUsageAccountPager,
    GetResourceUsageOrgPager,
    GetResourceUsageResourceGroupPager,
    UsageReportsV4,
)
from usage_reports.version import __version__

__all__ = [
    "__version__",
    # Services
    "PartnerUsageReportsV1",
    "UsageReportsV4",
    # Pagers
    "GetReportsSnapshotPager",
    "GetResourceUsageAccountPager",
    "GetResourceUsageOrgPager",
    "GetResourceUsageReportPager",
    "GetResourceUsageResourceGroupPager",
    "Pager",
    # Authentication
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "IAMAuthenticator",
    "NoAuthAuthenticator",
    "get_authenticator_from_environment",
    # Responses and errors
    "ApiError",
    "AuthenticationError",
    "DetailedResponse",
    "PagerExhaustedError",
]
