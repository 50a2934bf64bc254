"""Usage Reports v4: account, resource group and organization usage reports."""

from usage_reports.usage_reports_v4.models import (
    AccountSummary,
    AccountUsage,
    Discount,
    InstancesUsage,
    InstancesUsageFirst,
    InstancesUsageNext,
    InstanceUsage,
    Metric,
    Offer,
    OfferCredits,
    OrgUsage,
    Plan,
    Resource,
    ResourceGroupUsage,
    ResourcesSummary,
    SnapshotAccountType,
    SnapshotConfig,
    SnapshotConfigHistoryItem,
    SnapshotConfigState,
    SnapshotConfigValidateResponse,
    SnapshotInterval,
    SnapshotList,
    SnapshotListFirst,
    SnapshotListNext,
    SnapshotListSnapshotsItem,
    SnapshotListSnapshotsItemBillingPeriod,
    SnapshotListSnapshotsItemFilesItem,
    SnapshotListSnapshotsItemReportTypesItem,
    SnapshotReportType,
    SnapshotState,
    SnapshotVersioning,
    Subscription,
    SubscriptionSummary,
    SubscriptionTerm,
    SubscriptionTermCredits,
    SupportSummary,
)
from usage_reports.usage_reports_v4.pagers import (
    GetReportsSnapshotPager,
    GetResourceUsageAccountPager,
    GetResourceUsageOrgPager,
    GetResourceUsageResourceGroupPager,
)
from usage_reports.usage_reports_v4.service import UsageReportsV4

__all__ = [
    # Service
    "UsageReportsV4",
    # Pagers
    "GetReportsSnapshotPager",
    "GetResourceUsageAccountPager",
    "GetResourceUsageOrgPager",
    "GetResourceUsageResourceGroupPager",
    # Usage models
    "AccountSummary",
    "AccountUsage",
    "Discount",
    "InstanceUsage",
    "InstancesUsage",
    "InstancesUsageFirst",
    "InstancesUsageNext",
    "Metric",
    "Offer",
    "OfferCredits",
    "OrgUsage",
    "Plan",
    "Resource",
    "ResourceGroupUsage",
    "ResourcesSummary",
    "Subscription",
    "SubscriptionSummary",
    "SubscriptionTerm",
    "SubscriptionTermCredits",
    "SupportSummary",
    # Snapshot models
    "SnapshotAccountType",
    "SnapshotConfig",
    "SnapshotConfigHistoryItem",
    "SnapshotConfigState",
    "SnapshotConfigValidateResponse",
    "SnapshotInterval",
    "SnapshotList",
    "SnapshotListFirst",
    "SnapshotListNext",
    "SnapshotListSnapshotsItem",
    "SnapshotListSnapshotsItemBillingPeriod",
    "SnapshotListSnapshotsItemFilesItem",
    "SnapshotListSnapshotsItemReportTypesItem",
    "SnapshotReportType",
    "SnapshotState",
    "SnapshotVersioning",
]
