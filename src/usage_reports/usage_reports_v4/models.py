"""Data models for the Usage Reports v4 API."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from usage_reports.core.models import ApiModel

# Known snapshot values, for request arguments and comparisons. Response
# fields hold plain strings so values added by the service still parse.

class SnapshotInterval(str, Enum):
    """Frequency of taking the snapshot of the billing reports."""

    DAILY = "daily"


class SnapshotVersioning(str, Enum):
    """Whether a new report file is written per snapshot or replaced."""

    NEW = "new"
    OVERWRITE = "overwrite"


class SnapshotReportType(str, Enum):
    """Billing report types stored in a snapshot."""

    ACCOUNT_SUMMARY = "account_summary"
    ENTERPRISE_SUMMARY = "enterprise_summary"
    ACCOUNT_RESOURCE_INSTANCE_USAGE = "account_resource_instance_usage"


class SnapshotConfigState(str, Enum):
    """Status of the billing snapshot configuration."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class SnapshotAccountType(str, Enum):
    """Type of account."""

    ACCOUNT = "account"
    ENTERPRISE = "enterprise"


class SnapshotState(str, Enum):
    """Status of a billing snapshot."""

    ENABLED = "enabled"
    DISABLED = "disabled"


# ---------------------------------------------------------------------------
# Usage
# ---------------------------------------------------------------------------


class Discount(ApiModel):
    """Information about a discount that is associated with a metric."""

    ref: str | None = Field(None, description="ID of the discount")
    name: str | None = Field(None, description="Name of the discount indicator")
    display_name: str | None = Field(None, description="Display name of the discount")
    discount: float | None = Field(None, description="Discount percentage")


class Metric(ApiModel):
    """Information about a metric."""

    metric: str | None = Field(None, description="The ID of the metric")
    metric_name: str | None = Field(None, description="The name of the metric")
    quantity: float | None = Field(None, description="The aggregated value for the metric")
    rateable_quantity: float | None = Field(None, description="The quantity that is used for calculating charges")
    cost: float | None = Field(None, description="The cost incurred by the metric")
    rated_cost: float | None = Field(None, description="Pre-discounted cost incurred by the metric")
    price: list[Any] = Field(default_factory=list, description="The price with which the cost was calculated")
    unit: str | None = Field(None, description="The unit that qualifies the quantity")
    unit_name: str | None = Field(None, description="The name of the unit")
    non_chargeable: bool | None = Field(None, description="When set to true, the cost is for informational purpose")
    discounts: list[Discount] = Field(default_factory=list, description="All the discounts applicable to the metric")


class Plan(ApiModel):
    """The aggregated values for the plan."""

    plan_id: str | None = Field(None, description="The ID of the plan")
    plan_name: str | None = Field(None, description="The name of the plan")
    pricing_region: str | None = Field(None, description="The pricing region for the plan")
    pricing_plan_id: str | None = Field(None, description="The ID of the pricing plan")
    billable: bool | None = Field(None, description="Indicates if the plan charges are billed")
    cost: float | None = Field(None, description="The total cost incurred by the plan")
    rated_cost: float | None = Field(None, description="Total pre-discounted cost incurred by the plan")
    usage: list[Metric] = Field(default_factory=list, description="All the metrics in the plan")
    discounts: list[Discount] = Field(default_factory=list, description="All the discounts applicable to the plan")
    pending: bool | None = Field(None, description="Pending charge from the account")


class Resource(ApiModel):
    """The container for all the plans in the resource."""

    resource_id: str | None = Field(None, description="The ID of the resource")
    catalog_id: str | None = Field(None, description="The catalog ID of the resource")
    resource_name: str | None = Field(None, description="The name of the resource")
    billable_cost: float | None = Field(None, description="The billable charges for the account")
    billable_rated_cost: float | None = Field(None, description="The pre-discounted billable charges")
    non_billable_cost: float | None = Field(None, description="The non-billable charges for the account")
    non_billable_rated_cost: float | None = Field(None, description="The pre-discounted non-billable charges")
    plans: list[Plan] = Field(default_factory=list, description="All the plans in the resource")
    discounts: list[Discount] = Field(default_factory=list, description="All the discounts applicable to the resource")


class ResourcesSummary(ApiModel):
    """Charges related to the resources of an account."""

    billable_cost: float | None = Field(None, description="The billable charges for all cloud resources")
    non_billable_cost: float | None = Field(None, description="The non-billable charges for all cloud resources")


class OfferCredits(ApiModel):
    """Credit information related to an offer."""

    starting_balance: float | None = Field(None, description="The available credits at the start of the month")
    used: float | None = Field(None, description="The credits used in this month")
    balance: float | None = Field(None, description="The remaining credits in the offer")


class Offer(ApiModel):
    """Information about an individual offer."""

    offer_id: str | None = Field(None, description="The ID of the offer")
    credits_total: float | None = Field(None, description="The total credits before applying the offer")
    offer_template: str | None = Field(None, description="The template with which the offer was generated")
    valid_from: datetime | None = Field(None, description="The date from which the offer is valid")
    expires_on: datetime | None = Field(None, description="The date until the offer is valid")
    credits: OfferCredits | None = Field(None, description="Credit information related to an offer")


class SupportSummary(ApiModel):
    """Support charges for the month."""

    cost: float | None = Field(None, description="The monthly support cost")
    type: str | None = Field(None, description="The type of support")
    overage: float | None = Field(None, description="Additional support cost for the month")


class SubscriptionTermCredits(ApiModel):
    """Information about credits related to a subscription term."""

    total: float | None = Field(None, description="The total credits available in the term")
    starting_balance: float | None = Field(None, description="The unused credits in the term at the beginning of the month")
    used: float | None = Field(None, description="The credits used in this month")
    balance: float | None = Field(None, description="The remaining credits in this term")


class SubscriptionTerm(ApiModel):
    """Information about a subscription term."""

    start: datetime | None = Field(None, description="The start date of the term")
    end: datetime | None = Field(None, description="The end date of the term")
    credits: SubscriptionTermCredits | None = Field(None, description="Credits related to the term")


class Subscription(ApiModel):
    """A subscription and its terms."""

    subscription_id: str | None = Field(None, description="The ID of the subscription")
    charge_agreement_number: str | None = Field(None, description="The charge agreement number of the subscription")
    type: str | None = Field(None, description="Type of the subscription")
    subscription_amount: float | None = Field(None, description="The credits available in the subscription")
    start: datetime | None = Field(None, description="The date from which the subscription was active")
    end: datetime | None = Field(None, description="The date until which the subscription is active")
    credits_total: float | None = Field(None, description="The total credits available in the subscription")
    terms: list[SubscriptionTerm] = Field(default_factory=list, description="The terms through which the subscription is split into")


class SubscriptionSummary(ApiModel):
    """A summary of charges and credits related to a subscription."""

    overage: float | None = Field(None, description="The charges after exhausting subscription credits and offers credits")
    subscriptions: list[Subscription] = Field(default_factory=list, description="The list of subscriptions applicable for the month")


class AccountSummary(ApiModel):
    """A summary of charges and credits for an account."""

    account_id: str | None = Field(None, description="The ID of the account")
    account_resources: list[Resource] = Field(default_factory=list, description="The list of account resources for the month")
    month: str | None = Field(None, description="The month in which usages were incurred (yyyy-mm)")
    billing_country_code: str | None = Field(None, description="Country")
    billing_currency_code: str | None = Field(None, description="The currency in which the account is billed")
    resources: ResourcesSummary | None = Field(None, description="Charges related to cloud resources")
    offers: list[Offer] = Field(default_factory=list, description="The list of offers applicable for the account for the month")
    support: list[SupportSummary] = Field(default_factory=list, description="Support-related charges")
    support_resources: list[Any] = Field(default_factory=list, description="The list of support resources for the month")
    subscription: SubscriptionSummary | None = Field(None, description="A summary of charges and credits related to a subscription")


class _UsageTotals(ApiModel):
    pricing_country: str | None = Field(None, description="The target country pricing that should be used")
    currency_code: str | None = Field(None, description="The currency for the cost fields")
    month: str | None = Field(None, description="The month (yyyy-mm)")
    resources: list[Resource] = Field(default_factory=list, description="All the resource used in the account")
    currency_rate: float | None = Field(None, description="The value of the account's currency in USD")


class AccountUsage(_UsageTotals):
    """The aggregated usage and charges for all the plans in the account."""

    account_id: str | None = Field(None, description="The ID of the account")


class ResourceGroupUsage(_UsageTotals):
    """The aggregated usage and charges for all the plans in the resource group."""

    account_id: str | None = Field(None, description="The ID of the account")
    resource_group_id: str | None = Field(None, description="The ID of the resource group")
    resource_group_name: str | None = Field(None, description="The name of the resource group")


class OrgUsage(_UsageTotals):
    """The aggregated usage and charges for all the plans in the org."""

    account_id: str | None = Field(None, description="The ID of the account")
    organization_id: str | None = Field(None, description="The ID of the organization")
    organization_name: str | None = Field(None, description="The name of the organization")


class InstanceUsage(ApiModel):
    """The aggregated usage and charges for an instance."""

    account_id: str | None = Field(None, description="The ID of the account")
    resource_instance_id: str | None = Field(None, description="The ID of the resource instance")
    resource_instance_name: str | None = Field(None, description="The name of the resource instance")
    resource_id: str | None = Field(None, description="The ID of the resource")
    catalog_id: str | None = Field(None, description="The catalog ID of the resource")
    resource_name: str | None = Field(None, description="The name of the resource")
    resource_group_id: str | None = Field(None, description="The ID of the resource group")
    resource_group_name: str | None = Field(None, description="The name of the resource group")
    organization_id: str | None = Field(None, description="The ID of the organization")
    organization_name: str | None = Field(None, description="The name of the organization")
    space_id: str | None = Field(None, description="The ID of the space")
    space_name: str | None = Field(None, description="The name of the space")
    consumer_id: str | None = Field(None, description="The ID of the consumer")
    region: str | None = Field(None, description="The region where the instance was provisioned")
    pricing_region: str | None = Field(None, description="The pricing region where the usage was aggregated")
    pricing_country: str | None = Field(None, description="The target country pricing")
    currency_code: str | None = Field(None, description="The currency for the cost fields")
    billable: bool | None = Field(None, description="Is the cost charged to the account")
    parent_resource_instance_id: str | None = Field(None, description="The ID of the parent resource instance")
    plan_id: str | None = Field(None, description="The ID of the plan where the instance was provisioned")
    plan_name: str | None = Field(None, description="The name of the plan")
    pricing_plan_id: str | None = Field(None, description="The ID of the pricing plan")
    subscription_id: str | None = Field(None, description="The ID of the subscription")
    created_at: datetime | None = Field(None, description="The timestamp when the instance was created")
    deleted_at: datetime | None = Field(None, description="The timestamp when the instance was deleted")
    month: str | None = Field(None, description="The month (yyyy-mm)")
    usage: list[Metric] = Field(default_factory=list, description="All the resource used in the account")
    pending: bool | None = Field(None, description="Pending charge from the account")
    currency_rate: float | None = Field(None, description="The value of the account's currency in USD")
    tags: list[Any] = Field(default_factory=list, description="The user tags associated with a resource instance")
    service_tags: list[Any] = Field(default_factory=list, description="Service tags associated with a resource instance")


class InstancesUsageFirst(ApiModel):
    """The link to the first page of the search query."""

    href: str | None = Field(None, description="A link to a page of query results")


class InstancesUsageNext(ApiModel):
    """The link to the next page of the search query."""

    href: str | None = Field(None, description="A link to a page of query results")
    offset: str | None = Field(None, description="The value of the `_start` query parameter to fetch the next page")


class InstancesUsage(ApiModel):
    """The list of instance usage reports."""

    limit: int | None = Field(None, description="The max number of reports in the response")
    count: int | None = Field(None, description="The number of reports in the response")
    first: InstancesUsageFirst | None = Field(None, description="The link to the first page of the search query")
    next: InstancesUsageNext | None = Field(None, description="The link to the next page of the search query")
    resources: list[InstanceUsage] = Field(default_factory=list, description="The list of instance usage reports")

    def get_next_start(self) -> str | None:
        """Token for the ``start`` parameter of the next page, if any."""
        if self.next is None:
            return None
        return self.next.offset or None


# ---------------------------------------------------------------------------
# Billing reports snapshots
# ---------------------------------------------------------------------------


class SnapshotConfigHistoryItem(ApiModel):
    """A previous version of the snapshot configuration."""

    start_time: int | None = Field(None, description="Timestamp in milliseconds when the snapshot configuration was created")
    end_time: int | None = Field(None, description="Timestamp in milliseconds when the snapshot configuration ends")
    updated_by: str | None = Field(None, description="Account that updated the billing snapshot configuration")
    account_id: str | None = Field(None, description="Account ID for which billing report snapshot is configured")
    state: str | None = Field(None, description="Status of the billing snapshot configuration")
    account_type: str | None = Field(None, description="Type of account")
    interval: str | None = Field(None, description="Frequency of taking the snapshot")
    versioning: str | None = Field(None, description="A new version of report is created or the existing report version is overwritten")
    report_types: list[str] = Field(default_factory=list, description="The type of billing reports to take snapshot of")
    compression: str | None = Field(None, description="Compression format of the snapshot report")
    content_type: str | None = Field(None, description="Type of content stored in snapshot report")
    cos_reports_folder: str | None = Field(None, description="The billing reports root folder to store the billing reports snapshots")
    cos_bucket: str | None = Field(None, description="The name of the COS bucket")
    cos_location: str | None = Field(None, description="The regional location of the COS bucket")
    cos_endpoint: str | None = Field(None, description="The endpoint of the COS bucket")


class SnapshotConfig(ApiModel):
    """Billing reports snapshot configuration."""

    account_id: str | None = Field(None, description="Account ID for which billing report snapshot is configured")
    state: str | None = Field(None, description="Status of the billing snapshot configuration")
    account_type: str | None = Field(None, description="Type of account")
    interval: str | None = Field(None, description="Frequency of taking the snapshot")
    versioning: str | None = Field(None, description="A new version of report is created or the existing report version is overwritten")
    report_types: list[str] = Field(default_factory=list, description="The type of billing reports to take snapshot of")
    compression: str | None = Field(None, description="Compression format of the snapshot report")
    content_type: str | None = Field(None, description="Type of content stored in snapshot report")
    cos_reports_folder: str | None = Field(None, description="The billing reports root folder to store the billing reports snapshots")
    cos_bucket: str | None = Field(None, description="The name of the COS bucket")
    cos_location: str | None = Field(None, description="The regional location of the COS bucket")
    cos_endpoint: str | None = Field(None, description="The endpoint of the COS bucket")
    created_at: int | None = Field(None, description="Timestamp in milliseconds when the configuration was created")
    last_updated_at: int | None = Field(None, description="Timestamp in milliseconds when the configuration was last updated")
    history: list[SnapshotConfigHistoryItem] = Field(default_factory=list, description="List of previous versions of the snapshot configurations")


class SnapshotConfigValidateResponse(ApiModel):
    """Validated billing service to COS bucket configuration."""

    account_id: str | None = Field(None, description="Account ID for which billing report snapshot is configured")
    cos_bucket: Any = Field(None, description="Bucket validation details")
    cos_location: str | None = Field(None, description="The regional location of the COS bucket")


class SnapshotListFirst(ApiModel):
    """Reference to the first page of the search query."""

    href: str | None = Field(None, description="A link to a page of query results")


class SnapshotListNext(ApiModel):
    """Reference to the next page of the search query if any."""

    href: str | None = Field(None, description="A link to a page of query results")
    offset: str | None = Field(None, description="The value of the `_start` query parameter to fetch the next page")


class SnapshotListSnapshotsItemBillingPeriod(ApiModel):
    """Period of billing in snapshot."""

    start: str | None = Field(None, description="Date and time of start of the billing period")
    end: str | None = Field(None, description="Date and time of end of the billing period")


class SnapshotListSnapshotsItemReportTypesItem(ApiModel):
    """A report type captured in a snapshot."""

    type: str | None = Field(None, description="The type of billing report")
    version: str | None = Field(None, description="Version of the snapshot")


class SnapshotListSnapshotsItemFilesItem(ApiModel):
    """Location of a report file in the snapshot bucket."""

    report_types: str | None = Field(None, description="The type of billing report stored")
    location: str | None = Field(None, description="Absolute path of the billing report in the COS instance")
    account_id: str | None = Field(None, description="Account ID for which billing report is captured")


class SnapshotListSnapshotsItem(ApiModel):
    """Snapshot Schema."""

    account_id: str | None = Field(None, description="Account ID for which billing report snapshot is configured")
    month: str | None = Field(None, description="Month of captured snapshot (yyyy-mm)")
    account_type: str | None = Field(None, description="Type of account")
    expected_processed_at: int | None = Field(None, description="Timestamp of snapshot processed")
    state: str | None = Field(None, description="Status of the billing snapshot configuration")
    billing_period: SnapshotListSnapshotsItemBillingPeriod | None = Field(None, description="Period of billing in snapshot")
    snapshot_id: str | None = Field(None, description="Id of the snapshot captured")
    charset: str | None = Field(None, description="Character encoding used")
    compression: str | None = Field(None, description="Compression format of the snapshot report")
    content_type: str | None = Field(None, description="Type of content stored in snapshot report")
    bucket: str | None = Field(None, description="The name of the COS bucket")
    version: str | None = Field(None, description="Version of the snapshot")
    created_on: str | None = Field(None, description="Date and time of creation of snapshot")
    report_types: list[SnapshotListSnapshotsItemReportTypesItem] = Field(default_factory=list, description="List of report types configured for the snapshot")
    files: list[SnapshotListSnapshotsItemFilesItem] = Field(default_factory=list, description="List of location of reports")
    processed_at: int | None = Field(None, description="Timestamp at which snapshot is captured")


class SnapshotList(ApiModel):
    """List of billing reports snapshots."""

    count: int | None = Field(None, description="Number of total snapshots")
    first: SnapshotListFirst | None = Field(None, description="Reference to the first page of the search query")
    next: SnapshotListNext | None = Field(None, description="Reference to the next page of the search query if any")
    snapshots: list[SnapshotListSnapshotsItem] = Field(default_factory=list, description="Snapshots")

    def get_next_start(self) -> str | None:
        """Token for the ``start`` parameter of the next page, if any."""
        if self.next is None:
            return None
        return self.next.offset or None
