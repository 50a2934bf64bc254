"""Data models for the Partner Usage Reports v1 API."""

from enum import Enum
from typing import Any

from pydantic import Field

from usage_reports.core.models import ApiModel
from usage_reports.core.pagination import get_query_param


class Viewpoint(str, Enum):
    """Perspective from which the costs are computed."""

    DISTRIBUTOR = "DISTRIBUTOR"
    RESELLER = "RESELLER"
    END_CUSTOMER = "END_CUSTOMER"


class PartnerUsageMetric(ApiModel):
    """An object that represents a metric."""

    metric_id: str | None = Field(None, description="The ID of the metric")
    unit: str | None = Field(None, description="The unit used for the metric")
    quantity: float | None = Field(None, description="The aggregated value for the metric")
    rateable_quantity: float | None = Field(None, description="The quantity used for calculating charges")
    cost: float | None = Field(None, description="The cost incurred by the metric")
    rated_cost: float | None = Field(None, description="The pre-discounted cost incurred by the metric")
    price: list[Any] = Field(default_factory=list, description="The price with which cost was calculated")
    unit_name: str | None = Field(None, description="The name of the unit")
    non_chargeable: bool | None = Field(None, description="When set to true, the cost is for informational purpose")


class PartnerUsagePlan(ApiModel):
    """Aggregated values for the plan."""

    plan_id: str | None = Field(None, description="The ID of the plan")
    pricing_region: str | None = Field(None, description="The pricing region for the plan")
    pricing_plan_id: str | None = Field(None, description="The pricing plan with which the usage was rated")
    billable: bool | None = Field(None, description="Whether the plan charges are billed to the customer")
    cost: float | None = Field(None, description="The total cost incurred by the plan")
    rated_cost: float | None = Field(None, description="The total pre-discounted cost incurred by the plan")
    usage: list[PartnerUsageMetric] = Field(default_factory=list, description="All of the metrics in the plan")


class PartnerUsageResource(ApiModel):
    """A container for all the plans in the resource."""

    resource_id: str | None = Field(None, description="The ID of the resource")
    resource_name: str | None = Field(None, description="The name of the resource")
    billable_cost: float | None = Field(None, description="The billable charges for the partner")
    billable_rated_cost: float | None = Field(None, description="The pre-discounted billable charges")
    non_billable_cost: float | None = Field(None, description="The non-billable charges for the partner")
    non_billable_rated_cost: float | None = Field(None, description="The pre-discounted non-billable charges")
    plans: list[PartnerUsagePlan] = Field(default_factory=list, description="All of the plans in the resource")


class PartnerUsageReport(ApiModel):
    """Aggregated usage report of a partner."""

    entity_id: str | None = Field(None, description="The ID of the entity")
    entity_type: str | None = Field(None, description="The entity type")
    entity_crn: str | None = Field(None, description="The Cloud Resource Name (CRN) of the entity")
    entity_name: str | None = Field(None, description="A user-defined name for the entity")
    entity_partner_type: str | None = Field(None, description="Role of the entity from the partner's perspective")
    viewpoint: str | None = Field(None, description="The viewpoint of the costs")
    month: str | None = Field(None, description="The billing month (yyyy-mm)")
    currency_code: str | None = Field(None, description="Currency code of the billing unit")
    country_code: str | None = Field(None, description="The country code of the billing unit")
    billable_cost: float | None = Field(None, description="Billable charges aggregated across all entities")
    billable_rated_cost: float | None = Field(None, description="Pre-discounted billable charges aggregated across all entities")
    non_billable_cost: float | None = Field(None, description="Non-billable charges aggregated across all entities")
    non_billable_rated_cost: float | None = Field(None, description="Pre-discounted non-billable charges aggregated across all entities")
    resources: list[PartnerUsageResource] = Field(default_factory=list, description="The resources with their plans")


class PartnerUsageReportSummaryFirst(ApiModel):
    """The link to the first page of the search query."""

    href: str | None = Field(None, description="A link to a page of query results")


class PartnerUsageReportSummaryNext(ApiModel):
    """The link to the next page of the search query."""

    href: str | None = Field(None, description="A link to a page of query results")
    offset: str | None = Field(None, description="The value of the `offset` query parameter to fetch the next page")


class PartnerUsageReportSummary(ApiModel):
    """The aggregated partner usage report."""

    limit: int | None = Field(None, description="The maximum number of usage records in the response")
    first: PartnerUsageReportSummaryFirst | None = Field(None, description="The link to the first page of the search query")
    next: PartnerUsageReportSummaryNext | None = Field(None, description="The link to the next page of the search query")
    reports: list[PartnerUsageReport] = Field(default_factory=list, description="Aggregated usage report of all requested partners")

    def get_next_offset(self) -> str | None:
        """Token for the ``offset`` parameter of the next page, if any.

        The token is the ``offset`` query parameter of ``next.href``.

        Raises:
            ValueError: If ``next.href`` is not a valid URL.
        """
        if self.next is None:
            return None
        return get_query_param(self.next.href, "offset") or None
