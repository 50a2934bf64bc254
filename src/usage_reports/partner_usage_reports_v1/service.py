"""IBM Cloud Partner Usage Reports v1 API client."""

from __future__ import annotations

import logging

import httpx

from usage_reports.config import Settings
from usage_reports.core import (
    Authenticator,
    BaseService,
    DetailedResponse,
    get_authenticator_from_environment,
    get_sdk_headers,
    require,
)
from usage_reports.partner_usage_reports_v1.models import PartnerUsageReportSummary, Viewpoint

logger = logging.getLogger(__name__)


class PartnerUsageReportsV1(BaseService):
    """Client for the Partner Usage Reports v1 service.

    Partners use it to retrieve usage reports rolled up across their
    resellers and end customers, or for a single reseller or end customer.
    """

    DEFAULT_SERVICE_URL = "https://partner.cloud.ibm.com"
    DEFAULT_SERVICE_NAME = "partner_usage_reports"
    SERVICE_VERSION = "V1"

    def __init__(
        self,
        authenticator: Authenticator,
        service_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(
            authenticator=authenticator,
            service_url=service_url,
            http_client=http_client,
            settings=settings,
        )

    @classmethod
    def new_instance(
        cls,
        service_name: str = DEFAULT_SERVICE_NAME,
        credentials_file: str | None = None,
    ) -> PartnerUsageReportsV1:
        """Create a client from external configuration.

        Uses keys prefixed with ``PARTNER_USAGE_REPORTS_`` by default.
        """
        authenticator = get_authenticator_from_environment(service_name, credentials_file)
        service = cls(authenticator=authenticator)
        service.configure_service(service_name, credentials_file)
        return service

    async def get_resource_usage_report(
        self,
        partner_id: str,
        month: str,
        *,
        reseller_id: str | None = None,
        customer_id: str | None = None,
        children: bool | None = None,
        viewpoint: Viewpoint | str | None = None,
        recurse: bool | None = None,
        limit: int | None = None,
        offset: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[PartnerUsageReportSummary]:
        """Get partner resource usage reports.

        Returns the usage reports of the partner, its resellers or its end
        customers for a given month.

        Args:
            partner_id: Enterprise ID of the distributor or reseller.
            month: The billing month (yyyy-mm).
            reseller_id: Enterprise ID of the reseller to report on.
            customer_id: Account ID or enterprise ID of the end customer.
            children: Return the usage reports of the direct children of the
                requested entity instead of the rolled up report.
            viewpoint: Perspective of the costs: DISTRIBUTOR, RESELLER or
                END_CUSTOMER.
            recurse: Return the usage reports of all end customers below
                the partner.
            limit: Number of usage records returned (1-200).
            offset: Continuation token taken from ``next.href`` of the
                previous page.
            headers: Additional request headers.

        Returns:
            DetailedResponse with a PartnerUsageReportSummary.
        """
        require(partner_id, "partner_id")
        require(month, "month")

        request = self.prepare_request(
            "GET",
            "/v1/resource-usage-reports",
            params={
                "partner_id": partner_id,
                "reseller_id": reseller_id,
                "customer_id": customer_id,
                "children": children,
                "month": month,
                "viewpoint": viewpoint,
                "recurse": recurse,
                "limit": limit,
                "offset": offset,
            },
            headers={
                **get_sdk_headers(self.DEFAULT_SERVICE_NAME, self.SERVICE_VERSION, "get_resource_usage_report"),
                "Accept": "application/json",
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=PartnerUsageReportSummary)
