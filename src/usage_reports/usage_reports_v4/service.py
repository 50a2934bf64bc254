"""IBM Cloud Usage Reports v4 API client.

Usage reports summarize the usage and charges of an account, its resource
groups and organizations, broken down by resource, plan and metric.
Billing reports snapshots periodically export those reports to a Cloud
Object Storage bucket.
"""

from __future__ import annotations

import logging
from typing import Any

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
from usage_reports.usage_reports_v4.models import (
    AccountSummary,
    AccountUsage,
    InstancesUsage,
    OrgUsage,
    ResourceGroupUsage,
    SnapshotConfig,
    SnapshotConfigValidateResponse,
    SnapshotList,
)

logger = logging.getLogger(__name__)

SNAPSHOT_CONFIG_PATH = "/v1/billing-reports-snapshot-config"


class UsageReportsV4(BaseService):
    """Client for the Usage Reports v4 service."""

    DEFAULT_SERVICE_URL = "https://billing.cloud.ibm.com"
    DEFAULT_SERVICE_NAME = "usage_reports"
    SERVICE_VERSION = "V4"

    def __init__(
        self,
        authenticator: Authenticator,
        service_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the Usage Reports client.

        Args:
            authenticator: Authenticator for the service requests.
            service_url: Service base URL. Defaults to DEFAULT_SERVICE_URL.
            http_client: Optional HTTP client for testing.
            settings: SDK settings (uses default if not provided).
        """
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
    ) -> UsageReportsV4:
        """Create a client from external configuration.

        Credentials and service properties are read from the environment
        and the credentials file, using keys prefixed with the upper-cased
        ``service_name`` (``USAGE_REPORTS_APIKEY``, ``USAGE_REPORTS_URL``...).
        """
        authenticator = get_authenticator_from_environment(service_name, credentials_file)
        service = cls(authenticator=authenticator)
        service.configure_service(service_name, credentials_file)
        return service

    def _headers(self, operation_id: str, **extra: str | None) -> dict[str, str | None]:
        headers: dict[str, str | None] = dict(
            get_sdk_headers(self.DEFAULT_SERVICE_NAME, self.SERVICE_VERSION, operation_id)
        )
        headers.update(extra)
        return headers

    # ------------------------------------------------------------------
    # Account operations
    # ------------------------------------------------------------------

    async def get_account_summary(
        self,
        account_id: str,
        billingmonth: str,
        *,
        accept: str | None = None,
        format: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[AccountSummary | str]:
        """Get account summary.

        Returns the summary for the account for a given month. Account
        billing managers are authorized to access this report.

        Args:
            account_id: Account ID for which the usage report is requested.
            billingmonth: The billing month (yyyy-mm).
            accept: Response media type, ``application/json`` or ``text/csv``.
            format: Requested report format, ``json`` or ``csv``.
            headers: Additional request headers.

        Returns:
            DetailedResponse with an AccountSummary (or CSV text).
        """
        require(account_id, "account_id")
        require(billingmonth, "billingmonth")

        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/summary/{billingmonth}",
            path_params={"account_id": account_id, "billingmonth": billingmonth},
            params={"format": format},
            headers={
                **self._headers("get_account_summary", Accept=accept or "application/json"),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=AccountSummary)

    async def get_account_usage(
        self,
        account_id: str,
        billingmonth: str,
        *,
        names: bool | None = None,
        accept_language: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[AccountUsage]:
        """Get account usage.

        Usage for all the resources and plans in an account for a given
        month. Account billing managers are authorized to access this report.

        Args:
            account_id: Account ID for which the usage report is requested.
            billingmonth: The billing month (yyyy-mm).
            names: Include the names of the resources, plans and metrics.
            accept_language: Language for the resource, plan and metric names.
            headers: Additional request headers.
        """
        require(account_id, "account_id")
        require(billingmonth, "billingmonth")

        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/usage/{billingmonth}",
            path_params={"account_id": account_id, "billingmonth": billingmonth},
            params={"_names": names},
            headers={
                **self._headers(
                    "get_account_usage",
                    Accept="application/json",
                    **{"Accept-Language": accept_language},
                ),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=AccountUsage)

    async def get_resource_group_usage(
        self,
        account_id: str,
        resource_group_id: str,
        billingmonth: str,
        *,
        names: bool | None = None,
        accept_language: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[ResourceGroupUsage]:
        """Get resource group usage.

        Usage for all the resources and plans in a resource group in a
        given month.
        """
        require(account_id, "account_id")
        require(resource_group_id, "resource_group_id")
        require(billingmonth, "billingmonth")

        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/resource_groups/{resource_group_id}/usage/{billingmonth}",
            path_params={
                "account_id": account_id,
                "resource_group_id": resource_group_id,
                "billingmonth": billingmonth,
            },
            params={"_names": names},
            headers={
                **self._headers(
                    "get_resource_group_usage",
                    Accept="application/json",
                    **{"Accept-Language": accept_language},
                ),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=ResourceGroupUsage)

    async def get_org_usage(
        self,
        account_id: str,
        organization_id: str,
        billingmonth: str,
        *,
        names: bool | None = None,
        accept_language: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[OrgUsage]:
        """Get organization usage.

        Usage for all the resources and plans in an organization in a
        given month.
        """
        require(account_id, "account_id")
        require(organization_id, "organization_id")
        require(billingmonth, "billingmonth")

        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/organizations/{organization_id}/usage/{billingmonth}",
            path_params={
                "account_id": account_id,
                "organization_id": organization_id,
                "billingmonth": billingmonth,
            },
            params={"_names": names},
            headers={
                **self._headers(
                    "get_org_usage",
                    Accept="application/json",
                    **{"Accept-Language": accept_language},
                ),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=OrgUsage)

    # ------------------------------------------------------------------
    # Resource instance usage (paged)
    # ------------------------------------------------------------------

    @staticmethod
    def _instance_usage_params(
        names: bool | None,
        tags: bool | None,
        limit: int | None,
        start: str | None,
        filters: dict[str, Any],
    ) -> dict[str, Any]:
        return {
            "_names": names,
            "_tags": tags,
            "_limit": limit,
            "_start": start,
            **filters,
        }

    async def get_resource_usage_account(
        self,
        account_id: str,
        billingmonth: str,
        *,
        accept: str | None = None,
        format: str | None = None,
        names: bool | None = None,
        tags: bool | None = None,
        accept_language: str | None = None,
        limit: int | None = None,
        start: str | None = None,
        resource_group_id: str | None = None,
        organization_id: str | None = None,
        resource_instance_id: str | None = None,
        resource_id: str | None = None,
        plan_id: str | None = None,
        region: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[InstancesUsage | str]:
        """Get resource instance usage in an account.

        Query for resource instance usage in an account. Filter the results
        with query parameters. Account billing administrator is authorized
        to access this report.

        Args:
            account_id: Account ID for which the usage report is requested.
            billingmonth: The billing month (yyyy-mm).
            accept: Response media type, ``application/json`` or ``text/csv``.
            format: Requested report format, ``json`` or ``csv``.
            names: Include the names of the resources, plans and metrics.
            tags: Include the user and service tags of the instances.
            accept_language: Language for the resource, plan and metric names.
            limit: Number of usage records returned (max 200).
            start: Continuation token returned in ``next.offset`` of the
                previous page.
            resource_group_id: Filter by resource group.
            organization_id: Filter by organization.
            resource_instance_id: Filter by resource instance.
            resource_id: Filter by resource.
            plan_id: Filter by plan.
            region: Region in which the resource instance is provisioned.
            headers: Additional request headers.
        """
        require(account_id, "account_id")
        require(billingmonth, "billingmonth")

        params = self._instance_usage_params(
            names,
            tags,
            limit,
            start,
            {
                "format": format,
                "resource_group_id": resource_group_id,
                "organization_id": organization_id,
                "resource_instance_id": resource_instance_id,
                "resource_id": resource_id,
                "plan_id": plan_id,
                "region": region,
            },
        )
        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/resource_instances/usage/{billingmonth}",
            path_params={"account_id": account_id, "billingmonth": billingmonth},
            params=params,
            headers={
                **self._headers(
                    "get_resource_usage_account",
                    Accept=accept or "application/json",
                    **{"Accept-Language": accept_language},
                ),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=InstancesUsage)

    async def get_resource_usage_resource_group(
        self,
        account_id: str,
        resource_group_id: str,
        billingmonth: str,
        *,
        names: bool | None = None,
        tags: bool | None = None,
        accept_language: str | None = None,
        limit: int | None = None,
        start: str | None = None,
        resource_instance_id: str | None = None,
        resource_id: str | None = None,
        plan_id: str | None = None,
        region: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[InstancesUsage]:
        """Get resource instance usage in a resource group.

        Query for resource instance usage in a resource group. Filter the
        results with query parameters.
        """
        require(account_id, "account_id")
        require(resource_group_id, "resource_group_id")
        require(billingmonth, "billingmonth")

        params = self._instance_usage_params(
            names,
            tags,
            limit,
            start,
            {
                "resource_instance_id": resource_instance_id,
                "resource_id": resource_id,
                "plan_id": plan_id,
                "region": region,
            },
        )
        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/resource_groups/{resource_group_id}/resource_instances/usage/{billingmonth}",
            path_params={
                "account_id": account_id,
                "resource_group_id": resource_group_id,
                "billingmonth": billingmonth,
            },
            params=params,
            headers={
                **self._headers(
                    "get_resource_usage_resource_group",
                    Accept="application/json",
                    **{"Accept-Language": accept_language},
                ),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=InstancesUsage)

    async def get_resource_usage_org(
        self,
        account_id: str,
        organization_id: str,
        billingmonth: str,
        *,
        names: bool | None = None,
        tags: bool | None = None,
        accept_language: str | None = None,
        limit: int | None = None,
        start: str | None = None,
        resource_instance_id: str | None = None,
        resource_id: str | None = None,
        plan_id: str | None = None,
        region: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[InstancesUsage]:
        """Get resource instance usage in an organization.

        Query for resource instance usage in an organization. Filter the
        results with query parameters.
        """
        require(account_id, "account_id")
        require(organization_id, "organization_id")
        require(billingmonth, "billingmonth")

        params = self._instance_usage_params(
            names,
            tags,
            limit,
            start,
            {
                "resource_instance_id": resource_instance_id,
                "resource_id": resource_id,
                "plan_id": plan_id,
                "region": region,
            },
        )
        request = self.prepare_request(
            "GET",
            "/v4/accounts/{account_id}/organizations/{organization_id}/resource_instances/usage/{billingmonth}",
            path_params={
                "account_id": account_id,
                "organization_id": organization_id,
                "billingmonth": billingmonth,
            },
            params=params,
            headers={
                **self._headers(
                    "get_resource_usage_org",
                    Accept="application/json",
                    **{"Accept-Language": accept_language},
                ),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=InstancesUsage)

    # ------------------------------------------------------------------
    # Billing reports snapshot configuration
    # ------------------------------------------------------------------

    @staticmethod
    def _snapshot_config_body(
        account_id: str,
        interval: Any,
        cos_bucket: str | None,
        cos_location: str | None,
        cos_reports_folder: str | None,
        report_types: list[Any] | None,
        versioning: Any,
    ) -> dict[str, Any]:
        return {
            "account_id": account_id,
            "interval": interval,
            "cos_bucket": cos_bucket,
            "cos_location": cos_location,
            "cos_reports_folder": cos_reports_folder,
            "report_types": (
                [getattr(t, "value", t) for t in report_types] if report_types is not None else None
            ),
            "versioning": versioning,
        }

    async def create_reports_snapshot_config(
        self,
        account_id: str,
        interval: str,
        cos_bucket: str,
        cos_location: str,
        *,
        cos_reports_folder: str | None = None,
        report_types: list[str] | None = None,
        versioning: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[SnapshotConfig]:
        """Setup the snapshot configuration.

        Snapshots of the billing reports will be taken on a periodic basis
        and stored in the Cloud Object Storage bucket. Applicable only to
        enterprise accounts.

        Args:
            account_id: Account ID for which billing report snapshot is configured.
            interval: Frequency of taking the snapshot (``daily``).
            cos_bucket: The name of the COS bucket to store the snapshot.
            cos_location: Region of the COS instance.
            cos_reports_folder: Root folder for the snapshots in the bucket.
            report_types: Billing report types to take snapshots of.
            versioning: ``new`` or ``overwrite``.
            headers: Additional request headers.
        """
        require(account_id, "account_id")
        require(interval, "interval")
        require(cos_bucket, "cos_bucket")
        require(cos_location, "cos_location")

        request = self.prepare_request(
            "POST",
            SNAPSHOT_CONFIG_PATH,
            headers={
                **self._headers("create_reports_snapshot_config", Accept="application/json"),
                **(headers or {}),
            },
            json=self._snapshot_config_body(
                account_id,
                interval,
                cos_bucket,
                cos_location,
                cos_reports_folder,
                report_types,
                versioning,
            ),
        )
        logger.info("Creating billing reports snapshot configuration for account %s", account_id)
        return await self.send(request, response_model=SnapshotConfig)

    async def get_reports_snapshot_config(
        self,
        account_id: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[SnapshotConfig]:
        """Fetch the snapshot configuration."""
        require(account_id, "account_id")

        request = self.prepare_request(
            "GET",
            SNAPSHOT_CONFIG_PATH,
            params={"account_id": account_id},
            headers={
                **self._headers("get_reports_snapshot_config", Accept="application/json"),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=SnapshotConfig)

    async def update_reports_snapshot_config(
        self,
        account_id: str,
        *,
        interval: str | None = None,
        cos_bucket: str | None = None,
        cos_location: str | None = None,
        cos_reports_folder: str | None = None,
        report_types: list[str] | None = None,
        versioning: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[SnapshotConfig]:
        """Update the snapshot configuration.

        Only the fields given are changed.
        """
        require(account_id, "account_id")

        request = self.prepare_request(
            "PATCH",
            SNAPSHOT_CONFIG_PATH,
            headers={
                **self._headers("update_reports_snapshot_config", Accept="application/json"),
                **(headers or {}),
            },
            json=self._snapshot_config_body(
                account_id,
                interval,
                cos_bucket,
                cos_location,
                cos_reports_folder,
                report_types,
                versioning,
            ),
        )
        logger.info("Updating billing reports snapshot configuration for account %s", account_id)
        return await self.send(request, response_model=SnapshotConfig)

    async def delete_reports_snapshot_config(
        self,
        account_id: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[None]:
        """Delete the snapshot configuration."""
        require(account_id, "account_id")

        request = self.prepare_request(
            "DELETE",
            SNAPSHOT_CONFIG_PATH,
            params={"account_id": account_id},
            headers={
                **self._headers("delete_reports_snapshot_config"),
                **(headers or {}),
            },
        )
        logger.info("Deleting billing reports snapshot configuration for account %s", account_id)
        return await self.send(request)

    async def validate_reports_snapshot_config(
        self,
        account_id: str,
        *,
        interval: str | None = None,
        cos_bucket: str | None = None,
        cos_location: str | None = None,
        cos_reports_folder: str | None = None,
        report_types: list[str] | None = None,
        versioning: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[SnapshotConfigValidateResponse]:
        """Verify billing to COS authorization.

        Checks that the billing service is authorized to write the
        snapshots to the given COS bucket.
        """
        require(account_id, "account_id")

        request = self.prepare_request(
            "POST",
            f"{SNAPSHOT_CONFIG_PATH}/validate",
            headers={
                **self._headers("validate_reports_snapshot_config", Accept="application/json"),
                **(headers or {}),
            },
            json=self._snapshot_config_body(
                account_id,
                interval,
                cos_bucket,
                cos_location,
                cos_reports_folder,
                report_types,
                versioning,
            ),
        )
        return await self.send(request, response_model=SnapshotConfigValidateResponse)

    async def get_reports_snapshot(
        self,
        account_id: str,
        month: str,
        *,
        date_from: float | None = None,
        date_to: float | None = None,
        limit: int | None = None,
        start: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> DetailedResponse[SnapshotList]:
        """Fetch the current or past snapshots.

        Args:
            account_id: Account ID for which the billing report snapshot is requested.
            month: The month for which billing report snapshot is requested (yyyy-mm).
            date_from: Timestamp in milliseconds of the earliest snapshot.
            date_to: Timestamp in milliseconds of the latest snapshot.
            limit: Number of usage records returned (max 30).
            start: Continuation token returned in ``next.offset`` of the
                previous page.
            headers: Additional request headers.
        """
        require(account_id, "account_id")
        require(month, "month")

        request = self.prepare_request(
            "GET",
            "/v1/billing-reports-snapshots",
            params={
                "account_id": account_id,
                "month": month,
                "date_from": date_from,
                "date_to": date_to,
                "_limit": limit,
                "_start": start,
            },
            headers={
                **self._headers("get_reports_snapshot", Accept="application/json"),
                **(headers or {}),
            },
        )
        return await self.send(request, response_model=SnapshotList)
