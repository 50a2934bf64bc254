"""Pagers for the paged Usage Reports v4 operations.

The v4 operations page with the ``start`` parameter; the token for the
next page is returned in ``next.offset``.
"""

from typing import Any

from usage_reports.core import OperationPager
from usage_reports.usage_reports_v4.models import (
    InstanceUsage,
    InstancesUsage,
    SnapshotList,
    SnapshotListSnapshotsItem,
)
from usage_reports.usage_reports_v4.service import UsageReportsV4


class GetResourceUsageAccountPager(OperationPager[InstanceUsage]):
    """Pages through :meth:`UsageReportsV4.get_resource_usage_account`."""

    def __init__(self, client: UsageReportsV4, account_id: str, billingmonth: str, **options: Any) -> None:
        super().__init__(
            client.get_resource_usage_account,
            account_id,
            billingmonth,
            cursor_param="start",
            items_field="resources",
            next_token=InstancesUsage.get_next_start,
            options=options,
        )


class GetResourceUsageResourceGroupPager(OperationPager[InstanceUsage]):
    """Pages through :meth:`UsageReportsV4.get_resource_usage_resource_group`."""

    def __init__(
        self,
        client: UsageReportsV4,
        account_id: str,
        resource_group_id: str,
        billingmonth: str,
        **options: Any,
    ) -> None:
        super().__init__(
            client.get_resource_usage_resource_group,
            account_id,
            resource_group_id,
            billingmonth,
            cursor_param="start",
            items_field="resources",
            next_token=InstancesUsage.get_next_start,
            options=options,
        )


class GetResourceUsageOrgPager(OperationPager[InstanceUsage]):
    """Pages through :meth:`UsageReportsV4.get_resource_usage_org`."""

    def __init__(
        self,
        client: UsageReportsV4,
        account_id: str,
        organization_id: str,
        billingmonth: str,
        **options: Any,
    ) -> None:
        super().__init__(
            client.get_resource_usage_org,
            account_id,
            organization_id,
            billingmonth,
            cursor_param="start",
            items_field="resources",
            next_token=InstancesUsage.get_next_start,
            options=options,
        )


class GetReportsSnapshotPager(OperationPager[SnapshotListSnapshotsItem]):
    """Pages through :meth:`UsageReportsV4.get_reports_snapshot`."""

    def __init__(self, client: UsageReportsV4, account_id: str, month: str, **options: Any) -> None:
        super().__init__(
            client.get_reports_snapshot,
            account_id,
            month,
            cursor_param="start",
            items_field="snapshots",
            next_token=SnapshotList.get_next_start,
            options=options,
        )
