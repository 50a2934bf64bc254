"""Pager for the Partner Usage Reports v1 API."""

from typing import Any

from usage_reports.core import OperationPager
from usage_reports.partner_usage_reports_v1.models import PartnerUsageReport, PartnerUsageReportSummary
from usage_reports.partner_usage_reports_v1.service import PartnerUsageReportsV1


class GetResourceUsageReportPager(OperationPager[PartnerUsageReport]):
    """Pages through :meth:`PartnerUsageReportsV1.get_resource_usage_report`.

    The ``offset`` token comes from the query string of ``next.href``.
    """

    def __init__(self, client: PartnerUsageReportsV1, partner_id: str, month: str, **options: Any) -> None:
        super().__init__(
            client.get_resource_usage_report,
            partner_id,
            month,
            cursor_param="offset",
            items_field="reports",
            next_token=PartnerUsageReportSummary.get_next_offset,
            options=options,
        )
