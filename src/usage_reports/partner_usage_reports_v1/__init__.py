"""Partner Usage Reports v1: usage reports for partners, resellers and end customers."""

from usage_reports.partner_usage_reports_v1.models import (
    PartnerUsageMetric,
    PartnerUsagePlan,
    PartnerUsageReport,
    PartnerUsageReportSummary,
    PartnerUsageReportSummaryFirst,
    PartnerUsageReportSummaryNext,
    PartnerUsageResource,
    Viewpoint,
)
from usage_reports.partner_usage_reports_v1.pagers import GetResourceUsageReportPager
from usage_reports.partner_usage_reports_v1.service import PartnerUsageReportsV1

__all__ = [
    "GetResourceUsageReportPager",
    "PartnerUsageMetric",
    "PartnerUsagePlan",
    "PartnerUsageReport",
    "PartnerUsageReportSummary",
    "PartnerUsageReportSummaryFirst",
    "PartnerUsageReportSummaryNext",
    "PartnerUsageReportsV1",
    "PartnerUsageResource",
    "Viewpoint",
]
