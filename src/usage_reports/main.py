"""Command line entry point for the usage reports SDK."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from usage_reports.config import get_settings
from usage_reports.core import ApiError, ApiModel
from usage_reports.partner_usage_reports_v1 import GetResourceUsageReportPager, PartnerUsageReportsV1
from usage_reports.usage_reports_v4 import GetResourceUsageAccountPager, UsageReportsV4

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure logging to stderr so stdout carries only the report."""
    settings = get_settings()

    log_format = (
        '{"time": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s"}'
        if settings.log_format == "json"
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usage-reports",
        description="Fetch IBM Cloud usage reports as JSON.",
    )
    parser.add_argument(
        "--credentials-file",
        help="Credentials file (default: $IBM_CREDENTIALS_FILE or ./ibm-credentials.env)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    summary = subparsers.add_parser("account-summary", help="Account summary for a month")
    summary.add_argument("--account-id", required=True)
    summary.add_argument("--month", required=True, help="Billing month (yyyy-mm)")

    usage = subparsers.add_parser("account-usage", help="Account usage for a month")
    usage.add_argument("--account-id", required=True)
    usage.add_argument("--month", required=True, help="Billing month (yyyy-mm)")
    usage.add_argument("--names", action="store_true", help="Include resource and plan names")

    resources = subparsers.add_parser("resource-usage", help="Usage of every resource instance in an account")
    resources.add_argument("--account-id", required=True)
    resources.add_argument("--month", required=True, help="Billing month (yyyy-mm)")
    resources.add_argument("--limit", type=int, default=100, help="Page size (max 200)")
    resources.add_argument("--resource-group-id")
    resources.add_argument("--organization-id")
    resources.add_argument("--names", action="store_true", help="Include resource and plan names")
    resources.add_argument("--tags", action="store_true", help="Include user and service tags")

    partner = subparsers.add_parser("partner-usage", help="Partner usage reports for a month")
    partner.add_argument("--partner-id", required=True)
    partner.add_argument("--month", required=True, help="Billing month (yyyy-mm)")
    partner.add_argument("--reseller-id")
    partner.add_argument("--customer-id")
    partner.add_argument("--children", action="store_true", help="Report per direct child entity")
    partner.add_argument("--recurse", action="store_true", help="Report every end customer")
    partner.add_argument("--viewpoint", choices=["DISTRIBUTOR", "RESELLER", "END_CUSTOMER"])
    partner.add_argument("--limit", type=int, default=30, help="Page size (1-200)")

    return parser


def _to_json(value: Any) -> Any:
    if isinstance(value, ApiModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value


async def run_command(args: argparse.Namespace) -> Any:
    """Execute a parsed command and return its JSON-ready result."""
    if args.command == "partner-usage":
        async with PartnerUsageReportsV1.new_instance(credentials_file=args.credentials_file) as partner:
            pager = GetResourceUsageReportPager(
                partner,
                args.partner_id,
                args.month,
                reseller_id=args.reseller_id,
                customer_id=args.customer_id,
                children=args.children or None,
                recurse=args.recurse or None,
                viewpoint=args.viewpoint,
                limit=args.limit,
            )
            return _to_json(await pager.get_all())

    async with UsageReportsV4.new_instance(credentials_file=args.credentials_file) as service:
        if args.command == "account-summary":
            response = await service.get_account_summary(args.account_id, args.month)
            return _to_json(response.result)

        if args.command == "account-usage":
            response = await service.get_account_usage(args.account_id, args.month, names=args.names or None)
            return _to_json(response.result)

        pager = GetResourceUsageAccountPager(
            service,
            args.account_id,
            args.month,
            limit=args.limit,
            resource_group_id=args.resource_group_id,
            organization_id=args.organization_id,
            names=args.names or None,
            tags=args.tags or None,
        )
        instances = await pager.get_all()
        logger.info("Retrieved %d resource instance usage record(s)", len(instances))
        return _to_json(instances)


def main(argv: list[str] | None = None) -> int:
    """Run the usage reports command line."""
    # Load environment variables from .env file
    load_dotenv()

    setup_logging()

    args = build_parser().parse_args(argv)

    try:
        result = asyncio.run(run_command(args))
    except (ApiError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
