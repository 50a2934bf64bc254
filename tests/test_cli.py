"""Tests for the usage-reports command line."""

import json
from unittest.mock import patch

import httpx
import pytest

from usage_reports.main import build_parser, main
from usage_reports.partner_usage_reports_v1 import PartnerUsageReportsV1
from usage_reports.usage_reports_v4 import UsageReportsV4


class TestParser:
    """Tests for argument parsing."""

    def test_resource_usage_defaults(self):
        """Test defaults of the resource-usage command."""
        args = build_parser().parse_args(
            ["resource-usage", "--account-id", "acct", "--month", "2024-01"]
        )

        assert args.command == "resource-usage"
        assert args.limit == 100
        assert args.names is False
        assert args.credentials_file is None

    def test_partner_usage(self):
        """Test options of the partner-usage command."""
        args = build_parser().parse_args(
            [
                "--credentials-file",
                "creds.env",
                "partner-usage",
                "--partner-id",
                "p1",
                "--month",
                "2024-01",
                "--viewpoint",
                "RESELLER",
                "--recurse",
            ]
        )

        assert args.credentials_file == "creds.env"
        assert args.viewpoint == "RESELLER"
        assert args.recurse is True
        assert args.limit == 30

    def test_invalid_viewpoint(self):
        """Test that an unknown viewpoint is rejected."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["partner-usage", "--partner-id", "p1", "--month", "2024-01", "--viewpoint", "OWNER"]
            )

    def test_command_required(self):
        """Test that a command is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Tests for running commands."""

    def test_account_summary(self, server, usage_reports, capsys):
        """Test printing the account summary as JSON."""
        server.queue(httpx.Response(200, json={"account_id": "acct", "month": "2024-01", "offers": []}))

        with patch.object(UsageReportsV4, "new_instance", return_value=usage_reports):
            exit_code = main(["account-summary", "--account-id", "acct", "--month", "2024-01"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {"account_id": "acct", "month": "2024-01", "offers": []}

    def test_resource_usage_collects_all_pages(self, server, usage_reports, capsys):
        """Test that resource-usage follows every page."""
        server.queue(
            httpx.Response(
                200,
                json={
                    "next": {"href": "/usage?_start=s1", "offset": "s1"},
                    "resources": [{"resource_instance_id": "i1"}],
                },
            ),
            httpx.Response(200, json={"resources": [{"resource_instance_id": "i2"}]}),
        )

        with patch.object(UsageReportsV4, "new_instance", return_value=usage_reports):
            exit_code = main(["resource-usage", "--account-id", "acct", "--month", "2024-01", "--limit", "1"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert [r["resource_instance_id"] for r in output] == ["i1", "i2"]
        assert server.requests[0].url.params["_limit"] == "1"
        assert server.requests[1].url.params["_start"] == "s1"

    def test_partner_usage(self, server, partner_usage_reports, capsys):
        """Test printing partner reports."""
        server.queue(httpx.Response(200, json={"reports": [{"entity_id": "c1"}]}))

        with patch.object(PartnerUsageReportsV1, "new_instance", return_value=partner_usage_reports):
            exit_code = main(
                ["partner-usage", "--partner-id", "p1", "--month", "2024-01", "--viewpoint", "RESELLER"]
            )

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == [{"entity_id": "c1"}]
        params = server.last_request.url.params
        assert params["viewpoint"] == "RESELLER"
        assert "recurse" not in params

    def test_api_error_exit_code(self, server, usage_reports, capsys):
        """Test that a failed request exits with status 1."""
        server.queue(httpx.Response(401, json={"message": "Unauthorized"}))

        with patch.object(UsageReportsV4, "new_instance", return_value=usage_reports):
            exit_code = main(["account-usage", "--account-id", "acct", "--month", "2024-01"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_missing_credentials_exit_code(self, capsys):
        """Test that missing credentials exit with status 1."""
        exit_code = main(["account-usage", "--account-id", "acct", "--month", "2024-01"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""
