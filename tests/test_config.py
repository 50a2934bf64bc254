"""Tests for configuration module."""

import pytest

from usage_reports.config import Settings, parse_bool, read_service_properties


class TestSettings:
    """Tests for SDK settings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.iam_url == "https://iam.cloud.ibm.com"
        assert settings.max_retries == 4
        assert settings.retry_interval_seconds == 30.0
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"

    def test_from_environment(self, monkeypatch):
        """Test that settings are read from environment variables."""
        monkeypatch.setenv("IAM_URL", "https://iam.test.cloud.ibm.com")
        monkeypatch.setenv("MAX_RETRIES", "7")
        monkeypatch.setenv("LOG_FORMAT", "json")

        settings = Settings(_env_file=None)

        assert settings.iam_url == "https://iam.test.cloud.ibm.com"
        assert settings.max_retries == 7
        assert settings.log_format == "json"

    def test_invalid_log_format(self, monkeypatch):
        """Test that an unknown log format is rejected."""
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ValueError):
            Settings(_env_file=None)


class TestParseBool:
    """Tests for boolean property parsing."""

    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", "on", " TRUE "])
    def test_true_values(self, value):
        """Test values read as true."""
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [None, "", "false", "0", "no", "off", "maybe"])
    def test_false_values(self, value):
        """Test values read as false."""
        assert parse_bool(value) is False


class TestReadServiceProperties:
    """Tests for external service properties."""

    def test_reads_credentials_file(self, tmp_path):
        """Test reading prefixed keys from a credentials file."""
        credentials = tmp_path / "ibm-credentials.env"
        credentials.write_text(
            "USAGE_REPORTS_APIKEY=file-apikey\n"
            "USAGE_REPORTS_URL=https://billing.test.cloud.ibm.com\n"
            "PARTNER_USAGE_REPORTS_APIKEY=partner-apikey\n"
        )

        properties = read_service_properties("usage_reports", str(credentials))

        assert properties == {
            "APIKEY": "file-apikey",
            "URL": "https://billing.test.cloud.ibm.com",
        }

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test that environment variables take precedence over the file."""
        credentials = tmp_path / "ibm-credentials.env"
        credentials.write_text("USAGE_REPORTS_APIKEY=file-apikey\nUSAGE_REPORTS_AUTH_TYPE=iam\n")
        monkeypatch.setenv("USAGE_REPORTS_APIKEY", "env-apikey")

        properties = read_service_properties("usage_reports", str(credentials))

        assert properties["APIKEY"] == "env-apikey"
        assert properties["AUTH_TYPE"] == "iam"

    def test_credentials_file_from_environment(self, tmp_path, monkeypatch):
        """Test locating the credentials file through IBM_CREDENTIALS_FILE."""
        credentials = tmp_path / "custom.env"
        credentials.write_text("PARTNER_USAGE_REPORTS_URL=https://partner.test.cloud.ibm.com\n")
        monkeypatch.setenv("IBM_CREDENTIALS_FILE", str(credentials))

        properties = read_service_properties("partner_usage_reports")

        assert properties == {"URL": "https://partner.test.cloud.ibm.com"}

    def test_service_name_normalized(self, monkeypatch):
        """Test that dashes and case in the service name are normalized."""
        monkeypatch.setenv("USAGE_REPORTS_URL", "https://billing.example.com")

        assert read_service_properties("usage-reports") == {"URL": "https://billing.example.com"}

    def test_missing_file_is_ignored(self):
        """Test that a missing credentials file yields no properties."""
        assert read_service_properties("usage_reports", "/nonexistent/file.env") == {}

    def test_requires_service_name(self):
        """Test that a service name is required."""
        with pytest.raises(ValueError):
            read_service_properties("")
