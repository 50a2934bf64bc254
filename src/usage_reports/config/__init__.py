"""Configuration module for the usage reports SDK."""

from usage_reports.config.external import (
    DEFAULT_CREDENTIALS_FILE_NAME,
    parse_bool,
    read_service_properties,
)
from usage_reports.config.settings import Settings, get_settings

__all__ = [
    "DEFAULT_CREDENTIALS_FILE_NAME",
    "Settings",
    "get_settings",
    "parse_bool",
    "read_service_properties",
]
