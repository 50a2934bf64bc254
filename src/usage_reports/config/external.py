"""External service properties from credentials files and the environment.

Each service is configured through keys named ``<SERVICE_NAME>_<PROPERTY>``,
for example ``USAGE_REPORTS_URL`` or ``PARTNER_USAGE_REPORTS_APIKEY``.
Values are read from a dotenv-style credentials file first and then
overridden by process environment variables.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_FILE_NAME = "ibm-credentials.env"
CREDENTIALS_FILE_ENV_VAR = "IBM_CREDENTIALS_FILE"


def parse_bool(value: str | None) -> bool:
    """Interpret a configuration string as a boolean."""
    if value is None:
        return False
    return value.strip().lower() in ("1", "true", "yes", "on")


def _candidate_files(credentials_file: str | None) -> list[Path]:
    if credentials_file:
        return [Path(credentials_file)]

    from_env = os.getenv(CREDENTIALS_FILE_ENV_VAR)
    if from_env:
        return [Path(from_env)]

    return [
        Path.cwd() / DEFAULT_CREDENTIALS_FILE_NAME,
        Path.home() / DEFAULT_CREDENTIALS_FILE_NAME,
    ]


def _service_prefix(service_name: str) -> str:
    return service_name.upper().replace("-", "_") + "_"


def _strip_prefix(values: Mapping[str, str | None], prefix: str) -> dict[str, str]:
    properties: dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            continue
        upper_key = key.upper()
        if upper_key.startswith(prefix) and len(upper_key) > len(prefix):
            properties[upper_key[len(prefix):]] = value
    return properties


def read_service_properties(
    service_name: str,
    credentials_file: str | None = None,
) -> dict[str, str]:
    """Collect the external configuration of a service.

    Args:
        service_name: Service name, e.g. ``usage_reports``.
        credentials_file: Explicit credentials file. Defaults to
            ``$IBM_CREDENTIALS_FILE``, then ``./ibm-credentials.env`` and
            ``~/ibm-credentials.env``.

    Returns:
        Property name (without the service prefix) -> value.
    """
    if not service_name:
        raise ValueError("service_name must be provided")

    prefix = _service_prefix(service_name)
    properties: dict[str, str] = {}

    for path in _candidate_files(credentials_file):
        if path.is_file():
            logger.debug("Loading service properties for %s from %s", service_name, path)
            properties.update(_strip_prefix(dotenv_values(path), prefix))
            break

    properties.update(_strip_prefix(os.environ, prefix))
    return properties
