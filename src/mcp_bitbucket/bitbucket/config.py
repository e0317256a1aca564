"""Configuration module for Bitbucket API interactions."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from ..utils.env import get_custom_headers, is_env_ssl_verify
from ..utils.urls import is_bitbucket_cloud_url
from .constants import (
    AUTH_TYPE_BASIC,
    AUTH_TYPE_BEARER,
    AUTH_TYPES,
    CLOUD_API_BASE,
    CLOUD_SITE_ALIAS,
    CONFIG_FILE_NAME,
    DEFAULT_TIMEOUT,
)
from .descriptors import Dialect

logger = logging.getLogger("mcp-bitbucket.config")

AuthType = Literal["basic", "bearer"]


@dataclass(frozen=True)
class DialectResolution:
    """Which API dialect and auth scheme a base URL implies."""

    is_cloud: bool
    auth_type: AuthType
    base_url: str

    @property
    def dialect(self) -> Dialect:
        return Dialect.CLOUD if self.is_cloud else Dialect.SERVER


def resolve_dialect(
    base_url: str | None, explicit_auth_type: str | None = None
) -> DialectResolution:
    """Resolve the API dialect and default auth scheme for a base URL.

    Args:
        base_url: Bitbucket API base URL. Empty means Bitbucket Cloud.
        explicit_auth_type: ``basic`` or ``bearer``; overrides the default

    Returns:
        DialectResolution with the normalized base URL

    Raises:
        ValueError: If explicit_auth_type is not a supported scheme
    """
    normalized = (base_url or "").strip().rstrip("/") or CLOUD_API_BASE
    is_cloud = is_bitbucket_cloud_url(normalized)

    if explicit_auth_type:
        auth_type = explicit_auth_type.strip().lower()
        if auth_type not in AUTH_TYPES:
            msg = (
                f"Invalid auth type {explicit_auth_type!r}, "
                f"expected one of: {', '.join(AUTH_TYPES)}"
            )
            raise ValueError(msg)
    else:
        auth_type = AUTH_TYPE_BASIC if is_cloud else AUTH_TYPE_BEARER

    logger.debug(
        f"Resolved Bitbucket dialect: baseUrl={normalized}, "
        f"authType={auth_type}, isCloud={is_cloud}"
    )
    return DialectResolution(
        is_cloud=is_cloud,
        auth_type=auth_type,  # type: ignore[arg-type]
        base_url=normalized,
    )


def _load_config_file(config_dir: str | os.PathLike | None) -> dict[str, Any]:
    """Read the ``bitbucket`` section of the JSON config file, if any."""
    path = Path(config_dir or Path.cwd()) / CONFIG_FILE_NAME
    if not path.is_file():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as exc:
        logger.warning(f"Ignoring unreadable config file {path}: {exc}")
        return {}

    section = data.get("bitbucket") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        logger.debug(f"No 'bitbucket' section in {path}")
        return {}
    logger.debug(f"Loaded Bitbucket configuration from {path}")
    return section


@dataclass(frozen=True)
class BitbucketConfig:
    """Bitbucket API configuration.

    Resolved once at construction: ``url`` is normalized, ``auth_type`` is
    filled in from the dialect when not given, and ``is_cloud`` is derived
    from the URL. Instances are immutable.

    - Cloud (api.bitbucket.org): email + app password/API token, basic auth
    - Server/Data Center: personal access token, bearer auth
    """

    email: str  # Email or username
    token: str  # App password, API token or personal access token
    url: str = CLOUD_API_BASE  # Base URL of the REST API
    auth_type: AuthType | None = None  # Defaults from the dialect
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: float = DEFAULT_TIMEOUT  # Request timeout in seconds
    http_proxy: str | None = None  # HTTP proxy URL
    https_proxy: str | None = None  # HTTPS proxy URL
    no_proxy: str | None = None  # Comma-separated list of hosts to bypass proxy
    socks_proxy: str | None = None  # SOCKS proxy URL (optional)
    custom_headers: dict[str, str] | None = None  # Custom HTTP headers
    default_destination_branch: str | None = None  # Fallback PR target branch
    is_cloud: bool = field(init=False)

    def __post_init__(self) -> None:
        resolution = resolve_dialect(self.url, self.auth_type)
        object.__setattr__(self, "url", resolution.base_url)
        object.__setattr__(self, "auth_type", resolution.auth_type)
        object.__setattr__(self, "is_cloud", resolution.is_cloud)

    @property
    def dialect(self) -> Dialect:
        """API dialect spoken by the configured base URL."""
        return Dialect.CLOUD if self.is_cloud else Dialect.SERVER

    def is_auth_configured(self) -> bool:
        """Check if authentication is properly configured.

        Returns:
            True if authentication is configured, False otherwise.
        """
        if self.auth_type == AUTH_TYPE_BASIC:
            return bool(self.email and self.token)
        return bool(self.token)

    @classmethod
    def from_env(
        cls, config_dir: str | os.PathLike | None = None
    ) -> "BitbucketConfig":
        """Create configuration from environment variables.

        Values from the process environment win over the ``environments``
        block of ``mcp.config.json`` in ``config_dir`` (default: the current
        directory), which in turn wins over the file's top-level
        ``defaultDestinationBranch``.

        Returns:
            BitbucketConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        file_section = _load_config_file(config_dir)
        file_env = file_section.get("environments") or {}
        if not isinstance(file_env, dict):
            file_env = {}
        environ: dict[str, str] = {
            key: str(value) for key, value in file_env.items() if value is not None
        }
        environ.update(os.environ)

        def getenv(name: str, default: str | None = None) -> str | None:
            value = environ.get(name)
            return value if value not in (None, "") else default

        email = getenv("ATLASSIAN_USER_EMAIL")
        token = getenv("ATLASSIAN_API_TOKEN")
        if not email or not token:
            error_msg = (
                "Missing required Bitbucket credentials: set ATLASSIAN_USER_EMAIL "
                "and ATLASSIAN_API_TOKEN"
            )
            raise ValueError(error_msg)

        site_url = (getenv("ATLASSIAN_SITE_URL") or "").strip()
        if not site_url or site_url.lower() == CLOUD_SITE_ALIAS:
            url = CLOUD_API_BASE
        else:
            url = site_url

        timeout_raw = getenv("BITBUCKET_TIMEOUT")
        timeout: float = DEFAULT_TIMEOUT
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError as e:
                error_msg = f"Invalid BITBUCKET_TIMEOUT value: {timeout_raw!r}"
                raise ValueError(error_msg) from e

        default_destination_branch = getenv(
            "BITBUCKET_DEFAULT_DEST_BRANCH",
            file_section.get("defaultDestinationBranch"),
        )

        return cls(
            email=email,
            token=token,
            url=url,
            auth_type=getenv("BITBUCKET_AUTH_TYPE"),  # type: ignore[arg-type]
            ssl_verify=is_env_ssl_verify("BITBUCKET_SSL_VERIFY", environ),
            timeout=timeout,
            http_proxy=getenv("BITBUCKET_HTTP_PROXY", getenv("HTTP_PROXY")),
            https_proxy=getenv("BITBUCKET_HTTPS_PROXY", getenv("HTTPS_PROXY")),
            no_proxy=getenv("BITBUCKET_NO_PROXY", getenv("NO_PROXY")),
            socks_proxy=getenv("BITBUCKET_SOCKS_PROXY", getenv("SOCKS_PROXY")),
            custom_headers=get_custom_headers("BITBUCKET_CUSTOM_HEADERS", environ)
            or None,
            default_destination_branch=default_destination_branch,
        )
