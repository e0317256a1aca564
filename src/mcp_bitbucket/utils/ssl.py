"""SSL-related utility functions for MCP Bitbucket."""

import logging
import ssl
from typing import Any
from urllib.parse import urlparse

from requests.adapters import HTTPAdapter
from requests.sessions import Session
from urllib3.poolmanager import PoolManager

logger = logging.getLogger("mcp-bitbucket.utils.ssl")


class SSLIgnoreAdapter(HTTPAdapter):
    """HTTP adapter that skips certificate verification.

    Used for self-hosted Bitbucket Server installations running with
    self-signed certificates. Both ``verify_mode`` and ``check_hostname`` are
    disabled on the pool's SSL context.
    """

    def init_poolmanager(
        self, connections: int, maxsize: int, block: bool = False, **pool_kwargs: Any
    ) -> None:
        """Initialize the connection pool manager with SSL verification disabled.

        Args:
            connections: Number of connections to save in the pool
            maxsize: Maximum number of connections in the pool
            block: Whether to block when the pool is full
            pool_kwargs: Additional arguments for the pool manager
        """
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

        self.poolmanager = PoolManager(
            num_pools=connections,
            maxsize=maxsize,
            block=block,
            ssl_context=context,
            **pool_kwargs,
        )

    def cert_verify(self, conn: Any, url: str, verify: bool, cert: Any | None) -> None:
        super().cert_verify(conn, url, verify=False, cert=cert)


def configure_ssl_verification(
    service_name: str,
    url: str,
    session: Session,
    *,
    ssl_verify: bool = True,
) -> None:
    """Configure SSL verification on a requests session.

    When verification is disabled, an SSLIgnoreAdapter is mounted for the
    service's host on both https and http, so redirects between the two
    keep working.

    Args:
        service_name: Name of the service for logging (e.g., "Bitbucket")
        url: The base URL of the service
        session: The requests session to configure
        ssl_verify: Whether SSL verification should be enabled
    """
    if ssl_verify:
        session.verify = True
        return

    logger.warning(
        f"{service_name} SSL verification disabled. "
        "This is insecure and should only be used in testing environments."
    )

    parsed = urlparse(url)
    domain = parsed.netloc
    scheme = parsed.scheme.lower()
    if not domain:
        logger.warning(f"Cannot mount SSL-ignore adapter, no host in {url!r}")
        return

    schemes = ["https", "http"] if scheme == "https" else [scheme or "http"]
    adapter = SSLIgnoreAdapter()
    for mount_scheme in schemes:
        mount_url = f"{mount_scheme}://{domain}"
        session.mount(mount_url, adapter)
        logger.debug(f"Mounted SSL-ignore adapter for {mount_url}")
