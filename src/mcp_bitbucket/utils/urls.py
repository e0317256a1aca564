"""URL-related utility functions for MCP Bitbucket."""

import logging
from urllib.parse import quote, urlparse

logger = logging.getLogger("mcp-bitbucket.utils.urls")

CLOUD_API_HOST = "api.bitbucket.org"

# Same unescaped set as JavaScript's encodeURIComponent
SEGMENT_SAFE_CHARS = "!~*'()"


def is_bitbucket_cloud_url(url: str | None) -> bool:
    """Determine if a URL points at the Bitbucket Cloud API.

    Any URL containing the Cloud API host counts, including gateway URLs
    that carry it in their path. Anything that cannot be parsed is treated
    as a Server/Data Center URL.

    Args:
        url: The base URL to check

    Returns:
        True if the URL contains the Bitbucket Cloud API host, False otherwise
    """
    if not url:
        return False

    candidate = url.strip()
    try:
        urlparse(candidate if "://" in candidate else f"//{candidate}").hostname
    except ValueError as exc:
        logger.debug(f"Could not parse URL {url!r}, assuming Server: {exc}")
        return False

    return CLOUD_API_HOST in candidate.lower()


def encode_segment(value: str | int) -> str:
    """Percent-encode a single path segment or query value.

    Reserved characters, including ``/``, ``?`` and spaces, are always
    escaped so that one value can never span several path segments.
    """
    return quote(str(value), safe=SEGMENT_SAFE_CHARS)
