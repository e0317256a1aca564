"""Environment variable helpers for configuration loading."""

import logging
import os
from collections.abc import Mapping

from .io import parse_extended_bool

logger = logging.getLogger("mcp-bitbucket.utils.env")


def is_env_ssl_verify(
    env_var_name: str, environ: Mapping[str, str] | None = None
) -> bool:
    """Check whether SSL verification is enabled by an environment variable.

    Unset or unrecognized values keep verification on.
    """
    source = os.environ if environ is None else environ
    value = parse_extended_bool(source.get(env_var_name))
    return True if value is None else value


def get_custom_headers(
    env_var_name: str, environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Parse custom headers from a ``Name=value,Other=value`` variable.

    Entries without ``=`` or with an empty name are skipped.
    """
    source = os.environ if environ is None else environ
    raw = source.get(env_var_name, "")
    headers: dict[str, str] = {}
    if not raw or not raw.strip():
        return headers

    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            logger.warning(f"Ignoring malformed header in {env_var_name}: {pair!r}")
            continue
        name, value = pair.split("=", 1)
        name = name.strip()
        if not name:
            logger.warning(f"Ignoring header without a name in {env_var_name}")
            continue
        headers[name] = value.strip()
    return headers
