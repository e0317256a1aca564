"""I/O utility functions for MCP Bitbucket."""

from __future__ import annotations

from typing import Final

TRUTHY_VALUES: Final[set[str]] = {"true", "1", "yes", "y", "on"}
FALSY_VALUES: Final[set[str]] = {"false", "0", "no", "n", "off"}


def parse_extended_bool(value: str | bool | None) -> bool | None:
    """Convert a string or boolean flag into a canonical bool value.

    Returns:
        True/False when the value is recognized, otherwise None.
    """
    if isinstance(value, bool):
        return value

    if value is None:
        return None

    normalized = value.strip().lower()
    if not normalized:
        return None

    if normalized in TRUTHY_VALUES:
        return True
    if normalized in FALSY_VALUES:
        return False
    return None
