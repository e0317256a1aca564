"""Authorization header helpers for Bitbucket requests."""

import base64

AUTH_TYPE_BASIC = "basic"
AUTH_TYPE_BEARER = "bearer"


def basic_auth_header(identity: str, secret: str) -> str:
    """Build a Basic authorization header value from an identity and secret."""
    encoded = base64.b64encode(f"{identity}:{secret}".encode()).decode("ascii")
    return f"Basic {encoded}"


def bearer_auth_header(secret: str) -> str:
    """Build a Bearer authorization header value from a token."""
    return f"Bearer {secret}"


def get_auth_header(identity: str, secret: str, scheme: str) -> str:
    """Return a ready-to-send Authorization header value.

    Args:
        identity: Email or username (only used by the basic scheme)
        secret: App password, API token or personal access token
        scheme: ``basic`` or ``bearer``

    Raises:
        ValueError: If the scheme is not supported
    """
    if scheme == AUTH_TYPE_BASIC:
        return basic_auth_header(identity, secret)
    if scheme == AUTH_TYPE_BEARER:
        return bearer_auth_header(secret)
    msg = f"Unsupported authentication scheme: {scheme!r}"
    raise ValueError(msg)
