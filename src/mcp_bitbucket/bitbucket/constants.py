"""Bitbucket API constants and default values."""

from ..utils.auth import AUTH_TYPE_BASIC, AUTH_TYPE_BEARER
from ..utils.urls import CLOUD_API_HOST

# Pull request states
PR_STATES = {
    "OPEN": "OPEN",
    "MERGED": "MERGED",
    "DECLINED": "DECLINED",
    "SUPERSEDED": "SUPERSEDED",
}

DEFAULT_PR_STATE = PR_STATES["OPEN"]

# Bitbucket Cloud API
CLOUD_API_BASE = "https://api.bitbucket.org/2.0"

# Site name accepted in ATLASSIAN_SITE_URL as shorthand for Bitbucket Cloud
CLOUD_SITE_ALIAS = "bitbucket"

# Authentication schemes
AUTH_TYPES = (AUTH_TYPE_BASIC, AUTH_TYPE_BEARER)

# Headers sent with every JSON request
JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Request timeout in seconds (atlassian-python-api default)
DEFAULT_TIMEOUT = 75

# Config file looked up by BitbucketConfig.from_env
CONFIG_FILE_NAME = "mcp.config.json"
