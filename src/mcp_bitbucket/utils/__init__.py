"""
Utility functions for the MCP Bitbucket integration.
This package provides various utility functions used throughout the codebase.
"""

from .auth import basic_auth_header, bearer_auth_header, get_auth_header
from .env import get_custom_headers, is_env_ssl_verify
from .io import parse_extended_bool
from .logging import get_masked_session_headers, mask_sensitive, setup_logging
from .metrics import EventSink, PrometheusEventSink, RequestEvent
from .ssl import SSLIgnoreAdapter, configure_ssl_verification
from .urls import encode_segment, is_bitbucket_cloud_url

__all__ = [
    "EventSink",
    "PrometheusEventSink",
    "RequestEvent",
    "SSLIgnoreAdapter",
    "basic_auth_header",
    "bearer_auth_header",
    "configure_ssl_verification",
    "encode_segment",
    "get_auth_header",
    "get_custom_headers",
    "get_masked_session_headers",
    "is_bitbucket_cloud_url",
    "is_env_ssl_verify",
    "mask_sensitive",
    "parse_extended_bool",
    "setup_logging",
]
