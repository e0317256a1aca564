"""
Pydantic models for Bitbucket API responses.

This package provides type-safe models for error records and operation results.
"""

from .base import ApiModel
from .bitbucket import BitbucketErrorRecord, ConnectionTestResult

__all__ = [
    "ApiModel",
    "BitbucketErrorRecord",
    "ConnectionTestResult",
]
