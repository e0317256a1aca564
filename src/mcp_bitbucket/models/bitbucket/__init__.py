"""Bitbucket models module."""

from .errors import BitbucketErrorRecord
from .results import ConnectionTestResult

__all__ = [
    "BitbucketErrorRecord",
    "ConnectionTestResult",
]
