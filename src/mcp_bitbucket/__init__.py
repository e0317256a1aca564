"""Dual-dialect Bitbucket Cloud / Server client."""

import logging

from .bitbucket import BitbucketConfig, BitbucketFetcher
from .exceptions import BitbucketError, BitbucketErrorType, MCPBitbucketError

__version__ = "0.1.0"

# Library logging stays silent unless the application configures handlers
logging.getLogger("mcp-bitbucket").addHandler(logging.NullHandler())

__all__ = [
    "BitbucketConfig",
    "BitbucketError",
    "BitbucketErrorType",
    "BitbucketFetcher",
    "MCPBitbucketError",
    "__version__",
]
