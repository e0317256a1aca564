"""Exception types for MCP Bitbucket."""

from enum import Enum
from typing import Any


class MCPBitbucketError(Exception):
    """Base exception for MCP-Bitbucket errors."""

    pass


class BitbucketErrorType(str, Enum):
    """Fixed set of failure kinds a Bitbucket operation can end with."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT_ERROR = "CONFLICT_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_FETCH_ERROR = "FILE_FETCH_ERROR"
    CONNECTION_TEST_FAILED = "CONNECTION_TEST_FAILED"


class BitbucketError(MCPBitbucketError):
    """Raised when a Bitbucket request fails.

    Every failure of a Bitbucket operation surfaces as exactly one instance of
    this class. Callers branch on ``error_type`` and ``is_retryable``.

    Attributes:
        message: Short human-readable description
        status_code: HTTP status code, None for transport failures
        error_type: Classified failure kind
        details: Request path and method plus the upstream response body or
            transport error code
        suggestion: Remediation hint
        is_retryable: Whether the same request may be re-issued after a delay
    """

    def __init__(
        self,
        message: str,
        error_type: BitbucketErrorType | str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = BitbucketErrorType(error_type)
        self.status_code = status_code
        self.details = details or {}
        self.suggestion = suggestion
        self.is_retryable = is_retryable

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[{self.error_type.value}] {self.message} (HTTP {self.status_code})"
        return f"[{self.error_type.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"BitbucketError(error_type={self.error_type.value!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error to a plain record for logging or transport."""
        # Imported here to keep models free to import from this module
        from .models.bitbucket.errors import BitbucketErrorRecord

        return BitbucketErrorRecord.from_error(self).to_simplified_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BitbucketError":
        """Rebuild an error from a record produced by ``to_dict``."""
        from .models.bitbucket.errors import BitbucketErrorRecord

        record = BitbucketErrorRecord.from_api_response(data)
        return cls(
            message=record.message,
            error_type=record.error_type,
            status_code=record.status_code,
            details=record.details,
            suggestion=record.suggestion,
            is_retryable=record.is_retryable,
        )
