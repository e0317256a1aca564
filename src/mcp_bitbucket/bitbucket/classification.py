"""Classification of failed Bitbucket requests.

``classify_failure`` is a pure function of the HTTP status code (when a
response arrived) and the transport failure kind (when it did not). Both the
JSON request path and the raw file-content path go through it, so a status
code always maps to the same error type and retry flag.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

import requests

from ..exceptions import BitbucketError, BitbucketErrorType


class TransportFailure(str, Enum):
    """Kinds of failures that happen before any HTTP response arrives."""

    HOST_UNREACHABLE = "host_unreachable"
    TIMEOUT = "timeout"
    OTHER = "other"


def transport_failure_kind(exc: BaseException) -> TransportFailure:
    """Map a transport exception to a TransportFailure kind."""
    # ConnectTimeout is both a Timeout and a ConnectionError
    if isinstance(exc, requests.exceptions.Timeout):
        return TransportFailure.TIMEOUT
    if isinstance(exc, requests.exceptions.ConnectionError):
        return TransportFailure.HOST_UNREACHABLE
    return TransportFailure.OTHER


@dataclass(frozen=True)
class FailureClassification:
    """Outcome of classifying one failed request."""

    error_type: BitbucketErrorType
    message: str
    suggestion: str
    is_retryable: bool

    def to_error(
        self, status_code: int | None = None, details: dict[str, Any] | None = None
    ) -> BitbucketError:
        return BitbucketError(
            message=self.message,
            error_type=self.error_type,
            status_code=status_code,
            details=details,
            suggestion=self.suggestion,
            is_retryable=self.is_retryable,
        )


_STATUS_CLASSIFICATIONS: dict[int, FailureClassification] = {
    401: FailureClassification(
        BitbucketErrorType.AUTHENTICATION_ERROR,
        "Authentication failed",
        "Check your email and app password/token. "
        "Ensure credentials are valid and have not expired.",
        False,
    ),
    403: FailureClassification(
        BitbucketErrorType.PERMISSION_ERROR,
        "Permission denied",
        "Your credentials lack permission for this operation. "
        "Check repository access rights and workspace permissions.",
        False,
    ),
    404: FailureClassification(
        BitbucketErrorType.NOT_FOUND_ERROR,
        "Resource not found",
        "Verify workspace name, repository slug, or resource ID. "
        "Check if the resource exists and is accessible.",
        False,
    ),
    409: FailureClassification(
        BitbucketErrorType.CONFLICT_ERROR,
        "Conflict",
        "Resource already exists or conflicts with existing data. "
        "Try a different name or check for duplicates.",
        False,
    ),
    429: FailureClassification(
        BitbucketErrorType.RATE_LIMIT_ERROR,
        "Rate limit exceeded",
        "Too many requests. Wait before retrying. "
        "Check rate limit headers for reset time.",
        True,
    ),
}

_SERVER_ERROR = FailureClassification(
    BitbucketErrorType.SERVER_ERROR,
    "Bitbucket server error",
    "Bitbucket service is experiencing issues. Retry after a short delay.",
    True,
)

_TRANSPORT_CLASSIFICATIONS: dict[TransportFailure, FailureClassification] = {
    TransportFailure.HOST_UNREACHABLE: FailureClassification(
        BitbucketErrorType.NETWORK_ERROR,
        "Network connection failed",
        "Check network connectivity and baseUrl configuration. "
        "Verify the Bitbucket server is reachable.",
        True,
    ),
    TransportFailure.TIMEOUT: FailureClassification(
        BitbucketErrorType.TIMEOUT_ERROR,
        "Request timeout",
        "Request took too long. Check network speed or try again.",
        True,
    ),
}

_UNKNOWN_SUGGESTION = "An unexpected error occurred. Check logs for details."


def extract_upstream_message(response_body: Any) -> str | None:
    """Pull the human-readable error message out of an error payload.

    Cloud wraps it as ``{"error": {"message": ...}}``, Server as
    ``{"errors": [{"message": ...}]}``.
    """
    if not isinstance(response_body, dict):
        return None

    error = response_body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])

    errors = response_body.get("errors")
    if isinstance(errors, list):
        for item in errors:
            if isinstance(item, dict) and item.get("message"):
                return str(item["message"])
    return None


def _classify_file_status(status_code: int) -> FailureClassification:
    if status_code == 404:
        return FailureClassification(
            BitbucketErrorType.FILE_NOT_FOUND,
            "File not found",
            "Verify the file path and commit hash are correct. "
            "File may not exist at this commit.",
            False,
        )
    if status_code == 401:
        return FailureClassification(
            BitbucketErrorType.AUTHENTICATION_ERROR,
            "Authentication failed for file content",
            "Check authentication credentials.",
            False,
        )
    return FailureClassification(
        BitbucketErrorType.FILE_FETCH_ERROR,
        f"Failed to fetch file content: HTTP {status_code}",
        "Check file permissions and repository access.",
        status_code >= 500,
    )


def classify_failure(
    status_code: int | None = None,
    transport: TransportFailure | None = None,
    response_body: Any = None,
    *,
    file_content: bool = False,
    fallback_message: str | None = None,
) -> FailureClassification:
    """Classify a failed request.

    The status code is inspected first; the transport failure kind only
    matters when no response arrived.

    Args:
        status_code: HTTP status of the failed response, if any
        transport: Transport failure kind, if no response arrived
        response_body: Decoded error payload, used for validation messages
        file_content: Use the raw file-content classification for statuses
        fallback_message: Message for unclassified failures

    Returns:
        The FailureClassification for this failure
    """
    if status_code is not None:
        if file_content:
            return _classify_file_status(status_code)
        if status_code in _STATUS_CLASSIFICATIONS:
            return _STATUS_CLASSIFICATIONS[status_code]
        if status_code == 400:
            upstream = extract_upstream_message(response_body)
            return FailureClassification(
                BitbucketErrorType.VALIDATION_ERROR,
                "Bad request",
                "Invalid request parameters. "
                f"{upstream or 'Check the request payload and parameters.'}",
                False,
            )
        if status_code >= 500:
            return _SERVER_ERROR

    if transport in _TRANSPORT_CLASSIFICATIONS:
        return _TRANSPORT_CLASSIFICATIONS[transport]

    return FailureClassification(
        BitbucketErrorType.UNKNOWN_ERROR,
        fallback_message or "Unknown error occurred",
        _UNKNOWN_SUGGESTION,
        False,
    )
