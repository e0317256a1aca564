"""
Serializable record of a BitbucketError.

The record is the plain structure an error becomes when it is logged or
handed across a process boundary.
"""

from typing import TYPE_CHECKING, Any

from pydantic import Field

from ...exceptions import BitbucketErrorType
from ..base import ApiModel

if TYPE_CHECKING:
    from ...exceptions import BitbucketError


class BitbucketErrorRecord(ApiModel):
    """Model representing a classified Bitbucket failure."""

    name: str = "BitbucketError"
    message: str
    status_code: int | None = Field(default=None, alias="statusCode")
    error_type: BitbucketErrorType = Field(alias="errorType")
    details: dict[str, Any] = Field(default_factory=dict)
    suggestion: str | None = None
    is_retryable: bool = Field(default=False, alias="isRetryable")

    @classmethod
    def from_error(cls, error: "BitbucketError") -> "BitbucketErrorRecord":
        """Create a record from a raised error."""
        return cls(
            message=error.message,
            status_code=error.status_code,
            error_type=error.error_type,
            details=error.details,
            suggestion=error.suggestion,
            is_retryable=error.is_retryable,
        )

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "BitbucketErrorRecord":
        """Create a record from a serialized dictionary.

        Accepts both snake_case keys (as produced by ``to_simplified_dict``)
        and camelCase keys.
        """
        return cls.model_validate(data)

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert the record to a JSON-compatible dictionary."""
        result: dict[str, Any] = {
            "name": self.name,
            "message": self.message,
            "error_type": self.error_type.value,
            "details": self.details,
            "is_retryable": self.is_retryable,
        }
        if self.status_code is not None:
            result["status_code"] = self.status_code
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result
