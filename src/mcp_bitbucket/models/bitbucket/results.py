"""Result models for Bitbucket operations that report instead of raising."""

from typing import Any

from pydantic import ConfigDict

from ...exceptions import BitbucketError
from ..base import ApiModel


class ConnectionTestResult(ApiModel):
    """Outcome of a connection check."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    error: BitbucketError | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "ConnectionTestResult":
        """Create a result from a serialized dictionary."""
        error_data = data.get("error")
        return cls(
            success=bool(data.get("success")),
            error=BitbucketError.from_dict(error_data) if error_data else None,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result
