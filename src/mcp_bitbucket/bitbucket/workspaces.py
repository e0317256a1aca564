"""Module for Bitbucket workspace (Cloud) and project (Server/DC) operations."""

import logging
from typing import Any

from ..exceptions import BitbucketError, BitbucketErrorType
from ..models.bitbucket.results import ConnectionTestResult
from .client import BitbucketClient
from .descriptors import Operation

logger = logging.getLogger("mcp-bitbucket")


class WorkspacesMixin(BitbucketClient):
    """Mixin for Bitbucket workspace operations.

    Workspaces on Cloud correspond to projects on Server/Data Center.
    """

    def list_workspaces(self) -> Any:
        """
        List workspaces (Cloud) or projects (Server/DC) visible to the user.

        Returns:
            One page of the decoded API response

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug("[list_workspaces] Fetching workspaces/projects")
        return self._request(Operation.LIST_WORKSPACES)

    def test_connection(self) -> ConnectionTestResult:
        """
        Check that the configured URL and credentials work.

        Lists workspaces and reports the outcome instead of raising.

        Returns:
            ConnectionTestResult with success flag and the error, if any
        """
        logger.debug("[test_connection] Testing Bitbucket connection")
        try:
            self.list_workspaces()
        except BitbucketError as e:
            logger.error(f"[test_connection] Connection failed: {e}")
            return ConnectionTestResult(success=False, error=e)
        except Exception as e:  # noqa: BLE001 - the connection check reports every failure
            logger.error(f"[test_connection] Connection failed unexpectedly: {e}")
            error = BitbucketError(
                message=str(e) or "Connection test failed",
                error_type=BitbucketErrorType.CONNECTION_TEST_FAILED,
                details={"original_error": repr(e)},
                suggestion="Verify baseUrl, credentials, and network connectivity.",
                is_retryable=True,
            )
            return ConnectionTestResult(success=False, error=error)

        logger.debug("[test_connection] Connection successful")
        return ConnectionTestResult(success=True)
