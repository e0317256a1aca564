"""Base client module for Bitbucket API interactions."""

import logging
import time
from collections.abc import Callable
from typing import Any

from atlassian import Bitbucket
from requests import Response

from ..exceptions import BitbucketError
from ..utils.auth import get_auth_header
from ..utils.logging import get_masked_session_headers, mask_sensitive
from ..utils.metrics import EventSink, RequestEvent
from ..utils.ssl import configure_ssl_verification
from .classification import classify_failure, transport_failure_kind
from .config import BitbucketConfig
from .constants import JSON_HEADERS
from .descriptors import Operation, RequestDescriptor, ResponseFormat, build_descriptor

# Configure logging
logger = logging.getLogger("mcp-bitbucket.client")

AuthHeaderFactory = Callable[[str, str, str], str]


class BitbucketClient:
    """Base client for Bitbucket API interactions.

    Holds the resolved configuration and the single request-execution
    primitive every operation goes through. Failures never leave ``execute``
    as anything other than a BitbucketError.
    """

    config: BitbucketConfig

    def __init__(
        self,
        config: BitbucketConfig | None = None,
        *,
        event_sink: EventSink | None = None,
        auth_header_factory: AuthHeaderFactory = get_auth_header,
    ) -> None:
        """Initialize the Bitbucket client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)
            event_sink: Optional sink receiving one RequestEvent per request
            auth_header_factory: Builds the Authorization header value from
                (identity, secret, scheme)

        Raises:
            ValueError: If configuration is invalid or required credentials are missing
        """
        # Load configuration from environment variables if not provided
        self.config = config or BitbucketConfig.from_env()
        self.event_sink = event_sink

        if not self.config.is_auth_configured():
            error_msg = (
                f"Bitbucket credentials are incomplete for {self.config.auth_type} "
                "authentication"
            )
            raise ValueError(error_msg)

        self._auth_header = auth_header_factory(
            self.config.email, self.config.token, self.config.auth_type
        )
        logger.debug(
            f"Initializing Bitbucket client. URL: {self.config.url}, "
            f"Auth type: {self.config.auth_type}, Is Cloud: {self.config.is_cloud}, "
            f"Identity: {self.config.email}, "
            f"Secret (masked): {mask_sensitive(self.config.token)}"
        )

        # Every request is sent exactly once; retrying is left to the caller
        self.bitbucket = Bitbucket(
            url=self.config.url,
            cloud=self.config.is_cloud,
            timeout=self.config.timeout,
            verify_ssl=self.config.ssl_verify,
            backoff_and_retry=False,
            retry_with_header=False,
        )
        self.bitbucket._session.headers.update({"Authorization": self._auth_header})

        # Configure SSL verification using the shared utility
        configure_ssl_verification(
            service_name="Bitbucket",
            url=self.config.url,
            session=self.bitbucket._session,
            ssl_verify=self.config.ssl_verify,
        )

        # Proxy configuration
        proxies = {}
        if self.config.http_proxy:
            proxies["http"] = self.config.http_proxy
        if self.config.https_proxy:
            proxies["https"] = self.config.https_proxy
        if self.config.socks_proxy:
            proxies["http"] = self.config.socks_proxy
            proxies["https"] = self.config.socks_proxy

        if proxies:
            self.bitbucket._session.proxies.update(proxies)
            logger.debug(f"Configured proxies: {proxies}")

        # Configure no_proxy
        if self.config.no_proxy:
            self.bitbucket._session.trust_env = False
            logger.debug(f"Configured no_proxy: {self.config.no_proxy}")

        # Add custom headers
        if self.config.custom_headers:
            self.bitbucket._session.headers.update(self.config.custom_headers)
            logger.debug(
                f"Added custom headers: {get_masked_session_headers(self.config.custom_headers)}"
            )

        logger.debug(
            f"Bitbucket client initialized. Session headers: "
            f"{get_masked_session_headers(dict(self.bitbucket._session.headers))}"
        )

    def _request(self, operation: Operation, **params: Any) -> Any:
        """Build the descriptor for an operation in the active dialect and execute it."""
        descriptor = build_descriptor(operation, self.config.dialect, **params)
        return self.execute(descriptor)

    def execute(
        self, descriptor: RequestDescriptor, context: dict[str, Any] | None = None
    ) -> Any:
        """Execute a request descriptor.

        JSON descriptors return the decoded body (None for an empty body, the
        text itself when the body is not JSON). Text descriptors return the
        body as a string and only add the Authorization header.

        Args:
            descriptor: The request to issue
            context: Extra identifiers merged into error details

        Returns:
            The decoded response body

        Raises:
            BitbucketError: For every transport or HTTP failure
        """
        if descriptor.response_format is ResponseFormat.TEXT:
            response = self._send(
                descriptor,
                headers={"Authorization": self._auth_header},
                context=context,
                file_content=True,
            )
            content = response.text
            logger.debug(
                f"{descriptor.method} {descriptor.path} - Retrieved {len(content)} characters"
            )
            return content

        response = self._send(descriptor, headers=dict(JSON_HEADERS), context=context)
        return self._decode_json(response)

    def _send(
        self,
        descriptor: RequestDescriptor,
        headers: dict[str, str],
        context: dict[str, Any] | None = None,
        file_content: bool = False,
    ) -> Response:
        """Issue the HTTP call and turn every failure into a BitbucketError."""
        method = descriptor.method
        path = descriptor.path
        details: dict[str, Any] = {"path": path, "method": method, **(context or {})}

        logger.debug(f"{method} {path}")
        started = time.monotonic()
        try:
            response = self.bitbucket.request(
                method,
                path,
                json=descriptor.body,
                headers=headers,
                advanced_mode=True,
            )
        except Exception as exc:  # noqa: BLE001 - every transport failure is classified
            classification = classify_failure(
                transport=transport_failure_kind(exc),
                fallback_message=str(exc) or None,
            )
            error = classification.to_error(
                details={**details, "code": type(exc).__name__}
            )
            logger.error(
                f"{method} {path} - {error.error_type.value}: {exc}",
            )
            self._emit(descriptor, started, error=error)
            raise error from exc

        status_code = response.status_code
        if 200 <= status_code < 300:
            logger.debug(f"{method} {path} - Success ({status_code})")
            self._emit(descriptor, started, status_code=status_code)
            return response

        response_body = self._decode_error_body(response)
        classification = classify_failure(
            status_code=status_code,
            response_body=response_body,
            file_content=file_content,
            fallback_message=f"Unexpected HTTP status {status_code}",
        )
        error = classification.to_error(
            status_code=status_code,
            details={**details, "response": response_body},
        )
        logger.error(
            f"{method} {path} - {error.error_type.value} (HTTP {status_code}): "
            f"{response_body!r}"
        )
        self._emit(descriptor, started, status_code=status_code, error=error)
        raise error

    @staticmethod
    def _decode_json(response: Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # Plain-text endpoints such as the Cloud pull request diff
            return response.text

    @staticmethod
    def _decode_error_body(response: Response) -> Any:
        try:
            return response.json()
        except ValueError:
            try:
                return response.text
            except Exception:  # noqa: BLE001
                return "Unable to read error response"

    def _emit(
        self,
        descriptor: RequestDescriptor,
        started: float,
        status_code: int | None = None,
        error: BitbucketError | None = None,
    ) -> None:
        if self.event_sink is None:
            return
        event = RequestEvent(
            method=descriptor.method,
            path=descriptor.path,
            duration_seconds=time.monotonic() - started,
            status_code=status_code,
            error_type=error.error_type.value if error else None,
            operation=descriptor.operation.value if descriptor.operation else None,
        )
        try:
            self.event_sink.record(event)
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"Request event sink failed: {exc}")
