"""Shared fixtures for the MCP Bitbucket test suite."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from mcp_bitbucket.bitbucket import BitbucketFetcher
from mcp_bitbucket.bitbucket.config import BitbucketConfig

_NO_JSON = object()

CLOUD_URL = "https://api.bitbucket.org/2.0"
SERVER_URL = "https://bitbucket.example.com/rest/api/1.0"


@pytest.fixture
def cloud_config() -> BitbucketConfig:
    """Configuration for Bitbucket Cloud."""
    return BitbucketConfig(
        email="test@example.com",
        token="app_password",
        url=CLOUD_URL,
    )


@pytest.fixture
def server_config() -> BitbucketConfig:
    """Configuration for Bitbucket Server/Data Center."""
    return BitbucketConfig(
        email="test@example.com",
        token="personal_token",
        url=SERVER_URL,
    )


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for fake ``requests.Response`` objects."""

    def _make(
        status_code: int = 200, json_data: Any = _NO_JSON, text: str | None = None
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        if json_data is _NO_JSON:
            response.json.side_effect = ValueError("No JSON object could be decoded")
            response.text = text or ""
        else:
            response.json.return_value = json_data
            response.text = text if text is not None else json.dumps(json_data)
        response.content = response.text.encode("utf-8")
        return response

    return _make


@pytest.fixture
def fetcher_factory() -> Callable[..., BitbucketFetcher]:
    """Factory creating BitbucketFetcher instances with a mocked transport."""

    def _factory(config: BitbucketConfig, **kwargs: Any) -> BitbucketFetcher:
        with (
            patch("mcp_bitbucket.bitbucket.client.Bitbucket") as mock_bb,
            patch("mcp_bitbucket.bitbucket.client.configure_ssl_verification"),
        ):
            bb_instance = MagicMock()
            bb_instance._session = MagicMock()
            bb_instance._session.headers = {}
            bb_instance._session.proxies = {}
            bb_instance._session.trust_env = True
            mock_bb.return_value = bb_instance
            return BitbucketFetcher(config, **kwargs)

    return _factory


@pytest.fixture
def cloud_fetcher(fetcher_factory, cloud_config) -> BitbucketFetcher:
    """BitbucketFetcher speaking the Cloud dialect."""
    return fetcher_factory(cloud_config)


@pytest.fixture
def server_fetcher(fetcher_factory, server_config) -> BitbucketFetcher:
    """BitbucketFetcher speaking the Server dialect."""
    return fetcher_factory(server_config)
