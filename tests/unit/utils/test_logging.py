"""Tests for the logging utilities module."""

import io
import logging

import pytest

from mcp_bitbucket.utils.logging import (
    get_masked_session_headers,
    mask_sensitive,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging(restore_root_logger):
    """Test that logs go to the given stream at the given level."""
    # Arrange
    stream = io.StringIO()

    # Act
    logger = setup_logging(logging.DEBUG, stream=stream)
    logging.getLogger("mcp-bitbucket.client").debug("hello from client")

    # Assert
    assert logger.name == "mcp-bitbucket"
    assert logger.level == logging.DEBUG
    assert "hello from client" in stream.getvalue()
    assert "mcp-bitbucket.client - DEBUG" in stream.getvalue()


def test_setup_logging_replaces_handlers(restore_root_logger):
    """Test that repeated setup does not duplicate output."""
    stream = io.StringIO()

    setup_logging(logging.INFO, stream=stream)
    setup_logging(logging.INFO, stream=stream)
    logging.getLogger("mcp-bitbucket").info("once")

    assert stream.getvalue().count("once") == 1


@pytest.mark.parametrize(
    ("text", "keep", "expected"),
    [
        (None, 4, ""),
        ("", 4, ""),
        ("short", 4, "*****"),
        ("abcdefghijkl", 4, "abcd****ijkl"),
        ("abcdefghijkl", 2, "ab********kl"),
    ],
)
def test_mask_sensitive(text, keep, expected):
    """Test masking of secrets for logs."""
    assert mask_sensitive(text, keep) == expected


def test_get_masked_session_headers():
    """Test that credentials are masked and other headers kept."""
    headers = {
        "Authorization": "Bearer abcdefghijklmnop",
        "Cookie": "session=1",
        "Accept": "application/json",
        "X-Count": 3,
    }

    masked = get_masked_session_headers(headers)

    assert masked == {
        "Authorization": "Bearer abcde******lmnop",
        "Cookie": "*****",
        "Accept": "application/json",
        "X-Count": "3",
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Basic dXNlcjp0b2tlbg==", "Basic *****"),
        ("Token xyz", "*****"),
        (None, "*****"),
    ],
)
def test_get_masked_authorization_variants(value, expected):
    """Test masking of other authorization header shapes."""
    assert get_masked_session_headers({"authorization": value}) == {
        "authorization": expected
    }
