"""Logging utilities for MCP Bitbucket."""

import logging
import sys
from typing import Any, TextIO

LOGGER_NAME = "mcp-bitbucket"


def setup_logging(
    level: int = logging.WARNING, stream: TextIO = sys.stderr
) -> logging.Logger:
    """
    Configure the logging system with the specified level.

    Args:
        level: The logging level to use (default: WARNING)
        stream: Output stream for logs (default: stderr)

    Returns:
        The configured logger instance
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(handler)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for logger_name in [
        f"{LOGGER_NAME}.client",
        f"{LOGGER_NAME}.config",
        f"{LOGGER_NAME}.utils",
    ]:
        logging.getLogger(logger_name).setLevel(level)

    return logger


def mask_sensitive(text: str | None, keep_chars: int = 4) -> str:
    """
    Masks sensitive strings for logging.

    Args:
        text: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        Masked string
    """
    if not text:
        return ""
    if len(text) <= keep_chars * 2:
        return "*" * len(text)
    return text[:keep_chars] + "*" * (len(text) - keep_chars * 2) + text[-keep_chars:]


def get_masked_session_headers(headers: dict[str, Any]) -> dict[str, str]:
    """
    Get session headers with sensitive values masked for safe logging.

    Args:
        headers: Dictionary of HTTP headers

    Returns:
        Dictionary with sensitive headers masked
    """
    sensitive_headers = {"authorization", "cookie", "set-cookie", "proxy-authorization"}
    masked_headers = {}

    for key, value in headers.items():
        if key.lower() in sensitive_headers:
            if key.lower() == "authorization":
                if isinstance(value, str):
                    if value.startswith("Basic "):
                        masked_headers[key] = "Basic *****"
                    elif value.startswith("Bearer "):
                        token = value[7:]
                        masked_headers[key] = f"Bearer {mask_sensitive(token, 5)}"
                    else:
                        masked_headers[key] = "*****"
                else:
                    masked_headers[key] = "*****"
            else:
                masked_headers[key] = "*****"
        else:
            masked_headers[key] = str(value)

    return masked_headers
