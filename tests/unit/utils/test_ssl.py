"""Tests for the SSL utilities module."""

import ssl
from unittest.mock import MagicMock, patch

from requests.sessions import Session

from mcp_bitbucket.utils.ssl import SSLIgnoreAdapter, configure_ssl_verification


def test_ssl_ignore_adapter_disables_verification():
    """Test that the adapter's pool uses an unverified SSL context."""
    with patch("mcp_bitbucket.utils.ssl.PoolManager") as mock_pool:
        adapter = SSLIgnoreAdapter()

    context = mock_pool.call_args.kwargs["ssl_context"]
    assert isinstance(context, ssl.SSLContext)
    assert context.check_hostname is False
    assert context.verify_mode == ssl.CERT_NONE
    assert adapter.poolmanager is mock_pool.return_value


def test_ssl_ignore_adapter_cert_verify():
    """Test that certificate verification is always skipped."""
    adapter = SSLIgnoreAdapter()
    with patch(
        "requests.adapters.HTTPAdapter.cert_verify"
    ) as mock_cert_verify:
        adapter.cert_verify(MagicMock(), "https://example.com", True, None)

    assert mock_cert_verify.call_args.kwargs["verify"] is False


def test_configure_ssl_verification_enabled():
    """Test that verification stays on and no adapter is mounted."""
    session = MagicMock(spec=Session)

    configure_ssl_verification(
        "Bitbucket", "https://bitbucket.example.com", session, ssl_verify=True
    )

    assert session.verify is True
    session.mount.assert_not_called()


def test_configure_ssl_verification_disabled():
    """Test that the adapter is mounted for both schemes of the host."""
    session = MagicMock(spec=Session)

    with patch("mcp_bitbucket.utils.ssl.SSLIgnoreAdapter") as mock_adapter:
        configure_ssl_verification(
            "Bitbucket",
            "https://bitbucket.example.com/rest/api/1.0",
            session,
            ssl_verify=False,
        )

    mounted = [call.args for call in session.mount.call_args_list]
    assert mounted == [
        ("https://bitbucket.example.com", mock_adapter.return_value),
        ("http://bitbucket.example.com", mock_adapter.return_value),
    ]


def test_configure_ssl_verification_http_url():
    """Test that plain http URLs only mount the http scheme."""
    session = MagicMock(spec=Session)

    configure_ssl_verification(
        "Bitbucket", "http://bitbucket.local:7990", session, ssl_verify=False
    )

    assert session.mount.call_count == 1
    assert session.mount.call_args.args[0] == "http://bitbucket.local:7990"


def test_configure_ssl_verification_without_host(caplog):
    """Test that a URL without a host mounts nothing."""
    session = MagicMock(spec=Session)

    configure_ssl_verification("Bitbucket", "not a url", session, ssl_verify=False)

    session.mount.assert_not_called()
    assert "Cannot mount SSL-ignore adapter" in caplog.text
