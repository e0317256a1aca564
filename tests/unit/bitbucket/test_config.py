"""Tests for the Bitbucket config module."""

import json
import os
from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

from mcp_bitbucket.bitbucket.config import BitbucketConfig, resolve_dialect
from mcp_bitbucket.bitbucket.descriptors import Dialect

CREDENTIALS = {
    "ATLASSIAN_USER_EMAIL": "test@example.com",
    "ATLASSIAN_API_TOKEN": "test_token",
}


class TestResolveDialect:
    """Test cases for dialect and auth scheme resolution."""

    @pytest.mark.parametrize(
        ("url", "is_cloud", "auth_type"),
        [
            ("https://api.bitbucket.org/2.0", True, "basic"),
            ("https://api.bitbucket.org/2.0/", True, "basic"),
            ("api.bitbucket.org/2.0", True, "basic"),
            ("https://eu.api.bitbucket.org/2.0", True, "basic"),
            ("https://bitbucket.example.com/rest/api/1.0", False, "bearer"),
            ("https://git.company.com/rest/api/latest", False, "bearer"),
            ("https://gateway.example.com/api.bitbucket.org/2.0", True, "basic"),
            ("https://bitbucket.org/workspace", False, "bearer"),
            ("http://[::1", False, "bearer"),
        ],
    )
    def test_dialect_from_url(self, url, is_cloud, auth_type):
        """Test that URLs containing the Cloud API host select the Cloud dialect."""
        resolution = resolve_dialect(url)

        assert resolution.is_cloud is is_cloud
        assert resolution.auth_type == auth_type
        assert resolution.dialect is (Dialect.CLOUD if is_cloud else Dialect.SERVER)

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_empty_url_means_cloud(self, url):
        """Test that an empty base URL resolves to the Cloud API."""
        resolution = resolve_dialect(url)

        assert resolution.base_url == "https://api.bitbucket.org/2.0"
        assert resolution.is_cloud is True

    def test_trailing_slash_removed(self):
        """Test that the base URL is normalized."""
        resolution = resolve_dialect("  https://bitbucket.example.com/rest/api/1.0/ ")
        assert resolution.base_url == "https://bitbucket.example.com/rest/api/1.0"

    @pytest.mark.parametrize(
        ("url", "explicit", "expected"),
        [
            ("https://api.bitbucket.org/2.0", "bearer", "bearer"),
            ("https://bitbucket.example.com", "basic", "basic"),
            ("https://bitbucket.example.com", "BASIC", "basic"),
        ],
    )
    def test_explicit_auth_type(self, url, explicit, expected):
        """Test that an explicit auth type overrides the default."""
        assert resolve_dialect(url, explicit).auth_type == expected

    def test_invalid_auth_type(self):
        """Test that unsupported auth types are rejected."""
        with pytest.raises(ValueError, match="Invalid auth type"):
            resolve_dialect("https://bitbucket.example.com", "oauth")

    def test_resolution_is_deterministic(self):
        """Test that resolving twice gives equal results."""
        url = "https://bitbucket.example.com/rest/api/1.0"
        assert resolve_dialect(url) == resolve_dialect(url)


class TestBitbucketConfig:
    """Test cases for BitbucketConfig."""

    def test_defaults(self):
        """Test the defaults of a minimal configuration."""
        config = BitbucketConfig(email="a@b.c", token="t")

        assert config.url == "https://api.bitbucket.org/2.0"
        assert config.is_cloud is True
        assert config.auth_type == "basic"
        assert config.dialect is Dialect.CLOUD
        assert config.ssl_verify is True
        assert config.timeout == 75
        assert config.default_destination_branch is None

    def test_server_defaults(self):
        """Test that Server URLs default to bearer auth."""
        config = BitbucketConfig(
            email="a@b.c", token="t", url="https://bitbucket.example.com/"
        )

        assert config.url == "https://bitbucket.example.com"
        assert config.is_cloud is False
        assert config.auth_type == "bearer"
        assert config.dialect is Dialect.SERVER

    def test_config_is_immutable(self):
        """Test that the resolved configuration cannot be changed."""
        config = BitbucketConfig(email="a@b.c", token="t")
        with pytest.raises(FrozenInstanceError):
            config.url = "https://bitbucket.example.com"  # type: ignore[misc]

    def test_invalid_auth_type(self):
        """Test that an invalid auth type fails construction."""
        with pytest.raises(ValueError):
            BitbucketConfig(email="a@b.c", token="t", auth_type="digest")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("email", "token", "auth_type", "expected"),
        [
            ("a@b.c", "t", "basic", True),
            ("", "t", "basic", False),
            ("a@b.c", "", "basic", False),
            ("", "t", "bearer", True),
            ("a@b.c", "", "bearer", False),
        ],
    )
    def test_is_auth_configured(self, email, token, auth_type, expected):
        """Test the authentication completeness check."""
        config = BitbucketConfig(email=email, token=token, auth_type=auth_type)
        assert config.is_auth_configured() is expected


class TestBitbucketConfigFromEnv:
    """Test cases for loading configuration from the environment."""

    def test_cloud_defaults(self, tmp_path):
        """Test that no site URL means Bitbucket Cloud."""
        with patch.dict(os.environ, CREDENTIALS, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.email == "test@example.com"
        assert config.token == "test_token"
        assert config.url == "https://api.bitbucket.org/2.0"
        assert config.is_cloud is True
        assert config.auth_type == "basic"
        assert config.custom_headers is None

    def test_bitbucket_site_alias(self, tmp_path):
        """Test that the 'bitbucket' site alias means Cloud."""
        env = {**CREDENTIALS, "ATLASSIAN_SITE_URL": "Bitbucket"}
        with patch.dict(os.environ, env, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.url == "https://api.bitbucket.org/2.0"

    def test_server_url(self, tmp_path):
        """Test that a Server site URL selects bearer auth."""
        env = {
            **CREDENTIALS,
            "ATLASSIAN_SITE_URL": "https://bitbucket.example.com/rest/api/1.0",
        }
        with patch.dict(os.environ, env, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.is_cloud is False
        assert config.auth_type == "bearer"

    @pytest.mark.parametrize("missing", ["ATLASSIAN_USER_EMAIL", "ATLASSIAN_API_TOKEN"])
    def test_missing_credentials(self, tmp_path, missing):
        """Test that both credentials are required."""
        env = {k: v for k, v in CREDENTIALS.items() if k != missing}
        with (
            patch.dict(os.environ, env, clear=True),
            pytest.raises(ValueError, match="Missing required Bitbucket credentials"),
        ):
            BitbucketConfig.from_env(config_dir=tmp_path)

    def test_optional_settings(self, tmp_path):
        """Test that optional settings are read from the environment."""
        env = {
            **CREDENTIALS,
            "ATLASSIAN_SITE_URL": "https://bitbucket.example.com",
            "BITBUCKET_AUTH_TYPE": "basic",
            "BITBUCKET_SSL_VERIFY": "false",
            "BITBUCKET_TIMEOUT": "30",
            "BITBUCKET_HTTPS_PROXY": "https://proxy:8443",
            "HTTP_PROXY": "http://proxy:8080",
            "NO_PROXY": "localhost",
            "BITBUCKET_CUSTOM_HEADERS": "X-One=1, X-Two=a=b,broken",
            "BITBUCKET_DEFAULT_DEST_BRANCH": "develop",
        }
        with patch.dict(os.environ, env, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.auth_type == "basic"
        assert config.ssl_verify is False
        assert config.timeout == 30.0
        assert config.https_proxy == "https://proxy:8443"
        assert config.http_proxy == "http://proxy:8080"
        assert config.no_proxy == "localhost"
        assert config.custom_headers == {"X-One": "1", "X-Two": "a=b"}
        assert config.default_destination_branch == "develop"

    def test_invalid_timeout(self, tmp_path):
        """Test that a non-numeric timeout is rejected."""
        env = {**CREDENTIALS, "BITBUCKET_TIMEOUT": "soon"}
        with (
            patch.dict(os.environ, env, clear=True),
            pytest.raises(ValueError, match="Invalid BITBUCKET_TIMEOUT"),
        ):
            BitbucketConfig.from_env(config_dir=tmp_path)

    def test_invalid_auth_type(self, tmp_path):
        """Test that an invalid auth type in the environment is rejected."""
        env = {**CREDENTIALS, "BITBUCKET_AUTH_TYPE": "kerberos"}
        with (
            patch.dict(os.environ, env, clear=True),
            pytest.raises(ValueError, match="Invalid auth type"),
        ):
            BitbucketConfig.from_env(config_dir=tmp_path)

    def test_config_file(self, tmp_path):
        """Test that the config file supplies missing values."""
        (tmp_path / "mcp.config.json").write_text(
            json.dumps(
                {
                    "bitbucket": {
                        "environments": {
                            "ATLASSIAN_USER_EMAIL": "file@example.com",
                            "ATLASSIAN_API_TOKEN": "file_token",
                            "ATLASSIAN_SITE_URL": "https://bitbucket.example.com",
                        },
                        "defaultDestinationBranch": "main",
                    }
                }
            )
        )
        with patch.dict(os.environ, {}, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.email == "file@example.com"
        assert config.token == "file_token"
        assert config.is_cloud is False
        assert config.default_destination_branch == "main"

    def test_environment_wins_over_config_file(self, tmp_path):
        """Test the precedence of process environment over the file."""
        (tmp_path / "mcp.config.json").write_text(
            json.dumps(
                {
                    "bitbucket": {
                        "environments": {
                            "ATLASSIAN_USER_EMAIL": "file@example.com",
                            "ATLASSIAN_API_TOKEN": "file_token",
                            "BITBUCKET_DEFAULT_DEST_BRANCH": "release",
                        },
                        "defaultDestinationBranch": "main",
                    }
                }
            )
        )
        with patch.dict(os.environ, CREDENTIALS, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.email == "test@example.com"
        assert config.token == "test_token"
        assert config.default_destination_branch == "release"

    def test_invalid_config_file_is_ignored(self, tmp_path):
        """Test that an unreadable config file does not stop loading."""
        (tmp_path / "mcp.config.json").write_text("{not json")
        with patch.dict(os.environ, CREDENTIALS, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.email == "test@example.com"

    def test_config_file_without_bitbucket_section(self, tmp_path):
        """Test that other sections of the config file are ignored."""
        (tmp_path / "mcp.config.json").write_text(json.dumps({"jira": {}}))
        with patch.dict(os.environ, CREDENTIALS, clear=True):
            config = BitbucketConfig.from_env(config_dir=tmp_path)

        assert config.default_destination_branch is None
