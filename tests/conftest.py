"""Shared test fixtures for alidnshook tests."""

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from alidnshook.api import AliyunRequestBuilder
from alidnshook.config import Credentials, EnvironmentSettings


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


# ============================================================================
# Project Directory Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials in the environment out of the tests."""
    monkeypatch.delenv("ALIDNSHOOK_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("ALIDNSHOOK_ACCESS_KEY_SECRET", raising=False)


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create a temporary project directory with alidnshook.yaml."""
    config_data = {
        "aliyun": {
            "access_key_id": "file-key-id",
            "access_key_secret": "file-key-secret",
            "domain_name": "_acme-challenge.example.com",
            "record_value": "configured-token",
        },
    }

    config_file = tmp_path / "alidnshook.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_data, f)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def empty_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create a temporary directory without any config file."""
    workdir = tmp_path / "empty"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


# ============================================================================
# Credential Fixtures
# ============================================================================


@pytest.fixture
def credentials() -> Credentials:
    """Provide a test AccessKey pair."""
    return Credentials(key_id="testid", key_secret="testsecret")


@pytest.fixture
def mock_env_settings():
    """Mock environment settings with test credentials."""
    settings = EnvironmentSettings(
        access_key_id="env-key-id",
        access_key_secret="env-key-secret",
    )
    with patch("alidnshook.commands.challenge.load_env_settings", return_value=settings):
        yield settings


@pytest.fixture
def mock_env_settings_missing():
    """Mock environment settings without credentials."""
    settings = EnvironmentSettings(access_key_id=None, access_key_secret=None)
    with patch("alidnshook.commands.challenge.load_env_settings", return_value=settings):
        yield settings


# ============================================================================
# Request Builder Fixtures
# ============================================================================


FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
FIXED_NONCE = "3ee8c1b8-83d3-44af-a94f-4e0ad82fd6cf"


@pytest.fixture
def fixed_time() -> datetime:
    """Provide the pinned request timestamp."""
    return FIXED_TIME


@pytest.fixture
def fixed_nonce() -> str:
    """Provide the pinned signature nonce."""
    return FIXED_NONCE


@pytest.fixture
def fixed_builder(credentials: Credentials) -> AliyunRequestBuilder:
    """Provide a request builder with a pinned clock and nonce."""
    return AliyunRequestBuilder(
        credentials,
        clock=lambda: FIXED_TIME,
        nonce_factory=lambda: FIXED_NONCE,
    )


# ============================================================================
# Mock Fixtures - HTTP/API
# ============================================================================


def _make_response(text: str = "", status_code: int = 200) -> MagicMock:
    return MagicMock(
        status_code=status_code,
        text=text,
        is_success=200 <= status_code < 300,
    )


@pytest.fixture
def make_response():
    """Provide a factory for httpx.Response stand-ins."""
    return _make_response


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.Client for API calls."""
    with patch("httpx.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client
        yield mock_client


@pytest.fixture
def mock_provider():
    """Mock the DNS provider used by the challenge commands."""
    with patch("alidnshook.commands.challenge.get_dns_provider") as mock_get:
        provider = MagicMock()
        mock_get.return_value = provider
        yield provider
