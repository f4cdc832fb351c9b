"""
Global test configuration.
"""

from collections.abc import Callable
from contextlib import contextmanager
import logging
import os
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from mnotify.client.http_client import HttpClient
from mnotify.config import FrozenConfig

TEST_BASE_URL = "https://api.mnotify.com/api"


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_mnotify_env(request, monkeypatch):
    """Ensure a clean MNOTIFY_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("MNOTIFY_"):
            monkeypatch.delenv(key, raising=False)
    # Avoid DEBUG toggles affecting telemetry
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def neutral_home_config(request, monkeypatch, tmp_path):
    """Point the home-config path to an isolated temp file by default.

    Prevents reading a developer's real ~/.config/mnotify.toml during tests.
    """
    if request.node.get_closest_marker("allow_real_home_config"):
        return

    fake_home_dir = tmp_path / "home_config_isolated"
    fake_home_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("MNOTIFY_CONFIG_HOME", str(fake_home_dir / "mnotify.toml"))


@pytest.fixture
def isolated_config_sources(tmp_path, monkeypatch):
    """Write throwaway pyproject/home config files and chdir into the project.

    Returns a context manager factory; the project directory is yielded so
    tests can pass it as ``project_root``.
    """

    @contextmanager
    def _setup(
        *,
        pyproject_content: str = "",
        home_content: str = "",
        env_vars: dict[str, str] | None = None,
    ):
        project_dir = tmp_path / "project"
        project_dir.mkdir(exist_ok=True)
        if pyproject_content:
            (project_dir / "pyproject.toml").write_text(pyproject_content)

        home_config_path = tmp_path / "home" / "mnotify.toml"
        home_config_path.parent.mkdir(exist_ok=True)
        if home_content:
            home_config_path.write_text(home_content)

        clean_env = {k: v for k, v in os.environ.items() if not k.startswith("MNOTIFY_")}
        for key, value in (env_vars or {}).items():
            clean_env[key if key.startswith("MNOTIFY_") else f"MNOTIFY_{key.upper()}"] = value
        clean_env["MNOTIFY_CONFIG_HOME"] = str(home_config_path)

        monkeypatch.chdir(project_dir)
        with patch.dict(os.environ, clean_env, clear=True):
            yield project_dir

    return _setup


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with mocked HTTP",
        "allow_env_pollution: Keep MNOTIFY_* variables from the real environment",
        "allow_real_home_config: Read the real ~/.config/mnotify.toml",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def mock_api_key():
    """Provide a consistent, fake API key for tests."""
    return "test_api_key_12345_67890"


@pytest.fixture
def base_url():
    return TEST_BASE_URL


@pytest.fixture
def frozen_config(mock_api_key) -> FrozenConfig:
    return FrozenConfig(
        api_key=mock_api_key, base_url=TEST_BASE_URL, timeout=10_000, max_retries=3
    )


@pytest.fixture
def http_client(mock_api_key) -> HttpClient:
    """A transport pointed at the production-shaped base URL (mock it with respx)."""
    return HttpClient(mock_api_key, base_url=TEST_BASE_URL)


@pytest.fixture
def make_mock_client(mock_api_key) -> Callable[..., HttpClient]:
    """Build an HttpClient whose requests are served by ``handler``."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response], **kwargs
    ) -> HttpClient:
        return HttpClient(
            mock_api_key,
            base_url=kwargs.pop("base_url", TEST_BASE_URL),
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


@pytest.fixture
def tmp_env_file(tmp_path) -> Callable[[str], Path]:
    def _write(content: str) -> Path:
        path = tmp_path / ".env"
        path.write_text(content)
        return path

    return _write
