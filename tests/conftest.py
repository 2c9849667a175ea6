"""Shared pytest fixtures for OAUTHBEARER tests."""

from __future__ import annotations

import pytest

from oauthbearer.mechanism.server import OAuthBearerServer
from oauthbearer.testing.mocks import MockVerifier

# Load oauthbearer.testing fixtures (mock_verifier, rejecting_verifier, oauthbearer_server)
pytest_plugins = ["oauthbearer.testing.fixtures"]


@pytest.fixture
def rejecting_server(rejecting_verifier: MockVerifier) -> OAuthBearerServer:
    return OAuthBearerServer(verifier=rejecting_verifier)


@pytest.fixture(autouse=True)
def _clear_oauthbearer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep OAUTHBEARER_* settings from the developer's shell out of tests."""
    for name in (
        "OAUTHBEARER_OPENID_CONFIGURATION_URL",
        "OAUTHBEARER_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
