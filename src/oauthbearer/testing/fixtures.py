"""Pytest fixtures and context managers for OAUTHBEARER tests.

Fixtures (use with pytest):
    mock_verifier: MockVerifier that accepts every token.
    rejecting_verifier: MockVerifier that rejects every token.
    oauthbearer_server: OAuthBearerServer wired to mock_verifier.

Context managers:
    test_server(): Yields an OAuthBearerServer and its MockVerifier.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import pytest

from oauthbearer.mechanism.server import OAuthBearerServer
from oauthbearer.testing.mocks import MockVerifier

DEFAULT_TEST_DISCOVERY_URL = "https://issuer.example/.well-known"


@pytest.fixture
def mock_verifier() -> MockVerifier:
    return MockVerifier(verdict=True)


@pytest.fixture
def rejecting_verifier() -> MockVerifier:
    return MockVerifier(verdict=False)


@pytest.fixture
def oauthbearer_server(mock_verifier: MockVerifier) -> OAuthBearerServer:
    """OAuthBearerServer without discovery URL, backed by mock_verifier."""
    return OAuthBearerServer(verifier=mock_verifier)


@contextmanager
def test_server(
    verdict: bool = True,
    server_config: Mapping[str, Any] | None = None,
) -> Iterator[tuple[OAuthBearerServer, MockVerifier]]:
    """Yield a server and its verifier; recorded evidence is cleared on exit.

    Example:
        >>> with test_server(verdict=False) as (server, verifier):
        ...     server.evaluate_response(b"n,,auth=Bearer abc")
    """
    verifier = MockVerifier(verdict=verdict)
    try:
        yield OAuthBearerServer(verifier=verifier, server_config=server_config), verifier
    finally:
        verifier.reset()


# Not a test despite the test_ prefix
test_server.__test__ = False  # type: ignore[attr-defined]
