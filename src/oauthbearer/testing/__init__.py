"""OAUTHBEARER testing utilities.

Modules:
    mocks: MockVerifier with a configurable verdict and evidence recording.
    fixtures: Pytest fixtures (mock_verifier, rejecting_verifier,
              oauthbearer_server) and the test_server() context manager.

Example:
    >>> from oauthbearer.testing import MockVerifier
    >>> verifier = MockVerifier(verdict=False)
"""

from oauthbearer.testing.mocks import MockVerifier

__all__ = ["MockVerifier"]
