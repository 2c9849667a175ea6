"""Property-based tests for the initial client message parser.

Arbitrary bytes either parse into a message that keeps the exact input, or
fail with one of the mechanism's own errors. Parsing is deterministic.
"""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from oauthbearer.errors import (
    AuthorizationUnsupportedError,
    ChannelBindingUnsupportedError,
    InvalidMessageError,
    InvalidMessageReceivedError,
)
from oauthbearer.mechanism.parser import parse_initial_client_message
from oauthbearer.models.messages import InitialClientMessage

MECHANISM_ERRORS = (
    ChannelBindingUnsupportedError,
    InvalidMessageError,
    InvalidMessageReceivedError,
    AuthorizationUnsupportedError,
)

# conftest.py's autouse fixture only clears environment variables.
_settings = settings(suppress_health_check=[HealthCheck.function_scoped_fixture])

# --- Shared strategies ---

_TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~+/"
_KEY_ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def st_token() -> st.SearchStrategy[str]:
    """Generate bearer tokens (b64token characters, no padding)."""
    return st.text(alphabet=_TOKEN_ALPHABET, min_size=1, max_size=80)


def st_authzid() -> st.SearchStrategy[str]:
    """Generate authorization ids: any text without the GS2 separator."""
    return st.text(alphabet=st.characters(exclude_characters=","), max_size=40)


def st_extra_pair() -> st.SearchStrategy[str]:
    """Generate ``key=value`` pairs whose key is never ``auth``."""
    key = st.text(alphabet=_KEY_ALPHABET, min_size=1, max_size=10).filter(lambda k: k != "auth")
    value = st.text(alphabet=_TOKEN_ALPHABET + " :", max_size=30)
    return st.builds(lambda k, v: f"{k}={v}", key, value)


@st.composite
def st_client_message(draw: st.DrawFn) -> tuple[bytes, str | None, str]:
    """Generate well-formed messages; returns (data, authzid, token)."""
    authzid = draw(st.none() | st_authzid())
    token = draw(st_token())
    before = draw(st.lists(st_extra_pair(), max_size=3))
    after = draw(st.lists(st_extra_pair(), max_size=3))
    pairs = "%x01".join([*before, f"auth=Bearer {token}", *after])
    header = "n,," if authzid is None else f"n,a={authzid},"
    return f"{header}{pairs}".encode(), authzid, token


def _outcome(data: bytes) -> InitialClientMessage | type[Exception]:
    try:
        return parse_initial_client_message(data)
    except MECHANISM_ERRORS as e:
        return type(e)


class TestArbitraryInput:
    """Parser behavior on arbitrary bytes."""

    @_settings
    @given(data=st.binary(max_size=256))
    def test_only_mechanism_errors_are_raised(self, data: bytes) -> None:
        outcome = _outcome(data)

        if isinstance(outcome, InitialClientMessage):
            assert outcome.raw_bytes == data
            assert outcome.auth
        else:
            assert issubclass(outcome, MECHANISM_ERRORS)

    @_settings
    @given(data=st.binary(max_size=256))
    def test_parsing_is_deterministic(self, data: bytes) -> None:
        assert _outcome(data) == _outcome(data)

    @_settings
    @given(tail=st.binary(max_size=256))
    def test_header_prefixed_bytes(self, tail: bytes) -> None:
        data = b"n,," + tail
        outcome = _outcome(data)

        if isinstance(outcome, InitialClientMessage):
            assert outcome.raw_bytes == data
            assert outcome.authorization_id is None
        else:
            assert outcome in (InvalidMessageError, InvalidMessageReceivedError)


class TestWellFormedMessages:
    """Parser behavior on generated well-formed messages."""

    @_settings
    @given(message=st_client_message())
    def test_fields_are_extracted(self, message: tuple[bytes, str | None, str]) -> None:
        data, authzid, token = message

        parsed = parse_initial_client_message(data)

        assert parsed.raw_bytes == data
        assert parsed.authorization_id == authzid
        assert parsed.auth == f"Bearer {token}"
        assert parsed.token == token

    @_settings
    @given(message=st_client_message())
    def test_parsing_is_repeatable(self, message: tuple[bytes, str | None, str]) -> None:
        data = message[0]

        assert parse_initial_client_message(data) == parse_initial_client_message(data)
