"""OAUTHBEARER mechanism: message parsing and response evaluation."""

from oauthbearer.mechanism.cursor import ByteCursor, CursorExhaustedError
from oauthbearer.mechanism.parser import get_value, parse_initial_client_message
from oauthbearer.mechanism.server import (
    InvalidTokenStatus,
    OAuthBearerServer,
    build_error_response,
)

__all__ = [
    "ByteCursor",
    "CursorExhaustedError",
    "InvalidTokenStatus",
    "OAuthBearerServer",
    "build_error_response",
    "get_value",
    "parse_initial_client_message",
]
