"""Client message model for the OAUTHBEARER mechanism."""

from __future__ import annotations

from pydantic import Field

from oauthbearer.models.base import OAuthBearerBaseModel
from oauthbearer.models.constants import BEARER_SCHEME


class InitialClientMessage(OAuthBearerBaseModel):
    """Structured form of the client's initial OAUTHBEARER message.

    Created once per authentication attempt by the parser and consumed
    once by the evaluator.

    Attributes:
        authorization_id: Authorization identity from the GS2 header, if sent.
        auth: Raw value of the ``auth`` key, e.g. ``"Bearer abc123"``.
        raw_bytes: Exact copy of the message as received.
    """

    authorization_id: str | None = Field(
        default=None, description="Authorization identity from the GS2 header"
    )
    auth: str = Field(..., min_length=1, description="Value of the auth key")
    raw_bytes: bytes = Field(..., description="Original client message")

    @property
    def is_bearer_token(self) -> bool:
        """True when ``auth`` reads ``Bearer <token>`` with a non-empty token."""
        scheme, sep, token = self.auth.partition(" ")
        return bool(sep) and bool(token) and scheme.lower() == BEARER_SCHEME.lower()

    @property
    def token(self) -> str | None:
        """Bearer token (text after the first space), or None if not a bearer credential."""
        if not self.is_bearer_token:
            return None
        return self.auth[self.auth.index(" ") + 1 :]
