"""Evidence types handed to evidence verifiers."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from oauthbearer.models.base import OAuthBearerBaseModel


class Evidence(OAuthBearerBaseModel):
    """A presented credential awaiting verification.

    Subclasses set ``kind`` so verifiers can reject evidence they do not handle.
    """

    kind: ClassVar[str] = "unknown"


class BearerTokenEvidence(Evidence):
    """An OAuth2 bearer token presented by the client."""

    kind: ClassVar[str] = "bearer_token"

    token: str = Field(..., min_length=1, repr=False, description="Opaque bearer token")
