"""Evidence verification capability for the OAUTHBEARER mechanism.

The mechanism does not judge tokens itself: it hands BearerTokenEvidence
to an EvidenceVerifier passed in at construction time. Implementations
must be safe to call from several threads at once.
"""

from __future__ import annotations

import hmac
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from oauthbearer.errors import UnsupportedEvidenceKindError
from oauthbearer.models.evidence import BearerTokenEvidence, Evidence


@runtime_checkable
class EvidenceVerifier(Protocol):
    """Decides whether presented evidence is valid.

    ``verify_evidence`` returns True for valid evidence and False for
    invalid evidence. It raises UnsupportedEvidenceKindError for evidence
    it cannot judge at all.
    """

    def verify_evidence(self, evidence: Evidence) -> bool: ...


def require_bearer_token(evidence: Evidence, verifier: object) -> BearerTokenEvidence:
    """Return ``evidence`` narrowed to BearerTokenEvidence.

    Raises:
        UnsupportedEvidenceKindError: If the evidence is of another kind.
    """
    if not isinstance(evidence, BearerTokenEvidence):
        raise UnsupportedEvidenceKindError(
            evidence_kind=evidence.kind, verifier=type(verifier).__name__
        )
    return evidence


class StaticTokenVerifier:
    """Accepts bearer tokens from a fixed set.

    Tokens are compared in constant time. Useful for tests and for
    service-to-service setups with pre-shared tokens.

    Example:
        >>> verifier = StaticTokenVerifier({"abc123"})
        >>> verifier.verify_evidence(BearerTokenEvidence(token="abc123"))
        True
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens = tuple(t.encode("utf-8") for t in tokens)

    def verify_evidence(self, evidence: Evidence) -> bool:
        presented = require_bearer_token(evidence, self).token.encode("utf-8")
        matched = False
        for known in self._tokens:
            # must visit every known token
            matched |= hmac.compare_digest(presented, known)
        return matched
