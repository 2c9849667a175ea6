"""Mock evidence verifier for OAUTHBEARER tests.

MockVerifier returns a pre-set verdict, records every evidence it is
given and can be told to fail, so tests can drive each branch of the
mechanism without a token authority.
"""

from __future__ import annotations

from threading import Lock

from oauthbearer.errors import UnsupportedEvidenceKindError
from oauthbearer.models.evidence import Evidence


class MockVerifier:
    """Configurable evidence verifier for tests.

    Attributes:
        verdict: Value returned by verify_evidence().
        seen: Every evidence passed to verify_evidence(), in call order.
    """

    def __init__(self, verdict: bool = True) -> None:
        self.verdict = verdict
        self.seen: list[Evidence] = []
        self._failure: BaseException | None = None
        self._lock = Lock()

    def set_failure(self, exc: BaseException | None) -> None:
        """Make verify_evidence() raise ``exc`` (None to clear)."""
        self._failure = exc

    def refuse_all(self) -> None:
        """Make verify_evidence() raise UnsupportedEvidenceKindError."""
        self._failure = UnsupportedEvidenceKindError(
            evidence_kind="bearer_token", verifier=type(self).__name__
        )

    def verify_evidence(self, evidence: Evidence) -> bool:
        with self._lock:
            self.seen.append(evidence)
        if self._failure is not None:
            raise self._failure
        return self.verdict

    def reset(self) -> None:
        """Clear recorded evidence and any configured failure."""
        with self._lock:
            self.seen.clear()
        self._failure = None
