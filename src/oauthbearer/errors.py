"""OAUTHBEARER Error Taxonomy.

This module defines the error hierarchy for the OAUTHBEARER SASL mechanism,
providing structured error handling with specific error codes
and context information.

Every failure of an authentication attempt is terminal: the mechanism
never retries, it raises one of the errors below and the caller decides
whether to abort the session or prompt for re-authentication.
"""
from __future__ import annotations

from typing import Any


class OAuthBearerError(Exception):
    """Base exception for all OAUTHBEARER errors.

    Attributes:
        code: Error code following the oauthbearer:<area>/<kind> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class MechanismError(OAuthBearerError):
    """Base class for errors raised by a mechanism instance.

    Carries the name of the mechanism that rejected the attempt so
    callers hosting several mechanisms can tell them apart.

    Attributes:
        mechanism_name: Name of the mechanism that raised the error
    """

    def __init__(
        self,
        code: str,
        mechanism_name: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=f"[{mechanism_name}] {message}",
            details={"mechanism_name": mechanism_name, **(details or {})},
        )
        self.mechanism_name = mechanism_name


class ChannelBindingUnsupportedError(MechanismError):
    """Raised when the client requests channel binding.

    The GS2 channel-binding flag must be ``n``; this server never
    supports channel binding for OAUTHBEARER.

    Attributes:
        flag: The channel-binding flag sent by the client
    """

    def __init__(
        self, mechanism_name: str, flag: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            code="oauthbearer:mechanism/channel_binding_unsupported",
            mechanism_name=mechanism_name,
            message=f"Channel binding not supported (flag {flag!r})",
            details={"flag": flag, **(details or {})},
        )
        self.flag = flag


class InvalidMessageError(MechanismError):
    """Raised when a client message field is present but wrong.

    Covers a malformed GS2 authorization-identity field, a missing
    ``auth`` key and an ``auth`` value using a scheme other than Bearer.

    Attributes:
        reason: Short description of what was wrong
    """

    def __init__(
        self, mechanism_name: str, reason: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            code="oauthbearer:mechanism/invalid_message",
            mechanism_name=mechanism_name,
            message=f"Invalid client message: {reason}",
            details={"reason": reason, **(details or {})},
        )
        self.reason = reason


class InvalidMessageReceivedError(MechanismError):
    """Raised when the client message framing is truncated or malformed.

    This error occurs when the message ends before a required byte or
    delimiter, or when a text segment is not valid UTF-8.
    """

    def __init__(
        self,
        mechanism_name: str,
        reason: str = "message truncated",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="oauthbearer:mechanism/invalid_message_received",
            mechanism_name=mechanism_name,
            message=f"Invalid message received: {reason}",
            details={"reason": reason, **(details or {})},
        )
        self.reason = reason


class AuthorizationUnsupportedError(MechanismError):
    """Raised when the evidence verifier cannot process bearer-token evidence."""

    def __init__(
        self,
        mechanism_name: str,
        evidence_kind: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="oauthbearer:mechanism/authorization_unsupported",
            mechanism_name=mechanism_name,
            message=f"Authorization not supported for evidence kind '{evidence_kind}'",
            details={"evidence_kind": evidence_kind, **(details or {})},
        )
        self.evidence_kind = evidence_kind


class UnsupportedEvidenceKindError(OAuthBearerError):
    """Raised by an evidence verifier that cannot handle the given evidence.

    The mechanism translates this into AuthorizationUnsupportedError.

    Attributes:
        evidence_kind: Kind of the rejected evidence
        verifier: Name of the verifier class
    """

    def __init__(
        self, evidence_kind: str, verifier: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            code="oauthbearer:evidence/unsupported_kind",
            message=f"{verifier} cannot verify evidence of kind '{evidence_kind}'",
            details={"evidence_kind": evidence_kind, "verifier": verifier, **(details or {})},
        )
        self.evidence_kind = evidence_kind
        self.verifier = verifier
