"""OAUTHBEARER SASL server mechanism (RFC 7628).

Single-shot: the client's initial message is parsed, its bearer token is
handed to the injected EvidenceVerifier, and the server answers with an
empty message (accepted) or a base64-encoded JSON error (rejected).

Example:
    >>> from oauthbearer.auth import StaticTokenVerifier
    >>> server = OAuthBearerServer(
    ...     verifier=StaticTokenVerifier({"abc123"}),
    ...     server_config={"openid-configuration": "https://issuer.example/.well-known"},
    ... )
    >>> server.evaluate_response(b"n,,auth=Bearer abc123")
    b''
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from typing import Any

from pydantic import Field

from oauthbearer.auth.verifier import EvidenceVerifier
from oauthbearer.config import ServerConfig
from oauthbearer.errors import (
    AuthorizationUnsupportedError,
    InvalidMessageError,
    UnsupportedEvidenceKindError,
)
from oauthbearer.mechanism.parser import parse_initial_client_message
from oauthbearer.models.base import OAuthBearerBaseModel
from oauthbearer.models.constants import (
    CONFIG_OPENID_CONFIGURATION_URL,
    INVALID_TOKEN_STATUS,
    MECHANISM_NAME,
)
from oauthbearer.models.evidence import BearerTokenEvidence
from oauthbearer.models.messages import InitialClientMessage
from oauthbearer.observability import attempt_context, get_logger, sanitize_for_logging
from oauthbearer.utils.sanitization import sanitize_token, sanitize_url

logger = get_logger(__name__)

SUCCESS_RESPONSE = b""


class InvalidTokenStatus(OAuthBearerBaseModel):
    """Server error challenge sent when the token is rejected (RFC 7628 section 3.2.2)."""

    status: str = Field(default=INVALID_TOKEN_STATUS)
    openid_configuration: str | None = Field(
        default=None, alias=CONFIG_OPENID_CONFIGURATION_URL
    )


def build_error_response(server_config: Mapping[str, Any]) -> bytes:
    """Build the base64-encoded ``invalid_token`` error payload.

    The discovery URL from ``server_config`` is included, converted to
    text, when configured.

    Example:
        >>> build_error_response({})
        b'eyJzdGF0dXMiOiJpbnZhbGlkX3Rva2VuIn0='
    """
    discovery_url = server_config.get(CONFIG_OPENID_CONFIGURATION_URL)
    payload = InvalidTokenStatus(
        openid_configuration=str(discovery_url) if discovery_url is not None else None
    )
    body = payload.model_dump_json(by_alias=True, exclude_none=True)
    return base64.b64encode(body.encode("utf-8"))


class OAuthBearerServer:
    """Server side of the OAUTHBEARER mechanism.

    The name, verifier and configuration are fixed at construction time;
    one instance may serve concurrent authentication attempts as long as
    the verifier is thread-safe.

    Attributes:
        mechanism_name: Name reported in errors and logs.
        verifier: Capability that judges bearer-token evidence.
        server_config: Read-only server configuration.
    """

    def __init__(
        self,
        verifier: EvidenceVerifier,
        server_config: Mapping[str, Any] | None = None,
        *,
        mechanism_name: str = MECHANISM_NAME,
    ) -> None:
        self._mechanism_name = mechanism_name
        self._verifier = verifier
        self._server_config = (
            server_config if isinstance(server_config, ServerConfig) else ServerConfig(server_config)
        )

    @property
    def mechanism_name(self) -> str:
        return self._mechanism_name

    @property
    def verifier(self) -> EvidenceVerifier:
        return self._verifier

    @property
    def server_config(self) -> ServerConfig:
        return self._server_config

    def parse_initial_client_message(self, data: bytes) -> InitialClientMessage:
        """Parse the client's initial message; see parse_initial_client_message."""
        message = parse_initial_client_message(data, mechanism_name=self._mechanism_name)
        logger.debug(
            "oauthbearer.message.parsed",
            **sanitize_for_logging(
                {
                    "mechanism": self._mechanism_name,
                    "authzid": message.authorization_id,
                    "auth": message.auth,
                    "size": len(message.raw_bytes),
                }
            ),
        )
        return message

    def evaluate_initial_response(self, message: InitialClientMessage) -> bytes:
        """Verify the bearer token in ``message`` and build the server response.

        Returns:
            Empty bytes when the token is verified, otherwise the
            base64-encoded ``invalid_token`` error payload.

        Raises:
            InvalidMessageError: ``auth`` is not a Bearer credential.
            AuthorizationUnsupportedError: The verifier cannot handle
                bearer-token evidence.
        """
        token = message.token
        if token is None:
            scheme = message.auth.partition(" ")[0]
            logger.warning(
                "oauthbearer.auth.unsupported_scheme",
                mechanism=self._mechanism_name,
                scheme=sanitize_token(scheme),
            )
            raise InvalidMessageError(self._mechanism_name, "unsupported auth scheme")

        evidence = BearerTokenEvidence(token=token)
        try:
            verified = self._verifier.verify_evidence(evidence)
        except UnsupportedEvidenceKindError as e:
            raise AuthorizationUnsupportedError(
                self._mechanism_name,
                evidence_kind=e.evidence_kind,
                details={"verifier": e.verifier},
            ) from e

        if verified:
            logger.info(
                "oauthbearer.evidence.verified",
                mechanism=self._mechanism_name,
                authzid=message.authorization_id,
            )
            return SUCCESS_RESPONSE

        discovery_url = self._server_config.openid_configuration_url
        logger.info(
            "oauthbearer.evidence.rejected",
            **sanitize_for_logging(
                {
                    "mechanism": self._mechanism_name,
                    "authzid": message.authorization_id,
                    "auth": message.auth,
                    "discovery_url": sanitize_url(discovery_url) if discovery_url else None,
                }
            ),
        )
        return build_error_response(self._server_config)

    def evaluate_response(self, data: bytes, *, attempt_id: str | None = None) -> bytes:
        """Run one complete authentication attempt on raw client bytes.

        Equivalent to parsing ``data`` and evaluating the result. Events
        logged during the attempt carry ``attempt_id`` (generated when not
        given) and the mechanism name.
        """
        with attempt_context(attempt_id, mechanism=self._mechanism_name):
            return self.evaluate_initial_response(self.parse_initial_client_message(data))
