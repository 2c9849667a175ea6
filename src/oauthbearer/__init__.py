"""Server-side OAUTHBEARER SASL mechanism (RFC 7628).

Decodes the client's initial message, rejects channel binding, hands the
bearer token to an injected evidence verifier and answers with an empty
success message or a base64-encoded ``invalid_token`` error.

Example:
    >>> from oauthbearer import OAuthBearerServer, StaticTokenVerifier
    >>> server = OAuthBearerServer(verifier=StaticTokenVerifier({"abc123"}))
    >>> server.evaluate_response(b"n,,auth=Bearer abc123")
    b''
"""

__version__ = "0.1.0"

from oauthbearer.auth import (
    EvidenceVerifier,
    IntrospectionVerifier,
    JWKSVerifier,
    StaticTokenVerifier,
)
from oauthbearer.config import ServerConfig
from oauthbearer.errors import (
    AuthorizationUnsupportedError,
    ChannelBindingUnsupportedError,
    InvalidMessageError,
    InvalidMessageReceivedError,
    MechanismError,
    OAuthBearerError,
    UnsupportedEvidenceKindError,
)
from oauthbearer.mechanism import (
    OAuthBearerServer,
    build_error_response,
    parse_initial_client_message,
)
from oauthbearer.models import (
    CONFIG_OPENID_CONFIGURATION_URL,
    MECHANISM_NAME,
    BearerTokenEvidence,
    Evidence,
    InitialClientMessage,
)

__all__ = [
    "AuthorizationUnsupportedError",
    "BearerTokenEvidence",
    "CONFIG_OPENID_CONFIGURATION_URL",
    "ChannelBindingUnsupportedError",
    "Evidence",
    "EvidenceVerifier",
    "InitialClientMessage",
    "IntrospectionVerifier",
    "InvalidMessageError",
    "InvalidMessageReceivedError",
    "JWKSVerifier",
    "MECHANISM_NAME",
    "MechanismError",
    "OAuthBearerError",
    "OAuthBearerServer",
    "ServerConfig",
    "StaticTokenVerifier",
    "UnsupportedEvidenceKindError",
    "__version__",
    "build_error_response",
    "parse_initial_client_message",
]
