"""Evidence verifiers for the OAUTHBEARER mechanism.

Public exports:
    EvidenceVerifier: Protocol every verifier implements
    StaticTokenVerifier: Accepts tokens from a fixed set
    IntrospectionVerifier: RFC 7662 token introspection verifier
    TokenInfo: Introspection response model
    JWKSVerifier: JWT verifier with JWKS key rotation support
"""

from oauthbearer.auth.introspection import IntrospectionVerifier, TokenInfo
from oauthbearer.auth.jwks import Claims, JWKSVerifier, fetch_keys, validate_jwt
from oauthbearer.auth.verifier import EvidenceVerifier, StaticTokenVerifier

__all__ = [
    "Claims",
    "EvidenceVerifier",
    "IntrospectionVerifier",
    "JWKSVerifier",
    "StaticTokenVerifier",
    "TokenInfo",
    "fetch_keys",
    "validate_jwt",
]
