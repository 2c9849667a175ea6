"""JWT bearer-token verifier backed by a JSON Web Key Set.

Fetches the key set from the provider's JWKS URI (or takes a fixed one),
validates JWT signatures with joserfc and checks ``exp``, ``nbf`` and an
optional required scope. Keys are cached for 24 hours; a failed
signature check refetches them once to pick up key rotation.
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Any, Optional

import httpx
from joserfc import jwk
from joserfc import jwt as jose_jwt
from joserfc.errors import JoseError

from oauthbearer.auth.utils import parse_scope
from oauthbearer.auth.verifier import require_bearer_token
from oauthbearer.models.evidence import Evidence
from oauthbearer.observability import get_logger
from oauthbearer.utils.sanitization import sanitize_token

logger = get_logger(__name__)

JWKS_CACHE_TTL_SECONDS = 86400.0
DEFAULT_TIMEOUT_SECONDS = 10.0

# Type alias for decoded JWT claims
Claims = dict[str, Any]


class _JWKSCacheEntry:
    """Cache entry for JWKS KeySet with TTL."""

    def __init__(self, key_set: jwk.KeySet, ttl: float) -> None:
        self.key_set = key_set
        self.expires_at = time.time() + ttl

    def is_expired(self) -> bool:
        return time.time() >= self.expires_at


def fetch_keys(
    jwks_uri: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: Optional[httpx.BaseTransport] = None,
) -> jwk.KeySet:
    """Fetch JWKS from URI and return a joserfc KeySet.

    Raises:
        httpx.HTTPError: On network or protocol errors.
    """
    kwargs: dict[str, Any] = {"timeout": httpx.Timeout(timeout)}
    if transport is not None:
        kwargs["transport"] = transport

    with httpx.Client(**kwargs) as client:
        resp = client.get(jwks_uri)
        resp.raise_for_status()
        data = resp.json()

    key_set = jwk.KeySet.import_key_set(data)
    logger.info("oauthbearer.jwks.fetched", uri=jwks_uri, key_count=len(key_set.keys))
    return key_set


def validate_jwt(token: str, key_set: jwk.KeySet) -> Claims:
    """Validate JWT signature and return claims.

    Does not check exp, nbf or scope; see JWKSVerifier.check_claims.

    Raises:
        JoseError: If signature is invalid or token is malformed.
    """
    token_obj = jose_jwt.decode(token, key_set)
    return dict(token_obj.claims)


class JWKSVerifier:
    """Evidence verifier for JWT bearer tokens.

    Either ``jwks_uri`` or ``key_set`` must be given. With a fixed
    ``key_set`` no network access happens.

    Example:
        >>> verifier = JWKSVerifier(
        ...     jwks_uri="https://auth.example.com/.well-known/jwks.json",
        ...     required_scope="mail:read",
        ... )
        >>> server = OAuthBearerServer(verifier=verifier)
    """

    def __init__(
        self,
        jwks_uri: Optional[str] = None,
        *,
        key_set: Optional[jwk.KeySet] = None,
        required_scope: Optional[str] = None,
        leeway_seconds: int = 0,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if jwks_uri is None and key_set is None:
            raise ValueError("JWKSVerifier needs jwks_uri or key_set")
        self._jwks_uri = jwks_uri
        self._static_key_set = key_set
        self._required_scope = required_scope
        self._leeway = leeway_seconds
        self._timeout = timeout
        self._transport = transport
        self._keys_cache: Optional[_JWKSCacheEntry] = None
        self._lock = Lock()

    def get_keys(self) -> jwk.KeySet:
        """Return the key set, fetching it when not cached or expired."""
        if self._static_key_set is not None:
            return self._static_key_set
        with self._lock:
            if self._keys_cache is not None and not self._keys_cache.is_expired():
                return self._keys_cache.key_set

        if self._jwks_uri is None:
            raise ValueError("JWKSVerifier needs jwks_uri or key_set")
        key_set = fetch_keys(self._jwks_uri, timeout=self._timeout, transport=self._transport)

        with self._lock:
            self._keys_cache = _JWKSCacheEntry(key_set, JWKS_CACHE_TTL_SECONDS)
        return key_set

    def _invalidate_keys_cache(self) -> None:
        with self._lock:
            self._keys_cache = None

    def validate_token(self, token: str) -> Claims:
        """Validate the JWT signature, refetching keys once on failure.

        Raises:
            JoseError: If validation fails after refetch.
            httpx.HTTPError: On network errors during fetch.
        """
        key_set = self.get_keys()
        try:
            return validate_jwt(token, key_set)
        except JoseError:
            if self._static_key_set is not None:
                raise
            self._invalidate_keys_cache()
            return validate_jwt(token, self.get_keys())

    def check_claims(self, claims: Claims) -> bool:
        """Check exp, nbf and the required scope."""
        now = time.time()
        exp = claims.get("exp")
        if isinstance(exp, (int, float)) and exp + self._leeway < now:
            logger.info("oauthbearer.jwt.expired", sub=claims.get("sub"))
            return False
        nbf = claims.get("nbf")
        if isinstance(nbf, (int, float)) and nbf - self._leeway > now:
            logger.info("oauthbearer.jwt.not_yet_valid", sub=claims.get("sub"))
            return False
        if self._required_scope is not None:
            if self._required_scope not in parse_scope(claims.get("scope")):
                logger.info(
                    "oauthbearer.jwt.insufficient_scope",
                    sub=claims.get("sub"),
                    required_scope=self._required_scope,
                )
                return False
        return True

    def verify_evidence(self, evidence: Evidence) -> bool:
        """Return True if the token is a correctly signed, current JWT.

        Raises:
            UnsupportedEvidenceKindError: For non-bearer evidence.
            httpx.HTTPError: On network errors while fetching keys.
        """
        token = require_bearer_token(evidence, self).token
        try:
            claims = self.validate_token(token)
        except JoseError as e:
            logger.info(
                "oauthbearer.jwt.invalid",
                token_prefix=sanitize_token(token),
                error=type(e).__name__,
            )
            return False
        return self.check_claims(claims)
