"""OAuth2 token introspection verifier (RFC 7662).

Verifies opaque bearer tokens against the provider's introspection
endpoint. Results are cached using TTL derived from the token's
remaining lifetime.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from threading import Lock
from typing import Any, Optional

import httpx
from pydantic import Field

from oauthbearer.auth.utils import parse_scope
from oauthbearer.auth.verifier import require_bearer_token
from oauthbearer.models.base import OAuthBearerBaseModel
from oauthbearer.models.evidence import Evidence
from oauthbearer.observability import get_logger
from oauthbearer.utils.sanitization import sanitize_token

logger = get_logger(__name__)

# Default TTL for inactive token cache entries (reduce introspection endpoint load)
INACTIVE_TOKEN_CACHE_TTL_SECONDS = 60.0

# Max TTL cap for active token cache
MAX_ACTIVE_CACHE_TTL_SECONDS = 3600.0

# Buffer before expiry to consider token near-expired (seconds)
EXPIRY_BUFFER_SECONDS = 30

DEFAULT_TIMEOUT_SECONDS = 10.0


class TokenInfo(OAuthBearerBaseModel):
    """Token metadata from OAuth2 introspection (RFC 7662).

    Attributes:
        active: Whether the token is currently active.
        sub: Subject of the token.
        scope: List of scope strings.
        exp: Expiration timestamp (Unix). None if not provided.
        client_id: Client that requested the token (optional).
        username: Resource owner identifier (optional).
        token_type: Token type, typically "Bearer" (optional).
    """

    active: bool = Field(..., description="Whether the token is currently active")
    sub: str | None = Field(default=None, description="Subject of the token")
    scope: list[str] = Field(default_factory=list, description="Authorized scopes")
    exp: int | None = Field(default=None, description="Expiration timestamp (Unix)")
    client_id: str | None = Field(default=None, description="Client identifier")
    username: str | None = Field(default=None, description="Resource owner identifier")
    token_type: str | None = Field(default=None, description="Token type")

    @classmethod
    def from_response(cls, body: dict[str, Any]) -> TokenInfo:
        """Build TokenInfo from an introspection response body, tolerating odd types."""
        active = body.get("active", False)
        if not isinstance(active, bool):
            active = False

        exp = body.get("exp")
        exp_int: int | None = None
        if isinstance(exp, (int, float)) and not isinstance(exp, bool):
            try:
                exp_int = int(exp)
            except (OverflowError, ValueError):
                exp_int = None

        def _opt_str(name: str) -> str | None:
            value = body.get(name)
            return str(value) if value is not None else None

        return cls(
            active=active,
            sub=_opt_str("sub"),
            scope=parse_scope(body.get("scope")),
            exp=exp_int,
            client_id=_opt_str("client_id"),
            username=_opt_str("username"),
            token_type=_opt_str("token_type"),
        )

    def is_expired(self) -> bool:
        return self.exp is not None and self.exp <= time.time()

    def cache_ttl_seconds(self) -> float:
        """Compute cache TTL from token lifetime.

        Returns TTL for active tokens based on exp, or INACTIVE_TOKEN_CACHE_TTL_SECONDS
        for inactive tokens and tokens without exp.
        """
        if not self.active or self.exp is None:
            return INACTIVE_TOKEN_CACHE_TTL_SECONDS
        remaining = self.exp - time.time() - EXPIRY_BUFFER_SECONDS
        if remaining <= 0:
            return 0.0
        return min(float(remaining), MAX_ACTIVE_CACHE_TTL_SECONDS)


class _CacheEntry:
    """Cache entry for introspection results with TTL."""

    def __init__(self, info: TokenInfo, ttl: float) -> None:
        self.info = info
        self.expires_at = time.time() + ttl

    def is_expired(self) -> bool:
        return time.time() >= self.expires_at


class IntrospectionVerifier:
    """RFC 7662 introspection-backed evidence verifier with caching.

    Calls the provider's introspection endpoint (client credentials via
    Basic auth) and accepts the token when it is active and not expired.
    The call blocks the calling thread for at most ``timeout`` seconds.

    Example:
        >>> verifier = IntrospectionVerifier(
        ...     introspection_url="https://auth.example.com/oauth/introspect",
        ...     client_id="my-client",
        ...     client_secret="secret",
        ... )
        >>> server = OAuthBearerServer(verifier=verifier)
    """

    def __init__(
        self,
        introspection_url: str,
        client_id: str,
        client_secret: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
        max_cache_size: int = 1000,
    ) -> None:
        """Initialize the introspection verifier.

        Args:
            introspection_url: URL of the introspection endpoint (RFC 7662).
            client_id: OAuth2 client ID for Basic auth to the endpoint.
            client_secret: OAuth2 client secret for Basic auth.
            timeout: HTTP timeout in seconds.
            transport: Optional httpx transport for testing.
            max_cache_size: Maximum cached results (0 = unlimited).
        """
        self._url = introspection_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._transport = transport
        self._cache: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = Lock()
        self._max_size = max_cache_size

    def verify_evidence(self, evidence: Evidence) -> bool:
        """Return True if the bearer token is active and unexpired.

        Raises:
            UnsupportedEvidenceKindError: For non-bearer evidence.
            httpx.HTTPError: On network or protocol errors.
        """
        token = require_bearer_token(evidence, self).token
        info = self.introspect(token)
        return info.active and not info.is_expired()

    def introspect(self, token: str) -> TokenInfo:
        """Introspect a token, returning the cached result when still valid."""
        with self._lock:
            entry = self._cache.get(token)
            if entry is not None and not entry.is_expired():
                self._cache.move_to_end(token)
                return entry.info

        info = self._do_introspect(token)

        with self._lock:
            if token in self._cache:
                del self._cache[token]
            elif self._max_size > 0:
                while len(self._cache) >= self._max_size:
                    self._cache.popitem(last=False)
            self._cache[token] = _CacheEntry(info, info.cache_ttl_seconds())

        return info

    def _do_introspect(self, token: str) -> TokenInfo:
        kwargs: dict[str, Any] = {"timeout": httpx.Timeout(self._timeout)}
        if self._transport is not None:
            kwargs["transport"] = self._transport

        with httpx.Client(**kwargs) as client:
            resp = client.post(
                self._url,
                auth=(self._client_id, self._client_secret),
                data={"token": token, "token_type_hint": "access_token"},
                headers={"Accept": "application/json"},
            )
            resp.raise_for_status()
            body = resp.json()

        info = TokenInfo.from_response(body if isinstance(body, dict) else {})
        logger.debug(
            "oauthbearer.introspection.completed",
            token_prefix=sanitize_token(token),
            active=info.active,
            sub=info.sub,
        )
        return info
