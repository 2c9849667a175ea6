"""Server configuration for the OAUTHBEARER mechanism.

ServerConfig is a read-only mapping from configuration key to opaque
value. It is copied at construction time and never mutated, so one
instance can be shared by every authentication attempt.

Environment Variables:
    OAUTHBEARER_OPENID_CONFIGURATION_URL: Discovery URL advertised to clients
        whose token was rejected.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from oauthbearer.models.constants import CONFIG_OPENID_CONFIGURATION_URL

ENV_OPENID_CONFIGURATION_URL = "OAUTHBEARER_OPENID_CONFIGURATION_URL"


class ServerConfig(Mapping[str, Any]):
    """Immutable server configuration map.

    Example:
        >>> config = ServerConfig({"openid-configuration": "https://issuer.example/.well-known"})
        >>> config.openid_configuration_url
        'https://issuer.example/.well-known'
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values or {}))

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build a config from OAUTHBEARER_* environment variables.

        Unset or blank variables are left out of the map.
        """
        values: dict[str, Any] = {}
        url = os.environ.get(ENV_OPENID_CONFIGURATION_URL, "").strip()
        if url:
            values[CONFIG_OPENID_CONFIGURATION_URL] = url
        return cls(values)

    @property
    def openid_configuration_url(self) -> str | None:
        """Discovery URL as text, or None when not configured."""
        value = self._values.get(CONFIG_OPENID_CONFIGURATION_URL)
        return str(value) if value is not None else None

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ServerConfig({dict(self._values)!r})"
