"""Constants for the OAUTHBEARER mechanism.

Wire-level delimiters and configuration keys from RFC 7628.
"""

MECHANISM_NAME = "OAUTHBEARER"

# GS2 header bytes (RFC 5801 / RFC 7628 section 3.1)
GS2_NO_CHANNEL_BINDING = ord("n")
GS2_SEPARATOR = ord(",")
GS2_AUTHZID_PREFIX = ord("a")
GS2_AUTHZID_EQUALS = ord("=")

KV_DELIMITER = "%x01"
"""Separator between key-value pairs in the client message.

Matched as the literal four-character text ``%x01``, not the 0x01 control
byte the RFC grammar denotes. Clients talking to this server send it that way.
"""

KV_SEPARATOR = "="

AUTH_KEY = "auth"

BEARER_SCHEME = "Bearer"
"""Only supported auth scheme. Matched case-insensitively (RFC 7235 section 2.1)."""

CONFIG_OPENID_CONFIGURATION_URL = "openid-configuration"
"""Server config key (and error payload key) for the token issuer discovery URL."""

INVALID_TOKEN_STATUS = "invalid_token"
