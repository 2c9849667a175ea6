"""OAUTHBEARER Models.

Pydantic models and protocol constants shared by the mechanism and
the evidence verifiers.
"""

from oauthbearer.models.base import OAuthBearerBaseModel
from oauthbearer.models.constants import (
    AUTH_KEY,
    BEARER_SCHEME,
    CONFIG_OPENID_CONFIGURATION_URL,
    INVALID_TOKEN_STATUS,
    KV_DELIMITER,
    MECHANISM_NAME,
)
from oauthbearer.models.evidence import BearerTokenEvidence, Evidence
from oauthbearer.models.messages import InitialClientMessage

__all__ = [
    "AUTH_KEY",
    "BEARER_SCHEME",
    "BearerTokenEvidence",
    "CONFIG_OPENID_CONFIGURATION_URL",
    "Evidence",
    "INVALID_TOKEN_STATUS",
    "InitialClientMessage",
    "KV_DELIMITER",
    "MECHANISM_NAME",
    "OAuthBearerBaseModel",
]
