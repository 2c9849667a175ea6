"""Observability module for the OAUTHBEARER mechanism.

Structured logging via structlog, with JSON output for production and
colored console output for development.

Example:
    >>> from oauthbearer.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("oauthbearer.evidence.rejected", authzid="admin")
"""

from oauthbearer.observability.logging import (
    attempt_context,
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
)

__all__ = [
    "attempt_context",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "sanitize_for_logging",
]
