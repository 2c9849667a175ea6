"""Utility helpers for the OAUTHBEARER mechanism."""

from oauthbearer.utils.sanitization import sanitize_token, sanitize_url

__all__ = ["sanitize_token", "sanitize_url"]
