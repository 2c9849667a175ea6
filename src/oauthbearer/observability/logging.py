"""structlog setup for the OAUTHBEARER mechanism.

Events are dotted names (``oauthbearer.evidence.rejected``) with keyword
fields. Every authentication attempt run through
``OAuthBearerServer.evaluate_response`` is wrapped in attempt_context(),
so all events of one attempt share an ``attempt_id``.

Environment Variables:
    OAUTHBEARER_LOG_FORMAT: "json" for JSON lines, "console" for colored output
    OAUTHBEARER_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
    OAUTHBEARER_SERVICE_NAME: Value of the ``service`` field on every event
    OAUTHBEARER_DEBUG: "true"/"1" to log client credentials unredacted

Example:
    >>> configure_logging(log_format="json", log_level="DEBUG")
    >>> with attempt_context(mechanism="OAUTHBEARER"):
    ...     get_logger(__name__).info("oauthbearer.message.parsed")
"""

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.typing import Processor

ENV_LOG_FORMAT = "OAUTHBEARER_LOG_FORMAT"
ENV_LOG_LEVEL = "OAUTHBEARER_LOG_LEVEL"
ENV_SERVICE_NAME = "OAUTHBEARER_SERVICE_NAME"
ENV_DEBUG = "OAUTHBEARER_DEBUG"

REDACTED_PLACEHOLDER = "***REDACTED***"

# Field names redacted when they contain one of these substrings
_SENSITIVE_SUBSTRINGS = ("password", "secret", "token", "credential")
# Field names redacted only on exact match ("authzid" is not a credential)
_SENSITIVE_NAMES = frozenset({"auth", "authorization"})

_logging_configured = False


def is_debug_mode() -> bool:
    """True when OAUTHBEARER_DEBUG holds a truthy value."""
    return os.environ.get(ENV_DEBUG, "").strip().lower() in ("true", "1", "yes", "on")


def _is_sensitive(name: str) -> bool:
    lower = name.lower()
    return lower in _SENSITIVE_NAMES or any(s in lower for s in _SENSITIVE_SUBSTRINGS)


def sanitize_for_logging(fields: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``fields`` with credential-bearing values redacted.

    Nested dicts, and dicts inside lists, are walked. With OAUTHBEARER_DEBUG
    set, values pass through untouched.

    Example:
        >>> sanitize_for_logging({"authzid": "admin", "auth": "Bearer abc"})
        {'authzid': 'admin', 'auth': '***REDACTED***'}
    """
    if is_debug_mode():
        return dict(fields)

    def _clean(value: Any) -> Any:
        if isinstance(value, dict):
            return sanitize_for_logging(value)
        if isinstance(value, list):
            return [_clean(item) for item in value]
        return value

    return {
        k: REDACTED_PLACEHOLDER if _is_sensitive(k) else _clean(v) for k, v in fields.items()
    }


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Route structlog through the stdlib root logger with a console or JSON renderer.

    Arguments left as None fall back to the OAUTHBEARER_* environment
    variables, then to console / INFO / "oauthbearer". Repeated calls are
    no-ops unless ``force`` is set.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT, "console")).lower()
    log_level = (log_level or os.environ.get(ENV_LOG_LEVEL, "INFO")).upper()
    service_name = service_name or os.environ.get(ENV_SERVICE_NAME, "oauthbearer")

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level))

    structlog.contextvars.bind_contextvars(service=service_name)
    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for ``name``; configures logging with defaults on first use."""
    if not _logging_configured:
        configure_logging()
    return structlog.stdlib.get_logger(name)


@contextmanager
def attempt_context(attempt_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Bind ``attempt_id`` and ``fields`` to every event logged inside the block.

    Only the keys bound here are removed on exit, so context bound by the
    caller (e.g. a SASL session id) survives. Yields the attempt id.
    """
    attempt_id = attempt_id or uuid.uuid4().hex
    with structlog.contextvars.bound_contextvars(attempt_id=attempt_id, **fields):
        yield attempt_id
