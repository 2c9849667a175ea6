"""Parser for the OAUTHBEARER initial client message (RFC 7628 section 3.1).

The message is a GS2 header followed by key-value pairs::

    gs2-header = "n" "," [ "a=" authzid ] ","
    message    = gs2-header kvsep-pairs
    kv-pair    = key "=" value

Pairs are separated by the literal text ``%x01`` (see KV_DELIMITER).
"""

from __future__ import annotations

from oauthbearer.errors import (
    ChannelBindingUnsupportedError,
    InvalidMessageError,
    InvalidMessageReceivedError,
)
from oauthbearer.mechanism.cursor import ByteCursor, CursorExhaustedError
from oauthbearer.models.constants import (
    AUTH_KEY,
    GS2_AUTHZID_EQUALS,
    GS2_AUTHZID_PREFIX,
    GS2_NO_CHANNEL_BINDING,
    GS2_SEPARATOR,
    KV_DELIMITER,
    KV_SEPARATOR,
    MECHANISM_NAME,
)
from oauthbearer.models.messages import InitialClientMessage


def get_value(key: str, key_values: str) -> str | None:
    """Return the value of the first pair named ``key`` in ``key_values``.

    Pairs are split on KV_DELIMITER and each pair on ``=``. The value is
    the text between the first ``=`` and the next one, so a value that
    itself contains ``=`` comes back truncated (``auth=Bearer abc==``
    yields ``"Bearer abc"``). Deployed clients rely on this exact
    behavior, so it is kept as-is.

    Args:
        key: Key to look up, e.g. ``"auth"``.
        key_values: Decoded key-value segment of the message.

    Returns:
        The value, or None if no pair with a value has that key.

    Example:
        >>> get_value("auth", "host=example.com%x01auth=Bearer abc")
        'Bearer abc'
    """
    for pair in key_values.split(KV_DELIMITER):
        parts = pair.split(KV_SEPARATOR)
        if len(parts) < 2:
            continue
        if parts[0] == key:
            return parts[1]
    return None


def parse_initial_client_message(
    data: bytes, mechanism_name: str = MECHANISM_NAME
) -> InitialClientMessage:
    """Parse the client's initial OAUTHBEARER message.

    Args:
        data: Raw message bytes as received from the client.
        mechanism_name: Name reported in raised errors.

    Returns:
        InitialClientMessage holding the authorization id (if any), the
        ``auth`` value and a copy of ``data``.

    Raises:
        ChannelBindingUnsupportedError: The channel-binding flag is not ``n``.
        InvalidMessageError: The authorization-id field is malformed or the
            ``auth`` key is missing or empty.
        InvalidMessageReceivedError: The message ends early or is not UTF-8.

    Example:
        >>> msg = parse_initial_client_message(b"n,a=admin,auth=Bearer abc123")
        >>> msg.authorization_id, msg.auth
        ('admin', 'Bearer abc123')
    """
    raw_bytes = bytes(data)
    cursor = ByteCursor(raw_bytes)

    try:
        cbind_flag = cursor.next_byte()
        if cbind_flag != GS2_NO_CHANNEL_BINDING:
            raise ChannelBindingUnsupportedError(mechanism_name, flag=chr(cbind_flag))

        authorization_id: str | None = None

        if cursor.next_byte() == GS2_SEPARATOR:
            if cursor.next_byte() == GS2_AUTHZID_PREFIX:
                if cursor.next_byte() != GS2_AUTHZID_EQUALS:
                    raise InvalidMessageError(
                        mechanism_name, "authorization id must start with 'a='"
                    )
                authorization_id = cursor.read_utf8_until(GS2_SEPARATOR)
                if cursor.next_byte() != GS2_SEPARATOR:
                    raise InvalidMessageError(
                        mechanism_name, "authorization id must be followed by ','"
                    )

        auth = get_value(AUTH_KEY, cursor.drain_utf8())
    except CursorExhaustedError as e:
        raise InvalidMessageReceivedError(
            mechanism_name, details={"offset": cursor.position}
        ) from e
    except UnicodeDecodeError as e:
        raise InvalidMessageReceivedError(mechanism_name, reason="message is not valid UTF-8") from e

    if not auth:
        raise InvalidMessageError(mechanism_name, "missing 'auth' key")

    return InitialClientMessage(
        authorization_id=authorization_id,
        auth=auth,
        raw_bytes=raw_bytes,
    )
