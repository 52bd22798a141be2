"""
Encoding primitives shared by the bce-auth-v1 signer.
"""

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Any, Union
from urllib.parse import quote

TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'

# RFC 3986 unreserved characters besides ASCII letters and digits
_UNRESERVED = '-._~'


def uri_encode(value: Any) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set.

    Unlike ``quote``'s defaults, ``/`` is encoded and a space becomes ``%20``.
    """
    return quote(to_text(value), safe=_UNRESERVED)


def to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode('utf-8')
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to a string for signing")


def sha256_hmac(key: Union[str, bytes], message: Union[str, bytes]) -> str:
    if isinstance(key, str):
        key = key.encode('utf-8')
    if isinstance(message, str):
        message = message.encode('utf-8')
    return hmac.new(key, message, hashlib.sha256).hexdigest()


def format_timestamp(timestamp: Union[datetime, int, float]) -> str:
    """Render ``timestamp`` as ISO-8601 UTC truncated to whole seconds.

    Naive datetimes are taken to be UTC already; numbers are epoch seconds.
    """
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        timestamp = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    elif timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(TIMESTAMP_FORMAT)
