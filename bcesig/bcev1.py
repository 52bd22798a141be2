"""
bce-auth-v1 request signing.

The authorization token has three slash-separated parts:

    bce-auth-v1/{access_key}/{timestamp}/{expiration}   (session key descriptor)
    {signed;header;names}
    {signature}

The session key is HMAC-SHA256(secret_key, descriptor) and the signature is
HMAC-SHA256(session_key, canonical request), both as lowercase hex.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlsplit

from .encoding import format_timestamp, sha256_hmac, to_text, uri_encode

logger = logging.getLogger(__name__)

Headers = Mapping[str, Any]
Params = Mapping[str, Any]
Timestamp = Union[datetime, int, float]

AUTH_VERSION = 'bce-auth-v1'
BCE_PREFIX = 'x-bce-'

AUTHORIZATION = 'Authorization'
HOST = 'Host'
CONTENT_MD5 = 'Content-MD5'
CONTENT_LENGTH = 'Content-Length'
CONTENT_TYPE = 'Content-Type'
BCE_DATE = 'x-bce-date'

DEFAULT_HEADERS_TO_SIGN: Tuple[str, ...] = (HOST, CONTENT_MD5, CONTENT_LENGTH, CONTENT_TYPE)
DEFAULT_EXPIRATION_IN_SECONDS = 1800


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str = field(repr=False)


class BceV1Signer:
    def __init__(self, access_key: str, secret_key: str) -> None:
        self._credentials = Credentials(access_key, secret_key)

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> 'BceV1Signer':
        return cls(credentials.access_key, credentials.secret_key)

    @property
    def access_key(self) -> str:
        return self._credentials.access_key

    def generate_authorization(
            self,
            method: str,
            resource: str,
            params: Optional[Params] = None,
            headers: Optional[Headers] = None,
            timestamp: Optional[Timestamp] = None,
            expiration_in_seconds: int = DEFAULT_EXPIRATION_IN_SECONDS,
            headers_to_sign: Optional[Iterable[str]] = None
    ) -> str:
        """Build the bce-auth-v1 authorization token for a request.

        ``resource`` must already be percent-encoded; it is signed as-is.
        ``timestamp`` defaults to the current time.
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        raw_session_key = '/'.join([
            AUTH_VERSION,
            self._credentials.access_key,
            format_timestamp(timestamp),
            str(expiration_in_seconds),
        ])
        session_key = sha256_hmac(self._credentials.secret_key, raw_session_key)

        canonical_uri = self.uri_canonicalization(resource)
        canonical_query_string = self.query_string_canonicalization(params or {})
        canonical_headers, signed_headers = self.headers_canonicalization(
            headers or {}, headers_to_sign
        )

        raw_signature = '\n'.join([method, canonical_uri, canonical_query_string, canonical_headers])
        signature = sha256_hmac(session_key, raw_signature)

        logger.debug("Signed %s %s with headers %s", method, resource, signed_headers)
        return '/'.join([raw_session_key, ';'.join(signed_headers), signature])

    def create_headers(
            self,
            method: str,
            url: str,
            headers: Optional[Headers] = None,
            timestamp: Optional[Timestamp] = None,
            expiration_in_seconds: int = DEFAULT_EXPIRATION_IN_SECONDS,
            headers_to_sign: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """Return a copy of ``headers`` with Host, x-bce-date and Authorization set.

        The path and query of ``url`` must already be percent-encoded.
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        parts = urlsplit(url)
        params = dict(parse_qsl(parts.query, keep_blank_values=True))

        new_headers = dict(headers or {})
        present = {key.lower() for key in new_headers}
        if HOST.lower() not in present:
            new_headers[HOST] = parts.netloc
        if BCE_DATE not in present:
            new_headers[BCE_DATE] = format_timestamp(timestamp)

        new_headers[AUTHORIZATION] = self.generate_authorization(
            method,
            parts.path or '/',
            params,
            new_headers,
            timestamp,
            expiration_in_seconds,
            headers_to_sign,
        )
        return new_headers

    def uri_canonicalization(self, uri: str) -> str:
        return uri

    def query_string_canonicalization(self, params: Params) -> str:
        canonical_params = []
        for key, value in params.items():
            if key.lower() == AUTHORIZATION.lower():
                continue
            canonical_params.append(key + '=' + uri_encode('' if value is None else value))

        return '&'.join(sorted(canonical_params))

    def headers_canonicalization(
            self,
            headers: Headers,
            headers_to_sign: Optional[Iterable[str]] = None
    ) -> Tuple[str, List[str]]:
        """Return the canonical headers string and the signed header names.

        Tokens are sorted as whole ``key:value`` strings and the names are read
        back from the sorted tokens, so names are not sorted on their own.
        """
        if headers_to_sign is None:
            headers_to_sign = DEFAULT_HEADERS_TO_SIGN
        wanted = {name.lower() for name in headers_to_sign}

        canonical_headers = []
        for key, value in headers.items():
            key = key.lower()
            if value is None:
                continue
            value = to_text(value).strip()
            if value and (key.startswith(BCE_PREFIX) or key in wanted):
                canonical_headers.append(uri_encode(key) + ':' + uri_encode(value))

        canonical_headers.sort()

        signed_headers = [header.split(':', 1)[0] for header in canonical_headers]
        return '\n'.join(canonical_headers), signed_headers
