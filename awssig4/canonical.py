"""Canonical request, canonical headers and string-to-sign construction.

Everything here is pure string assembly; the results must match what the
receiving service computes byte for byte.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

from .encoding import encode_path, encode_query
from .errors import DuplicateHeaderError, InvalidHeaderError
from .keys import SCOPE_TERMINATOR
from .payload import UNSIGNED_PAYLOAD

ALGORITHM = 'AWS4-HMAC-SHA256'

AMZ_DATE_FORMAT = '%Y%m%dT%H%M%SZ'
DATE_STAMP_FORMAT = '%Y%m%d'

HOST = 'Host'
X_AMZ_DATE = 'X-Amz-Date'
X_AMZ_SECURITY_TOKEN = 'X-Amz-Security-Token'
X_AMZ_CONTENT_SHA256 = 'x-amz-content-sha256'
AUTHORIZATION = 'Authorization'
CONTENT_TYPE = 'Content-Type'


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are already UTC by convention.
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc)


def amz_date(moment: datetime) -> str:
    """``YYYYMMDDTHHMMSSZ`` in UTC."""
    return _as_utc(moment).strftime(AMZ_DATE_FORMAT)


def date_stamp(moment: datetime) -> str:
    """``YYYYMMDD`` in UTC."""
    return _as_utc(moment).strftime(DATE_STAMP_FORMAT)


def set_header(headers: Dict[str, Any], name: str, value: str) -> None:
    """Set ``name`` in ``headers``, replacing any entry that differs only by case."""
    lname = name.lower()
    for existing in [k for k in headers if k.lower() == lname]:
        del headers[existing]
    headers[name] = value


def add_signing_headers(
        headers: Mapping[str, Any],
        host: str,
        timestamp: str,
        payload_hash: str,
        token: Optional[str] = None
) -> Dict[str, Any]:
    """Return a copy of ``headers`` with the headers SigV4 requires.

    ``Host`` and ``X-Amz-Date`` are always set. ``X-Amz-Security-Token`` is
    only set when a session token is configured and ``x-amz-content-sha256``
    is left out for unsigned payloads, even when the caller supplied one.
    Non-text values are converted to ``str`` so the output matches what
    gets signed.

    Raises:
        InvalidHeaderError: If a value is ``None``.
    """
    result = {name: _header_value(name, value) for name, value in headers.items()}
    set_header(result, HOST, host)
    set_header(result, X_AMZ_DATE, timestamp)
    if token:
        set_header(result, X_AMZ_SECURITY_TOKEN, token)
    if payload_hash != UNSIGNED_PAYLOAD:
        set_header(result, X_AMZ_CONTENT_SHA256, payload_hash)
    else:
        for existing in [k for k in result if k.lower() == X_AMZ_CONTENT_SHA256]:
            del result[existing]
    return result


def _header_value(name: str, value: Any) -> str:
    if value is None:
        raise InvalidHeaderError(name, 'has no value')
    return value if isinstance(value, str) else str(value)


def _trim_value(value: str) -> str:
    # Trimall: strip the ends and squeeze inner runs of whitespace.
    return ' '.join(value.split())


def canonical_headers(headers: Mapping[str, Any]) -> Tuple[str, str]:
    """Build the canonical header block and the signed headers list.

    Returns:
        ``(block, signed_headers)`` where ``block`` holds one
        ``name:value`` line per header sorted by lower-cased name and
        ``signed_headers`` is the same names joined by ``;``.

    Raises:
        DuplicateHeaderError: If two names are equal once lower-cased.
        InvalidHeaderError: If a name has surrounding whitespace or a value
            is ``None``.
    """
    lowered: Dict[str, str] = {}
    for name, value in headers.items():
        if name != name.strip():
            raise InvalidHeaderError(name, 'has surrounding whitespace')
        key = name.lower()
        if key in lowered:
            raise DuplicateHeaderError(name)
        lowered[key] = _trim_value(_header_value(name, value))

    names = sorted(lowered)
    block = '\n'.join(f'{name}:{lowered[name]}' for name in names)
    return block, ';'.join(names)


def canonical_request(
        method: str,
        path: str,
        query: Optional[str],
        headers_block: str,
        signed_headers: str,
        payload_hash: str
) -> str:
    """Assemble the canonical request.

    The path and query are percent-encoded with their own allowed sets;
    an empty query leaves its line empty.
    """
    return '\n'.join([
        method,
        encode_path(path or '/'),
        encode_query(query) if query else '',
        headers_block,
        '',
        signed_headers,
        payload_hash,
    ])


def credential_scope(stamp: str, region: str, service: str) -> str:
    return '/'.join([stamp, region, service, SCOPE_TERMINATOR])


def string_to_sign(timestamp: str, scope: str, canonical_hash: str, algorithm: str = ALGORITHM) -> str:
    return '\n'.join([algorithm, timestamp, scope, canonical_hash])


def authorization_header(access_key: str, scope: str, signed_headers: str, signature: str,
                         algorithm: str = ALGORITHM) -> str:
    return (
        f'{algorithm} Credential={access_key}/{scope}, '
        f'SignedHeaders={signed_headers}, Signature={signature}'
    )
