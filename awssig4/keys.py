"""SHA-256/HMAC primitives and the SigV4 signing-key derivation chain."""

import hashlib
import hmac
from typing import Union

from .errors import HashingError, SigningError

SCOPE_TERMINATOR = 'aws4_request'
KEY_PREFIX = 'AWS4'


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")


def sha256_hex(data: Union[str, bytes]) -> str:
    try:
        return hashlib.sha256(_to_bytes(data)).hexdigest()
    except (TypeError, ValueError) as exc:
        raise HashingError(f"SHA-256 failed: {exc}") from exc


def hmac_sha256(key: bytes, msg: Union[str, bytes]) -> bytes:
    try:
        return hmac.new(key, _to_bytes(msg), hashlib.sha256).digest()
    except (TypeError, ValueError) as exc:
        raise SigningError(f"HMAC-SHA256 failed: {exc}") from exc


def derive_signing_key(secret_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """Derive the per-day, per-region, per-service signing key.

    Each HMAC output is used verbatim as the key of the next step:
    ``AWS4<secret>`` -> date -> region -> service -> ``aws4_request``.
    """
    try:
        k_secret = (KEY_PREFIX + secret_key).encode('utf-8')
    except (TypeError, UnicodeEncodeError) as exc:
        raise SigningError("Secret key must be text") from exc
    k_date = hmac_sha256(k_secret, date_stamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, SCOPE_TERMINATOR)


def sign_string(signing_key: bytes, string_to_sign: str) -> str:
    """Hex-encoded HMAC-SHA256 of ``string_to_sign``."""
    return hmac_sha256(signing_key, string_to_sign).hex()
