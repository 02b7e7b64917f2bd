"""Percent-encoding with AWS's reserved character rules."""

from typing import FrozenSet

from .errors import EncodingError

_UNRESERVED = frozenset(
    b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~'
)

# Path segments keep their separators; query keys and values keep theirs.
AWS_PATH_ALLOWED: FrozenSet[int] = _UNRESERVED | frozenset(b'/')
AWS_QUERY_ALLOWED: FrozenSet[int] = _UNRESERVED | frozenset(b'=&')


def percent_encode(value: str, allowed: FrozenSet[int]) -> str:
    """Percent-encode ``value`` leaving only bytes in ``allowed`` untouched.

    The string is encoded as UTF-8 first and every byte outside ``allowed``
    becomes ``%XX`` with uppercase hex digits.

    Raises:
        EncodingError: If ``value`` is not a string or cannot be encoded
            as UTF-8 (e.g. it contains lone surrogates).
    """
    if not isinstance(value, str):
        raise EncodingError(f"Expected str, got {type(value).__name__}")
    try:
        raw = value.encode('utf-8')
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Cannot encode {value!r}: {exc.reason}") from exc

    return ''.join(chr(b) if b in allowed else f'%{b:02X}' for b in raw)


def encode_path(path: str) -> str:
    return percent_encode(path, AWS_PATH_ALLOWED)


def encode_query(query: str) -> str:
    return percent_encode(query, AWS_QUERY_ALLOWED)
