"""Request payload descriptors and payload hashing."""

import functools
import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional, Union

from .errors import HashingError

UNSIGNED_PAYLOAD = 'UNSIGNED-PAYLOAD'
EMPTY_SHA256 = hashlib.sha256(b'').hexdigest()

_READ_CHUNK_SIZE = 1024 * 1024

Body = Union[bytes, bytearray, str, BinaryIO]


class PayloadKind(Enum):
    NONE = 'none'
    EMPTY = 'empty'
    DATA = 'data'
    UNSIGNED = 'unsigned'


@dataclass(frozen=True)
class Payload:
    """What the signer should hash as the request body.

    Build one with :meth:`none`, :meth:`empty`, :meth:`of` or
    :meth:`unsigned` rather than calling the constructor directly.
    """

    kind: PayloadKind
    body: Optional[Body] = None

    @classmethod
    def none(cls) -> 'Payload':
        return cls(PayloadKind.NONE)

    @classmethod
    def empty(cls) -> 'Payload':
        return cls(PayloadKind.EMPTY)

    @classmethod
    def unsigned(cls) -> 'Payload':
        return cls(PayloadKind.UNSIGNED)

    @classmethod
    def of(cls, body: Body) -> 'Payload':
        if body is None:
            raise ValueError("Use Payload.none() for a request without a body")
        return cls(PayloadKind.DATA, body)

    @property
    def is_unsigned(self) -> bool:
        return self.kind is PayloadKind.UNSIGNED

    def hashed(self) -> str:
        """Return the hex SHA-256 of the body, or ``UNSIGNED-PAYLOAD``.

        File objects are read in chunks and rewound to where they started
        so the caller can still send them.

        Raises:
            HashingError: If the body cannot be read or is not bytes-like.
        """
        if self.kind is PayloadKind.UNSIGNED:
            return UNSIGNED_PAYLOAD
        if self.kind in (PayloadKind.NONE, PayloadKind.EMPTY):
            return EMPTY_SHA256
        return _hash_body(self.body)


def _hash_body(body: Body) -> str:
    if isinstance(body, str):
        try:
            body = body.encode('utf-8')
        except UnicodeEncodeError as exc:
            raise HashingError(f"Payload text is not valid UTF-8: {exc.reason}") from exc

    if isinstance(body, (bytes, bytearray, memoryview)):
        return hashlib.sha256(body).hexdigest()

    if not hasattr(body, 'read'):
        raise HashingError(f"Cannot hash payload of type {type(body).__name__}")

    checksum = hashlib.sha256()
    try:
        seekable = getattr(body, 'seekable', None)
        position = body.tell() if seekable is not None and seekable() else None
        for chunk in iter(functools.partial(body.read, _READ_CHUNK_SIZE), b''):
            checksum.update(chunk)
        if position is not None:
            body.seek(position)
    except (OSError, TypeError, ValueError) as exc:
        raise HashingError(f"Could not read payload: {exc}") from exc
    return checksum.hexdigest()


def payload_hash(payload: Optional[Payload]) -> str:
    """Hash ``payload``, treating ``None`` as a request without a body."""
    return (payload or Payload.none()).hashed()
