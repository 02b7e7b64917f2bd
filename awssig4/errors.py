"""Exceptions raised while signing a request."""


class SigningError(Exception):
    """A request could not be signed."""


class EncodingError(SigningError):
    """The request path or query could not be percent-encoded."""


class HashingError(SigningError):
    """The payload or canonical request could not be hashed."""


class DuplicateHeaderError(SigningError):
    """Two header names differ only by case."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Header {name!r} was supplied more than once with different casing")
        self.name = name


class InvalidHeaderError(SigningError):
    """A header name or value cannot be sent as-is."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Header {name!r} {reason}")
        self.name = name
