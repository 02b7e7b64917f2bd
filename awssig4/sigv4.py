"""AWS Signature Version 4 request signer."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .canonical import (
    AUTHORIZATION,
    CONTENT_TYPE,
    HOST,
    X_AMZ_CONTENT_SHA256,
    X_AMZ_DATE,
    add_signing_headers,
    amz_date,
    authorization_header,
    canonical_headers,
    canonical_request,
    credential_scope,
    date_stamp,
    set_header,
    string_to_sign,
)
from .keys import derive_signing_key, sha256_hex, sign_string
from .payload import UNSIGNED_PAYLOAD, Payload, payload_hash

logger = logging.getLogger(__name__)

Headers = Dict[str, Any]
Clock = Callable[[], datetime]

DEFAULT_CONTENT_TYPE = 'application/x-www-form-urlencoded; charset=utf-8'


class Method(Enum):
    DELETE = 'DELETE'
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'

    @classmethod
    def coerce(cls, value: Union['Method', str]) -> 'Method':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


class Service(str, Enum):
    S3 = 's3'
    DYNAMODB = 'dynamodb'
    LAMBDA = 'lambda'
    IAM = 'iam'
    STS = 'sts'
    EC2 = 'ec2'
    SQS = 'sqs'
    SNS = 'sns'
    EXECUTE_API = 'execute-api'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SignerConfig:
    """Credentials and target of a signer. Shared by every ``sign`` call."""

    service: str
    host: str
    region: str
    access_key: str
    secret_key: str = field(repr=False)
    token: Optional[str] = field(default=None, repr=False)
    content_type: str = DEFAULT_CONTENT_TYPE

    def __post_init__(self) -> None:
        if isinstance(self.service, Service):
            object.__setattr__(self, 'service', self.service.value)


@dataclass(frozen=True)
class CanonicalForm:
    """Intermediate values of a single signing pass."""

    timestamp: str
    payload_hash: str
    headers: Headers
    signed_headers: str
    canonical_request: str
    canonical_hash: str
    credential_scope: str
    string_to_sign: str
    signature: str


class SigV4Signer:
    """Signs requests for one service, host and region.

    The signer is immutable; every call samples ``clock`` once, so two calls
    made a second apart produce different signatures. Pass a fixed ``clock``
    to get reproducible output.
    """

    def __init__(
            self,
            service: Union[Service, str],
            host: str,
            region: str,
            access_key: str,
            secret_key: str,
            token: Optional[str] = None,
            *,
            content_type: str = DEFAULT_CONTENT_TYPE,
            clock: Optional[Clock] = None
    ) -> None:
        self._config = SignerConfig(
            service=service,
            host=host,
            region=region,
            access_key=access_key,
            secret_key=secret_key,
            token=token,
            content_type=content_type,
        )
        self._clock = clock or utc_now

    @classmethod
    def from_config(cls, config: SignerConfig, clock: Optional[Clock] = None) -> 'SigV4Signer':
        return cls(
            config.service,
            config.host,
            config.region,
            config.access_key,
            config.secret_key,
            config.token,
            content_type=config.content_type,
            clock=clock,
        )

    @classmethod
    def from_environment(cls, service: Union[Service, str], host: str,
                         clock: Optional[Clock] = None) -> 'SigV4Signer':
        """Build a signer from ``AWS_*`` environment variables."""
        from .settings import SignerSettings

        return cls.from_config(SignerSettings().to_config(service, host), clock)

    @property
    def config(self) -> SignerConfig:
        return self._config

    def canonicalize(
            self,
            payload: Optional[Payload] = None,
            method: Union[Method, str] = Method.GET,
            path: str = '/',
            query: Optional[str] = None,
            headers: Optional[Mapping[str, Any]] = None
    ) -> CanonicalForm:
        """Run the signing pipeline and return every intermediate value."""
        method = Method.coerce(method)
        config = self._config
        moment = self._clock()
        timestamp = amz_date(moment)
        stamp = date_stamp(moment)

        hashed = payload_hash(payload)
        extra = {k: v for k, v in (headers or {}).items() if k.lower() != AUTHORIZATION.lower()}
        to_sign = add_signing_headers(extra, config.host, timestamp, hashed, config.token)
        block, signed_headers = canonical_headers(to_sign)

        request = canonical_request(method.value, path, query, block, signed_headers, hashed)
        logger.debug('CanonicalRequest:\n%s', request)
        request_hash = sha256_hex(request)

        scope = credential_scope(stamp, config.region, config.service)
        sts = string_to_sign(timestamp, scope, request_hash)
        logger.debug('StringToSign:\n%s', sts)

        signing_key = derive_signing_key(config.secret_key, stamp, config.region, config.service)
        signature = sign_string(signing_key, sts)

        return CanonicalForm(
            timestamp=timestamp,
            payload_hash=hashed,
            headers=to_sign,
            signed_headers=signed_headers,
            canonical_request=request,
            canonical_hash=request_hash,
            credential_scope=scope,
            string_to_sign=sts,
            signature=signature,
        )

    def sign(
            self,
            payload: Optional[Payload] = None,
            method: Union[Method, str] = Method.GET,
            path: str = '/',
            query: Optional[str] = None,
            headers: Optional[Mapping[str, Any]] = None
    ) -> Headers:
        """Sign a request and return the headers to send with it.

        Args:
            payload: Body to hash; ``None`` means no body. Use
                ``Payload.unsigned()`` to skip body hashing.
            method: HTTP method.
            path: Request path, not yet percent-encoded.
            query: Raw query string without the leading ``?``.
            headers: Extra headers. They are signed and passed through;
                a caller ``Authorization`` header is ignored.

        Raises:
            SigningError: If any step of the pipeline fails.
        """
        form = self.canonicalize(payload, method, path, query, headers)
        config = self._config

        result: Headers = {
            X_AMZ_DATE: form.timestamp,
            CONTENT_TYPE: config.content_type,
            HOST: config.host,
        }
        if form.payload_hash != UNSIGNED_PAYLOAD:
            result[X_AMZ_CONTENT_SHA256] = form.payload_hash
        for name, value in form.headers.items():
            set_header(result, name, value)

        set_header(result, AUTHORIZATION, authorization_header(
            config.access_key,
            form.credential_scope,
            form.signed_headers,
            form.signature,
        ))
        logger.debug('Signed %s with headers %s', path, form.signed_headers)
        return result
