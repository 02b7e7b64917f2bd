"""
AWS Signature Version 4 - Request Signing

This package computes SigV4 (AWS4-HMAC-SHA256) signatures and the headers
that carry them, for AWS and AWS-compatible services.
"""

from .acl import AccessControlList
from .errors import DuplicateHeaderError, EncodingError, HashingError, InvalidHeaderError, SigningError
from .payload import UNSIGNED_PAYLOAD, Payload
from .sigv4 import CanonicalForm, Headers, Method, Service, SignerConfig, SigV4Signer

__version__ = "0.1.0"
__all__ = [
    "SigV4Signer",
    "SignerConfig",
    "CanonicalForm",
    "Method",
    "Service",
    "Payload",
    "UNSIGNED_PAYLOAD",
    "Headers",
    "AccessControlList",
    "SigningError",
    "EncodingError",
    "HashingError",
    "DuplicateHeaderError",
    "InvalidHeaderError",
]
