"""Canned access control lists understood by S3-compatible services."""

from enum import Enum
from typing import Dict

ACL_HEADER = 'x-amz-acl'


class AccessControlList(str, Enum):
    PRIVATE = 'private'
    PUBLIC_READ = 'public-read'
    PUBLIC_READ_WRITE = 'public-read-write'
    AWS_EXEC_READ = 'aws-exec-read'
    AUTHENTICATED_READ = 'authenticated-read'
    BUCKET_OWNER_READ = 'bucket-owner-read'
    BUCKET_OWNER_FULL_CONTROL = 'bucket-owner-full-control'

    def header(self) -> Dict[str, str]:
        """The ``x-amz-acl`` header, ready to pass as an extra header to ``sign``."""
        return {ACL_HEADER: self.value}
