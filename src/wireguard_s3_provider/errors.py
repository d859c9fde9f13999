"""Exception types and error classification for bucket operations."""

from __future__ import annotations

from enum import Enum

from botocore.exceptions import ClientError

NOT_FOUND_CODES = frozenset({"404", "NoSuchBucket", "NotFound"})
ALREADY_OWNED_CODES = frozenset({"BucketAlreadyOwnedByYou"})
WRONG_REGION_CODES = frozenset({"301", "PermanentRedirect"})


class ErrorKind(str, Enum):
    """Closed set of remote failure kinds the reconciler distinguishes."""

    NOT_FOUND = "NotFound"
    ALREADY_OWNED = "AlreadyOwnedByYou"
    WRONG_REGION = "WrongRegion"
    SERVICE = "ServiceError"


class BucketProviderError(Exception):
    """Base class for all provider errors."""


class PropertiesValidationError(BucketProviderError):
    """Inbound event or resource properties failed schema validation."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class BucketGatewayError(BucketProviderError):
    """A remote storage call failed.

    Attributes:
        kind: Classified failure kind
        operation: Gateway operation that failed (e.g. "head_bucket")
        bucket_name: Bucket the operation targeted
        cause: Original botocore error
    """

    def __init__(
        self,
        kind: ErrorKind,
        operation: str,
        bucket_name: str,
        cause: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.operation = operation
        self.bucket_name = bucket_name
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} failed for bucket {bucket_name} ({kind.value}){detail}")


class BucketNotFoundError(BucketProviderError):
    """An update was requested for a bucket that no longer exists."""

    def __init__(self, bucket_name: str) -> None:
        self.bucket_name = bucket_name
        super().__init__(f"Bucket {bucket_name} does not exist, cannot apply update")


def classify_client_error(error: ClientError) -> ErrorKind:
    """Map a botocore ClientError onto an ErrorKind.

    HeadBucket responses carry no body, so the error code is the bare HTTP
    status ("404", "301"); other operations return named codes.
    """
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    if code in NOT_FOUND_CODES:
        return ErrorKind.NOT_FOUND
    if code in ALREADY_OWNED_CODES:
        return ErrorKind.ALREADY_OWNED
    if code in WRONG_REGION_CODES or status == 301:
        return ErrorKind.WRONG_REGION
    return ErrorKind.SERVICE
