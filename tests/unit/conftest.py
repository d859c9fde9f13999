"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest
from botocore.exceptions import ClientError

from wireguard_s3_provider.errors import BucketGatewayError, ErrorKind
from wireguard_s3_provider.services.aws.models import PublicAccessConfig


class FakeBucketGateway:
    """In-memory bucket gateway recording every call."""

    def __init__(self) -> None:
        self.buckets: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []

    def add_bucket(self, name: str, objects: list[str] | None = None, **state: Any) -> None:
        bucket = {
            "versioning": None,
            "encryption": None,
            "public_access_block": None,
            "objects": list(objects or []),
        }
        bucket.update(state)
        self.buckets[name] = bucket

    def _require(self, operation: str, name: str) -> dict[str, Any]:
        if name not in self.buckets:
            raise BucketGatewayError(ErrorKind.NOT_FOUND, operation, name)
        return self.buckets[name]

    def head_bucket(self, name: str) -> dict[str, Any]:
        self.calls.append(("head_bucket", name))
        self._require("head_bucket", name)
        return {}

    def create_bucket(self, name: str) -> None:
        self.calls.append(("create_bucket", name))
        if name in self.buckets:
            raise BucketGatewayError(ErrorKind.ALREADY_OWNED, "create_bucket", name)
        self.add_bucket(name)

    def set_bucket_versioning(self, name: str, enabled: bool) -> None:
        self.calls.append(("set_bucket_versioning", name))
        self._require("put_bucket_versioning", name)["versioning"] = "Enabled" if enabled else "Suspended"

    def set_bucket_encryption(self, name: str, algorithm: str, kms_key_id: str | None = None) -> None:
        self.calls.append(("set_bucket_encryption", name))
        self._require("put_bucket_encryption", name)["encryption"] = (algorithm, kms_key_id)

    def set_public_access_block(self, name: str, config: PublicAccessConfig) -> None:
        self.calls.append(("set_public_access_block", name))
        self._require("put_public_access_block", name)["public_access_block"] = config

    def list_objects(self, name: str, max_keys: int = 1) -> list[str]:
        self.calls.append(("list_objects", name))
        return self._require("list_objects", name)["objects"][:max_keys]

    def delete_bucket(self, name: str) -> None:
        self.calls.append(("delete_bucket", name))
        bucket = self._require("delete_bucket", name)
        if bucket["objects"]:
            raise BucketGatewayError(ErrorKind.SERVICE, "delete_bucket", name)
        del self.buckets[name]

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]


@pytest.fixture
def fake_gateway() -> FakeBucketGateway:
    """Create an empty in-memory gateway."""
    return FakeBucketGateway()


def make_client_error(code: str, operation: str, status: int | None = None) -> ClientError:
    """Build a botocore ClientError with the given error code."""
    response: dict[str, Any] = {"Error": {"Code": code, "Message": code}}
    if status is not None:
        response["ResponseMetadata"] = {"HTTPStatusCode": status}
    return ClientError(response, operation)


def make_event(
    request_type: str,
    properties: dict[str, Any],
    old_properties: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a raw custom resource event."""
    event: dict[str, Any] = {
        "RequestType": request_type,
        "RequestId": "req-1234",
        "StackId": "arn:aws:cloudformation:eu-west-1:123456789012:stack/wireguard/abc",
        "LogicalResourceId": "BucketResource",
        "ResponseURL": "https://cloudformation-custom-resource-response.s3.amazonaws.com/x?X-Amz-Signature=abc123",
        "ResourceProperties": {"ServiceToken": "arn:aws:lambda:eu-west-1:123456789012:function:provider", **properties},
    }
    if old_properties is not None:
        event["OldResourceProperties"] = {
            "ServiceToken": "arn:aws:lambda:eu-west-1:123456789012:function:provider",
            **old_properties,
        }
    return event
