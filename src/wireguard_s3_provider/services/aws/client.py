"""AWS S3 client implementation."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

import boto3
from botocore.exceptions import ClientError

from ... import metrics
from ...constants import DEFAULT_REGION
from ...errors import BucketGatewayError, classify_client_error
from .models import PublicAccessConfig

logger = logging.getLogger(__name__)


class AWSBucketGateway:
    """AWS S3 bucket gateway implementation."""

    def __init__(
        self,
        region: str | None = None,
        endpoint: str | None = None,
        path_style: bool = False,
    ) -> None:
        """Initialize AWS S3 gateway.

        Credentials come from the default boto3 chain (the Lambda execution role).

        Args:
            region: AWS region (defaults to the boto3 session region)
            endpoint: Optional S3 endpoint URL override
            path_style: Use path-style addressing
        """
        self.endpoint = endpoint
        self.path_style = path_style

        config = boto3.session.Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if path_style else "auto"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            region_name=region,
            config=config,
        )
        self.region = region or self.client.meta.region_name

    @contextmanager
    def _api_call(self, operation: str, name: str) -> Iterator[None]:
        """Time an API call and translate ClientError into BucketGatewayError."""
        start_time = time.time()
        try:
            yield
            metrics.api_call_total.labels(operation=operation, result="success").inc()
        except ClientError as e:
            kind = classify_client_error(e)
            metrics.api_call_total.labels(operation=operation, result=kind.value).inc()
            logger.error(f"Failed to {operation.replace('_', ' ')} for bucket {name}: {e}")
            raise BucketGatewayError(kind, operation, name, e) from e
        finally:
            metrics.api_call_duration_seconds.labels(operation=operation).observe(time.time() - start_time)

    def head_bucket(self, name: str) -> dict[str, Any]:
        """Check that a bucket exists and is reachable."""
        with self._api_call("head_bucket", name):
            return self.client.head_bucket(Bucket=name)

    def create_bucket(self, name: str) -> None:
        """Create a bucket in the gateway region."""
        create_params: dict[str, Any] = {"Bucket": name}
        if self.region and self.region != DEFAULT_REGION:
            create_params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

        with self._api_call("create_bucket", name):
            self.client.create_bucket(**create_params)

    def set_bucket_versioning(self, name: str, enabled: bool) -> None:
        """Set bucket versioning configuration."""
        with self._api_call("put_bucket_versioning", name):
            self.client.put_bucket_versioning(
                Bucket=name,
                VersioningConfiguration={"Status": "Enabled" if enabled else "Suspended"},
            )

    def set_bucket_encryption(self, name: str, algorithm: str, kms_key_id: str | None = None) -> None:
        """Set bucket encryption configuration."""
        encryption_config = {
            "Rules": [
                {
                    "ApplyServerSideEncryptionByDefault": {
                        "SSEAlgorithm": algorithm,
                    }
                }
            ]
        }

        if kms_key_id:
            encryption_config["Rules"][0]["ApplyServerSideEncryptionByDefault"]["KMSMasterKeyID"] = (
                kms_key_id
            )

        with self._api_call("put_bucket_encryption", name):
            self.client.put_bucket_encryption(
                Bucket=name,
                ServerSideEncryptionConfiguration=encryption_config,
            )

    def set_public_access_block(self, name: str, config: PublicAccessConfig) -> None:
        """Set the public access block configuration."""
        with self._api_call("put_public_access_block", name):
            self.client.put_public_access_block(
                Bucket=name,
                PublicAccessBlockConfiguration=config.to_api(),
            )

    def list_objects(self, name: str, max_keys: int = 1) -> list[str]:
        """List up to max_keys object keys."""
        with self._api_call("list_objects", name):
            response = self.client.list_objects_v2(Bucket=name, MaxKeys=max_keys)
        return [obj["Key"] for obj in response.get("Contents", [])]

    def delete_bucket(self, name: str) -> None:
        """Delete a bucket."""
        with self._api_call("delete_bucket", name):
            self.client.delete_bucket(Bucket=name)
