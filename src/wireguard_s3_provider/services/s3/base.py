"""Base bucket gateway interface."""

from __future__ import annotations

from typing import Any, Protocol

from ..aws.models import PublicAccessConfig


class BucketGateway(Protocol):
    """Protocol defining the remote bucket operations the reconciler uses.

    Every method raises BucketGatewayError on a remote failure.
    """

    def head_bucket(self, name: str) -> dict[str, Any]:
        """Probe bucket existence and access."""
        ...

    def create_bucket(self, name: str) -> None:
        """Create a bucket."""
        ...

    def set_bucket_versioning(self, name: str, enabled: bool) -> None:
        """Set bucket versioning status."""
        ...

    def set_bucket_encryption(self, name: str, algorithm: str, kms_key_id: str | None = None) -> None:
        """Set the default server-side encryption of a bucket."""
        ...

    def set_public_access_block(self, name: str, config: PublicAccessConfig) -> None:
        """Set the public access block of a bucket."""
        ...

    def list_objects(self, name: str, max_keys: int = 1) -> list[str]:
        """List up to max_keys object keys in a bucket."""
        ...

    def delete_bucket(self, name: str) -> None:
        """Delete an empty bucket."""
        ...
