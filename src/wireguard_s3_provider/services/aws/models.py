"""Models for AWS S3 operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PublicAccessConfig:
    """Configuration for public access blocking."""

    block_public_acls: bool = True
    block_public_policy: bool = True
    ignore_public_acls: bool = True
    restrict_public_buckets: bool = True

    def to_api(self) -> dict[str, bool]:
        """Render as a PublicAccessBlockConfiguration payload."""
        return {
            "BlockPublicAcls": self.block_public_acls,
            "IgnorePublicAcls": self.ignore_public_acls,
            "BlockPublicPolicy": self.block_public_policy,
            "RestrictPublicBuckets": self.restrict_public_buckets,
        }


@dataclass(frozen=True)
class EncryptionConfig:
    """Default server-side encryption for a bucket."""

    algorithm: str
    kms_key_id: str | None = None
