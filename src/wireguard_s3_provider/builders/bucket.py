"""Builders for bucket configuration payloads."""

from __future__ import annotations

from ..models import BucketProperties, EncryptionMode
from ..services.aws.models import EncryptionConfig, PublicAccessConfig


def create_public_access_config(properties: BucketProperties) -> PublicAccessConfig:
    """Create the public access block for the declared properties.

    Every flag is the inverse of PublicReadAccess: a private bucket blocks
    all four kinds of public access, a public bucket blocks none.
    """
    block = not properties.public_read_access
    return PublicAccessConfig(
        block_public_acls=block,
        block_public_policy=block,
        ignore_public_acls=block,
        restrict_public_buckets=block,
    )


def create_encryption_config(properties: BucketProperties) -> EncryptionConfig | None:
    """Create the default encryption for the declared properties.

    Args:
        properties: Validated bucket properties

    Returns:
        Encryption config, or None when no encryption mode is declared
    """
    if properties.encryption is None:
        return None

    # The key id only applies to KMS encryption
    kms_key_id = properties.kms_key_id if properties.encryption is EncryptionMode.KMS else None
    return EncryptionConfig(algorithm=properties.encryption.value, kms_key_id=kms_key_id or None)
