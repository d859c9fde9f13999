"""Registration of the bucket handler as a singleton provider per deployment scope."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from .constants import (
    PROVIDER_CONSTRUCT_ID,
    PROVIDER_HANDLER,
    PROVIDER_ID,
    PROVIDER_RUNTIME,
    PROVIDER_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

POLICY_VERSION = "2012-10-17"

# ListBucket authorizes both HeadBucket and ListObjectsV2
S3_ACTIONS = (
    "s3:CreateBucket",
    "s3:ListBucket",
    "s3:DeleteBucket",
    "s3:GetBucketVersioning",
    "s3:PutBucketVersioning",
    "s3:GetEncryptionConfiguration",
    "s3:PutEncryptionConfiguration",
    "s3:GetBucketPublicAccessBlock",
    "s3:PutBucketPublicAccessBlock",
    "s3:GetBucketLocation",
)

KMS_ACTIONS = (
    "kms:Decrypt",
    "kms:GenerateDataKey",
)


@dataclass(frozen=True)
class PolicyStatement:
    """One IAM policy statement granted to the handler."""

    actions: tuple[str, ...]
    resources: tuple[str, ...] = ("*",)
    effect: str = "Allow"

    def to_dict(self) -> dict[str, Any]:
        return {
            "Effect": self.effect,
            "Action": list(self.actions),
            "Resource": list(self.resources),
        }


def default_policy_statements() -> tuple[PolicyStatement, ...]:
    """Return the minimal permission set of the bucket handler."""
    return (
        PolicyStatement(actions=S3_ACTIONS),
        PolicyStatement(actions=KMS_ACTIONS),
    )


@dataclass(frozen=True)
class ProviderRegistration:
    """The registered handler endpoint of one deployment scope."""

    scope_id: str
    construct_id: str = PROVIDER_CONSTRUCT_ID
    handler: str = PROVIDER_HANDLER
    runtime: str = PROVIDER_RUNTIME
    timeout_seconds: int = PROVIDER_TIMEOUT_SECONDS
    policy_statements: tuple[PolicyStatement, ...] = field(default_factory=default_policy_statements)

    @property
    def service_token(self) -> str:
        """Identifier resources use to address this provider."""
        return f"{self.scope_id}/{self.construct_id}/{PROVIDER_ID}"

    def policy_document(self) -> dict[str, Any]:
        """Render the granted permissions as an IAM policy document."""
        return {
            "Version": POLICY_VERSION,
            "Statement": [statement.to_dict() for statement in self.policy_statements],
        }

    def policy_json(self) -> str:
        return json.dumps(self.policy_document(), indent=2)


class ProviderRegistry:
    """Keeps at most one provider registration per deployment scope."""

    def __init__(self) -> None:
        self._registrations: dict[str, ProviderRegistration] = {}

    def find(self, scope_id: str) -> ProviderRegistration | None:
        return self._registrations.get(self._key(scope_id))

    def get_or_create(self, scope_id: str) -> ProviderRegistration:
        """Return the registration for a scope, creating it on first use.

        Args:
            scope_id: Deployment scope identity (e.g. stack name)

        Returns:
            The single registration of that scope
        """
        if not scope_id:
            raise ValueError("scope_id is required")

        key = self._key(scope_id)
        registration = self._registrations.get(key)
        if registration is None:
            registration = ProviderRegistration(scope_id=scope_id)
            self._registrations[key] = registration
            logger.info(f"Registered bucket provider {registration.service_token}")
        return registration

    def get_service_token(self, scope_id: str) -> str:
        return self.get_or_create(scope_id).service_token

    def clear(self) -> None:
        self._registrations.clear()

    @staticmethod
    def _key(scope_id: str) -> str:
        return f"{scope_id}:{PROVIDER_CONSTRUCT_ID}"


# Process-wide registry
registry = ProviderRegistry()
