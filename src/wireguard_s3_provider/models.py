"""Typed models for lifecycle events and reconciliation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, Strict, model_validator

from .constants import ATTR_BUCKET_NAME, SSE_AES256, SSE_KMS


class RequestType(str, Enum):
    """Lifecycle request types sent by the orchestration layer."""

    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class EncryptionMode(str, Enum):
    """Default server-side encryption modes. An absent mode means no encryption."""

    AES256 = SSE_AES256
    KMS = SSE_KMS


def _parse_flag(value: Any) -> Any:
    # CloudFormation stringifies every property value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


# Only JSON booleans and "true"/"false" strings are accepted
Flag = Annotated[bool, Strict(), BeforeValidator(_parse_flag)]


class BucketProperties(BaseModel):
    """Declared configuration for one bucket.

    Field aliases are the CloudFormation property names. Booleans arrive as
    "true"/"false" strings from CloudFormation and are coerced; any
    other value, including 1, 0 and "yes", is rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    bucket_name: str = Field(alias="BucketName", min_length=1)
    versioning: Flag = Field(default=False, alias="Versioning")
    public_read_access: Flag = Field(default=False, alias="PublicReadAccess")
    encryption: EncryptionMode | None = Field(default=None, alias="Encryption")
    kms_key_id: str | None = Field(default=None, alias="KmsKeyId")


class LifecycleEvent(BaseModel):
    """One reconciliation request."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    request_type: RequestType = Field(alias="RequestType")
    desired: BucketProperties = Field(alias="ResourceProperties")
    previous: BucketProperties | None = Field(default=None, alias="OldResourceProperties")
    request_id: str | None = Field(default=None, alias="RequestId")
    logical_resource_id: str | None = Field(default=None, alias="LogicalResourceId")
    physical_resource_id: str | None = Field(default=None, alias="PhysicalResourceId")
    stack_id: str | None = Field(default=None, alias="StackId")

    @model_validator(mode="after")
    def check_previous_on_update(self) -> "LifecycleEvent":
        if self.request_type is RequestType.UPDATE and self.previous is None:
            raise ValueError("OldResourceProperties is required for Update requests")
        return self


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of one lifecycle event."""

    physical_id: str
    bucket_name: str
    action: str

    @property
    def output_attributes(self) -> dict[str, str]:
        return {ATTR_BUCKET_NAME: self.bucket_name}
