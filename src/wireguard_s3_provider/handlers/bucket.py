"""Lifecycle handler for the S3 bucket custom resource."""

from __future__ import annotations

from .. import metrics
from ..builders.bucket import create_encryption_config, create_public_access_config
from ..constants import (
    ACTION_ABSENT,
    ACTION_CREATED,
    ACTION_DELETED,
    ACTION_EXISTS,
    ACTION_RETAINED,
    ACTION_SKIPPED,
    ACTION_UPDATED,
    EVENT_REASON_BUCKET_ALREADY_OWNED,
    EVENT_REASON_BUCKET_CREATED,
    EVENT_REASON_BUCKET_DELETED,
    EVENT_REASON_BUCKET_EXISTS,
    EVENT_REASON_BUCKET_MISSING,
    EVENT_REASON_BUCKET_RETAINED,
    EVENT_REASON_BUCKET_UPDATED,
    EVENT_REASON_BUCKET_WRONG_REGION,
    EVENT_REASON_ENCRYPTION_APPLIED,
    EVENT_REASON_ENCRYPTION_REMOVAL_SKIPPED,
    EVENT_REASON_NAME_CHANGE_SKIPPED,
    EVENT_REASON_PUBLIC_ACCESS_APPLIED,
    EVENT_REASON_VERSIONING_DISABLE_SKIPPED,
    EVENT_REASON_VERSIONING_ENABLED,
    KIND_BUCKET,
)
from ..errors import BucketGatewayError, BucketNotFoundError, ErrorKind, PropertiesValidationError
from ..models import BucketProperties, LifecycleEvent, ReconciliationResult, RequestType
from ..services.s3.base import BucketGateway
from ..tracing import add_span_attribute, trace_span
from .base import BaseHandler


class BucketHandler(BaseHandler):
    """Reconciles one S3 bucket against its declared properties.

    Every branch is idempotent: the orchestration layer may re-deliver an
    event after a timeout, and running it again from scratch converges on
    the same remote state.
    """

    def __init__(self, gateway: BucketGateway):
        """Initialize bucket handler.

        Args:
            gateway: Remote bucket operations
        """
        super().__init__(KIND_BUCKET)
        self.gateway = gateway

    def reconcile(self, event: LifecycleEvent) -> ReconciliationResult:
        """Apply one lifecycle event and return its outcome."""
        with trace_span(
            f"{event.request_type.value.lower()}_bucket",
            kind=KIND_BUCKET,
            attributes={"bucket.name": event.desired.bucket_name},
        ):
            return self.reconcile_with_metrics(event, lambda: self._dispatch(event))

    def _dispatch(self, event: LifecycleEvent) -> ReconciliationResult:
        if event.request_type is RequestType.CREATE:
            return self.handle_create(event)
        if event.request_type is RequestType.UPDATE:
            return self.handle_update(event)
        return self.handle_delete(event)

    def handle_create(self, event: LifecycleEvent) -> ReconciliationResult:
        """Create the bucket and apply its configuration.

        An existing bucket is treated as already satisfied and left untouched.
        """
        desired = event.desired
        bucket_name = desired.bucket_name

        try:
            self.gateway.head_bucket(bucket_name)
        except BucketGatewayError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                self.log_info(event, f"Bucket {bucket_name} does not exist, will create it")
            elif e.kind is ErrorKind.WRONG_REGION:
                self.log_error(event, f"Bucket {bucket_name} exists in a different region",
                               error=e, reason=EVENT_REASON_BUCKET_WRONG_REGION)
                raise
            else:
                self.log_error(event, f"Error checking bucket existence for {bucket_name}", error=e)
                raise
        else:
            self.log_info(event, f"Bucket {bucket_name} already exists, skipping creation and configuration",
                          reason=EVENT_REASON_BUCKET_EXISTS)
            return self._result(bucket_name, ACTION_EXISTS)

        try:
            self.gateway.create_bucket(bucket_name)
            self.log_info(event, f"Bucket {bucket_name} created", reason=EVENT_REASON_BUCKET_CREATED)
        except BucketGatewayError as e:
            if e.kind is not ErrorKind.ALREADY_OWNED:
                metrics.bucket_operations_total.labels(operation="create", result="failed").inc()
                raise
            self.log_info(event, f"Bucket {bucket_name} already exists and is owned by this account",
                          reason=EVENT_REASON_BUCKET_ALREADY_OWNED)
        metrics.bucket_operations_total.labels(operation="create", result="success").inc()

        self._apply_public_access(event, desired)

        if desired.versioning:
            self._enable_versioning(event, desired)

        if desired.encryption is not None:
            self._apply_encryption(event, desired)

        return self._result(bucket_name, ACTION_CREATED)

    def handle_update(self, event: LifecycleEvent) -> ReconciliationResult:
        """Apply the properties that changed since the previous declaration.

        A bucket name change is never applied: the previous bucket keeps its
        identity and nothing is called remotely.
        """
        desired = event.desired
        previous = event.previous
        if previous is None:
            raise PropertiesValidationError("OldResourceProperties is required for Update requests")

        if desired.bucket_name != previous.bucket_name:
            self.log_warning(
                event,
                f"Bucket name change from {previous.bucket_name} to {desired.bucket_name} "
                "is not supported, skipping update to avoid replacement",
                reason=EVENT_REASON_NAME_CHANGE_SKIPPED,
            )
            metrics.skipped_operations_total.labels(operation="rename", reason="name_change").inc()
            return self._result(previous.bucket_name, ACTION_SKIPPED)

        bucket_name = desired.bucket_name
        try:
            self.gateway.head_bucket(bucket_name)
        except BucketGatewayError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                self.log_error(event, f"Bucket {bucket_name} does not exist, cannot update",
                               error=e, reason=EVENT_REASON_BUCKET_MISSING)
                raise BucketNotFoundError(bucket_name) from e
            self.log_error(event, f"Error checking bucket existence for {bucket_name}", error=e)
            raise

        changed = False

        if desired.versioning != previous.versioning:
            if desired.versioning:
                self._enable_versioning(event, desired)
                changed = True
            else:
                self.log_warning(event, f"Versioning disable requested for bucket {bucket_name}, "
                                 "skipping as versioning is never suspended",
                                 reason=EVENT_REASON_VERSIONING_DISABLE_SKIPPED)
                metrics.skipped_operations_total.labels(
                    operation="put_bucket_versioning", reason="disable_requested"
                ).inc()

        if desired.public_read_access != previous.public_read_access:
            self._apply_public_access(event, desired)
            changed = True

        if desired.encryption != previous.encryption or desired.kms_key_id != previous.kms_key_id:
            if desired.encryption is not None:
                self._apply_encryption(event, desired)
                changed = True
            else:
                self.log_warning(event, f"Encryption removal requested for bucket {bucket_name}, "
                                 "skipping as default encryption cannot be removed",
                                 reason=EVENT_REASON_ENCRYPTION_REMOVAL_SKIPPED)
                metrics.skipped_operations_total.labels(
                    operation="put_bucket_encryption", reason="removal_requested"
                ).inc()

        if changed:
            self.log_info(event, f"Bucket {bucket_name} updated", reason=EVENT_REASON_BUCKET_UPDATED)
            return self._result(bucket_name, ACTION_UPDATED)
        return self._result(bucket_name, ACTION_SKIPPED)

    def handle_delete(self, event: LifecycleEvent) -> ReconciliationResult:
        """Delete the bucket if it exists and holds no objects.

        A bucket with content is retained and the delete still succeeds.
        """
        bucket_name = event.desired.bucket_name

        try:
            self.gateway.head_bucket(bucket_name)
        except BucketGatewayError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                self.log_info(event, f"Bucket {bucket_name} does not exist, nothing to delete",
                              reason=EVENT_REASON_BUCKET_MISSING)
                return self._result(bucket_name, ACTION_ABSENT)
            self.log_error(event, f"Error checking bucket existence for {bucket_name}", error=e)
            raise

        keys = self.gateway.list_objects(bucket_name, max_keys=1)
        if keys:
            self.log_warning(event, f"Bucket {bucket_name} contains objects, skipping deletion to prevent data loss",
                             reason=EVENT_REASON_BUCKET_RETAINED)
            metrics.skipped_operations_total.labels(operation="delete_bucket", reason="not_empty").inc()
            return self._result(bucket_name, ACTION_RETAINED)

        try:
            self.gateway.delete_bucket(bucket_name)
        except BucketGatewayError:
            metrics.bucket_operations_total.labels(operation="delete", result="failed").inc()
            raise
        metrics.bucket_operations_total.labels(operation="delete", result="success").inc()
        self.log_info(event, f"Bucket {bucket_name} deleted", reason=EVENT_REASON_BUCKET_DELETED)
        return self._result(bucket_name, ACTION_DELETED)

    def _apply_public_access(self, event: LifecycleEvent, desired: BucketProperties) -> None:
        config = create_public_access_config(desired)
        self.gateway.set_public_access_block(desired.bucket_name, config)
        metrics.bucket_operations_total.labels(operation="put_public_access_block", result="success").inc()
        self.log_info(event, f"Public access block applied to bucket {desired.bucket_name}",
                      reason=EVENT_REASON_PUBLIC_ACCESS_APPLIED,
                      public_read_access=desired.public_read_access)

    def _enable_versioning(self, event: LifecycleEvent, desired: BucketProperties) -> None:
        self.gateway.set_bucket_versioning(desired.bucket_name, True)
        metrics.bucket_operations_total.labels(operation="put_bucket_versioning", result="success").inc()
        self.log_info(event, f"Versioning enabled for bucket {desired.bucket_name}",
                      reason=EVENT_REASON_VERSIONING_ENABLED)

    def _apply_encryption(self, event: LifecycleEvent, desired: BucketProperties) -> None:
        config = create_encryption_config(desired)
        if config is None:
            return
        self.gateway.set_bucket_encryption(desired.bucket_name, config.algorithm, config.kms_key_id)
        metrics.bucket_operations_total.labels(operation="put_bucket_encryption", result="success").inc()
        self.log_info(event, f"Encryption configured for bucket {desired.bucket_name}: {config.algorithm}",
                      reason=EVENT_REASON_ENCRYPTION_APPLIED)

    def _result(self, bucket_name: str, action: str) -> ReconciliationResult:
        add_span_attribute("reconcile.action", action)
        return ReconciliationResult(physical_id=bucket_name, bucket_name=bucket_name, action=action)
