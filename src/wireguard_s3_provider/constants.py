"""Constants for the WireGuard S3 bucket provider."""

# Controller name reported in structured logs
CONTROLLER = "wireguard-s3-provider"

# Resource Kinds
KIND_BUCKET = "Bucket"

# Request Types
REQUEST_UPDATE = "Update"

# Response attributes
ATTR_BUCKET_NAME = "BucketName"

# Server-side encryption algorithms
SSE_AES256 = "AES256"
SSE_KMS = "aws:kms"

# Region in which CreateBucket must not carry a LocationConstraint
DEFAULT_REGION = "us-east-1"

# Provider registration
PROVIDER_ID = "CustomS3BucketProvider"
PROVIDER_CONSTRUCT_ID = f"com.amazonaws.cdk.custom-resources.{PROVIDER_ID}"
PROVIDER_HANDLER = "wireguard_s3_provider.main.handler"
PROVIDER_RUNTIME = "python3.12"
PROVIDER_TIMEOUT_SECONDS = 300

# Reconciliation outcomes
ACTION_CREATED = "created"
ACTION_EXISTS = "exists"
ACTION_UPDATED = "updated"
ACTION_SKIPPED = "skipped"
ACTION_DELETED = "deleted"
ACTION_RETAINED = "retained"
ACTION_ABSENT = "absent"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_SUCCEEDED = "ReconcileSucceeded"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_EVENT_RECEIVED = "EventReceived"
EVENT_REASON_VALIDATE_FAILED = "ValidateFailed"
EVENT_REASON_RESPONSE_SENT = "ResponseSent"
EVENT_REASON_BUCKET_CREATED = "BucketCreated"
EVENT_REASON_BUCKET_EXISTS = "BucketExists"
EVENT_REASON_BUCKET_ALREADY_OWNED = "BucketAlreadyOwned"
EVENT_REASON_BUCKET_WRONG_REGION = "BucketWrongRegion"
EVENT_REASON_BUCKET_MISSING = "BucketMissing"
EVENT_REASON_BUCKET_UPDATED = "BucketUpdated"
EVENT_REASON_BUCKET_DELETED = "BucketDeleted"
EVENT_REASON_BUCKET_RETAINED = "BucketRetained"
EVENT_REASON_NAME_CHANGE_SKIPPED = "NameChangeSkipped"
EVENT_REASON_VERSIONING_ENABLED = "VersioningEnabled"
EVENT_REASON_VERSIONING_DISABLE_SKIPPED = "VersioningDisableSkipped"
EVENT_REASON_PUBLIC_ACCESS_APPLIED = "PublicAccessApplied"
EVENT_REASON_ENCRYPTION_APPLIED = "EncryptionApplied"
EVENT_REASON_ENCRYPTION_REMOVAL_SKIPPED = "EncryptionRemovalSkipped"
