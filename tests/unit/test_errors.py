"""Tests for error classification and sanitization utilities."""

from __future__ import annotations

from conftest import make_client_error
from wireguard_s3_provider.errors import (
    BucketGatewayError,
    BucketNotFoundError,
    BucketProviderError,
    ErrorKind,
    PropertiesValidationError,
    classify_client_error,
)
from wireguard_s3_provider.utils.errors import (
    sanitize_dict,
    sanitize_error_message,
    sanitize_exception,
)


class TestClassifyClientError:
    """Test cases for classify_client_error."""

    def test_not_found_codes(self):
        """Test every not-found code maps to NOT_FOUND."""
        for code in ("404", "NoSuchBucket", "NotFound"):
            assert classify_client_error(make_client_error(code, "HeadBucket")) is ErrorKind.NOT_FOUND

    def test_already_owned(self):
        """Test BucketAlreadyOwnedByYou maps to ALREADY_OWNED."""
        error = make_client_error("BucketAlreadyOwnedByYou", "CreateBucket", 409)
        assert classify_client_error(error) is ErrorKind.ALREADY_OWNED

    def test_wrong_region_by_code(self):
        """Test redirect codes map to WRONG_REGION."""
        assert classify_client_error(make_client_error("PermanentRedirect", "ListObjectsV2")) is ErrorKind.WRONG_REGION
        assert classify_client_error(make_client_error("301", "HeadBucket")) is ErrorKind.WRONG_REGION

    def test_wrong_region_by_status(self):
        """Test an HTTP 301 status maps to WRONG_REGION."""
        error = make_client_error("Moved", "HeadBucket", 301)
        assert classify_client_error(error) is ErrorKind.WRONG_REGION

    def test_other_errors_are_service_errors(self):
        """Test everything else maps to SERVICE."""
        for code in ("AccessDenied", "BucketAlreadyExists", "InternalError", "403"):
            assert classify_client_error(make_client_error(code, "CreateBucket")) is ErrorKind.SERVICE

    def test_missing_error_code(self):
        """Test a response without an error code maps to SERVICE."""
        from botocore.exceptions import ClientError

        assert classify_client_error(ClientError({}, "HeadBucket")) is ErrorKind.SERVICE


class TestExceptions:
    """Test cases for the exception hierarchy."""

    def test_hierarchy(self):
        """Test all errors share the provider base class."""
        assert issubclass(PropertiesValidationError, BucketProviderError)
        assert issubclass(BucketGatewayError, BucketProviderError)
        assert issubclass(BucketNotFoundError, BucketProviderError)

    def test_gateway_error_message(self):
        """Test the gateway error names the operation and bucket."""
        cause = make_client_error("AccessDenied", "PutBucketEncryption", 403)
        error = BucketGatewayError(ErrorKind.SERVICE, "put_bucket_encryption", "wg-backups-1", cause)

        assert "put_bucket_encryption" in str(error)
        assert "wg-backups-1" in str(error)
        assert "AccessDenied" in str(error)
        assert error.cause is cause

    def test_validation_error_keeps_field_errors(self):
        """Test validation errors carry field level messages."""
        error = PropertiesValidationError("invalid", ["BucketName: Field required"])
        assert error.errors == ["BucketName: Field required"]
        assert PropertiesValidationError("invalid").errors == []

    def test_bucket_not_found_message(self):
        """Test the not-found error names the bucket."""
        assert "wg-backups-1" in str(BucketNotFoundError("wg-backups-1"))


class TestSanitize:
    """Test cases for the sanitization helpers."""

    def test_sanitize_secret_key(self):
        """Test that secret keys are sanitized."""
        message = "Error: secret_access_key: wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY"
        result = sanitize_error_message(message)
        assert "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY" not in result
        assert "[REDACTED]" in result

    def test_sanitize_presigned_signature(self):
        """Test that presigned URL signatures are sanitized."""
        message = "PUT https://example.com/x?X-Amz-Credential=AKIA%2F123&X-Amz-Signature=deadbeef"
        result = sanitize_error_message(message)
        assert "deadbeef" not in result
        assert "AKIA%2F123" not in result

    def test_bucket_names_are_kept(self):
        """Test that bucket names stay readable for diagnostics."""
        message = "head_bucket failed for bucket wg-backups-1 (NotFound)"
        assert sanitize_error_message(message) == message

    def test_sanitize_exception(self):
        """Test that exceptions are sanitized via their message."""
        error = ValueError("session_token: FQoGZXIvYXdzEXAMPLE")
        assert "FQoGZXIvYXdzEXAMPLE" not in sanitize_exception(error)

    def test_sanitize_dict(self):
        """Test nested dictionaries are sanitized."""
        data = {
            "BucketName": "wg-backups-1",
            "credentials": {"AccessKeyId": "AKIA"},
            "nested": {"session_token": "abc", "Versioning": True},
        }

        result = sanitize_dict(data)

        assert result["BucketName"] == "wg-backups-1"
        assert result["credentials"] == "[REDACTED]"
        assert result["nested"]["session_token"] == "[REDACTED]"
        assert result["nested"]["Versioning"] is True

    def test_sanitize_dict_extra_keys(self):
        """Test additional sensitive keys are redacted."""
        result = sanitize_dict({"ResponseURL": "https://example.com"}, {"ResponseURL"})
        assert result["ResponseURL"] == "[REDACTED]"
