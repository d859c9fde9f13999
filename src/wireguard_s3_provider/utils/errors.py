"""Error sanitization utilities to prevent credential leakage in logs."""

import re
from typing import Any


# Patterns that might expose credentials
SENSITIVE_PATTERNS = [
    r"access[_\s]?key[_\s]?id[:=\s]+([A-Z0-9]{16,128})",
    r"secret[_\s]?access[_\s]?key[:=\s]+([A-Za-z0-9/+=]{40})",
    r"session[_\s]?token[:=\s]+([A-Za-z0-9/+=]+)",
    r"X-Amz-Signature=([0-9a-f]+)",
    r"X-Amz-Credential=([^&\s]+)",
    r"X-Amz-Security-Token=([^&\s]+)",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "access_key_id",
    "secret_access_key",
    "session_token",
    "password",
    "secret",
    "credentials",
    "token",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove credentials.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(
            pattern,
            lambda match: match.group(0).replace(match.group(1), "[REDACTED]"),
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: BaseException) -> str:
    """Sanitize exception message.

    Args:
        error: Exception object

    Returns:
        Sanitized error message
    """
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized copy with sensitive values redacted
    """
    all_sensitive = {key.lower() for key in SENSITIVE_FIELDS | (sensitive_keys or set())}
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized
