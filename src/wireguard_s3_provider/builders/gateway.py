"""Builder for bucket gateway instances."""

from __future__ import annotations

import os

from ..services.aws.client import AWSBucketGateway

_gateway: AWSBucketGateway | None = None


def create_gateway_from_env() -> AWSBucketGateway:
    """Create a bucket gateway from environment configuration.

    Environment Variables:
        AWS_REGION: Region for bucket operations (set by the Lambda runtime)
        S3_ENDPOINT_URL: Optional S3 endpoint override
        S3_PATH_STYLE: Use path-style addressing when "true" (default: false)

    Returns:
        Configured bucket gateway
    """
    region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
    endpoint = os.getenv("S3_ENDPOINT_URL") or None
    path_style = os.getenv("S3_PATH_STYLE", "false").lower() == "true"

    return AWSBucketGateway(region=region, endpoint=endpoint, path_style=path_style)


def get_gateway() -> AWSBucketGateway:
    """Return the gateway shared across warm invocations, creating it on first use."""
    global _gateway
    if _gateway is None:
        _gateway = create_gateway_from_env()
    return _gateway


def reset_gateway() -> None:
    """Drop the shared gateway so the next call rebuilds it from the environment."""
    global _gateway
    _gateway = None
