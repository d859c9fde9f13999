"""Prometheus metrics for the WireGuard S3 bucket provider."""

from __future__ import annotations

import logging
import os

from prometheus_client import REGISTRY, Counter, Histogram, push_to_gateway

logger = logging.getLogger(__name__)

# Reconciliation metrics
reconcile_total = Counter(
    "wireguard_s3_provider_reconcile_total",
    "Total number of reconciliations",
    ["request_type", "result"],
)

reconcile_duration_seconds = Histogram(
    "wireguard_s3_provider_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["request_type"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# S3 operation metrics
bucket_operations_total = Counter(
    "wireguard_s3_provider_bucket_operations_total",
    "Total number of S3 bucket operations",
    ["operation", "result"],
)

skipped_operations_total = Counter(
    "wireguard_s3_provider_skipped_operations_total",
    "Total number of operations deliberately skipped to protect data",
    ["operation", "reason"],
)

# API call metrics
api_call_total = Counter(
    "wireguard_s3_provider_api_call_total",
    "Total number of API calls",
    ["operation", "result"],
)

api_call_duration_seconds = Histogram(
    "wireguard_s3_provider_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

# Error metrics
error_total = Counter(
    "wireguard_s3_provider_error_total",
    "Total number of errors by type",
    ["request_type", "error_type"],
)


def push_metrics() -> bool:
    """Push the default registry to a Pushgateway, if one is configured.

    Environment Variables:
        PROMETHEUS_PUSHGATEWAY_URL: Pushgateway address (push disabled when unset)
        PROMETHEUS_JOB_NAME: Job label (default: wireguard-s3-provider)

    Returns:
        True if metrics were pushed, False otherwise
    """
    gateway = os.getenv("PROMETHEUS_PUSHGATEWAY_URL")
    if not gateway:
        return False

    job = os.getenv("PROMETHEUS_JOB_NAME", "wireguard-s3-provider")
    try:
        push_to_gateway(gateway, job=job, registry=REGISTRY)
    except Exception as e:
        # A failed push never fails the invocation
        logger.warning(f"Failed to push metrics to {gateway}: {e}")
        return False
    return True
