"""Lifecycle handlers for custom resources."""

from .bucket import BucketHandler

__all__ = ["BucketHandler"]
