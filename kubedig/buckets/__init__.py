"""Discovery buckets and the registry that composes them."""

from kubedig.buckets.base import Bucket, BucketConfig, BucketSpec, MissingClientError, SideEffectsNotAllowedError
from kubedig.buckets.registry import BucketRegistry, build_default_registry

__all__ = [
    "Bucket",
    "BucketConfig",
    "BucketSpec",
    "BucketRegistry",
    "MissingClientError",
    "SideEffectsNotAllowedError",
    "build_default_registry",
]
