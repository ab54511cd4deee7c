"""kubedig: read-only Kubernetes discovery buckets."""

__version__ = "0.1.0"
