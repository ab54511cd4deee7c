"""Version bucket: API server version information."""

from __future__ import annotations

from datetime import timezone

from dateutil import parser as date_parser

from kubedig.buckets.base import BucketConfig, BucketSpec, MissingClientError
from kubedig.buckets.registry import BucketRegistry
from kubedig.core.models import Results

BUCKET_NAME = "version"
BUCKET_DESCRIPTION = "Version dumps the API server version information."
BUCKET_ALIASES = ["versions", "v"]


def format_build_date(raw: str) -> str:
    """Normalize the build timestamp to UTC `YYYY-MM-DDTHH:MM:SSZ`; unparseable values pass through."""
    if not raw:
        return ""
    try:
        dt = date_parser.isoparse(raw)
    except (ValueError, TypeError, OverflowError):
        return raw
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class VersionBucket:
    def __init__(self, config: BucketConfig) -> None:
        if config.provider is None:
            raise MissingClientError(f"bucket {BUCKET_NAME!r} requires a Kubernetes client")
        self.config = config

    def run(self) -> Results:
        res = Results(name=BUCKET_NAME)
        v = self.config.provider.get_server_version()
        res.set_headers(["version", "buildDate", "platform", "goVersion"])
        res.add_content([v.git_version, format_build_date(v.build_date), v.platform, v.go_version])
        return res


def register(registry: BucketRegistry) -> None:
    registry.register(
        BucketSpec(
            name=BUCKET_NAME,
            description=BUCKET_DESCRIPTION,
            aliases=list(BUCKET_ALIASES),
            factory=VersionBucket,
        )
    )
