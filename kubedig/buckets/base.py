from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from kubedig.core.models import Results
from kubedig.providers.k8s_provider import K8sProvider


class MissingClientError(Exception):
    """A bucket that needs the API server was built without a provider."""


class Bucket(Protocol):
    """
    A named, self-contained discovery check.

    Buckets are read-only unless their BucketSpec declares side effects, and produce exactly one
    Results table per run.
    """

    def run(self) -> Results:
        """Run the check. API failures propagate to the caller."""


@dataclass(frozen=True)
class BucketConfig:
    namespace: str = ""
    provider: Optional[K8sProvider] = None


@dataclass(frozen=True)
class BucketSpec:
    name: str
    description: str
    factory: Callable[[BucketConfig], Bucket]
    aliases: List[str] = field(default_factory=list)
    side_effects: bool = False
    require_client: bool = True


class SideEffectsNotAllowedError(Exception):
    """A bucket with side effects was requested without explicitly allowing them."""
