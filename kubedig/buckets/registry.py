from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from kubedig.buckets.base import Bucket, BucketConfig, BucketSpec, MissingClientError, SideEffectsNotAllowedError
from kubedig.core.models import Results

logger = logging.getLogger(__name__)


@dataclass
class BucketRegistry:
    """Buckets by name and alias. Built once at startup and passed to whoever runs buckets."""

    _specs: List[BucketSpec] = field(default_factory=list)
    _index: Dict[str, BucketSpec] = field(default_factory=dict)

    def register(self, spec: BucketSpec) -> None:
        keys = [spec.name.lower()] + [a.lower() for a in spec.aliases]
        for key in keys:
            if key in self._index:
                raise ValueError(f"bucket name or alias {key!r} already registered by {self._index[key].name!r}")
        self._specs.append(spec)
        for key in keys:
            self._index[key] = spec

    def get(self, name: str) -> BucketSpec:
        spec = self._index.get((name or "").strip().lower())
        if spec is None:
            raise KeyError(f"unknown bucket {name!r} (known: {', '.join(self.names())})")
        return spec

    def names(self) -> List[str]:
        return [s.name for s in self._specs]

    def specs(self) -> List[BucketSpec]:
        return list(self._specs)

    def build(self, name: str, config: BucketConfig) -> Bucket:
        spec = self.get(name)
        if spec.require_client and config.provider is None:
            raise MissingClientError(f"bucket {spec.name!r} requires a Kubernetes client")
        return spec.factory(config)

    def resolve(self, names: Iterable[str]) -> List[BucketSpec]:
        """Resolve names/aliases, dropping repeats of the same bucket (first occurrence wins)."""
        out: List[BucketSpec] = []
        for name in names:
            spec = self.get(name)
            if spec not in out:
                out.append(spec)
        return out

    def run(self, names: Iterable[str], config: BucketConfig, *, allow_side_effects: bool = False) -> List[Results]:
        specs = self.resolve(names)
        blocked = [s.name for s in specs if s.side_effects and not allow_side_effects]
        if blocked:
            raise SideEffectsNotAllowedError(f"buckets with side effects need explicit opt-in: {', '.join(blocked)}")
        results: List[Results] = []
        for spec in specs:
            logger.info("running bucket %s", spec.name)
            results.append(self.build(spec.name, config).run())
        return results


def build_default_registry() -> BucketRegistry:
    reg = BucketRegistry()
    # Explicit composition; one line per shipped bucket.
    from kubedig.buckets import authorization, version

    for module in (authorization, version):
        module.register(reg)
    return reg
