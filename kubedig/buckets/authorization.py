"""Authorization bucket: what can the current context/token do in a namespace."""

from __future__ import annotations

import logging

from kubedig.buckets.base import BucketConfig, BucketSpec, MissingClientError
from kubedig.buckets.registry import BucketRegistry
from kubedig.core.models import Results
from kubedig.rbac import get_compact_rules
from kubedig.rbac.display import RULE_HEADERS, display_row

logger = logging.getLogger(__name__)

BUCKET_NAME = "authorization"
BUCKET_DESCRIPTION = "Authorization checks your API permissions with the current context or the available token."
BUCKET_ALIASES = ["authorizations", "auth"]


class AuthorizationBucket:
    def __init__(self, config: BucketConfig) -> None:
        if config.provider is None:
            raise MissingClientError(f"bucket {BUCKET_NAME!r} requires a Kubernetes client")
        self.config = config

    def run(self) -> Results:
        res = Results(name=BUCKET_NAME)
        res.add_comment(f'Checking current context/token permissions in the "{self.config.namespace}" namespace.')

        # Transport errors propagate: no table for a failed call.
        status = self.config.provider.create_self_subject_rules_review(self.config.namespace)

        rules, comment = get_compact_rules(status)
        res.set_headers(RULE_HEADERS)
        for rule in rules:
            res.add_content(display_row(rule))
        if comment:
            res.add_comment(comment)
        logger.info("authorization: %d rules in namespace %r", len(rules), self.config.namespace)
        return res


def register(registry: BucketRegistry) -> None:
    registry.register(
        BucketSpec(
            name=BUCKET_NAME,
            description=BUCKET_DESCRIPTION,
            aliases=list(BUCKET_ALIASES),
            factory=AuthorizationBucket,
            side_effects=False,
            require_client=True,
        )
    )
