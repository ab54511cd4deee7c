"""Display helpers: turn a compacted rule into a table row."""

from __future__ import annotations

from typing import Any, List

from kubedig.core.models import PolicyRule, ResourcePolicyRule

RULE_HEADERS = ["resources", "nonResourceURLs", "resourceNames", "verbs"]


def combine_resource_group(resources: List[str], api_groups: List[str]) -> List[str]:
    """
    `resource.group` for every resource/group pair; bare resource for the core group.

    Subresources keep their suffix after the group: `deployments/scale` in `apps` renders
    as `deployments.apps/scale`.
    """
    groups = api_groups or [""]
    out: List[str] = []
    for resource in resources:
        base, sep, sub = resource.partition("/")
        for group in groups:
            combined = f"{base}.{group}" if group else base
            if sep:
                combined = f"{combined}/{sub}"
            out.append(combined)
    return out


def display_row(rule: PolicyRule) -> List[Any]:
    if isinstance(rule, ResourcePolicyRule):
        return [combine_resource_group(rule.resources, rule.api_groups), [], list(rule.resource_names), list(rule.verbs)]
    return [[], list(rule.non_resource_urls), [], list(rule.verbs)]
