"""Compound rules -> atomic rules (one verb, one group/resource or one URL)."""

from __future__ import annotations

from typing import Iterable, List

from kubedig.core.models import NonResourcePolicyRule, PolicyRule, ResourcePolicyRule

CORE_GROUP = ""


def effective_api_groups(rule: ResourcePolicyRule) -> List[str]:
    # An empty group list addresses the core group.
    return list(rule.api_groups) if rule.api_groups else [CORE_GROUP]


def breakdown_rule(rule: PolicyRule) -> List[PolicyRule]:
    """
    Expand a compound rule into the atomic rules it authorizes.

    Order is verb-major (verb, then group, then resource). Every atomic resource rule carries the
    source rule's full `resource_names` list. Empty verb/resource/URL lists yield no atomic rules.
    """
    out: List[PolicyRule] = []
    if isinstance(rule, ResourcePolicyRule):
        groups = effective_api_groups(rule)
        for verb in rule.verbs:
            for group in groups:
                for resource in rule.resources:
                    out.append(
                        ResourcePolicyRule(
                            verbs=[verb],
                            api_groups=[group],
                            resources=[resource],
                            resource_names=list(rule.resource_names),
                        )
                    )
        return out
    if isinstance(rule, NonResourcePolicyRule):
        for verb in rule.verbs:
            for url in rule.non_resource_urls:
                out.append(NonResourcePolicyRule(verbs=[verb], non_resource_urls=[url]))
        return out
    raise TypeError(f"not a policy rule: {type(rule).__name__}")


def breakdown_rules(rules: Iterable[PolicyRule]) -> List[PolicyRule]:
    out: List[PolicyRule] = []
    for rule in rules:
        out.extend(breakdown_rule(rule))
    return out


def is_atomic(rule: PolicyRule) -> bool:
    if isinstance(rule, ResourcePolicyRule):
        return len(rule.verbs) == 1 and len(rule.api_groups) == 1 and len(rule.resources) == 1
    if isinstance(rule, NonResourcePolicyRule):
        return len(rule.verbs) == 1 and len(rule.non_resource_urls) == 1
    return False
