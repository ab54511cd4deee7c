"""Deterministic display order for compacted rules."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from kubedig.core.models import PolicyRule, ResourcePolicyRule


def rule_sort_key(rule: PolicyRule) -> Tuple:
    """
    Verb count, verbs, resources, groups, names, URLs; then kind and raw field order.

    Set-valued fields are compared sorted so the key does not depend on incoming list order.
    The raw tuples at the end keep the order total for rules that differ only in ordering.
    """
    verbs = sorted(rule.verbs)
    if isinstance(rule, ResourcePolicyRule):
        return (
            len(set(verbs)),
            verbs,
            sorted(rule.resources),
            sorted(rule.api_groups),
            sorted(rule.resource_names),
            [],
            rule.kind,
            (rule.verbs, rule.resources, rule.api_groups, rule.resource_names),
        )
    return (
        len(set(verbs)),
        verbs,
        [],
        [],
        [],
        sorted(rule.non_resource_urls),
        rule.kind,
        (rule.verbs, rule.non_resource_urls, [], []),
    )


def sort_rules(rules: Iterable[PolicyRule]) -> List[PolicyRule]:
    # sorted() is stable: equal keys keep their incoming order.
    return sorted(rules, key=rule_sort_key)
