"""Semantic value of a rule set: the exact set of permission tuples it grants.

This is the reference definition of rule equivalence. The pipeline never calls it; the test
suite uses it to check that breakdown and compaction grant exactly what their input granted.
"""

from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple, Union

from kubedig.core.models import NonResourcePolicyRule, PolicyRule, ResourcePolicyRule
from kubedig.rbac.breakdown import effective_api_groups

# (verb, group, resource, name) for resource rules, name=None when unrestricted.
ResourceTuple = Tuple[str, str, str, Optional[str]]
# (verb, url) for non-resource rules.
NonResourceTuple = Tuple[str, str]


def semantic_value(
    rules: Iterable[PolicyRule],
) -> Set[Union[ResourceTuple, NonResourceTuple]]:
    out: Set[Union[ResourceTuple, NonResourceTuple]] = set()
    for rule in rules:
        if isinstance(rule, ResourcePolicyRule):
            names = list(rule.resource_names) or [None]
            for verb in rule.verbs:
                for group in effective_api_groups(rule):
                    for resource in rule.resources:
                        for name in names:
                            out.add((verb, group, resource, name))
        elif isinstance(rule, NonResourcePolicyRule):
            for verb in rule.verbs:
                for url in rule.non_resource_urls:
                    out.add((verb, url))
        else:
            raise TypeError(f"not a policy rule: {type(rule).__name__}")
    return out
