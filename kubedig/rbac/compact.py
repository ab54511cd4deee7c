"""Atomic rules -> minimal equivalent set of compound rules.

Two merge phases over resource rules:
- A: same verb + same resourceNames set -> merge group/resource pairs
- B: same groups + same resources + same resourceNames set -> merge verbs

Non-resource rules only get the phase B analog (same URL -> merge verbs).

Every emitted list (verbs, groups, resources, resourceNames, URLs) is sorted, so output does
not depend on input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from kubedig.core.models import NonResourcePolicyRule, PolicyRule, ResourcePolicyRule
from kubedig.rbac.breakdown import breakdown_rules, is_atomic

logger = logging.getLogger(__name__)


class CompactionError(Exception):
    """A value that is not a well-formed rule of exactly one variant reached the merge stage."""


@dataclass
class _VerbGroup:
    resource_names: List[str]
    # api group -> resources granted in that group
    by_group: Dict[str, Set[str]] = field(default_factory=dict)


@dataclass
class _ResourceGroup:
    api_groups: List[str]
    resources: List[str]
    resource_names: List[str]
    verbs: Set[str] = field(default_factory=set)


def _check_variant(rule: object) -> None:
    if isinstance(rule, ResourcePolicyRule):
        if getattr(rule, "non_resource_urls", None):
            raise CompactionError("resource rule carries nonResourceURLs")
        return
    if isinstance(rule, NonResourcePolicyRule):
        if getattr(rule, "api_groups", None) or getattr(rule, "resources", None):
            raise CompactionError("non-resource rule carries apiGroups/resources")
        return
    raise CompactionError(f"not a policy rule: {type(rule).__name__}")


def _atomize(rules: Iterable[PolicyRule]) -> Tuple[List[ResourcePolicyRule], List[NonResourcePolicyRule]]:
    rules = list(rules)
    for rule in rules:
        _check_variant(rule)
    resource_atoms: List[ResourcePolicyRule] = []
    non_resource_atoms: List[NonResourcePolicyRule] = []
    for atom in breakdown_rules(rules):
        if not is_atomic(atom):
            raise CompactionError(f"breakdown produced a non-atomic rule: {atom!r}")
        if isinstance(atom, ResourcePolicyRule):
            resource_atoms.append(atom)
        else:
            non_resource_atoms.append(atom)
    return resource_atoms, non_resource_atoms


def _merge_by_verb(atoms: List[ResourcePolicyRule]) -> List[ResourcePolicyRule]:
    """
    Phase A.

    The emitted groups x resources cross product must equal the union of pairs exactly, so pairs
    are gathered per api group first and groups sharing an identical resource set become one rule.
    """
    grouped: Dict[Tuple[str, FrozenSet[str]], _VerbGroup] = {}
    for atom in atoms:
        key = (atom.verbs[0], frozenset(atom.resource_names))
        entry = grouped.get(key)
        if entry is None:
            entry = _VerbGroup(resource_names=sorted(set(atom.resource_names)))
            grouped[key] = entry
        entry.by_group.setdefault(atom.api_groups[0], set()).add(atom.resources[0])

    out: List[ResourcePolicyRule] = []
    for (verb, _names), entry in grouped.items():
        groups_by_resources: Dict[FrozenSet[str], Set[str]] = {}
        for api_group, resources in entry.by_group.items():
            groups_by_resources.setdefault(frozenset(resources), set()).add(api_group)
        for resources, api_groups in groups_by_resources.items():
            out.append(
                ResourcePolicyRule(
                    verbs=[verb],
                    api_groups=sorted(api_groups),
                    resources=sorted(resources),
                    resource_names=list(entry.resource_names),
                )
            )
    return out


def _merge_verbs(rules: List[ResourcePolicyRule]) -> List[ResourcePolicyRule]:
    """Phase B."""
    grouped: Dict[Tuple[FrozenSet[str], FrozenSet[str], FrozenSet[str]], _ResourceGroup] = {}
    for rule in rules:
        key = (frozenset(rule.api_groups), frozenset(rule.resources), frozenset(rule.resource_names))
        entry = grouped.get(key)
        if entry is None:
            entry = _ResourceGroup(
                api_groups=sorted(set(rule.api_groups)),
                resources=sorted(set(rule.resources)),
                resource_names=sorted(set(rule.resource_names)),
            )
            grouped[key] = entry
        entry.verbs.update(rule.verbs)
    return [
        ResourcePolicyRule(
            verbs=sorted(e.verbs),
            api_groups=e.api_groups,
            resources=e.resources,
            resource_names=e.resource_names,
        )
        for e in grouped.values()
    ]


def _merge_non_resource(atoms: List[NonResourcePolicyRule]) -> List[NonResourcePolicyRule]:
    verbs_by_url: Dict[str, Set[str]] = {}
    for atom in atoms:
        verbs_by_url.setdefault(atom.non_resource_urls[0], set()).add(atom.verbs[0])
    return [NonResourcePolicyRule(verbs=sorted(verbs), non_resource_urls=[url]) for url, verbs in verbs_by_url.items()]


def _authorizes_nothing(rule: PolicyRule) -> bool:
    if not rule.verbs:
        return True
    if isinstance(rule, ResourcePolicyRule):
        return not rule.resources
    return not rule.non_resource_urls


def compact_rules(rules: Iterable[PolicyRule]) -> List[PolicyRule]:
    """
    Merge rules into the minimal equivalent compound set.

    Input may be atomic or compound; it is broken down first, so compacting already compacted
    output yields the same rule set again. Raises CompactionError on malformed input values.
    """
    resource_atoms, non_resource_atoms = _atomize(rules)
    phase_a = _merge_by_verb(resource_atoms)
    merged: List[PolicyRule] = []
    merged.extend(_merge_verbs(phase_a))
    merged.extend(_merge_non_resource(non_resource_atoms))
    out = [r for r in merged if not _authorizes_nothing(r)]
    logger.debug(
        "compacted %d resource + %d non-resource atomic rules into %d rules (phase A: %d)",
        len(resource_atoms),
        len(non_resource_atoms),
        len(out),
        len(phase_a),
    )
    return out
