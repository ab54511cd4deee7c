"""Review status -> compound policy rules."""

from __future__ import annotations

from typing import List, Optional, Tuple

from kubedig.core.models import NonResourcePolicyRule, PolicyRule, ResourcePolicyRule, SubjectRulesReviewStatus

INCOMPLETE_WARNING_PREFIX = "warning: the list may be incomplete: "


def incomplete_comment(status: SubjectRulesReviewStatus) -> Optional[str]:
    """Return the warning comment for an incomplete review, or None when the review is complete."""
    if not status.incomplete:
        return None
    return INCOMPLETE_WARNING_PREFIX + (status.evaluation_error or "")


def convert_to_policy_rules(
    status: SubjectRulesReviewStatus,
) -> List[PolicyRule]:
    """
    Map every review record to one compound rule.

    Resource rules come first, then non-resource rules, both in response order. Records are copied
    verbatim: a rule with zero verbs is still emitted and simply breaks down to nothing later.
    """
    out: List[PolicyRule] = []
    for r in status.resource_rules:
        out.append(
            ResourcePolicyRule(
                verbs=list(r.verbs),
                api_groups=list(r.api_groups),
                resources=list(r.resources),
                resource_names=list(r.resource_names),
            )
        )
    for nr in status.non_resource_rules:
        out.append(NonResourcePolicyRule(verbs=list(nr.verbs), non_resource_urls=list(nr.non_resource_urls)))
    return out


def split_status(
    status: SubjectRulesReviewStatus,
) -> Tuple[List[PolicyRule], Optional[str]]:
    """Short-circuit incomplete reviews: no rules, only the warning."""
    comment = incomplete_comment(status)
    if comment is not None:
        return [], comment
    return convert_to_policy_rules(status), None
