"""Policy rule normalization: convert -> breakdown -> compact -> sort.

Every stage is a pure function over in-memory rules; nothing here talks to the API server.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from kubedig.core.models import PolicyRule, SubjectRulesReviewStatus
from kubedig.rbac.breakdown import breakdown_rule, breakdown_rules
from kubedig.rbac.compact import CompactionError, compact_rules
from kubedig.rbac.convert import convert_to_policy_rules, split_status
from kubedig.rbac.sort import sort_rules

logger = logging.getLogger(__name__)

__all__ = [
    "CompactionError",
    "breakdown_rule",
    "breakdown_rules",
    "compact_rules",
    "convert_to_policy_rules",
    "get_compact_rules",
    "sort_rules",
]


def get_compact_rules(
    status: SubjectRulesReviewStatus,
) -> Tuple[List[PolicyRule], Optional[str]]:
    """
    Run the full pipeline over a review status.

    Returns (rules, comment). An incomplete review returns no rules and the warning comment;
    partial rules in such a response are deliberately not shown.
    """
    rules, comment = split_status(status)
    if comment is not None:
        logger.debug("review incomplete, skipping compaction")
        return [], comment

    atoms = breakdown_rules(rules)
    compacted = compact_rules(atoms)
    logger.debug("rules: %d compound -> %d atomic -> %d compacted", len(rules), len(atoms), len(compacted))
    return sort_rules(compacted), None
