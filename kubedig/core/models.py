"""Canonical domain models (single source of truth).

This file is the one place where we define models used across:
- talking to the API server (review status, server version)
- the rule normalization engine (policy rules)
- rendering (bucket results)

Design note:
- Review records mirror the upstream wire shape and stay permissive (`extra="allow"`) because
  API servers may add fields over time; engine rules are strict.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class BaseModelAllowExtra(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class BaseModelStrict(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ResourceRuleRecord(BaseModelAllowExtra):
    verbs: List[str] = Field(default_factory=list)
    api_groups: List[str] = Field(default_factory=list, alias="apiGroups")
    resources: List[str] = Field(default_factory=list)
    resource_names: List[str] = Field(default_factory=list, alias="resourceNames")


class NonResourceRuleRecord(BaseModelAllowExtra):
    verbs: List[str] = Field(default_factory=list)
    non_resource_urls: List[str] = Field(default_factory=list, alias="nonResourceURLs")


class SubjectRulesReviewStatus(BaseModelAllowExtra):
    """Status block of a SelfSubjectRulesReview response."""

    incomplete: bool = False
    evaluation_error: str = Field(default="", alias="evaluationError")
    resource_rules: List[ResourceRuleRecord] = Field(default_factory=list, alias="resourceRules")
    non_resource_rules: List[NonResourceRuleRecord] = Field(default_factory=list, alias="nonResourceRules")


class ResourcePolicyRule(BaseModelStrict):
    kind: Literal["resource"] = "resource"
    verbs: List[str] = Field(default_factory=list)
    # Empty means the core ("") group.
    api_groups: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list)
    # Empty means every instance of the matched resources.
    resource_names: List[str] = Field(default_factory=list)


class NonResourcePolicyRule(BaseModelStrict):
    kind: Literal["nonResource"] = "nonResource"
    verbs: List[str] = Field(default_factory=list)
    non_resource_urls: List[str] = Field(default_factory=list)


PolicyRule = Annotated[Union[ResourcePolicyRule, NonResourcePolicyRule], Field(discriminator="kind")]


class ServerVersion(BaseModelAllowExtra):
    git_version: str = Field(default="", alias="gitVersion")
    build_date: str = Field(default="", alias="buildDate")
    platform: str = ""
    go_version: str = Field(default="", alias="goVersion")


class Results(BaseModelStrict):
    """One bucket's output table: headers, rows and free-form comments."""

    name: str
    headers: List[str] = Field(default_factory=list)
    contents: List[List[Any]] = Field(default_factory=list)
    comments: List[str] = Field(default_factory=list)

    def set_headers(self, headers: List[str]) -> None:
        self.headers = list(headers)

    def add_content(self, row: List[Any]) -> None:
        if self.headers and len(row) != len(self.headers):
            raise ValueError(f"row has {len(row)} cells, expected {len(self.headers)} ({self.name})")
        self.contents.append(list(row))

    def add_comment(self, comment: str) -> None:
        self.comments.append(comment)
