"""
Pytest config.

Tests import the local `kubedig/` package and `main.py` from the repo root, which is not
reliably on sys.path when invoking a global `pytest` entrypoint. We pin the behavior here.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


class FakeK8sProvider:
    """In-memory provider: canned review status / version, or a canned error."""

    def __init__(self, *, status=None, version=None, namespace: str = "default", error: Optional[Exception] = None):
        self.status = status
        self.version = version
        self.namespace = namespace
        self.error = error
        self.reviewed_namespaces = []

    def create_self_subject_rules_review(self, namespace: str):
        from kubedig.core.models import SubjectRulesReviewStatus

        self.reviewed_namespaces.append(namespace)
        if self.error is not None:
            raise self.error
        return self.status if self.status is not None else SubjectRulesReviewStatus()

    def get_server_version(self):
        from kubedig.core.models import ServerVersion

        if self.error is not None:
            raise self.error
        return self.version if self.version is not None else ServerVersion()

    def current_namespace(self) -> str:
        return self.namespace


@pytest.fixture
def fake_provider_factory():
    return FakeK8sProvider


@pytest.fixture(autouse=True)
def _clear_kubedig_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("KUBEDIG_NAMESPACE", "KUBEDIG_OUTPUT", "KUBEDIG_LOG_LEVEL", "KUBEDIG_SIDE_EFFECTS"):
        monkeypatch.delenv(name, raising=False)
