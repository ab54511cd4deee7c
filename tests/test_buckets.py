from __future__ import annotations

import pytest


def _status(**kw):
    from kubedig.core.models import SubjectRulesReviewStatus

    payload = {
        "resourceRules": [
            {"verbs": ["get", "list"], "apiGroups": [""], "resources": ["pods", "services"]},
            {"verbs": ["get"], "apiGroups": ["apps"], "resources": ["deployments"], "resourceNames": ["web"]},
        ],
        "nonResourceRules": [{"verbs": ["get"], "nonResourceURLs": ["/healthz"]}],
    }
    payload.update(kw)
    return SubjectRulesReviewStatus.model_validate(payload)


def test_authorization_bucket_renders_compacted_rules(fake_provider_factory) -> None:
    from kubedig.buckets.authorization import AuthorizationBucket
    from kubedig.buckets.base import BucketConfig

    provider = fake_provider_factory(status=_status())
    res = AuthorizationBucket(BucketConfig(namespace="team-a", provider=provider)).run()

    assert provider.reviewed_namespaces == ["team-a"]
    assert res.name == "authorization"
    assert res.headers == ["resources", "nonResourceURLs", "resourceNames", "verbs"]
    assert res.contents == [
        [[], ["/healthz"], [], ["get"]],
        [["deployments.apps"], [], ["web"], ["get"]],
        [["pods", "services"], [], [], ["get", "list"]],
    ]
    assert res.comments == ['Checking current context/token permissions in the "team-a" namespace.']


def test_authorization_bucket_incomplete_review_shows_only_warning(fake_provider_factory) -> None:
    from kubedig.buckets.authorization import AuthorizationBucket
    from kubedig.buckets.base import BucketConfig

    provider = fake_provider_factory(status=_status(incomplete=True, evaluationError="etcd timeout"))
    res = AuthorizationBucket(BucketConfig(namespace="default", provider=provider)).run()

    assert res.contents == []
    assert len(res.comments) == 2
    assert "etcd timeout" in res.comments[1]


def test_authorization_bucket_propagates_transport_errors(fake_provider_factory) -> None:
    from kubedig.buckets.authorization import AuthorizationBucket
    from kubedig.buckets.base import BucketConfig
    from kubedig.providers.k8s_provider import TransportError

    provider = fake_provider_factory(error=TransportError("Kubernetes API error: Forbidden - None"))
    with pytest.raises(TransportError):
        AuthorizationBucket(BucketConfig(namespace="default", provider=provider)).run()


def test_authorization_bucket_requires_provider() -> None:
    from kubedig.buckets.authorization import AuthorizationBucket
    from kubedig.buckets.base import BucketConfig, MissingClientError

    with pytest.raises(MissingClientError):
        AuthorizationBucket(BucketConfig(namespace="default"))


def test_version_bucket_row(fake_provider_factory) -> None:
    from kubedig.buckets.base import BucketConfig
    from kubedig.buckets.version import VersionBucket
    from kubedig.core.models import ServerVersion

    version = ServerVersion.model_validate(
        {
            "gitVersion": "v1.29.2",
            "buildDate": "2024-02-14T10:32:40Z",
            "platform": "linux/amd64",
            "goVersion": "go1.21.7",
        }
    )
    res = VersionBucket(BucketConfig(provider=fake_provider_factory(version=version))).run()
    assert res.headers == ["version", "buildDate", "platform", "goVersion"]
    assert res.contents == [["v1.29.2", "2024-02-14T10:32:40Z", "linux/amd64", "go1.21.7"]]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2024-02-14T10:32:40Z", "2024-02-14T10:32:40Z"),
        ("2024-02-14T12:32:40+02:00", "2024-02-14T10:32:40Z"),
        ("2024-02-14T10:32:40", "2024-02-14T10:32:40Z"),
        ("not-a-date", "not-a-date"),
        ("", ""),
    ],
)
def test_format_build_date(raw: str, expected: str) -> None:
    from kubedig.buckets.version import format_build_date

    assert format_build_date(raw) == expected
