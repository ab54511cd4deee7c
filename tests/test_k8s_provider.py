"""Tests for the kubernetes client seam (API calls mocked)."""

from unittest.mock import MagicMock, patch

import pytest


def test_create_self_subject_rules_review_parses_status():
    from kubedig.providers.k8s_provider import create_self_subject_rules_review

    with patch("kubedig.providers.k8s_provider._get_authorization_v1") as mock_authz, patch(
        "kubedig.providers.k8s_provider._get_api_client"
    ) as mock_api_client:
        mock_api = MagicMock()
        mock_authz.return_value = mock_api
        mock_api.create_self_subject_rules_review.return_value = MagicMock(status=object())
        mock_api_client.return_value.sanitize_for_serialization.return_value = {
            "incomplete": False,
            "resourceRules": [{"verbs": ["get"], "apiGroups": [""], "resources": ["pods"]}],
            "nonResourceRules": [{"verbs": ["get"], "nonResourceURLs": ["/healthz"]}],
        }

        status = create_self_subject_rules_review("team-a")

        body = mock_api.create_self_subject_rules_review.call_args.kwargs["body"]
        assert body.spec.namespace == "team-a"
        assert status.incomplete is False
        assert status.resource_rules[0].resources == ["pods"]
        assert status.non_resource_rules[0].non_resource_urls == ["/healthz"]


def test_create_self_subject_rules_review_wraps_api_errors():
    from kubernetes.client.rest import ApiException

    from kubedig.providers.k8s_provider import TransportError, create_self_subject_rules_review

    with patch("kubedig.providers.k8s_provider._get_authorization_v1") as mock_authz:
        mock_authz.return_value.create_self_subject_rules_review.side_effect = ApiException(
            status=403, reason="Forbidden"
        )
        with pytest.raises(TransportError) as exc:
            create_self_subject_rules_review("default")
        assert "Forbidden" in str(exc.value)
        assert isinstance(exc.value.__cause__, ApiException)


def test_create_self_subject_rules_review_wraps_connection_errors():
    from kubedig.providers.k8s_provider import TransportError, create_self_subject_rules_review

    with patch("kubedig.providers.k8s_provider._get_authorization_v1") as mock_authz:
        mock_authz.side_effect = ConnectionError("connection refused")
        with pytest.raises(TransportError) as exc:
            create_self_subject_rules_review("default")
        assert "connection refused" in str(exc.value)


def test_get_server_version_parses_version_info():
    from kubedig.providers.k8s_provider import get_server_version

    with patch("kubedig.providers.k8s_provider._get_version_api") as mock_version, patch(
        "kubedig.providers.k8s_provider._get_api_client"
    ) as mock_api_client:
        mock_version.return_value.get_code.return_value = object()
        mock_api_client.return_value.sanitize_for_serialization.return_value = {
            "gitVersion": "v1.30.1",
            "buildDate": "2024-05-14T10:42:02Z",
            "platform": "linux/arm64",
            "goVersion": "go1.22.2",
            "major": "1",
        }
        v = get_server_version()
        assert v.git_version == "v1.30.1"
        assert v.platform == "linux/arm64"


def test_current_namespace_prefers_service_account_file(tmp_path, monkeypatch):
    from kubedig.providers import k8s_provider

    ns_file = tmp_path / "namespace"
    ns_file.write_text("in-cluster-ns\n", encoding="utf-8")
    monkeypatch.setattr(k8s_provider, "SERVICE_ACCOUNT_NAMESPACE_FILE", ns_file)

    assert k8s_provider.current_namespace() == "in-cluster-ns"


def test_current_namespace_uses_active_kubeconfig_context(tmp_path, monkeypatch):
    from kubedig.providers import k8s_provider

    monkeypatch.setattr(k8s_provider, "SERVICE_ACCOUNT_NAMESPACE_FILE", tmp_path / "missing")
    with patch(
        "kubernetes.config.list_kube_config_contexts",
        return_value=([], {"name": "dev", "context": {"cluster": "c", "namespace": "dev-ns"}}),
    ):
        assert k8s_provider.current_namespace() == "dev-ns"


def test_current_namespace_falls_back_to_default(tmp_path, monkeypatch):
    from kubedig.providers import k8s_provider

    monkeypatch.setattr(k8s_provider, "SERVICE_ACCOUNT_NAMESPACE_FILE", tmp_path / "missing")
    with patch("kubernetes.config.list_kube_config_contexts", side_effect=Exception("no kubeconfig")):
        assert k8s_provider.current_namespace() == "default"
    with patch("kubernetes.config.list_kube_config_contexts", return_value=([], {"context": {"cluster": "c"}})):
        assert k8s_provider.current_namespace() == "default"


def test_default_provider_satisfies_protocol():
    from kubedig.providers.k8s_provider import K8sProvider, get_k8s_provider

    assert isinstance(get_k8s_provider(), K8sProvider)
