"""Kubernetes API client seam: the only place that talks to the API server."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from kubedig.core.models import ServerVersion, SubjectRulesReviewStatus

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_NAMESPACE_FILE = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")
DEFAULT_NAMESPACE = "default"

_api_client = None
_authorization_v1_api = None
_version_api = None
_config_loaded = False
_in_cluster = False
_init_lock = threading.Lock()


class TransportError(Exception):
    """The API server call failed (connection, auth, or API error)."""


@runtime_checkable
class K8sProvider(Protocol):
    def create_self_subject_rules_review(self, namespace: str) -> SubjectRulesReviewStatus: ...

    def get_server_version(self) -> ServerVersion: ...

    def current_namespace(self) -> str: ...


class DefaultK8sProvider:
    def create_self_subject_rules_review(self, namespace: str) -> SubjectRulesReviewStatus:
        return create_self_subject_rules_review(namespace)

    def get_server_version(self) -> ServerVersion:
        return get_server_version()

    def current_namespace(self) -> str:
        return current_namespace()


def get_k8s_provider() -> K8sProvider:
    """Seam for swapping provider implementations (tests use in-memory fakes)."""
    return DefaultK8sProvider()


def _ensure_config_loaded() -> None:
    """Load in-cluster config, falling back to kubeconfig. Caller holds `_init_lock`."""
    global _config_loaded, _in_cluster
    if _config_loaded:
        return
    from kubernetes import config

    try:
        config.load_incluster_config()
        _in_cluster = True
    except config.ConfigException:
        config.load_kube_config()
    _config_loaded = True
    logger.debug("kubernetes config loaded (in_cluster=%s)", _in_cluster)


def _get_api_client():
    """Return a cached ApiClient, used for (de)serialization helpers."""
    global _api_client
    if _api_client is not None:
        return _api_client

    with _init_lock:
        if _api_client is not None:
            return _api_client
        _ensure_config_loaded()
        from kubernetes import client

        _api_client = client.ApiClient()
        return _api_client


def _get_authorization_v1():
    """Return a cached AuthorizationV1Api client (thread-safe lazy init)."""
    global _authorization_v1_api
    if _authorization_v1_api is not None:
        return _authorization_v1_api

    api_client = _get_api_client()
    with _init_lock:
        if _authorization_v1_api is not None:
            return _authorization_v1_api
        from kubernetes import client

        _authorization_v1_api = client.AuthorizationV1Api(api_client)
        return _authorization_v1_api


def _get_version_api():
    """Return a cached VersionApi client (thread-safe lazy init)."""
    global _version_api
    if _version_api is not None:
        return _version_api

    api_client = _get_api_client()
    with _init_lock:
        if _version_api is not None:
            return _version_api
        from kubernetes import client

        _version_api = client.VersionApi(api_client)
        return _version_api


def _to_wire_dict(obj: Any) -> Dict[str, Any]:
    """Client model -> camelCase dict as sent over the wire."""
    if obj is None:
        return {}
    data = _get_api_client().sanitize_for_serialization(obj)
    return data if isinstance(data, dict) else {}


def _transport_error(action: str, e: Exception) -> TransportError:
    from kubernetes.client.rest import ApiException

    # Preserve ApiException details (status reason + body).
    if isinstance(e, ApiException):
        return TransportError(f"Kubernetes API error: {e.reason} - {e.body}")
    return TransportError(f"Failed to {action}: {str(e)}")


def create_self_subject_rules_review(namespace: str) -> SubjectRulesReviewStatus:
    """
    Ask the API server which rules apply to the current identity in `namespace`.

    One call, no retries. Any failure is raised as TransportError.
    """
    try:
        from kubernetes import client

        api = _get_authorization_v1()
        body = client.V1SelfSubjectRulesReview(spec=client.V1SelfSubjectRulesReviewSpec(namespace=namespace))
        logger.debug("creating SelfSubjectRulesReview in namespace %r", namespace)
        response = api.create_self_subject_rules_review(body=body)
        return SubjectRulesReviewStatus.model_validate(_to_wire_dict(getattr(response, "status", None)))
    except Exception as e:
        raise _transport_error("create SelfSubjectRulesReview", e) from e


def get_server_version() -> ServerVersion:
    try:
        api = _get_version_api()
        logger.debug("fetching API server version")
        return ServerVersion.model_validate(_to_wire_dict(api.get_code()))
    except Exception as e:
        raise _transport_error("fetch server version", e) from e


def current_namespace() -> str:
    """
    Namespace of the current identity.

    In-cluster: the service account namespace file. Otherwise the active kubeconfig context's
    namespace. Falls back to `default`.
    """
    try:
        if SERVICE_ACCOUNT_NAMESPACE_FILE.is_file():
            ns = SERVICE_ACCOUNT_NAMESPACE_FILE.read_text(encoding="utf-8").strip()
            if ns:
                return ns
    except OSError as e:
        logger.debug("cannot read service account namespace: %s", e)

    try:
        from kubernetes import config

        _contexts, active = config.list_kube_config_contexts()
        context_ns: Optional[str] = ((active or {}).get("context") or {}).get("namespace")
        if context_ns:
            return context_ns
    except Exception as e:
        logger.debug("cannot resolve kubeconfig namespace: %s", e)
    return DEFAULT_NAMESPACE
