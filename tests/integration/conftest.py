"""Shared fixtures for Teleskope integration tests.

Provides a realistic cluster snapshot (two application namespaces plus a
system namespace) served by an in-memory provider, so tests can exercise
fetch -> profile/graph -> navigation without a real API server.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import pytest

from teleskope.dashboard import ResourceQuery
from teleskope.graph.selectors import selector_matches

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

NOW = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


def _iso(delta: timedelta) -> str:
    return (NOW - delta).strftime("%Y-%m-%dT%H:%M:%SZ")


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


def make_pod(
    name: str,
    namespace: str = "default",
    labels: dict[str, str] | None = None,
    phase: str = "Running",
    deleting: bool = False,
    age: timedelta = timedelta(hours=2),
) -> dict:
    """Create a Pod record with one running container."""
    metadata: dict = {
        "name": name,
        "namespace": namespace,
        "uid": f"uid-{namespace}-{name}",
        "creationTimestamp": _iso(age),
        "labels": labels or {},
    }
    if deleting:
        metadata["deletionTimestamp"] = _iso(timedelta(seconds=5))
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": metadata,
        "spec": {"nodeName": "worker-1", "containers": [{"name": "app", "image": f"{name}:1.0"}]},
        "status": {
            "phase": phase,
            "containerStatuses": [
                {"name": "app", "ready": phase == "Running", "restartCount": 0, "state": {"running": {"startedAt": "t"}}}
            ],
        },
    }


def make_service(name: str, namespace: str = "default", selector: dict[str, str] | None = None) -> dict:
    """Create a ClusterIP Service record."""
    spec: dict = {"type": "ClusterIP", "clusterIP": "10.96.0.10", "ports": [{"port": 80, "targetPort": 8080}]}
    if selector is not None:
        spec["selector"] = selector
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": {"name": name, "namespace": namespace, "creationTimestamp": _iso(timedelta(days=3))},
        "spec": spec,
    }


def make_ingress(name: str, namespace: str = "default", backends: Sequence[str] = ()) -> dict:
    """Create an Ingress routing ``/<backend>`` to each named Service."""
    paths = [
        {"path": f"/{svc}", "pathType": "Prefix", "backend": {"service": {"name": svc, "port": {"number": 80}}}}
        for svc in backends
    ]
    return {
        "apiVersion": "networking.k8s.io/v1",
        "kind": "Ingress",
        "metadata": {"name": name, "namespace": namespace, "creationTimestamp": _iso(timedelta(days=10))},
        "spec": {"ingressClassName": "nginx", "rules": [{"host": f"{name}.example", "http": {"paths": paths}}]},
    }


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class InMemoryProvider:
    """Serves a fixed snapshot, honouring namespace and label selector filters."""

    def __init__(self, collections: dict[str, list[dict]]) -> None:
        self.collections = collections
        self.queries: list[ResourceQuery] = []

    async def list_resources(self, query: ResourceQuery) -> list[dict]:
        self.queries.append(query)
        records = self.collections.get(query.plural, [])
        if query.namespace:
            records = [r for r in records if r["metadata"].get("namespace") == query.namespace]
        if query.label_selector:
            wanted = dict(pair.split("=", 1) for pair in query.label_selector.split(","))
            records = [r for r in records if selector_matches(wanted, r["metadata"].get("labels"))]
        return records


class RecordingSink:
    def __init__(self) -> None:
        self.targets: list = []

    def navigate(self, target) -> None:
        self.targets.append(target)


@pytest.fixture
def cluster_snapshot() -> dict[str, list[dict]]:
    """shop: ingress -> 2 services -> pods; blog: lone service; kube-system: pods only."""
    return {
        "ingresses": [make_ingress("storefront", "shop", backends=("web", "api", "gone"))],
        "services": [
            make_service("web", "shop", selector={"app": "web"}),
            make_service("api", "shop", selector={"app": "api"}),
            make_service("blog", "blog", selector={"app": "blog"}),
            make_service("kubernetes", "default"),
        ],
        "pods": [
            make_pod("web-1", "shop", labels={"app": "web", "tier": "front"}),
            make_pod("web-2", "shop", labels={"app": "web", "tier": "front"}, deleting=True),
            make_pod("api-1", "shop", labels={"app": "api"}, phase="Pending"),
            make_pod("coredns-1", "kube-system", labels={"k8s-app": "kube-dns"}),
        ],
    }


@pytest.fixture
def provider(cluster_snapshot: dict[str, list[dict]]) -> InMemoryProvider:
    return InMemoryProvider(cluster_snapshot)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
