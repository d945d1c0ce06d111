"""Integration tests: provider snapshot -> topology graph -> navigation -> detail."""

from __future__ import annotations

import pytest

from teleskope.dashboard import ResourceQuery, TopologyDashboard, related_pods
from teleskope.models.resources import ResourceIdentity
from teleskope.profiles.rendering import detail_sections, quick_info, render_table
from teleskope.profiles.resolver import resolve_profile

from conftest import NOW, InMemoryProvider, RecordingSink, make_pod

pytestmark = pytest.mark.integration


class TestClusterMap:
    async def test_namespaces_in_order(self, provider: InMemoryProvider) -> None:
        graph = await TopologyDashboard(provider).refresh()
        assert graph.namespaces == ["blog", "default", "kube-system", "shop"]

    async def test_groups_stack_without_overlap(self, provider: InMemoryProvider) -> None:
        graph = await TopologyDashboard(provider).refresh()
        for upper, lower in zip(graph.groups, graph.groups[1:]):
            assert lower.position.y == upper.position.y + upper.height + 50
        assert all(g.position.x == 0 for g in graph.groups)

    async def test_shop_edges(self, provider: InMemoryProvider) -> None:
        graph = await TopologyDashboard(provider).refresh()
        shop_edges = {(e.source, e.target) for e in graph.edges if "-shop-" in e.source}
        assert shop_edges == {
            ("ing-shop-storefront", "svc-shop-web"),
            ("ing-shop-storefront", "svc-shop-api"),
            ("svc-shop-web", "pod-shop-web-1"),
            ("svc-shop-web", "pod-shop-web-2"),
            ("svc-shop-api", "pod-shop-api-1"),
        }

    async def test_nodes_fit_inside_their_group(self, provider: InMemoryProvider) -> None:
        graph = await TopologyDashboard(provider).refresh()
        groups = {g.id: g for g in graph.groups}
        for node in graph.nodes:
            group = groups[node.parent_id]
            assert 40 <= node.position.x <= group.width - 40 - 180
            assert 80 <= node.position.y <= group.height - 40 - 60

    async def test_selector_less_service_stands_alone(self, provider: InMemoryProvider) -> None:
        graph = await TopologyDashboard(provider).refresh()
        assert graph.node("svc-default-kubernetes") is not None
        assert not [e for e in graph.edges if "svc-default-kubernetes" in (e.source, e.target)]

    async def test_refresh_is_idempotent(self, provider: InMemoryProvider) -> None:
        dashboard = TopologyDashboard(provider)
        first = await dashboard.refresh()
        second = await dashboard.refresh()
        assert [(n.id, n.position) for n in first.nodes] == [(n.id, n.position) for n in second.nodes]

    async def test_new_snapshot_drops_stale_nodes(self, provider: InMemoryProvider) -> None:
        dashboard = TopologyDashboard(provider)
        first = await dashboard.refresh()
        provider.collections["pods"] = [p for p in provider.collections["pods"] if p["metadata"]["name"] != "web-2"]
        provider.collections["pods"].append(make_pod("web-3", "shop", labels={"app": "web"}))
        second = await dashboard.refresh()
        assert first.node("pod-shop-web-2") is not None
        assert second.node("pod-shop-web-2") is None
        assert second.node("pod-shop-web-3") is not None


class TestNavigationToDetail:
    async def test_click_pod_then_render_detail(self, provider: InMemoryProvider, sink: RecordingSink) -> None:
        dashboard = TopologyDashboard(provider, sink=sink)
        await dashboard.refresh()
        target = dashboard.select("pod-shop-web-2")
        assert target is not None
        assert sink.targets == [target]

        record = dashboard.graph.node("pod-shop-web-2").record
        profile = resolve_profile(target.identity)
        cells = quick_info(record, profile, now=NOW)
        assert [c.text for c in cells] == ["⏸", "web-2", "✓", "worker-1"]

        metadata = {i.label: i.value for i in detail_sections(target.identity.kind, record, now=NOW)[0].items}
        assert metadata["Namespace"] == "shop"
        assert metadata["Created"] == "2h ago"

    async def test_service_table(self, provider: InMemoryProvider) -> None:
        identity = ResourceIdentity("", "v1", "Service")
        records = await provider.list_resources(ResourceQuery(identity=identity, plural="services", namespace="shop"))
        rows = render_table(records, resolve_profile(identity), now=NOW)
        assert [[c.text for c in row] for row in rows] == [
            ["web", "shop", "ClusterIP", "10.96.0.10", "-", "80", "3d"],
            ["api", "shop", "ClusterIP", "10.96.0.10", "-", "80", "3d"],
        ]

    async def test_related_pods_for_deployment(self, provider: InMemoryProvider) -> None:
        deployment = {
            "metadata": {"name": "web", "namespace": "shop"},
            "spec": {"selector": {"matchLabels": {"app": "web", "tier": "front"}}},
        }
        pods = await related_pods(provider, ResourceIdentity("apps", "v1", "Deployment"), deployment)
        assert sorted(p["metadata"]["name"] for p in pods) == ["web-1", "web-2"]
        assert provider.queries[-1].label_selector == "app=web,tier=front"
