"""Integration tests for the caller-facing Waiter (resolve, then wait)."""

from __future__ import annotations

import time

import pytest

from kubewait.errors import ResolutionError, WaitTimeoutError
from kubewait.models.events import EventType
from kubewait.models.resources import GroupVersionKind, SelectorSpec
from kubewait.predicates import has_condition, pod_phase
from kubewait.wait import Waiter

from .conftest import FakeDiscovery, FakeListWatchSource, discovery_snapshot, make_pod, pod_event


def _crontab(name: str, ready: str) -> dict:
    return {
        "apiVersion": "stable.example.com/v1",
        "kind": "CronTab",
        "metadata": {"name": name, "namespace": "jobs", "resourceVersion": "7"},
        "status": {"conditions": [{"type": "Ready", "status": ready}]},
    }


class TestResolutionBeforeWatch:
    async def test_unknown_kind_fails_before_list(self, discovery: FakeDiscovery) -> None:
        source = FakeListWatchSource(items=[make_pod("a", "Running")])
        waiter = Waiter(discovery, source)

        with pytest.raises(ResolutionError, match="Gizmo"):
            await waiter.wait_resource(
                "ns1",
                GroupVersionKind("", "v1", "Gizmo"),
                SelectorSpec(),
                lambda obj: True,
                timeout=5,
            )

        assert source.list_calls == []
        assert source.watch_calls == []

    async def test_discovery_failure_is_resolution_error(self) -> None:
        discovery = FakeDiscovery([], error=ConnectionError("apiserver unreachable"))
        source = FakeListWatchSource()
        waiter = Waiter(discovery, source)

        with pytest.raises(ResolutionError, match="apiserver unreachable"):
            await waiter.wait_pod("ns1", SelectorSpec(), pod_phase("Running"), timeout=5)

        assert source.list_calls == []

    async def test_discovery_is_fetched_per_call(self, discovery: FakeDiscovery) -> None:
        waiter = Waiter(discovery, FakeListWatchSource(items=[make_pod("a", "Running")]))

        await waiter.wait_pod("ns1", SelectorSpec(), pod_phase("Running"), timeout=5)
        await waiter.wait_pod("ns1", SelectorSpec(), pod_phase("Running"), timeout=5)

        assert discovery.calls == 2


class TestWaitPod:
    async def test_wait_pod_resolves_core_pods(self, discovery: FakeDiscovery) -> None:
        source = FakeListWatchSource(items=[make_pod("a", "Running")])

        result = await Waiter(discovery, source).wait_pod(
            "ns1", SelectorSpec(label_selector="app=web"), pod_phase("Running"), timeout=5
        )

        assert result is None
        descriptor, namespace, selector = source.list_calls[0]
        assert (descriptor.kind, descriptor.plural, descriptor.namespaced) == ("Pod", "pods", True)
        assert namespace == "ns1"
        assert selector.label_selector == "app=web"

    async def test_wait_pod_returns_satisfying_event(self, discovery: FakeDiscovery) -> None:
        modified = pod_event(EventType.MODIFIED, make_pod("web-0", "Running", rv="102"))
        source = FakeListWatchSource(items=[make_pod("web-0", "Pending")], events=[modified])

        result = await Waiter(discovery, source).wait_pod("ns1", SelectorSpec(), pod_phase("Running"), timeout=5)

        assert result is modified

    async def test_default_timeout_applies(self, discovery: FakeDiscovery) -> None:
        source = FakeListWatchSource(items=[], hang=True)
        waiter = Waiter(discovery, source, default_timeout=0.1)

        with pytest.raises(WaitTimeoutError) as exc_info:
            await waiter.wait_pod("ns2", SelectorSpec(), pod_phase("Running"))

        assert exc_info.value.timeout == 0.1


class TestWaitResource:
    async def test_custom_resource_dicts(self, discovery: FakeDiscovery) -> None:
        ready = pod_event(EventType.MODIFIED, _crontab("nightly", "True"))
        source = FakeListWatchSource(items=[_crontab("nightly", "False")], events=[ready])

        result = await Waiter(discovery, source).wait_resource(
            "jobs",
            GroupVersionKind.from_api_version("stable.example.com/v1", "CronTab"),
            SelectorSpec(),
            has_condition("Ready"),
            timeout=5,
        )

        assert result is ready
        descriptor = source.list_calls[0][0]
        assert descriptor.plural == "crontabs"
        assert descriptor.group == "stable.example.com"

    async def test_cluster_scoped_kind(self, discovery: FakeDiscovery) -> None:
        node = {"metadata": {"name": "worker-1"}, "status": {"conditions": [{"type": "Ready", "status": "True"}]}}
        source = FakeListWatchSource(items=[node])

        result = await Waiter(discovery, source).wait_resource(
            "", GroupVersionKind("", "v1", "Node"), SelectorSpec(), has_condition("Ready"), timeout=5
        )

        assert result is None
        assert source.list_calls[0][0].namespaced is False


class TestSharedDeadline:
    async def test_stalled_discovery_times_out(self) -> None:
        """The deadline starts before resolution, not after it."""
        discovery = FakeDiscovery(discovery_snapshot(), delay=3.0)
        source = FakeListWatchSource(items=[make_pod("a", "Running")])

        started = time.monotonic()
        with pytest.raises(WaitTimeoutError) as exc_info:
            await Waiter(discovery, source).wait_pod("ns1", SelectorSpec(), pod_phase("Running"), timeout=0.2)
        elapsed = time.monotonic() - started

        assert elapsed < 1.0
        assert exc_info.value.timeout == 0.2
        assert exc_info.value.descriptor == GroupVersionKind("", "v1", "Pod")
        assert source.list_calls == []

    async def test_resolution_time_counts_against_the_wait(self) -> None:
        discovery = FakeDiscovery(discovery_snapshot(), delay=0.15)
        source = FakeListWatchSource(items=[], hang=True)

        started = time.monotonic()
        with pytest.raises(WaitTimeoutError):
            await Waiter(discovery, source).wait_pod("ns1", SelectorSpec(), pod_phase("Running"), timeout=0.3)
        elapsed = time.monotonic() - started

        assert 0.25 < elapsed < 0.6
        assert source.closed_watches == 1
