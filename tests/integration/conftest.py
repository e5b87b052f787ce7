"""Shared fakes and fixtures for kubewait integration tests.

The two collaborators of a wait call (discovery and the list-watch source)
are replaced by in-memory fakes that record every call, so tests can assert
not just outcomes but also how many lists/watches were issued, how many
events were consumed and whether the subscription was released.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from kubernetes_asyncio.client import V1ObjectMeta, V1Pod, V1PodStatus

from kubewait.discovery.resolver import DiscoverySource
from kubewait.meta import object_meta
from kubewait.models.discovery import APIGroupResources, APIResource
from kubewait.models.events import EventType, ListResult, WatchEvent
from kubewait.models.resources import ResourceDescriptor, SelectorSpec
from kubewait.watcher.source import ListWatchSource

# ---------------------------------------------------------------------------
# Object factories
# ---------------------------------------------------------------------------


def make_pod(name: str, phase: str = "Pending", namespace: str = "ns1", rv: str = "1") -> V1Pod:
    """Create a typed Pod with the given phase."""
    return V1Pod(
        metadata=V1ObjectMeta(name=name, namespace=namespace, resource_version=rv),
        status=V1PodStatus(phase=phase),
    )


def pod_event(event_type: EventType, obj: Any) -> WatchEvent:
    """Wrap a typed Pod or raw dict in a WatchEvent carrying its resourceVersion."""
    return WatchEvent(type=event_type, object=obj, resource_version=object_meta(obj).resource_version)


def is_running(pod: V1Pod) -> bool:
    return pod.status.phase == "Running"


POD_DESCRIPTOR = ResourceDescriptor(group="", version="v1", kind="Pod", plural="pods")


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeListWatchSource(ListWatchSource):
    """Serves a fixed snapshot and a scripted event feed.

    Args:
        items:    objects returned by list().
        events:   events yielded by watch(), in order.
        hang:     after the scripted events, block forever instead of
                  ending the feed.
        list_delay: seconds list() sleeps before answering.
        list_error: exception list() raises instead of answering.
    """

    def __init__(
        self,
        items: list[Any] | None = None,
        events: list[WatchEvent] | None = None,
        *,
        resource_version: str = "100",
        hang: bool = False,
        list_delay: float = 0.0,
        list_error: Exception | None = None,
    ) -> None:
        self.items = items or []
        self.events = events or []
        self.resource_version = resource_version
        self.hang = hang
        self.list_delay = list_delay
        self.list_error = list_error

        self.list_calls: list[tuple[ResourceDescriptor, str, SelectorSpec]] = []
        self.watch_calls: list[tuple[ResourceDescriptor, str, SelectorSpec, str]] = []
        self.consumed = 0
        self.open_watches = 0
        self.closed_watches = 0

    async def list(self, descriptor: ResourceDescriptor, namespace: str, selector: SelectorSpec) -> ListResult:
        self.list_calls.append((descriptor, namespace, selector))
        if self.list_delay:
            await asyncio.sleep(self.list_delay)
        if self.list_error is not None:
            raise self.list_error
        return ListResult(items=list(self.items), resource_version=self.resource_version)

    async def watch(
        self,
        descriptor: ResourceDescriptor,
        namespace: str,
        selector: SelectorSpec,
        resource_version: str,
    ) -> AsyncGenerator[WatchEvent, None]:
        self.watch_calls.append((descriptor, namespace, selector, resource_version))
        self.open_watches += 1
        try:
            for event in self.events:
                self.consumed += 1
                yield event
            if self.hang:
                await asyncio.Event().wait()
        finally:
            self.open_watches -= 1
            self.closed_watches += 1


class FakeDiscovery(DiscoverySource):
    """Returns a fixed discovery snapshot, or raises *error*.

    *delay* seconds pass before answering, standing in for a stalled API
    server.
    """

    def __init__(
        self,
        groups: list[APIGroupResources],
        error: Exception | None = None,
        *,
        delay: float = 0.0,
    ) -> None:
        self.groups = groups
        self.error = error
        self.delay = delay
        self.calls = 0

    async def api_group_resources(self) -> list[APIGroupResources]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.groups


def discovery_snapshot() -> list[APIGroupResources]:
    """A small cluster: core/v1, apps/v1 and one CRD group with two versions."""
    return [
        APIGroupResources(
            name="",
            preferred_version="v1",
            versions=["v1"],
            resources={
                "v1": [
                    APIResource(name="pods", kind="Pod", namespaced=True),
                    APIResource(name="pods/log", kind="Pod", namespaced=True),
                    APIResource(name="nodes", kind="Node", namespaced=False),
                    APIResource(name="configmaps", kind="ConfigMap", namespaced=True),
                ]
            },
        ),
        APIGroupResources(
            name="apps",
            preferred_version="v1",
            versions=["v1"],
            resources={"v1": [APIResource(name="deployments", kind="Deployment", namespaced=True)]},
        ),
        APIGroupResources(
            name="stable.example.com",
            preferred_version="v1",
            versions=["v1", "v1beta1"],
            resources={
                "v1": [APIResource(name="crontabs", kind="CronTab", namespaced=True)],
                "v1beta1": [
                    APIResource(name="crontabs", kind="CronTab", namespaced=True),
                    APIResource(name="legacytabs", kind="LegacyTab", namespaced=True),
                ],
            },
        ),
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def discovery() -> FakeDiscovery:
    return FakeDiscovery(discovery_snapshot())
