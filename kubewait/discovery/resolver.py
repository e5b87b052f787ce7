"""Type Resolver: group/version/kind -> concrete resource descriptor.

The resolver is a pure function of the discovery snapshot it is handed.
The snapshot is fetched from the DiscoverySource on every call; nothing
is cached here, so a descriptor is only valid for the wait call that
resolved it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kubewait.errors import ResolutionError
from kubewait.models.discovery import APIGroupResources, APIResource
from kubewait.models.resources import GroupVersionKind, ResourceDescriptor
from kubewait.observability.logging import get_logger

_log = get_logger("discovery.resolver")


class DiscoverySource(ABC):
    """Provides a snapshot of the API groups served by the cluster."""

    @abstractmethod
    async def api_group_resources(self) -> list[APIGroupResources]:
        """Return every served group with its versions and resources.

        Raises on failure; the resolver surfaces the failure as a
        ResolutionError.
        """


def _candidate_versions(group: APIGroupResources, version: str) -> list[str]:
    if version:
        return [version]
    ordered = [group.preferred_version] if group.preferred_version else []
    ordered.extend(v for v in group.versions if v not in ordered)
    return ordered


def _find_kind(resources: list[APIResource], kind: str) -> APIResource | None:
    for resource in resources:
        if resource.kind == kind and not resource.is_subresource:
            return resource
    return None


def resolve_from_snapshot(groups: list[APIGroupResources], gvk: GroupVersionKind) -> ResourceDescriptor:
    """Map *gvk* to a descriptor using *groups*.

    An empty ``gvk.version`` resolves against the group's preferred version
    first, then the remaining versions in server order.

    Raises:
        ResolutionError: no group, version or kind in the snapshot matches.
    """
    group = next((g for g in groups if g.name == gvk.group), None)
    if group is None:
        raise ResolutionError(gvk, f"API group {gvk.group or 'core'!r} is not served")

    for version in _candidate_versions(group, gvk.version):
        resource = _find_kind(group.resources.get(version, []), gvk.kind)
        if resource is not None:
            return ResourceDescriptor(
                group=gvk.group,
                version=version,
                kind=resource.kind,
                plural=resource.name,
                namespaced=resource.namespaced,
            )

    if gvk.version and gvk.version not in group.resources:
        raise ResolutionError(gvk, f"version {gvk.version!r} is not served by the group")
    raise ResolutionError(gvk, "kind is not registered")


class TypeResolver:
    """Resolves kinds against a freshly fetched discovery snapshot."""

    def __init__(self, discovery: DiscoverySource) -> None:
        self._discovery = discovery

    async def resolve(self, gvk: GroupVersionKind) -> ResourceDescriptor:
        try:
            groups = await self._discovery.api_group_resources()
        except ResolutionError:
            raise
        except Exception as exc:
            raise ResolutionError(gvk, f"discovery failed: {exc}") from exc

        descriptor = resolve_from_snapshot(groups, gvk)
        _log.debug("kind resolved", gvk=str(gvk), resource=str(descriptor), namespaced=descriptor.namespaced)
        return descriptor
