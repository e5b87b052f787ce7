"""Discovery snapshot fetched from a live cluster via kubernetes-asyncio.

Reads ``/api``, ``/api/v1``, ``/apis`` and every ``/apis/<group>/<version>``.
Group versions that fail to answer (typically an unavailable aggregated
API such as ``metrics.k8s.io``) are left out of the snapshot with a
warning; a failure of the root endpoints propagates.
"""

from __future__ import annotations

import asyncio
from typing import Any

from kubewait.discovery.resolver import DiscoverySource
from kubewait.models.discovery import APIGroupResources, APIResource
from kubewait.observability.logging import get_logger

_log = get_logger("discovery.kube")


def parse_api_resource_list(data: dict[str, Any]) -> list[APIResource]:
    """Convert an ``APIResourceList`` document into APIResource entries."""
    resources = []
    for item in data.get("resources") or []:
        resources.append(
            APIResource(
                name=item.get("name", ""),
                kind=item.get("kind", ""),
                namespaced=bool(item.get("namespaced", False)),
                verbs=tuple(item.get("verbs") or ()),
            )
        )
    return resources


def parse_api_group_list(data: dict[str, Any]) -> list[APIGroupResources]:
    """Convert an ``APIGroupList`` document into groups without resources."""
    groups = []
    for item in data.get("groups") or []:
        preferred = (item.get("preferredVersion") or {}).get("version", "")
        versions = [v.get("version", "") for v in item.get("versions") or []]
        groups.append(APIGroupResources(name=item.get("name", ""), preferred_version=preferred, versions=versions))
    return groups


class KubeDiscoverySource(DiscoverySource):
    """DiscoverySource backed by a ``kubernetes_asyncio.client.ApiClient``."""

    def __init__(self, api_client: Any) -> None:
        self._api = api_client

    async def _get_json(self, path: str) -> dict[str, Any]:
        response = await self._api.call_api(
            path,
            "GET",
            header_params={"Accept": "application/json"},
            auth_settings=["BearerToken"],
            _preload_content=False,
            _return_http_data_only=True,
        )
        try:
            return await response.json()
        finally:
            response.release()

    async def _core_group(self) -> APIGroupResources:
        versions = (await self._get_json("/api")).get("versions") or ["v1"]
        group = APIGroupResources(name="", preferred_version=versions[0], versions=list(versions))
        for version in versions:
            group.resources[version] = parse_api_resource_list(await self._get_json(f"/api/{version}"))
        return group

    async def _fill_group(self, group: APIGroupResources) -> None:
        paths = [f"/apis/{group.name}/{version}" for version in group.versions]
        results = await asyncio.gather(*(self._get_json(p) for p in paths), return_exceptions=True)
        for version, result in zip(group.versions, results, strict=True):
            if isinstance(result, BaseException):
                _log.warning(
                    "group version discovery failed; skipping",
                    group=group.name,
                    version=version,
                    error=str(result),
                )
                continue
            group.resources[version] = parse_api_resource_list(result)

    async def api_group_resources(self) -> list[APIGroupResources]:
        core = await self._core_group()
        groups = parse_api_group_list(await self._get_json("/apis"))
        await asyncio.gather(*(self._fill_group(g) for g in groups))
        _log.debug("discovery snapshot fetched", groups=len(groups) + 1)
        return [core, *groups]
