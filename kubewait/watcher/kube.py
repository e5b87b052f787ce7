"""ListWatchSource backed by kubernetes-asyncio.

Built-in kinds are listed and watched through their typed API class
(``CoreV1Api.list_namespaced_pod``, ``AppsV1Api.list_deployment_for_all_namespaces``,
...), so predicates receive typed models such as ``V1Pod``. Kinds without a
typed client (custom resources) go through ``CustomObjectsApi`` and arrive
as plain dicts.

A watch request is bounded server-side by ``watch_timeout_seconds``. When a
window closes cleanly the watch is reopened from the last resource version
seen. Failures (``410 Gone``, connection errors) are not retried: they are
reported as an ERROR event and the generator ends.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from typing import Any

import aiohttp
from kubernetes_asyncio import client, watch
from kubernetes_asyncio.client.rest import ApiException

from kubewait.errors import ResolutionError, TransportError
from kubewait.meta import object_meta
from kubewait.models.events import EventType, ListResult, WatchEvent
from kubewait.models.resources import ResourceDescriptor, SelectorSpec
from kubewait.naming import api_class_name, snake_case
from kubewait.observability.logging import get_logger
from kubewait.watcher.source import ListWatchSource

_log = get_logger("watcher.kube")

_DEFAULT_WATCH_TIMEOUT_SECONDS = 300

# kubernetes-asyncio raises a plain Exception with this prefix for frames
# missing type/object, or bookmarks without a resourceVersion.
_MALFORMED_FRAME = "Malformed JSON response"


def _selector_kwargs(selector: SelectorSpec) -> dict[str, str]:
    kwargs = {}
    if selector.label_selector:
        kwargs["label_selector"] = selector.label_selector
    if selector.field_selector:
        kwargs["field_selector"] = selector.field_selector
    return kwargs


def to_watch_event(raw: Any) -> WatchEvent:
    """Convert a kubernetes-asyncio watch event dict into a WatchEvent.

    The library hands back the undecoded line when it is not JSON; that
    becomes an ERROR event like any other unusable frame.
    """
    if not isinstance(raw, dict):
        return WatchEvent.failure(f"undecodable watch event: {str(raw).strip()[:200]!r}")
    try:
        event_type = EventType(raw.get("type", ""))
    except ValueError:
        return WatchEvent.failure(f"unknown watch event type {raw.get('type')!r}")

    if event_type is EventType.ERROR:
        status = raw.get("raw_object") or raw.get("object") or {}
        if isinstance(status, dict):
            message = status.get("message") or status.get("reason") or str(status)
            code = status.get("code")
        else:
            message = getattr(status, "message", None) or str(status)
            code = getattr(status, "code", None)
        return WatchEvent.failure(message, status=code if isinstance(code, int) else None)

    obj = raw.get("object")
    return WatchEvent(type=event_type, object=obj, resource_version=object_meta(obj).resource_version)


class KubeListWatchSource(ListWatchSource):
    """List and watch any served resource type through an ``ApiClient``."""

    def __init__(self, api_client: Any, watch_timeout_seconds: int = _DEFAULT_WATCH_TIMEOUT_SECONDS) -> None:
        self._api = api_client
        self._watch_timeout = watch_timeout_seconds

    def _list_call(self, descriptor: ResourceDescriptor, namespace: str) -> tuple[Callable[..., Any], tuple[Any, ...]]:
        """Pick the list function (and its positional args) for *descriptor*."""
        api_cls = getattr(client, api_class_name(descriptor.group, descriptor.version), None)
        if api_cls is not None:
            api = api_cls(self._api)
            kind = snake_case(descriptor.kind)
            if not descriptor.namespaced:
                name, args = f"list_{kind}", ()
            elif namespace:
                name, args = f"list_namespaced_{kind}", (namespace,)
            else:
                name, args = f"list_{kind}_for_all_namespaces", ()
            fn = getattr(api, name, None)
            if fn is not None:
                return fn, args

        if not descriptor.group:
            # The core group has no custom-object endpoint to fall back on.
            raise ResolutionError(descriptor.gvk, "no client type registered for the core kind")

        custom = client.CustomObjectsApi(self._api)
        if descriptor.namespaced and namespace:
            return custom.list_namespaced_custom_object, (
                descriptor.group,
                descriptor.version,
                namespace,
                descriptor.plural,
            )
        return custom.list_cluster_custom_object, (descriptor.group, descriptor.version, descriptor.plural)

    async def list(
        self,
        descriptor: ResourceDescriptor,
        namespace: str,
        selector: SelectorSpec,
    ) -> ListResult:
        fn, args = self._list_call(descriptor, namespace)
        try:
            response = await fn(*args, **_selector_kwargs(selector))
        except ApiException as exc:
            raise TransportError(f"list {descriptor} failed: {exc.reason}", status=exc.status) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"list {descriptor} failed: {exc}") from exc

        if isinstance(response, dict):
            items = response.get("items") or []
            resource_version = (response.get("metadata") or {}).get("resourceVersion", "")
        else:
            items = response.items or []
            resource_version = response.metadata.resource_version if response.metadata else ""

        _log.debug("listed", resource=str(descriptor), items=len(items), resource_version=resource_version)
        return ListResult(items=list(items), resource_version=resource_version or "")

    async def watch(
        self,
        descriptor: ResourceDescriptor,
        namespace: str,
        selector: SelectorSpec,
        resource_version: str,
    ) -> AsyncGenerator[WatchEvent, None]:
        fn, args = self._list_call(descriptor, namespace)
        kwargs = _selector_kwargs(selector)
        current_rv = resource_version

        while True:
            try:
                async with watch.Watch() as stream:
                    async for raw in stream.stream(
                        fn,
                        *args,
                        resource_version=current_rv,
                        allow_watch_bookmarks=True,
                        timeout_seconds=self._watch_timeout,
                        **kwargs,
                    ):
                        event = to_watch_event(raw)
                        if event.resource_version:
                            current_rv = event.resource_version
                        yield event
                        if event.type is EventType.ERROR:
                            return
            except ApiException as exc:
                yield WatchEvent.failure(f"watch {descriptor} failed: {exc.reason}", status=exc.status)
                return
            except aiohttp.ClientError as exc:
                yield WatchEvent.failure(f"watch {descriptor} failed: {exc}")
                return
            except Exception as exc:
                if not str(exc).startswith(_MALFORMED_FRAME):
                    raise
                yield WatchEvent.failure(f"watch {descriptor} failed: {exc}")
                return

            _log.debug("watch window closed; resuming", resource=str(descriptor), resource_version=current_rv)
