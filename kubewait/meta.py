"""Metadata extraction for typed models and raw resource dicts.

Typed objects are ``kubernetes_asyncio`` models (``V1Pod`` and friends)
whose metadata attributes are snake_case. Raw dicts come straight from the
API server (custom resources) and are read case-sensitively: only the exact
``metadata`` / ``resourceVersion`` keys count, so ``Metadata`` or
``resourceversion`` are treated as absent.
"""

from __future__ import annotations

from typing import Any

from kubewait.models.resources import ObjectMeta


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def object_meta(obj: Any) -> ObjectMeta:
    """Return namespace, name, resourceVersion and uid of *obj*.

    Missing fields come back as empty strings; an object without metadata
    yields an empty ObjectMeta rather than an error.
    """
    if isinstance(obj, dict):
        meta = obj.get("metadata")
        if not isinstance(meta, dict):
            return ObjectMeta()
        return ObjectMeta(
            namespace=_str(meta.get("namespace")),
            name=_str(meta.get("name")),
            resource_version=_str(meta.get("resourceVersion")),
            uid=_str(meta.get("uid")),
        )

    meta = getattr(obj, "metadata", None)
    if meta is None:
        return ObjectMeta()
    return ObjectMeta(
        namespace=_str(getattr(meta, "namespace", None)),
        name=_str(getattr(meta, "name", None)),
        resource_version=_str(getattr(meta, "resource_version", None)),
        uid=_str(getattr(meta, "uid", None)),
    )


def namespace_and_name(obj: Any) -> tuple[str, str]:
    meta = object_meta(obj)
    return meta.namespace, meta.name
