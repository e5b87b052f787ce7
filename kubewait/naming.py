"""Name conversions between API (camelCase) and Python client (snake_case) forms."""

from __future__ import annotations

import re

_RE_UPPER_FOLLOWED_BY_LOWER = re.compile(r"(.)([A-Z][a-z]+)")
_RE_LOWER_OR_NUM_FOLLOWED_BY_UPPER = re.compile(r"([a-z0-9])([A-Z])")


def snake_case(name: str) -> str:
    """``PersistentVolumeClaim`` -> ``persistent_volume_claim``, ``podIP`` -> ``pod_ip``."""
    name = _RE_UPPER_FOLLOWED_BY_LOWER.sub(r"\1_\2", name)
    return _RE_LOWER_OR_NUM_FOLLOWED_BY_UPPER.sub(r"\1_\2", name).lower()


def api_class_name(group: str, version: str) -> str:
    """Typed client class for a group/version: ``("apps", "v1")`` -> ``AppsV1Api``.

    The ``.k8s.io`` suffix is dropped and dotted segments are capitalised,
    so ``rbac.authorization.k8s.io`` becomes ``RbacAuthorizationV1Api``.
    The core group maps to ``CoreV1Api``.
    """
    group = group or "core"
    if group.endswith(".k8s.io"):
        group = group[: -len(".k8s.io")]
    prefix = "".join(word.capitalize() for word in group.split("."))
    return f"{prefix}{version.capitalize()}Api"
