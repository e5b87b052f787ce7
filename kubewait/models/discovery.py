"""API discovery snapshot data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class APIResource:
    """One entry of an ``APIResourceList`` (``/api/v1``, ``/apis/<group>/<version>``)."""

    name: str
    kind: str
    namespaced: bool = True
    verbs: tuple[str, ...] = ()

    @property
    def is_subresource(self) -> bool:
        return "/" in self.name


@dataclass
class APIGroupResources:
    """All served versions of one API group and the resources of each.

    ``versions`` keeps server order; the core group is named ``""``.
    """

    name: str
    preferred_version: str = ""
    versions: list[str] = field(default_factory=list)
    resources: dict[str, list[APIResource]] = field(default_factory=dict)
