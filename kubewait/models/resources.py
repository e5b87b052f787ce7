"""Resource identity data structures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupVersionKind:
    """Abstract resource kind, e.g. ``("apps", "v1", "Deployment")``.

    The core API group is the empty string.
    """

    group: str
    version: str
    kind: str

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        """Build from a manifest-style ``apiVersion`` (``"v1"``, ``"apps/v1"``)."""
        group, _, version = api_version.partition("/")
        if not version:
            group, version = "", group
        return cls(group=group, version=version, kind=kind)

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


POD_KIND = GroupVersionKind(group="", version="v1", kind="Pod")


@dataclass(frozen=True)
class ResourceDescriptor:
    """Concrete addressable resource type resolved from discovery.

    Resolved once per wait call and never mutated afterwards.
    """

    group: str
    version: str
    kind: str
    plural: str
    namespaced: bool = True

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def gvk(self) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=self.kind)

    def __str__(self) -> str:
        return f"{self.plural}.{self.group}" if self.group else self.plural


@dataclass(frozen=True)
class SelectorSpec:
    """Label and field selectors, passed through to the event source unmodified."""

    label_selector: str = ""
    field_selector: str = ""


@dataclass(frozen=True)
class ObjectMeta:
    """Identity fields extracted from a resource object."""

    namespace: str = ""
    name: str = ""
    resource_version: str = ""
    uid: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.namespace, self.name)
