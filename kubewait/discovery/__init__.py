"""Type resolution: map group/version/kind to the served resource type.

Submodules
----------
resolver -- TypeResolver, the DiscoverySource interface and the pure
            snapshot lookup.
kube     -- KubeDiscoverySource: snapshot from a live cluster.
"""

from kubewait.discovery.kube import KubeDiscoverySource
from kubewait.discovery.resolver import DiscoverySource, TypeResolver, resolve_from_snapshot

__all__ = ["DiscoverySource", "KubeDiscoverySource", "TypeResolver", "resolve_from_snapshot"]
