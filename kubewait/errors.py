"""Exception hierarchy for kubewait.

Every wait call ends in exactly one success or one of these errors.
Nothing is retried internally; retry policy belongs to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubewait.models.events import WatchEvent
    from kubewait.models.resources import GroupVersionKind, ResourceDescriptor


class KubeWaitError(Exception):
    """Base class for all kubewait errors."""


class ResolutionError(KubeWaitError):
    """The resource kind cannot be mapped to a concrete resource type."""

    def __init__(self, gvk: GroupVersionKind, reason: str) -> None:
        super().__init__(f"no matches for kind {gvk.kind!r} in version {gvk.api_version!r}: {reason}")
        self.gvk = gvk
        self.reason = reason


class WaitTimeoutError(KubeWaitError, TimeoutError):
    """The deadline elapsed before the condition was satisfied.

    ``descriptor`` is the GroupVersionKind instead when the deadline passed
    during kind resolution. ``last_event`` is the last event seen from the
    watch, if any, kept for diagnostics.
    """

    def __init__(
        self,
        descriptor: ResourceDescriptor | GroupVersionKind,
        timeout: float,
        last_event: WatchEvent | None = None,
    ) -> None:
        super().__init__(f"timed out after {timeout:g}s waiting for the condition on {descriptor}")
        self.descriptor = descriptor
        self.timeout = timeout
        self.last_event = last_event


class TransportError(KubeWaitError):
    """The event source reported an error event or a connection failure."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ConfigurationError(KubeWaitError):
    """No usable cluster credentials: kubeconfig missing, unreadable or invalid."""
