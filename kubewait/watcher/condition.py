"""Condition Watcher: block until resources satisfy a predicate.

Algorithm (one call, one asyncio task):

1. A deadline scoped to ``timeout`` covers every await below. Callers that
   did work of their own first (kind resolution) pass the absolute
   ``deadline`` they started from instead, so the budget is shared.
2. List the matching objects into an ObservedObjectSet.
3. Precondition: the set is non-empty and the predicate holds for every
   object. If so, return immediately without opening a watch.
4. Otherwise watch from the list's resource version, so nothing between the
   snapshot and the feed is missed. ERROR events end the call; every
   object-carrying event is checked on its own and the first satisfying
   event is returned.

The precondition judges the whole snapshot but the steady state judges one
event at a time. The asymmetry is intentional and covered by tests.

The watch generator is closed on every exit path: success, error, deadline
expiry and cancellation by the caller.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from kubewait.errors import KubeWaitError, TransportError, WaitTimeoutError
from kubewait.models.events import EventType, WatchEvent
from kubewait.models.resources import ResourceDescriptor, SelectorSpec
from kubewait.observability.logging import bound_wait_context, get_logger
from kubewait.observability.metrics import wait_duration_seconds, waits_total, watch_events_total
from kubewait.watcher.source import ListWatchSource
from kubewait.watcher.store import ObservedObjectSet

_log = get_logger("watcher.condition")

T = TypeVar("T")


@dataclass
class WaitSession(Generic[T]):
    """Transient state of a single wait call. Never shared or persisted."""

    descriptor: ResourceDescriptor
    namespace: str
    selector: SelectorSpec
    predicate: Callable[[T], bool]
    timeout: float
    deadline: float | None = None
    observed: ObservedObjectSet = field(default_factory=ObservedObjectSet)
    last_event: WatchEvent | None = None
    events_seen: int = 0


class ConditionWatcher:
    """Runs list-then-watch waits against a ListWatchSource.

    Holds no per-call state, so one instance can serve concurrent waits.
    """

    def __init__(self, source: ListWatchSource) -> None:
        self._source = source

    async def wait(
        self,
        namespace: str,
        descriptor: ResourceDescriptor,
        selector: SelectorSpec,
        predicate: Callable[[T], bool],
        timeout: float,
        *,
        deadline: float | None = None,
    ) -> WatchEvent | None:
        """Block until the condition holds.

        *deadline* is an absolute event-loop time; when given it bounds the
        call instead of *timeout*, which is then only reported in errors.

        Returns:
            None when the initial snapshot already satisfied the predicate,
            otherwise the watch event whose object satisfied it.

        Raises:
            WaitTimeoutError: *timeout* seconds elapsed first.
            TransportError:   the source failed or the watch ended early.
        """
        session: WaitSession[T] = WaitSession(
            descriptor=descriptor,
            namespace=namespace,
            selector=selector,
            predicate=predicate,
            timeout=timeout,
            deadline=deadline,
        )
        started = time.monotonic()
        outcome = "error"
        try:
            with bound_wait_context(resource=str(descriptor), namespace=namespace or "*"):
                event = await self._wait_with_deadline(session)
            outcome = "success"
            return event
        except WaitTimeoutError as exc:
            outcome = "timeout"
            self._log_failure(session, exc)
            raise
        except KubeWaitError as exc:
            self._log_failure(session, exc)
            raise
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise
        finally:
            waits_total.labels(kind=descriptor.kind, outcome=outcome).inc()
            wait_duration_seconds.labels(kind=descriptor.kind).observe(time.monotonic() - started)

    async def _wait_with_deadline(self, session: WaitSession[T]) -> WatchEvent | None:
        if session.deadline is not None:
            deadline = asyncio.timeout_at(session.deadline)
        else:
            deadline = asyncio.timeout(session.timeout)
        try:
            async with deadline:
                return await self._run(session)
        except TimeoutError as exc:
            if not deadline.expired():
                # A timeout raised by the transport itself, not our deadline.
                raise TransportError(f"event source timed out: {exc}") from exc
            raise WaitTimeoutError(session.descriptor, session.timeout, session.last_event) from exc

    async def _run(self, session: WaitSession[T]) -> WatchEvent | None:
        listed = await self._source.list(session.descriptor, session.namespace, session.selector)
        session.observed.replace(listed.items)

        if session.observed.all_satisfy(session.predicate):
            _log.debug("condition met by snapshot", objects=len(session.observed))
            return None

        _log.debug(
            "condition not met by snapshot; watching",
            objects=len(session.observed),
            resource_version=listed.resource_version,
        )
        events = self._source.watch(
            session.descriptor,
            session.namespace,
            session.selector,
            listed.resource_version,
        )
        async with aclosing(events):
            async for event in events:
                session.last_event = event
                session.events_seen += 1
                watch_events_total.labels(type=event.type.value).inc()

                if event.type is EventType.ERROR:
                    raise TransportError(event.error or "watch reported an error", status=event.status)
                if not event.carries_object:
                    continue

                session.observed.apply(event)
                if session.predicate(event.object):
                    _log.debug("condition met by event", event_type=event.type.value, events=session.events_seen)
                    return event

        raise TransportError("watch closed before the condition was met")

    def _log_failure(self, session: WaitSession[Any], exc: KubeWaitError) -> None:
        _log.info(
            "wait resource failed",
            resource=str(session.descriptor),
            namespace=session.namespace or "*",
            error=str(exc),
            last_event=str(session.last_event) if session.last_event else None,
            observed=len(session.observed),
        )
