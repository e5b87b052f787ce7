"""Ready-made predicates over resource objects.

A predicate takes one resource object and returns True when it is in the
desired state. Field paths are written in API form (``status.phase``,
``status.readyReplicas``) and work against both typed client models,
whose attributes are snake_case, and raw dicts.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from kubewait.naming import snake_case

Predicate = Callable[[Any], bool]

_MISSING = object()


def _child(obj: Any, segment: str) -> Any:
    if obj is None:
        return _MISSING
    if isinstance(obj, dict):
        return obj.get(segment, _MISSING)
    value = getattr(obj, snake_case(segment), _MISSING)
    if value is _MISSING:
        value = getattr(obj, segment, _MISSING)
    return value


def field_value(obj: Any, path: str) -> Any:
    """Resolve a dotted *path* on *obj*; returns None when any segment is missing."""
    current = obj
    for segment in path.split("."):
        current = _child(current, segment)
        if current is _MISSING:
            return None
    return current


def field_equals(path: str, expected: Any) -> Predicate:
    """Match when the field at *path* equals *expected* (compared as strings)."""

    def check(obj: Any) -> bool:
        value = field_value(obj, path)
        return value is not None and str(value) == str(expected)

    return check


def pod_phase(phase: str) -> Predicate:
    return field_equals("status.phase", phase)


def has_condition(condition_type: str, status: str = "True") -> Predicate:
    """Match when ``status.conditions`` has *condition_type* with *status*."""

    def check(obj: Any) -> bool:
        conditions = field_value(obj, "status.conditions") or []
        for condition in conditions:
            if field_value(condition, "type") == condition_type:
                return str(field_value(condition, "status")) == status
        return False

    return check


def pod_ready() -> Predicate:
    return has_condition("Ready")


def all_of(*predicates: Predicate) -> Predicate:
    def check(obj: Any) -> bool:
        return all(predicate(obj) for predicate in predicates)

    return check


def parse_condition(spec: str) -> Predicate:
    """Build a predicate from a CLI ``--for`` expression.

    Supported forms::

        phase=Running
        condition=Ready            (status defaults to True)
        condition=Available=False
        field=status.readyReplicas=3
    """
    kind, sep, rest = spec.partition("=")
    if not sep or not rest:
        raise ValueError(f"invalid condition {spec!r}: expected <kind>=<value>")

    if kind == "phase":
        return pod_phase(rest)
    if kind == "condition":
        condition_type, _, status = rest.partition("=")
        return has_condition(condition_type, status or "True")
    if kind == "field":
        path, sep, expected = rest.partition("=")
        if not sep or not path:
            raise ValueError(f"invalid field condition {spec!r}: expected field=<path>=<value>")
        return field_equals(path, expected)
    raise ValueError(f"unknown condition kind {kind!r}: expected phase, condition or field")
