"""Configuration loading from KUBEWAIT_* environment variables.

Numeric settings are clamped into their allowed range rather than
rejected; an unparsable number or an unknown choice raises ValueError
naming the variable.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Collection
from typing import TypeVar

from kubewait.models.config import KubeConfig, KubeWaitConfig, LogConfig, WaitConfig
from kubewait.observability.logging import LOG_FORMATS

_PREFIX = "KUBEWAIT_"
_LOG_LEVELS = ("debug", "info", "warning", "error")

N = TypeVar("N", int, float)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(_PREFIX + key, default)


def _env_number(
    key: str,
    default: N,
    parse: Callable[[str], N],
    lo: N | None = None,
    hi: N | None = None,
) -> N:
    raw = _env(key)
    if not raw:
        return default
    try:
        value = parse(raw)
    except ValueError as exc:
        raise ValueError(f"{_PREFIX}{key}={raw!r} is not a valid {parse.__name__}") from exc
    if lo is not None and value < lo:
        return lo
    if hi is not None and value > hi:
        return hi
    return value


def _env_choice(key: str, default: str, choices: Collection[str]) -> str:
    value = _env(key, default).lower()
    if value not in choices:
        raise ValueError(f"{_PREFIX}{key}={value!r} must be one of {', '.join(choices)}")
    return value


def load_config() -> KubeWaitConfig:
    """Build the configuration from the environment.

    ``KUBEWAIT_KUBECONFIG`` falls back to the standard ``KUBECONFIG``.
    """
    return KubeWaitConfig(
        wait=WaitConfig(
            default_timeout=_env_number("DEFAULT_TIMEOUT", 60.0, float, lo=1.0),
            watch_timeout_seconds=_env_number("WATCH_TIMEOUT_SECONDS", 300, int, lo=30, hi=3600),
        ),
        kube=KubeConfig(
            kubeconfig=_env("KUBECONFIG", os.environ.get("KUBECONFIG", "")),
            context=_env("CONTEXT"),
            kubeconfig_dir=_env("KUBECONFIG_DIR"),
        ),
        log=LogConfig(
            level=_env_choice("LOG_LEVEL", "info", _LOG_LEVELS),
            format=_env_choice("LOG_FORMAT", "json", LOG_FORMATS),
        ),
    )
