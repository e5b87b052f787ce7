"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WaitConfig:
    """Wait defaults."""

    default_timeout: float = 60.0
    # Server-side window for a single watch request; the adapter resumes
    # from the last resource version when a window closes cleanly.
    watch_timeout_seconds: int = 300


@dataclass
class KubeConfig:
    """Kubernetes client configuration."""

    kubeconfig: str = ""
    context: str = ""
    kubeconfig_dir: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class KubeWaitConfig:
    """Top-level kubewait configuration."""

    wait: WaitConfig = field(default_factory=WaitConfig)
    kube: KubeConfig = field(default_factory=KubeConfig)
    log: LogConfig = field(default_factory=LogConfig)
