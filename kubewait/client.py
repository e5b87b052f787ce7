"""Kubernetes API client construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kubewait.errors import ConfigurationError
from kubewait.kubeconfig import get_or_gen_kubeconfig_path
from kubewait.models.config import KubeConfig
from kubewait.observability.logging import get_logger

if TYPE_CHECKING:
    from kubernetes_asyncio.client import ApiClient

_log = get_logger("client")


async def create_api_client(kube: KubeConfig | None = None, *, kubeconfig_content: str = "") -> ApiClient:
    """Build an ``ApiClient`` for the target cluster.

    With an explicit kubeconfig (path, context or inline content) that file
    is used. Otherwise the in-cluster service account is tried first and the
    default kubeconfig second. The caller owns the client and must close it.

    Raises:
        ConfigurationError: no usable configuration was found, or the
            kubeconfig could not be read or parsed.
    """
    # Imported lazily: kubernetes-asyncio probes the environment on import.
    import kubernetes_asyncio.config as k8s_config  # type: ignore[import-untyped]
    from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

    kube = kube or KubeConfig()
    configuration = k8s_client.Configuration()

    config_file = kube.kubeconfig
    if kubeconfig_content:
        config_file = str(get_or_gen_kubeconfig_path(kubeconfig_content, kube.kubeconfig_dir or None))

    try:
        if config_file or kube.context:
            await k8s_config.load_kube_config(
                config_file=config_file or None,
                context=kube.context or None,
                client_configuration=configuration,
            )
            _log.debug("k8s client configured from kubeconfig", path=config_file or "default", context=kube.context)
        else:
            try:
                # load_incluster_config() is synchronous in kubernetes-asyncio
                k8s_config.load_incluster_config(client_configuration=configuration)
                _log.debug("k8s client configured from in-cluster service account")
            except k8s_config.ConfigException:
                await k8s_config.load_kube_config(client_configuration=configuration)
                _log.debug("k8s client configured from kubeconfig")
    except (k8s_config.ConfigException, OSError) as exc:
        raise ConfigurationError(f"cannot configure the Kubernetes client: {exc}") from exc

    return k8s_client.ApiClient(configuration)
