"""kubewait command-line interface.

    kubewait pod -n web -l app=api --for condition=Ready --timeout 120
    kubewait resource Deployment --api-version apps/v1 -n web \\
        --for condition=Available
    kubewait resource Certificate --api-version cert-manager.io/v1 \\
        -n web --field-selector metadata.name=api-tls --for condition=Ready

Exit codes: 0 condition met, 1 timeout, 3 kind could not be resolved,
4 transport failure, 5 no usable cluster configuration.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import click

from kubewait.client import create_api_client
from kubewait.config import load_config
from kubewait.errors import ConfigurationError, ResolutionError, TransportError, WaitTimeoutError
from kubewait.meta import namespace_and_name
from kubewait.models.config import KubeWaitConfig
from kubewait.models.events import WatchEvent
from kubewait.models.resources import POD_KIND, GroupVersionKind, SelectorSpec
from kubewait.observability.logging import LOG_FORMATS, setup_logging
from kubewait.predicates import parse_condition
from kubewait.validation import is_dns1123_subdomain
from kubewait.wait import Waiter

EXIT_TIMEOUT = 1
EXIT_RESOLUTION = 3
EXIT_TRANSPORT = 4
EXIT_CONFIG = 5


def _validate_namespace(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if value and not is_dns1123_subdomain(value):
        raise click.BadParameter(f"{value!r} is not a valid namespace name")
    return value


def _validate_condition(ctx: click.Context, param: click.Parameter, value: str) -> Callable[[Any], bool]:
    try:
        return parse_condition(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _wait_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option("-n", "--namespace", default="default", show_default=True, callback=_validate_namespace),
        click.option("-A", "--all-namespaces", is_flag=True, help="Wait across all namespaces."),
        click.option("-l", "--selector", default="", help="Label selector, e.g. app=web."),
        click.option("--field-selector", default="", help="Field selector, e.g. metadata.name=web-0."),
        click.option(
            "--for",
            "condition",
            required=True,
            callback=_validate_condition,
            help="phase=<Phase>, condition=<Type>[=<Status>] or field=<path>=<value>.",
        ),
        click.option("--timeout", type=float, default=None, help="Seconds; defaults to KUBEWAIT_DEFAULT_TIMEOUT."),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


async def _wait(
    config: KubeWaitConfig,
    namespace: str,
    gvk: GroupVersionKind,
    selector: SelectorSpec,
    predicate: Callable[[Any], bool],
    timeout: float | None,
) -> WatchEvent | None:
    api = await create_api_client(config.kube)
    async with api:
        waiter = Waiter.from_api_client(api, config.wait)
        return await waiter.wait_resource(namespace, gvk, selector, predicate, timeout)


def _run(
    ctx: click.Context,
    gvk: GroupVersionKind,
    namespace: str,
    all_namespaces: bool,
    selector: str,
    field_selector: str,
    condition: Callable[[Any], bool],
    timeout: float | None,
) -> None:
    config: KubeWaitConfig = ctx.obj
    scope = "" if all_namespaces else namespace
    spec = SelectorSpec(label_selector=selector, field_selector=field_selector)

    try:
        event = asyncio.run(_wait(config, scope, gvk, spec, condition, timeout))
    except WaitTimeoutError as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(EXIT_TIMEOUT)
    except ResolutionError as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(EXIT_RESOLUTION)
    except TransportError as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(EXIT_TRANSPORT)
    except ConfigurationError as exc:
        click.echo(f"error: {exc}", err=True)
        ctx.exit(EXIT_CONFIG)

    if event is None:
        click.echo(f"condition met: all matching {gvk.kind} objects")
    else:
        ns, name = namespace_and_name(event.object)
        click.echo(f"condition met: {gvk.kind} {ns + '/' if ns else ''}{name} ({event.type.value})")


@click.group()
@click.option("--kubeconfig", default=None, help="Path to a kubeconfig file.")
@click.option("--context", "kube_context", default=None, help="Kubeconfig context to use.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Defaults to KUBEWAIT_LOG_LEVEL.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default=None,
    help="Defaults to KUBEWAIT_LOG_FORMAT (json).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    kubeconfig: str | None,
    kube_context: str | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """Wait for Kubernetes resources to reach a condition."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    if kubeconfig:
        config.kube.kubeconfig = kubeconfig
    if kube_context:
        config.kube.context = kube_context
    if log_level:
        config.log.level = log_level
    if log_format:
        config.log.format = log_format
    setup_logging(config.log.level, config.log.format)
    ctx.obj = config


@cli.command()
@_wait_options
@click.pass_context
def pod(
    ctx: click.Context,
    namespace: str,
    all_namespaces: bool,
    selector: str,
    field_selector: str,
    condition: Callable[[Any], bool],
    timeout: float | None,
) -> None:
    """Wait for Pods to reach a condition."""
    _run(ctx, POD_KIND, namespace, all_namespaces, selector, field_selector, condition, timeout)


@cli.command()
@click.argument("kind")
@click.option("--api-version", default="v1", show_default=True, help="Group/version, e.g. apps/v1.")
@_wait_options
@click.pass_context
def resource(
    ctx: click.Context,
    kind: str,
    api_version: str,
    namespace: str,
    all_namespaces: bool,
    selector: str,
    field_selector: str,
    condition: Callable[[Any], bool],
    timeout: float | None,
) -> None:
    """Wait for resources of KIND to reach a condition."""
    gvk = GroupVersionKind.from_api_version(api_version, kind)
    _run(ctx, gvk, namespace, all_namespaces, selector, field_selector, condition, timeout)
