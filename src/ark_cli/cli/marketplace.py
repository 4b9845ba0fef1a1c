"""Marketplace-related CLI commands."""

from __future__ import annotations
import asyncio
from typing import Annotated
import typer
from rich.markup import escape
from ark_cli.marketplace import (
    MARKETPLACE_REPO_URL,
    MarketplaceClient,
    ServiceCollection,
    ServiceRecord,
    extract_marketplace_service_name,
    marketplace_service_path,
)
from .errors import CLIError
from .output import print_json, render_kv_section, render_table
from .state import CLIContext


marketplace_app = typer.Typer(
    help=(
        "Install community-contributed services from the ARK Marketplace.\n\n"
        f"Repository: {MARKETPLACE_REPO_URL}"
    ),
)

RefreshOption = Annotated[
    bool,
    typer.Option("--refresh", help="Force refresh marketplace data from repository."),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print services as JSON instead of a table."),
]
NameArgument = Annotated[
    str,
    typer.Argument(help="Service name or marketplace/services/<name> path."),
]


def _state(ctx: typer.Context) -> CLIContext:
    return ctx.ensure_object(CLIContext)


def _source_notice(client: MarketplaceClient) -> str:
    manifest = client.manifest
    if client.source == "manifest" and manifest is not None:
        version = escape(str(manifest.version or "unknown"))
        return f"Using marketplace.json (version: {version})"
    if client.fallback_reason == "no-installable-items":
        return "Using fallback services (marketplace.json has no installable items)"
    return "Using fallback services (marketplace.json unavailable)"


def _service_rows(services: ServiceCollection) -> list[list[str]]:
    return [
        [
            marketplace_service_path(key),
            escape(service.description),
            service.namespace or "default",
        ]
        for key, service in services.items()
    ]


def _service_pairs(service: ServiceRecord) -> list[tuple[str, str]]:
    pairs = [
        ("Install path", marketplace_service_path(service.name)),
        ("Description", escape(service.description)),
        ("Namespace", service.namespace),
        ("Helm release", service.helm_release_name),
        ("Chart", service.chart_path),
        ("Install args", " ".join(service.install_args) or "-"),
    ]
    optional = [
        ("Service", service.k8s_service_name),
        ("Service port", service.k8s_service_port),
        ("Port-forward port", service.k8s_port_forward_local_port),
        ("Deployment", service.k8s_deployment_name),
        ("Dev deployment", service.k8s_dev_deployment_name),
    ]
    pairs.extend((label, str(value)) for label, value in optional if value is not None)
    return pairs


@marketplace_app.command("list")
@marketplace_app.command("ls", hidden=True)
def list_services(
    ctx: typer.Context,
    refresh: RefreshOption = False,
    as_json: JsonOption = False,
) -> None:
    """List available marketplace services."""
    state = _state(ctx)
    client = state.marketplace
    console = state.console

    if refresh and not as_json:
        console.print("[dim]Refreshing marketplace data...[/dim]")

    services = asyncio.run(client.get_all(force_refresh=refresh))

    if as_json:
        print_json({key: service.to_dict() for key, service in services.items()})
        return

    console.print(f"[dim]{_source_notice(client)}[/dim]")
    console.print(
        "[dim]Install with: ark install marketplace/services/<service-name>[/dim]"
    )
    render_table(
        console,
        title="ARK Marketplace Services",
        columns=["Service", "Description", "Namespace"],
        rows=_service_rows(services),
    )
    console.print(f"[cyan]Repository: {MARKETPLACE_REPO_URL}[/cyan]")
    console.print(f"[cyan]Registry: {client.registry}[/cyan]")
    if client.source == "manifest" and client.manifest is not None:
        count = len(client.manifest.items)
        console.print(f"[dim]Manifest: marketplace.json ({count} items)[/dim]")


@marketplace_app.command("show")
def show_service(
    ctx: typer.Context,
    name: NameArgument,
    as_json: JsonOption = False,
) -> None:
    """Display the deployment details of a marketplace service."""
    state = _state(ctx)
    service_name = extract_marketplace_service_name(name)
    service = asyncio.run(state.marketplace.get_one(service_name))
    if service is None:
        raise CLIError(f"Marketplace service '{service_name}' was not found.")

    if as_json:
        print_json(service.to_dict())
        return

    render_kv_section(state.console, title=service.name, pairs=_service_pairs(service))


__all__ = ["list_services", "marketplace_app", "show_service"]
