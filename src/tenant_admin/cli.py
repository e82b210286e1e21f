"""Typer CLI for Tenant-Admin."""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from tenant_admin.common.exceptions import TenantAdminError
from tenant_admin.tenants.schemas import TenantConfig, TenantCreate, ToolPolicy

app = typer.Typer(name="tenant-admin", help="Tenant-Admin: manage per-channel bot tenants")
console = Console()


def _service():
    from tenant_admin.deps import get_tenant_service
    return get_tenant_service()


def _run(coro):
    """Run a service coroutine, turning domain errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except TenantAdminError as e:
        console.print(f"[bold red]{e.code}[/bold red] — {e.message}")
        raise typer.Exit(1)


def _print_tenant(tenant: TenantConfig) -> None:
    status = "[green]enabled[/green]" if tenant.enabled else "[yellow]paused[/yellow]"
    console.print(f"[bold]{tenant.name}[/bold] ({tenant.id}) {tenant.channel_name} — {status}")
    console.print(f"  Paid: {tenant.paid}")
    console.print(f"  Group policy: {tenant.group_policy}")
    console.print(f"  Denied tools: {', '.join(tenant.tools.deny)}")
    console.print(f"  Users: {', '.join(tenant.users) or '-'}")
    console.print(f"  System prompt: {tenant.system_prompt!r}", markup=False)


def _report(result, verb: str) -> None:
    if result.tenant is not None:
        console.print(f"[bold green]{verb}[/bold green] {result.tenant.id}")
    else:
        console.print(f"[bold green]{verb}[/bold green]")
    if not result.live:
        console.print(
            f"[bold yellow]Saved, but gateway restart failed:[/bold yellow] {result.gateway_error.message}"
        )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
):
    """Start the Tenant-Admin API server."""
    import uvicorn
    from tenant_admin.app import create_app
    from tenant_admin.common.config import get_settings

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    console.print(f"[bold green]Starting Tenant-Admin on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command("list")
def list_tenants():
    """List all tenants."""
    tenants = _run(_service().list_tenants())
    if not tenants:
        console.print("No tenants configured.")
        return

    table = Table("ID", "Name", "Enabled", "Paid", "Policy", "Users")
    for t in tenants:
        table.add_row(t.id, t.name, str(t.enabled), str(t.paid), t.group_policy, str(len(t.users)))
    console.print(table)


@app.command()
def show(tenant_id: str = typer.Argument(..., help="Tenant ID")):
    """Show one tenant."""
    _print_tenant(_run(_service().get_tenant(tenant_id)))


@app.command()
def add(
    tenant_id: str = typer.Argument(..., help="Tenant ID (channel key)"),
    name: Optional[str] = typer.Option(None, help="Display name"),
    prompt: Optional[str] = typer.Option(None, help="System prompt"),
    deny: Optional[List[str]] = typer.Option(None, help="Denied tool (repeatable)"),
    user: Optional[List[str]] = typer.Option(None, help="Allowed user ID (repeatable)"),
    paid: bool = typer.Option(False, "--paid/--free", help="Paid tenant"),
    open_policy: bool = typer.Option(False, "--open", help="groupPolicy=open instead of allowlist"),
    disabled: bool = typer.Option(False, "--disabled", help="Create paused"),
):
    """Add a tenant; omitted settings take the safe defaults."""
    data = TenantCreate(
        name=name,
        system_prompt=prompt,
        tools=ToolPolicy(deny=deny) if deny else None,
        users=user or None,
        enabled=not disabled,
        paid=paid,
        group_policy="open" if open_policy else "allowlist",
    )
    _report(_run(_service().add_tenant(tenant_id, data)), "Added")


@app.command()
def update(
    tenant_id: str = typer.Argument(..., help="Tenant ID"),
    name: Optional[str] = typer.Option(None, help="Display name"),
    prompt: Optional[str] = typer.Option(None, help="System prompt"),
    deny: Optional[List[str]] = typer.Option(None, help="Replace denied tools (repeatable)"),
    user: Optional[List[str]] = typer.Option(None, help="Replace allowed users (repeatable)"),
    paid: Optional[bool] = typer.Option(None, "--paid/--free", help="Paid tenant"),
    group_policy: Optional[str] = typer.Option(None, help="allowlist or open"),
):
    """Change only the given fields of a tenant."""
    fields = {
        "name": name,
        "system_prompt": prompt,
        "tools": {"deny": deny} if deny else None,
        "users": user or None,
        "paid": paid,
        "group_policy": group_policy,
    }
    changes = {k: v for k, v in fields.items() if v is not None}
    if not changes:
        console.print("[yellow]Nothing to update.[/yellow]")
        raise typer.Exit(1)
    _report(_run(_service().update_tenant(tenant_id, changes)), "Updated")


@app.command()
def pause(tenant_id: str = typer.Argument(..., help="Tenant ID")):
    """Stop the bot from answering in a tenant's channel."""
    _report(_run(_service().pause_tenant(tenant_id)), "Paused")


@app.command()
def activate(tenant_id: str = typer.Argument(..., help="Tenant ID")):
    """Resume a paused tenant."""
    _report(_run(_service().activate_tenant(tenant_id)), "Activated")


@app.command()
def remove(
    tenant_id: str = typer.Argument(..., help="Tenant ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a tenant's entry from the config."""
    if not yes:
        typer.confirm(f"Remove tenant '{tenant_id}'?", abort=True)
    _report(_run(_service().remove_tenant(tenant_id)), "Removed")


@app.command()
def health():
    """Check whether the gateway is running."""
    status = _run(_service().gateway_health())
    if status.running:
        version = f" v{status.version}" if status.version else ""
        console.print(f"[bold green]running[/bold green]{version}")
    else:
        console.print("[bold red]not running[/bold red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
