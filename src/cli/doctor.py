"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and provider configuration.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


def provider_rows(settings: AppSettings) -> list[tuple[str, str, str]]:
    """Estado de configuración de cada proveedor, en orden de la cadena."""

    rows: list[tuple[str, str, str]] = []
    if settings.cpfhub_api_key:
        rows.append(("CPFHub.io", "OK", settings.cpfhub_base_url))
    else:
        rows.append(("CPFHub.io", "SKIPPED", "No API key -> provider always fails over"))
    rows.append(("Receita CPF", "OK", settings.receita_base_url))
    if settings.mte_url:
        detail = settings.mte_url if settings.mte_cookie else f"{settings.mte_url} (no session cookie)"
        rows.append(("MTE portal", "OK", detail))
    else:
        rows.append(("MTE portal", "SKIPPED", "No URL configured"))
    rows.append(("Fallback data", "OK", "Always available (synthetic)"))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics and show provider configuration."""

    settings = AppSettings()

    table = Table(title="CPF-RESOLVER Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    for name, status, detail in provider_rows(settings):
        table.add_row(name, status, detail)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s per provider")

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.receita_base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-providers")
def setup_providers() -> None:
    """Interactive provider setup (stores config in the user config .env).

    Empty answers keep the value already stored.
    """

    api_key = typer.prompt("CPFHub.io API key", default="", hide_input=True, show_default=False).strip()
    mte_url = typer.prompt("MTE portal URL", default="", show_default=False).strip()
    mte_cookie = typer.prompt("MTE session cookie", default="", hide_input=True, show_default=False).strip()

    env_path = write_user_env_vars(
        {
            "CPF_RESOLVER_CPFHUB_API_KEY": api_key or None,
            "CPF_RESOLVER_MTE_URL": mte_url or None,
            "CPF_RESOLVER_MTE_COOKIE": mte_cookie or None,
        }
    )

    _console.print(f"[green]Saved provider config to:[/green] {env_path}")
