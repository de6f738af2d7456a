"""Entry point de la CLI.

Comandos:
- `resolve`: valida y resuelve un CPF por la cadena de proveedores.
- `validate`: corre solo los validadores puros.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_envelope_json
from cli import doctor
from cli.ui_components import (
    build_record_table,
    build_validation_table,
    build_warning_panel,
    print_banner,
)
from core.config import AppSettings
from core.observability.correlation import get_correlation_id
from core.observability.log_setup import configure_logging
from core.services.identity_resolver import ResolverHooks
from core.services.lookup_service import consult_cpf
from core.validators import clean_cpf, is_valid_birth_date, is_valid_cpf, is_valid_phone

app = typer.Typer(no_args_is_help=True, help="Consulta de CPF com cadeia de provedores e fallback.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

EXIT_INPUT_ERROR = 1
EXIT_INTERNAL_ERROR = 2


@app.command()
def resolve(
    cpf: str = typer.Option(..., "--cpf", help="CPF (com ou sem pontuação)."),
    birth_date: str = typer.Option(..., "--birth-date", help="Data de nascimento DD/MM/YYYY."),
    phone: str = typer.Option(..., "--phone", help="Telefone com DDD (10 ou 11 dígitos)."),
    as_json: bool = typer.Option(False, "--json", help="Imprime o envelope em JSON."),
    output: Optional[Path] = typer.Option(None, "--output", help="Salva o envelope em um arquivo JSON."),
) -> None:
    """Resolve o registro de identidade de um CPF."""

    settings = AppSettings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )

    hooks = None
    if not as_json:
        print_banner(_console)
        hooks = ResolverHooks(
            attempt=lambda name: _console.print(f"[dim]-> consultando {name}[/dim]"),
            failure=lambda name, reason: _console.print(f"[yellow]   {name} falhou ({reason})[/yellow]"),
        )

    response = asyncio.run(
        consult_cpf(
            {"cpf": cpf, "birthDate": birth_date, "phone": phone},
            settings=settings,
            hooks=hooks,
        )
    )

    if output is not None:
        export_envelope_json(response=response, output_path=output)

    if as_json:
        typer.echo(json.dumps(response.body, ensure_ascii=False))
    elif response.success:
        _console.print(build_record_table(response.body))
        if response.body.get("warning"):
            _console.print(build_warning_panel(response.body["warning"]))
    else:
        _console.print(f"[red]Erro:[/red] {response.body.get('error')}")

    if response.status_code == 400:
        raise typer.Exit(code=EXIT_INPUT_ERROR)
    if response.status_code >= 500:
        raise typer.Exit(code=EXIT_INTERNAL_ERROR)


@app.command()
def validate(
    cpf: Optional[str] = typer.Option(None, "--cpf"),
    birth_date: Optional[str] = typer.Option(None, "--birth-date"),
    phone: Optional[str] = typer.Option(None, "--phone"),
) -> None:
    """Valida CPF, data de nascimento e/ou telefone sem consultar provedores."""

    rows: list[tuple[str, str, bool]] = []
    if cpf is not None:
        rows.append(("CPF", cpf, is_valid_cpf(clean_cpf(cpf))))
    if birth_date is not None:
        rows.append(("Nascimento", birth_date, is_valid_birth_date(birth_date)))
    if phone is not None:
        rows.append(("Telefone", phone, is_valid_phone(phone)))

    if not rows:
        raise typer.BadParameter("informe ao menos --cpf, --birth-date ou --phone")

    _console.print(build_validation_table(rows))
    if not all(ok for _, _, ok in rows):
        raise typer.Exit(code=EXIT_INPUT_ERROR)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
