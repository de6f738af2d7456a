"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `resolve`, `validate` y `doctor`.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

_RECORD_LABELS: tuple[tuple[str, str], ...] = (
    ("cpf", "CPF"),
    ("name", "Nome"),
    ("birthDate", "Nascimento"),
    ("motherName", "Nome da mãe"),
    ("situacao", "Situação"),
    ("status", "Status"),
    ("declaration", "Declaração"),
    ("gender", "Gênero"),
)


def print_banner(console: Console) -> None:
    """Banner de bienvenida (se omite en modo `--json`)."""

    title = Text("CPF-RESOLVER", style="bold cyan")
    subtitle = Text("Validação • Cadeia de provedores • Fallback", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_record_table(body: dict[str, Any]) -> Table:
    data = body.get("data") or {}
    table = Table(title=f"Fonte: {body.get('source', '-')}")
    table.add_column("Campo", style="cyan", no_wrap=True)
    table.add_column("Valor", style="white")
    for key, label in _RECORD_LABELS:
        value = data.get(key)
        if value is None:
            continue
        table.add_row(label, str(value) or "-")
    table.caption = f"requestId={body.get('requestId')} • {body.get('processingTime')} ms"
    return table


def build_warning_panel(message: str) -> Panel:
    return Panel(Text(message, style="yellow"), title="Aviso", border_style="yellow")


def build_validation_table(rows: list[tuple[str, str, bool]]) -> Table:
    """Filas `(campo, valor, válido)`."""

    table = Table(title="Validação")
    table.add_column("Campo", style="cyan", no_wrap=True)
    table.add_column("Valor", style="white")
    table.add_column("Resultado")
    for field_name, value, ok in rows:
        table.add_row(field_name, value, "[green]OK[/green]" if ok else "[red]INVÁLIDO[/red]")
    return table
