"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (proveedores HTTP) lean config de forma consistente.
- Credenciales, cookies y URLs de proveedores NO viven en el código: se
  inyectan por entorno o por el `.env` del usuario.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "cpf-resolver"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "cpf-resolver"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cpf-resolver"
    return Path.home() / ".config" / "cpf-resolver"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Valores `None` se ignoran (no borran lo que ya estaba guardado).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# cpf-resolver user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CPF_RESOLVER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout uniforme por intento de proveedor (segundos).",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        min_length=1,
        description="User-Agent tipo navegador para las consultas.",
    )

    cpfhub_base_url: str = Field(
        default="https://api.cpfhub.io",
        min_length=8,
        description="Base URL de la API CPFHub.io (proveedor primario).",
    )
    cpfhub_api_key: str | None = Field(
        default=None,
        description="API key de CPFHub.io (header x-api-key).",
    )

    receita_base_url: str = Field(
        default="https://api-receita-cpf.herokuapp.com",
        min_length=8,
        description="Base URL de la API Receita CPF (proveedor secundario).",
    )

    mte_url: str | None = Field(
        default=None,
        description="URL completa del portal MTE (proveedor legado). Sin URL no se consulta.",
    )
    mte_cookie: str | None = Field(
        default=None,
        description="Cookie de sesión para el portal MTE (expira; no es integración durable).",
    )
    mte_host: str | None = Field(
        default=None,
        description="Header Host a enviar al portal MTE (opcional).",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    service_name: str = Field(
        default="cpf_resolver",
        min_length=1,
        description="Nombre del servicio inyectado en cada log JSON.",
    )
