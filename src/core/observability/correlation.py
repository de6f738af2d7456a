"""Correlation id por request (el `requestId` del envelope).

Usa ContextVar para ser async-safe: cada consulta corre en su propio
contexto y los logs de los proveedores heredan el id sin pasarlo a mano.
"""

from __future__ import annotations

import secrets
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Id corto alfanumérico (13 chars), cómodo para buscar en logs."""

    return secrets.token_hex(8)[:13]


def get_correlation_id() -> str:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define el id en el contexto actual; genera uno si no se pasa."""

    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)
