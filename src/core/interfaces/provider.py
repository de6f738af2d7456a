"""Contrato de proveedores de identidad.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- El resolver puede recibir proveedores falsos en tests sin tocar HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from core.domain.models import ProviderResult


@runtime_checkable
class IdentityProvider(Protocol):
    """Contrato mínimo de una fuente de la cadena de fallback.

    Reglas de diseño:
    - `lookup` es asíncrono porque hace I/O (HTTP) con el cliente compartido.
    - Nunca lanza por fallas esperables: devuelve `ProviderResult.failure`.
    - `birth_date` es la fecha informada por el usuario, usada como respaldo.
    """

    name: str

    async def lookup(
        self,
        cpf: str,
        *,
        birth_date: str,
        client: httpx.AsyncClient,
    ) -> ProviderResult:
        ...
