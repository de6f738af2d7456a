"""Proveedor primario: CPFHub.io.

- `GET {base}/cpf/<cpf>` con header `x-api-key`.
- Respuesta: `{"success": bool, "data": {name, birthDate, gender, day, month, year}}`.
- No entrega nombre de la madre.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.identity_sources._guard import as_optional_int, guarded_lookup
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import IdentityRecord, ProviderResult
from core.formatters import format_birth_date, format_name
from core.interfaces.provider import IdentityProvider


class CPFHubProvider(IdentityProvider):
    name = "CPFHub.io API"

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    async def lookup(
        self,
        cpf: str,
        *,
        birth_date: str,
        client: httpx.AsyncClient,
    ) -> ProviderResult:
        async def fetch() -> IdentityRecord:
            return await self._fetch(cpf, birth_date=birth_date, client=client)

        return await guarded_lookup(self.name, fetch)

    async def _fetch(self, cpf: str, *, birth_date: str, client: httpx.AsyncClient) -> IdentityRecord:
        api_key = self._settings.cpfhub_api_key
        if not api_key:
            raise ProviderError("not_configured")

        url = f"{self._settings.cpfhub_base_url.rstrip('/')}/cpf/{cpf}"
        response = await client.get(
            url,
            headers={"x-api-key": api_key, "Accept": "application/json"},
        )
        if not response.is_success:
            raise ProviderError(f"http_{response.status_code}")

        payload = response.json()
        if not isinstance(payload, dict) or not payload.get("success") or not payload.get("data"):
            raise ProviderError("no_data")

        data: Any = payload["data"]
        if not isinstance(data, dict):
            raise ProviderError("malformed_payload")

        name = format_name(str(data.get("name") or "")).strip()
        if not name:
            raise ProviderError("missing_name")

        return IdentityRecord(
            cpf=cpf,
            name=name,
            birth_date=format_birth_date(str(data.get("birthDate") or "")) or birth_date,
            mother_name="",
            source=self.name,
            gender=str(data.get("gender") or "N"),
            day=as_optional_int(data.get("day")),
            month=as_optional_int(data.get("month")),
            year=as_optional_int(data.get("year")),
        )
