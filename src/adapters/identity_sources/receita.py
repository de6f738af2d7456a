"""Proveedor secundario: API Receita CPF (datos scrapeados).

- `GET {base}/cpf/<cpf>/?format=json` con headers tipo navegador.
- Respuesta: lista de registros con claves `NOME`, `DATA_NASCIMENTO`
  (`YYYY-MM-DD`) y `NOME_MAE`. Se usa el primero.
"""

from __future__ import annotations

import httpx

from adapters.identity_sources._guard import guarded_lookup
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import IdentityRecord, ProviderResult
from core.formatters import format_birth_date, format_name
from core.interfaces.provider import IdentityProvider


class ReceitaCPFProvider(IdentityProvider):
    name = "GitHub API"

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
        url = f"{self._settings.receita_base_url.rstrip('/')}/cpf/{cpf}/"
        response = await client.get(
            url,
            params={"format": "json"},
            headers={
                "Accept": "application/json",
                "User-Agent": self._settings.user_agent,
            },
        )
        if not response.is_success:
            raise ProviderError(f"http_{response.status_code}")

        data = response.json()
        if not isinstance(data, list) or not data:
            raise ProviderError("not_found")

        person = data[0]
        if not isinstance(person, dict):
            raise ProviderError("malformed_payload")

        name = format_name(str(person.get("NOME") or "")).strip()
        if not name:
            raise ProviderError("missing_name")

        return IdentityRecord(
            cpf=cpf,
            name=name,
            birth_date=format_birth_date(str(person.get("DATA_NASCIMENTO") or "")) or birth_date,
            mother_name=format_name(str(person.get("NOME_MAE") or "")),
            source=self.name,
        )
