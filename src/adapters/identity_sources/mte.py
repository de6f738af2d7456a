"""Proveedor legado: portal MTE (respuesta no JSON).

Implementación:
- `POST` form-encoded (`acao`, `cpf`, `nocache`) con cookie de sesión fija.
- El cuerpo es texto semi-estructurado con tokens `KEY='valor'`; se
  normalizan comillas dobles a simples antes de extraer.

Notas:
- URL, cookie y host vienen de configuración. Sin URL el proveedor se salta.
- La cookie de sesión expira: no asumir que este proveedor sigue disponible.
"""

from __future__ import annotations

import random
import re

import httpx

from adapters.identity_sources._guard import guarded_lookup
from core.config import AppSettings
from core.domain.errors import ProviderError
from core.domain.models import IdentityRecord, ProviderResult
from core.formatters import format_name
from core.interfaces.provider import IdentityProvider

CONTENT_TYPE = (
    "text/xml, application/x-www-form-urlencoded;charset=ISO-8859-1, "
    "text/xml; charset=ISO-8859-1"
)

_NAME_RE = re.compile(r"NOPESSOAFISICA='(.*?)'")
_BIRTH_DATE_RE = re.compile(r"DTNASCIMENTO='(.*?)'")
_MOTHER_RE = re.compile(r"NOMAE='(.*?)'")


def extract_field(text: str, pattern: re.Pattern[str]) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def parse_portal_text(raw: str) -> tuple[str, str, str]:
    """Devuelve `(nombre, nacimiento, nombre_madre)`; vacíos si no aparecen."""

    text = raw.replace('"', "'")
    return (
        extract_field(text, _NAME_RE),
        extract_field(text, _BIRTH_DATE_RE),
        extract_field(text, _MOTHER_RE),
    )


class MTEPortalProvider(IdentityProvider):
    name = "MTE API"

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._rng = rng or random.Random()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": CONTENT_TYPE}
        if self._settings.mte_cookie:
            headers["Cookie"] = self._settings.mte_cookie
        if self._settings.mte_host:
            headers["Host"] = self._settings.mte_host
        return headers

    def build_body(self, cpf: str) -> str:
        # `nocache` evita respuestas cacheadas por el portal.
        return f"acao=consultar%20cpf&cpf={cpf}&nocache={self._rng.random()}"

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
        url = self._settings.mte_url
        if not url:
            raise ProviderError("not_configured")

        response = await client.post(url, headers=self._headers(), content=self.build_body(cpf))

        name, born, mother = parse_portal_text(response.text)
        if not name or not born:
            raise ProviderError("not_found")

        return IdentityRecord(
            cpf=cpf,
            name=format_name(name),
            birth_date=born or birth_date,
            mother_name=format_name(mother),
            source=self.name,
        )
