"""Cadena de fallback de proveedores de identidad.

El resolver recorre una lista ordenada de proveedores, en secuencia, y se
detiene en el primer éxito. Cada intento:
- corre con el mismo deadline (`http_timeout_seconds`), vía `asyncio.wait_for`;
- devuelve un `ProviderResult` etiquetado (las fallas no son excepciones);
- se ejecuta como máximo una vez por consulta.

Si todos fallan, el último estado sintetiza un registro de demostración.
Los hooks permiten a la CLI mostrar progreso sin meter prints en el Core.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Sequence

import httpx

from adapters.http_client import build_async_client
from adapters.identity_sources import CPFHubProvider, MTEPortalProvider, ReceitaCPFProvider
from core.config import AppSettings
from core.domain.models import IdentityRecord, ProviderResult
from core.interfaces.provider import IdentityProvider
from core.observability.log_setup import log_fallback
from core.services.fallback_synthesis import FALLBACK_WARNING, synthesize_record

logger = logging.getLogger(__name__)


@dataclass
class ResolverHooks:
    """Callbacks opcionales para capas de UI (progreso)."""

    attempt: Callable[[str], None] | None = None
    failure: Callable[[str, str], None] | None = None


@dataclass
class ResolutionResult:
    """Salida de una resolución completa."""

    record: IdentityRecord
    attempts: list[ProviderResult] = field(default_factory=list)
    warning: str | None = None

    @property
    def source(self) -> str:
        return self.record.source

    @property
    def synthetic(self) -> bool:
        return self.warning is not None


def default_providers(
    settings: AppSettings,
    *,
    rng: random.Random | None = None,
) -> list[IdentityProvider]:
    """Orden fijo de prioridad: CPFHub -> Receita -> MTE."""

    return [
        CPFHubProvider(settings),
        ReceitaCPFProvider(settings),
        MTEPortalProvider(settings, rng=rng),
    ]


async def _attempt(
    provider: IdentityProvider,
    *,
    cpf: str,
    birth_date: str,
    client: httpx.AsyncClient,
    timeout: float,
) -> ProviderResult:
    try:
        return await asyncio.wait_for(
            provider.lookup(cpf, birth_date=birth_date, client=client),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.info("provider_failed", extra={"provider": provider.name, "reason": "deadline_exceeded"})
        return ProviderResult.failure(provider.name, "deadline_exceeded")


async def resolve_identity(
    *,
    cpf: str,
    birth_date: str,
    settings: AppSettings,
    providers: Sequence[IdentityProvider] | None = None,
    client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
    hooks: ResolverHooks | None = None,
) -> ResolutionResult:
    """Resuelve el registro para un CPF ya validado y limpio.

    Nunca falla por culpa de un proveedor: en el peor caso devuelve datos
    sintéticos con `warning`.
    """

    hooks = hooks or ResolverHooks()
    rng = rng or random.Random()
    chain = list(providers) if providers is not None else default_providers(settings, rng=rng)

    attempts: list[ProviderResult] = []
    owns_client = client is None
    http = client or build_async_client(settings)
    try:
        for provider in chain:
            if hooks.attempt:
                hooks.attempt(provider.name)
            logger.info("provider_attempt", extra={"provider": provider.name})

            result = await _attempt(
                provider,
                cpf=cpf,
                birth_date=birth_date,
                client=http,
                timeout=settings.http_timeout_seconds,
            )
            attempts.append(result)

            if result.ok and result.record is not None:
                logger.info("provider_succeeded", extra={"provider": provider.name})
                return ResolutionResult(record=result.record, attempts=attempts)

            if hooks.failure:
                hooks.failure(provider.name, result.reason or "unknown")
    finally:
        if owns_client:
            await http.aclose()

    log_fallback(logger, "identity_resolver", reason="all_providers_failed")
    record = synthesize_record(cpf, birth_date, rng=rng)
    return ResolutionResult(record=record, attempts=attempts, warning=FALLBACK_WARNING)
