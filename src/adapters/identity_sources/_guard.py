"""Aislamiento de fallas por proveedor.

Convierte las fallas esperables (red, URL inválida, status, JSON inválido,
campos ausentes) en `ProviderResult.failure`. Cualquier otra excepción es un bug y
se propaga hasta el handler (500).
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

import httpx

from core.domain.errors import ProviderError
from core.domain.models import IdentityRecord, ProviderResult

logger = logging.getLogger(__name__)


async def guarded_lookup(
    provider: str,
    fetch: Callable[[], Awaitable[IdentityRecord]],
) -> ProviderResult:
    try:
        record = await fetch()
    except ProviderError as exc:
        reason = exc.reason
    except httpx.TimeoutException:
        reason = "timeout"
    except httpx.HTTPError as exc:
        reason = f"network_error:{exc.__class__.__name__}"
    except httpx.InvalidURL:
        # URL base mal configurada; no es subclase de HTTPError.
        reason = "invalid_url"
    except httpx.StreamError as exc:
        reason = f"stream_error:{exc.__class__.__name__}"
    except ValueError:
        # JSON inválido o payload que no valida contra IdentityRecord.
        reason = "malformed_payload"
    else:
        return ProviderResult.success(provider, record)

    logger.info("provider_failed", extra={"provider": provider, "reason": reason})
    return ProviderResult.failure(provider, reason)


def as_optional_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
