"""Handler de consulta de CPF (agnóstico de transporte).

Flujo:
1. Presencia de campos (cpf, birthDate, phone) -> 400.
2. Formato: checksum de CPF, fecha, teléfono -> 400.
3. Cadena de fallback (nunca falla por proveedores).
4. Envelope de éxito, o 500 si algo escapó del aislamiento de fallas.

Cada respuesta lleva `processingTime` (ms) y `requestId` (= correlation id).
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Mapping
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import InputValidationError
from core.domain.models import LookupRequest, LookupResponse
from core.interfaces.provider import IdentityProvider
from core.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from core.services.identity_resolver import ResolverHooks, resolve_identity
from core.validators import (
    clean_cpf,
    is_valid_birth_date,
    is_valid_cpf,
    is_valid_phone,
    mask_cpf,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"


def validate_request(request: LookupRequest) -> tuple[str, str, str]:
    """Devuelve `(cpf_limpio, fecha, telefono)` o lanza `InputValidationError`.

    La presencia se chequea antes que el formato, en orden cpf/fecha/teléfono.
    """

    if not request.cpf:
        raise InputValidationError("CPF é obrigatório")
    if not request.birth_date:
        raise InputValidationError("Data de nascimento é obrigatória")
    if not request.phone:
        raise InputValidationError("Telefone é obrigatório")

    cpf = clean_cpf(request.cpf)
    if not is_valid_cpf(cpf):
        raise InputValidationError("CPF inválido")
    if not is_valid_birth_date(request.birth_date):
        raise InputValidationError("Data de nascimento inválida")
    if not is_valid_phone(request.phone):
        raise InputValidationError("Telefone inválido")

    return cpf, request.birth_date, request.phone


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _error(status_code: int, message: str, started: float) -> LookupResponse:
    return LookupResponse(
        status_code=status_code,
        body={
            "success": False,
            "error": message,
            "processingTime": _elapsed_ms(started),
            "requestId": get_correlation_id(),
        },
    )


async def consult_cpf(
    payload: Mapping[str, Any],
    *,
    settings: AppSettings | None = None,
    providers: Sequence[IdentityProvider] | None = None,
    client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
    hooks: ResolverHooks | None = None,
    request_id: str | None = None,
) -> LookupResponse:
    settings = settings or AppSettings()
    started = time.perf_counter()
    token = set_correlation_id(request_id)
    try:
        logger.info("cpf_lookup_started")
        try:
            if not isinstance(payload, Mapping):
                raise TypeError(f"payload no es un objeto: {type(payload).__name__}")
            request = LookupRequest.model_validate(dict(payload))
            cpf, birth_date, _phone = validate_request(request)
        except (ValidationError, TypeError):
            logger.warning("cpf_lookup_rejected", extra={"error": "payload_invalido"})
            return _error(400, "Payload inválido", started)
        except InputValidationError as exc:
            logger.warning("cpf_lookup_rejected", extra={"error": exc.message})
            return _error(400, exc.message, started)

        logger.info("cpf_lookup_validated", extra={"cpf": mask_cpf(cpf)})

        try:
            result = await resolve_identity(
                cpf=cpf,
                birth_date=birth_date,
                settings=settings,
                providers=providers,
                client=client,
                rng=rng,
                hooks=hooks,
            )
        except Exception:
            logger.exception("cpf_lookup_internal_error", extra={"processing_ms": _elapsed_ms(started)})
            return _error(500, INTERNAL_ERROR_MESSAGE, started)

        processing_ms = _elapsed_ms(started)
        body: dict[str, Any] = {
            "success": True,
            "data": result.record.to_payload(),
        }
        if result.warning:
            body["warning"] = result.warning
        body.update(
            {
                "source": result.source,
                "processingTime": processing_ms,
                "requestId": get_correlation_id(),
            }
        )
        logger.info(
            "cpf_lookup_completed",
            extra={"source": result.source, "processing_ms": processing_ms},
        )
        return LookupResponse(status_code=200, body=body)
    finally:
        reset_correlation_id(token)
