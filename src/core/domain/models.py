"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita la normalización de respuestas heterogéneas de múltiples
  proveedores a un único registro canónico.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# Regla de negocio aguas abajo: siempre los mismos valores, venga de donde venga el dato.
SITUACAO = "irregular"
STATUS = "SUSPENSO"
DECLARATION = "NÃO ENTREGUE"


class IdentityRecord(BaseModel):
    """Registro canónico de identidad para un CPF.

    Por qué existe:
    - Unifica el resultado de los proveedores (CPFHub, Receita, MTE) y de la
      síntesis de respaldo en una estructura común.
    - Los campos `situacao`/`status`/`declaration` son constantes de dominio,
      no reflejan lo que diga el proveedor.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cpf: str = Field(
        ...,
        min_length=11,
        max_length=11,
        pattern=r"^[0-9]{11}$",
        description="CPF limpio (11 dígitos).",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre completo normalizado (title case).",
    )
    birth_date: str = Field(
        default="",
        alias="birthDate",
        description="Fecha de nacimiento en DD/MM/YYYY.",
    )
    mother_name: str = Field(
        default="",
        alias="motherName",
        description="Nombre de la madre (vacío si el proveedor no lo entrega).",
    )
    situacao: Literal["irregular"] = Field(default=SITUACAO)
    status: Literal["SUSPENSO"] = Field(default=STATUS)
    declaration: Literal["NÃO ENTREGUE"] = Field(default=DECLARATION)
    source: str = Field(
        ...,
        min_length=1,
        description="Proveedor que originó el dato.",
    )
    gender: str | None = Field(default=None)
    day: int | None = Field(default=None)
    month: int | None = Field(default=None)
    year: int | None = Field(default=None)

    def to_payload(self) -> dict[str, Any]:
        """Serializa con alias camelCase y sin los campos opcionales ausentes."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class ProviderResult:
    """Resultado etiquetado de un intento contra un proveedor.

    - Éxito: `record` presente, `reason` None.
    - Falla: `record` None, `reason` con un código corto (sin PII).
    """

    provider: str
    record: IdentityRecord | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    @classmethod
    def success(cls, provider: str, record: IdentityRecord) -> "ProviderResult":
        return cls(provider=provider, record=record)

    @classmethod
    def failure(cls, provider: str, reason: str) -> "ProviderResult":
        return cls(provider=provider, reason=reason)


class LookupRequest(BaseModel):
    """Entrada cruda del handler (tal como llega del cliente)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cpf: str | None = None
    birth_date: str | None = Field(default=None, alias="birthDate")
    phone: str | None = None


class LookupResponse(BaseModel):
    """Envelope final + clasificación tipo HTTP (200/400/500)."""

    status_code: int = Field(..., ge=100, le=599)
    body: dict[str, Any] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))
