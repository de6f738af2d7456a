"""Síntesis de datos de demostración (último estado de la cadena).

Se usa solo cuando los tres proveedores fallaron. Siempre produce un
registro válido, marcado con `source="Fallback Data"` y un aviso explícito.
"""

from __future__ import annotations

import random

from core.domain.models import IdentityRecord

FALLBACK_SOURCE = "Fallback Data"
FALLBACK_WARNING = "Dados de demonstração - serviço oficial temporariamente indisponível"
MOTHER_NAME_PREFIX = "Maria"

COMMON_NAMES: tuple[str, ...] = (
    "João Silva Santos",
    "Maria Oliveira Costa",
    "Pedro Fernandes Lima",
    "Ana Paula Rodrigues",
    "Carlos Eduardo Souza",
    "Juliana Santos Pereira",
    "Rafael Almeida Barbosa",
    "Camila Ferreira Dias",
    "Lucas Martins Rocha",
    "Beatriz Carvalho Nunes",
    "Gabriel Costa Ribeiro",
    "Larissa Gomes Araújo",
    "Matheus Pereira Silva",
    "Isabela Lima Cardoso",
    "Felipe Santos Moreira",
    "Mariana Alves Correia",
)


def derive_mother_name(name: str) -> str:
    """'João Silva Santos' -> 'Maria Silva João'."""

    tokens = name.split(" ")
    second = tokens[1] if len(tokens) > 1 else ""
    return f"{MOTHER_NAME_PREFIX} {second} {tokens[0]}"


def synthesize_record(
    cpf: str,
    birth_date: str,
    *,
    rng: random.Random | None = None,
    names: tuple[str, ...] = COMMON_NAMES,
) -> IdentityRecord:
    chosen = (rng or random.Random()).choice(names)
    return IdentityRecord(
        cpf=cpf,
        name=chosen,
        birth_date=birth_date,
        mother_name=derive_mother_name(chosen),
        source=FALLBACK_SOURCE,
    )
