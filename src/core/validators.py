"""Validadores puros de entrada (CPF, fecha de nacimiento, teléfono).

Sin I/O: la única dependencia externa es el reloj en `is_valid_birth_date`,
y se puede inyectar `today` para tests.
"""

from __future__ import annotations

import re
from datetime import date

_NON_DIGITS_RE = re.compile(r"\D", re.ASCII)
_BIRTH_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$", re.ASCII)

MIN_BIRTH_YEAR = 1900


def digits_only(value: str) -> str:
    """'529.982.247-25' -> '52998224725'."""

    return _NON_DIGITS_RE.sub("", value)


def clean_cpf(cpf: str) -> str:
    return digits_only(cpf)


def _check_digit(digits: str, first_weight: int) -> int:
    total = sum(int(d) * (first_weight - i) for i, d in enumerate(digits))
    remainder = 11 - (total % 11)
    return 0 if remainder >= 10 else remainder


def is_valid_cpf(cpf: str) -> bool:
    """Valida un CPF (solo dígitos) con el algoritmo de dígitos verificadores.

    Reglas:
    - Exactamente 11 dígitos.
    - Los 11 dígitos iguales (000..., 111...) son inválidos aunque el
      checksum cierre.
    - Primer verificador: pesos 10..2 sobre los dígitos 0..8.
    - Segundo verificador: pesos 11..2 sobre los dígitos 0..9.
    """

    if len(cpf) != 11 or not (cpf.isascii() and cpf.isdigit()):
        return False
    if cpf == cpf[0] * 11:
        return False

    if _check_digit(cpf[:9], 10) != int(cpf[9]):
        return False
    return _check_digit(cpf[:10], 11) == int(cpf[10])


def is_valid_birth_date(value: str, *, today: date | None = None) -> bool:
    """Acepta solo `DD/MM/YYYY` con fecha existente, no futura y año >= 1900."""

    match = _BIRTH_DATE_RE.match(value)
    if not match:
        return False

    day, month, year = (int(part) for part in match.groups())
    try:
        parsed = date(year, month, day)
    except ValueError:
        # 31/04, 29/02 en año no bisiesto, mes 13...
        return False

    if parsed > (today or date.today()):
        return False
    return year >= MIN_BIRTH_YEAR


def is_valid_phone(phone: str) -> bool:
    return len(digits_only(phone)) in (10, 11)


def mask_cpf(cpf: str) -> str:
    """Máscara para logs: '52998224725' -> '529.***.***-25'."""

    digits = digits_only(cpf)
    if len(digits) != 11:
        return "***"
    return f"{digits[:3]}.***.***-{digits[9:]}"
