"""Formateadores puros de nombre y fecha."""

from __future__ import annotations


def format_name(name: str) -> str:
    """'joão da silva' -> 'João Da Silva'.

    Cada token separado por un espacio simple se trata por separado
    (conectores incluidos). Espacios dobles producen tokens vacíos que se
    preservan tal cual.
    """

    return " ".join(token[:1].upper() + token[1:].lower() for token in name.split(" "))


def format_birth_date(value: str) -> str:
    """'1990-05-20' -> '20/05/1990'; cualquier otra cosa pasa sin cambios."""

    if value and "-" in value:
        year, month, day = (value.split("-") + ["", ""])[:3]
        return f"{day}/{month}/{year}"
    return value
