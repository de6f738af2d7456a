"""Errores del dominio.

Dos familias con destinos distintos:
- `InputValidationError`: llega al cliente (400), nunca entra al resolver.
- `ProviderError`: se queda dentro del adaptador y solo avanza la cadena.
"""


class InputValidationError(Exception):
    """Entrada ausente o con formato inválido."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProviderError(Exception):
    """Falla recuperable de un proveedor (red, status, payload, not found)."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
