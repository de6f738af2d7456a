"""Fuentes de identidad (proveedores concretos de la cadena de fallback).

Por qué un paquete:
- Un módulo por fuente (CPFHub, Receita, MTE).
- Cada módulo implementa `core.interfaces.provider.IdentityProvider`.
"""

from adapters.identity_sources.cpfhub import CPFHubProvider
from adapters.identity_sources.mte import MTEPortalProvider
from adapters.identity_sources.receita import ReceitaCPFProvider

__all__ = [
	"CPFHubProvider",
	"MTEPortalProvider",
	"ReceitaCPFProvider",
]
