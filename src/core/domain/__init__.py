"""Dominio de resolución de CPF.

- `models`: registro canónico, resultado etiquetado de proveedor y envelopes.
- `errors`: errores de entrada (al cliente) y de proveedor (internos a la cadena).

El dominio no conoce HTTP ni CLI.
"""
