"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) que implementan los proveedores de identidad.
- El resolver depende de la abstracción, no de CPFHub/Receita/MTE.
"""
