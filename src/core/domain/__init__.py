"""Modelos y estado del dominio.

Por qué:
- Aquí viven la entidad, el rango de ids, la sesión y la taxonomía de errores.
- El dominio no conoce httpx, Typer ni Rich: solo conceptos del problema.
"""
