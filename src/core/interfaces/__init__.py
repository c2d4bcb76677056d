"""Contratos del Core.

Por qué:
- El controlador depende de `EntityFetcher`, no de httpx.
- El adaptador HTTP y los fakes de test cumplen el mismo Protocol.
"""
