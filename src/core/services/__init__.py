"""Servicios del Core.

Lógica de orquestación que depende solo de dominio e interfaces.
"""
