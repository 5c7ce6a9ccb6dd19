# app/modules/receptions/__init__.py
"""
Módulo de Recepciones - Sesiones de Ingreso de Mercancía

- Apertura de recepción (una sola in_progress por PVZ)
- Cierre de la recepción abierta

Arquitectura:
- router.py: Endpoints de recepciones
- service.py: Reglas de negocio y traducción de errores
- repository.py: Transacciones con bloqueo de filas
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ReceptionService
from .repository import ReceptionRepository

__all__ = [
    "router",
    "ReceptionService",
    "ReceptionRepository"
]
