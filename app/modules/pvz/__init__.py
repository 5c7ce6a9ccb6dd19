# app/modules/pvz/__init__.py
"""
Módulo de PVZ - Catálogo de Puntos de Recogida

- Alta de PVZ por moderadores (ciudades soportadas)
- Listado de PVZ con recepciones y productos, filtrado por fecha y paginado

Arquitectura:
- router.py: Endpoints de PVZ
- service.py: Validación y normalización de paginación
- repository.py: Acceso a datos y armado del listado
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import PickupPointService
from .repository import PickupPointRepository

__all__ = [
    "router",
    "PickupPointService",
    "PickupPointRepository"
]
