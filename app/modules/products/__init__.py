# app/modules/products/__init__.py
"""
Módulo de Productos - Registro de Productos en Recepciones

- Alta de producto en la recepción abierta (orden de inserción explícito)
- Baja del último producto agregado

Arquitectura:
- router.py: Endpoints de productos
- service.py: Reglas de negocio y traducción de errores
- repository.py: Transacciones con bloqueo de la recepción
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import ProductService
from .repository import ProductRepository

__all__ = [
    "router",
    "ProductService",
    "ProductRepository"
]
