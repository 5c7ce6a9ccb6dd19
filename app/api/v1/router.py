# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.pvz.router import router as pvz_router
from app.modules.receptions.router import router as receptions_router
from app.modules.products.router import router as products_router


# Crear router principal de la API v1
api_router = APIRouter()

# Autenticación (sin token)
api_router.include_router(auth_router)

# Operaciones de PVZ (con token)
api_router.include_router(
    pvz_router,
    tags=["PVZ"]
)

api_router.include_router(
    receptions_router,
    tags=["Receptions"]
)

api_router.include_router(
    products_router,
    tags=["Products"]
)
