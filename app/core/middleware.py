# app/core/middleware.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from app.core.metrics import UNKNOWN_ROUTE, observe_request

logger = logging.getLogger(__name__)


def setup_middleware(app: FastAPI):
    """CORS, log y métricas de cada request con ruta, status y duración"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - start_time
        # Plantilla de la ruta (/pvz/{pvzId}/...) para no mezclar IDs en log ni métricas
        route = request.scope.get("route")
        route_path = getattr(route, "path", None)

        observe_request(request.method, route_path or UNKNOWN_ROUTE, response.status_code, elapsed)

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"{request.method} {route_path or request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {elapsed * 1000:.1f}ms"
        )

        return response
