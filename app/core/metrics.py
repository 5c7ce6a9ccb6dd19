# app/core/metrics.py
"""
Métricas Prometheus del servicio

Técnicas (las registra el middleware HTTP):
- http_request_total{method, path, status}
- http_request_duration_seconds{method, path}

De negocio (las incrementan los servicios tras cada alta exitosa):
- pvz_created_total
- receptions_created_total
- products_added_total
"""
from fastapi import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

# Ruta usada cuando el request no coincide con ninguna ruta registrada
UNKNOWN_ROUTE = "unknown"

HTTP_REQUESTS = Counter(
    "http_request_total",
    "Total number of HTTP requests",
    ["method", "path", "status"]
)

HTTP_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"]
)

PVZ_CREATED = Counter("pvz_created_total", "Total number of created PVZs")

RECEPTIONS_CREATED = Counter("receptions_created_total", "Total number of created order receptions")

PRODUCTS_ADDED = Counter("products_added_total", "Total number of added products")


def observe_request(method: str, path: str, status_code: int, duration_seconds: float):
    """Registrar un request terminado"""
    HTTP_REQUESTS.labels(method=method, path=path, status=str(status_code)).inc()
    HTTP_DURATION.labels(method=method, path=path).observe(duration_seconds)


def metrics_response() -> Response:
    """Exposición en formato texto de Prometheus"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
