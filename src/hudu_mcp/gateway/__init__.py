"""Gateway — typed async client over the Hudu REST API."""

from hudu_mcp.gateway.client import HuduClient
from hudu_mcp.gateway.endpoints import ENDPOINTS, Endpoint, endpoint
from hudu_mcp.gateway.errors import (
    ApiError,
    GatewayError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
    UnsupportedOperationError,
)

__all__ = [
    "ENDPOINTS",
    "ApiError",
    "Endpoint",
    "GatewayError",
    "HuduClient",
    "NetworkError",
    "NotFoundError",
    "UnauthorizedError",
    "UnsupportedOperationError",
    "endpoint",
]
