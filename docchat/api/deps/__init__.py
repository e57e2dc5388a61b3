"""FastAPI dependencies."""

from docchat.api.deps.dependencies import (
    ServiceCache,
    get_artifact_store,
    get_chat_service,
    get_diagram_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_artifact_store",
    "get_chat_service",
    "get_diagram_service",
    "get_service_cache",
]
