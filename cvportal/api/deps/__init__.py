"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_analytics_service,
    get_chat_service,
    get_ingestion_service,
    get_service_cache,
    get_vector_store,
)

__all__ = [
    "ServiceCache",
    "get_analytics_service",
    "get_chat_service",
    "get_ingestion_service",
    "get_service_cache",
    "get_vector_store",
]
