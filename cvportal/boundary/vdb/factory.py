"""
Vector provider factory for selecting between in-memory (dev) and S3 Vectors (prod).

Dependencies: cvportal.boundary.vdb, cvportal.configs
System role: Vector store backend selection
"""

import logging

from cvportal.boundary.vdb.memory_provider import InMemoryVectorProvider
from cvportal.boundary.vdb.provider import VectorStoreProvider
from cvportal.boundary.vdb.s3_vectors_provider import S3VectorsProvider
from cvportal.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_provider(settings: VectorStoreSettings) -> VectorStoreProvider:
    """
    Build the vector provider named by ``settings.store_type``.

    Raises:
        ValueError: If the store type is invalid
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_provider - In-memory vector store (local dev mode)")
        return InMemoryVectorProvider()

    if store_type == "s3":
        logger.info(f"{__name__}:get_vector_provider - S3 Vectors store (production mode)")
        return S3VectorsProvider(
            vectors_bucket=settings.vectors_bucket,
            index_name=settings.index_name,
            region=settings.aws_region,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 's3' (production)."
    )
