"""
Vector database boundary layer.

- VectorStoreProvider: namespace-partitioned backend protocol
- InMemoryVectorProvider: numpy cosine search for dev and tests
- S3VectorsProvider: production backend over boto3 s3vectors
- get_vector_provider(): settings-driven factory

Dependencies: numpy, boto3
System role: Vector store adapter for RAG retrieval
"""

from cvportal.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord
from cvportal.boundary.vdb.provider import VectorStoreProvider
from cvportal.boundary.vdb.memory_provider import InMemoryVectorProvider
from cvportal.boundary.vdb.factory import get_vector_provider

__all__ = [
    "IndexStats",
    "InMemoryVectorProvider",
    "VectorMatch",
    "VectorRecord",
    "VectorStoreProvider",
    "get_vector_provider",
]
