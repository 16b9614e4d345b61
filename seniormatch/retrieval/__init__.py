from .embeddings import EmbedMode, Embedder, OpenAIEmbedder
from .ingest import IndexReport, index_programs
from .vector_index import InMemoryVectorIndex, SearchHit, VectorIndex, VectorPoint

__all__ = [
    "EmbedMode",
    "Embedder",
    "OpenAIEmbedder",
    "IndexReport",
    "index_programs",
    "InMemoryVectorIndex",
    "SearchHit",
    "VectorIndex",
    "VectorPoint",
]
