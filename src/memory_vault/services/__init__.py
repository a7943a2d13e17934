"""Service layer: ingestion, index building, retrieval and their orchestration."""

from .index_builder import IndexBuilder
from .locks import KeyedLock
from .memory_service import MemoryService
from .retrieval import RetrievalEngine

__all__ = ["IndexBuilder", "KeyedLock", "MemoryService", "RetrievalEngine"]
