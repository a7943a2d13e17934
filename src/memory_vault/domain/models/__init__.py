"""Domain models for Memory Vault."""

from .memory import ChunkType, Memory, MemoryIndex, MemoryStatus, Page, StatusSummary, TextChunk

__all__ = [
    "ChunkType",
    "Memory",
    "MemoryIndex",
    "MemoryStatus",
    "Page",
    "StatusSummary",
    "TextChunk",
]
