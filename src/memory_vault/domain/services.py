"""Domain service protocols."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable
from uuid import UUID

from memory_vault.domain.models.memory import Memory, MemoryIndex, MemoryStatus, Page, TextChunk


@runtime_checkable
class MemoryStore(Protocol):
    """Durable storage for the memory aggregate.

    Every read returns a detached copy. Writes that change status and index
    happen in one step so readers never see a BUILT memory without its index.
    """

    async def create(self, memory: Memory) -> Memory:
        """Persist a new memory; artifact file names must be unused."""
        ...

    async def get(self, memory_id: UUID) -> Memory | None:
        """Memory attributes only; chunks and index are not loaded."""
        ...

    async def get_with_chunks(self, memory_id: UUID) -> Memory | None:
        """Memory with its chunks ordered by position; index not loaded."""
        ...

    async def get_with_all(self, memory_id: UUID) -> Memory | None:
        """Memory with chunks and index."""
        ...

    async def list(self, page: int, size: int) -> Page[Memory]:
        """Memories ordered by creation time, newest first."""
        ...

    async def search(self, query: str) -> list[Memory]:
        """Memories whose title or description contains ``query``."""
        ...

    async def list_by_status(self, status: MemoryStatus) -> list[Memory]: ...

    async def exists(self, memory_id: UUID) -> bool: ...

    async def delete(self, memory_id: UUID) -> None:
        """Delete a memory together with its chunks and index."""
        ...

    async def count_chunks(self, memory_id: UUID) -> int: ...

    async def sum_word_count(self, memory_id: UUID) -> int: ...

    async def append_chunks(self, memory_id: UUID, chunks: Sequence[TextChunk]) -> None: ...

    async def update_status(self, memory_id: UUID, status: MemoryStatus, index: MemoryIndex | None = None) -> None:
        """Set status and replace the index in one write."""
        ...
