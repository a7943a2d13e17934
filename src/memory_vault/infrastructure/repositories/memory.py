"""In-process implementation of the memory store."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from uuid import UUID

from memory_vault.core.base import ErrorLevel, MemoryErrorDetails, StoreErrorDetails
from memory_vault.core.decorators import with_error_handling
from memory_vault.core.errors import ConflictError, IntegrityError, NotFoundError
from memory_vault.core.logging import get_logger
from memory_vault.domain.models.memory import Memory, MemoryIndex, MemoryStatus, Page, TextChunk
from memory_vault.domain.models.utils import utc_now

logger = get_logger(__name__)


class InMemoryMemoryRepository:
    """Dictionary-backed store keeping memories, chunks and indexes apart.

    Chunks and the index are keyed by their owning memory id and attached to
    a copy of the memory on read.
    """

    def __init__(self) -> None:
        self._memories: dict[UUID, Memory] = {}
        self._chunks: dict[UUID, list[TextChunk]] = {}
        self._indexes: dict[UUID, MemoryIndex] = {}
        self._lock = asyncio.Lock()

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def create(self, memory: Memory) -> Memory:
        async with self._lock:
            if memory.id in self._memories:
                raise self._conflict("id", str(memory.id))
            for existing in self._memories.values():
                if existing.video_filename == memory.video_filename:
                    raise self._conflict("video_filename", memory.video_filename)
                if existing.index_filename == memory.index_filename:
                    raise self._conflict("index_filename", memory.index_filename)

            stored = memory.model_copy(update={"chunks": [], "index": None}, deep=True)
            self._memories[stored.id] = stored
            self._chunks[stored.id] = [chunk.model_copy(deep=True) for chunk in memory.chunks]
            logger.debug(f"Stored memory {stored.id}")
            return self._assemble(stored.id, with_chunks=True, with_index=False)

    async def get(self, memory_id: UUID) -> Memory | None:
        async with self._lock:
            if memory_id not in self._memories:
                return None
            return self._assemble(memory_id, with_chunks=False, with_index=False)

    async def get_with_chunks(self, memory_id: UUID) -> Memory | None:
        async with self._lock:
            if memory_id not in self._memories:
                return None
            return self._assemble(memory_id, with_chunks=True, with_index=False)

    async def get_with_all(self, memory_id: UUID) -> Memory | None:
        async with self._lock:
            if memory_id not in self._memories:
                return None
            return self._assemble(memory_id, with_chunks=True, with_index=True)

    async def list(self, page: int, size: int) -> Page[Memory]:
        async with self._lock:
            ordered = self._newest_first(self._memories)
            start = page * size
            items = [self._assemble(m.id, with_chunks=True, with_index=True) for m in ordered[start : start + size]]
            return Page[Memory](items=items, total=len(ordered), page=page, size=size)

    async def search(self, query: str) -> list[Memory]:
        needle = query.lower()
        async with self._lock:
            return [
                self._assemble(m.id, with_chunks=True, with_index=True)
                for m in self._newest_first(self._memories)
                if needle in m.title.lower() or (m.description is not None and needle in m.description.lower())
            ]

    async def list_by_status(self, status: MemoryStatus) -> list[Memory]:
        async with self._lock:
            return [
                self._assemble(m.id, with_chunks=True, with_index=True)
                for m in self._newest_first(self._memories)
                if m.status is status
            ]

    async def exists(self, memory_id: UUID) -> bool:
        async with self._lock:
            return memory_id in self._memories

    async def delete(self, memory_id: UUID) -> None:
        async with self._lock:
            self._memories.pop(memory_id, None)
            self._chunks.pop(memory_id, None)
            self._indexes.pop(memory_id, None)
            logger.debug(f"Deleted memory {memory_id}")

    async def count_chunks(self, memory_id: UUID) -> int:
        async with self._lock:
            return len(self._chunks.get(memory_id, []))

    async def sum_word_count(self, memory_id: UUID) -> int:
        async with self._lock:
            return sum(chunk.word_count for chunk in self._chunks.get(memory_id, []))

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def append_chunks(self, memory_id: UUID, chunks: Sequence[TextChunk]) -> None:
        async with self._lock:
            self._require(memory_id, "append_chunks")
            existing = self._chunks[memory_id]
            for offset, chunk in enumerate(chunks):
                if chunk.memory_id != memory_id or chunk.chunk_index != len(existing) + offset:
                    raise IntegrityError(
                        message=f"Chunk position {chunk.chunk_index} does not follow the stored sequence",
                        details=self._store_details("append_chunks", "chunks", str(chunk.chunk_index)),
                    )
            existing.extend(chunk.model_copy(deep=True) for chunk in chunks)
            self._touch(memory_id)

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def update_status(self, memory_id: UUID, status: MemoryStatus, index: MemoryIndex | None = None) -> None:
        if (status is MemoryStatus.BUILT) != (index is not None):
            raise IntegrityError(
                message=f"Status {status.value} {'requires' if index is None else 'cannot carry'} an index",
                details=self._store_details("update_status", "indexes", str(memory_id)),
            )
        async with self._lock:
            self._require(memory_id, "update_status")
            if index is None:
                self._indexes.pop(memory_id, None)
            else:
                self._indexes[memory_id] = index.model_copy(deep=True)
            self._memories[memory_id].status = status
            self._touch(memory_id)

    def _assemble(self, memory_id: UUID, *, with_chunks: bool, with_index: bool) -> Memory:
        memory = self._memories[memory_id]
        update: dict = {}
        if with_chunks:
            update["chunks"] = sorted(self._chunks[memory_id], key=lambda c: c.chunk_index)
        if with_index:
            update["index"] = self._indexes.get(memory_id)
        return memory.model_copy(update=update, deep=True)

    def _require(self, memory_id: UUID, operation: str) -> None:
        if memory_id not in self._memories:
            raise NotFoundError(
                f"Memory not found with id: {memory_id}",
                details=MemoryErrorDetails(source="memory_repository", operation=operation, memory_id=memory_id),
            )

    def _touch(self, memory_id: UUID) -> None:
        self._memories[memory_id].updated_at = utc_now()

    @staticmethod
    def _newest_first(memories: dict[UUID, Memory]) -> list[Memory]:
        # Equal timestamps keep the most recently inserted first
        return sorted(reversed(list(memories.values())), key=lambda m: m.created_at, reverse=True)

    @staticmethod
    def _store_details(operation: str, collection: str, key: str) -> StoreErrorDetails:
        return StoreErrorDetails(source="memory_repository", operation=operation, collection=collection, key=key)

    def _conflict(self, field: str, value: str) -> ConflictError:
        return ConflictError(
            message=f"A memory with {field} '{value}' already exists",
            details=self._store_details("create", "memories", value),
        )
