"""Memory service: chunk ingestion, index builds and chat over the memory store.

Ingestion, builds and deletes on one memory are serialized through a
per-memory lock. Reads never take that lock; they see whatever the store
last committed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING
from uuid import UUID

from memory_vault.core.base import ErrorLevel, StateErrorDetails, ValidationErrorDetails
from memory_vault.core.config import Settings, settings
from memory_vault.core.decorators import with_error_handling
from memory_vault.core.errors import InvalidArgumentError, InvalidStateError, NotFoundError
from memory_vault.core.logging import bind_memory, get_logger
from memory_vault.domain.models.memory import (
    ChunkType,
    Memory,
    MemoryStatus,
    Page,
    StatusSummary,
    TextChunk,
)
from memory_vault.domain.models.utils import epoch_millis
from memory_vault.domain.state_machine import ensure_transition, is_chat_ready
from memory_vault.domain.text import artifact_stem, count_words, summarize
from memory_vault.services.index_builder import IndexBuilder
from memory_vault.services.locks import KeyedLock
from memory_vault.services.retrieval import RetrievalEngine

if TYPE_CHECKING:
    from memory_vault.domain.services import MemoryStore

logger = get_logger(__name__)

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000



def _invalid(message: str, operation: str, field: str, value: object, constraint: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        message,
        details=ValidationErrorDetails(
            source="memory_service",
            operation=operation,
            field=field,
            actual_value=value,
            constraint=constraint,
        ),
    )


class MemoryService:
    """Operations exposed to transport layers."""

    def __init__(
        self,
        store: MemoryStore,
        builder: IndexBuilder | None = None,
        retriever: RetrievalEngine | None = None,
        config: Settings = settings,
        clock: Callable[[], int] = epoch_millis,
    ):
        self.store = store
        self.config = config
        self.builder = builder or IndexBuilder(config)
        self.retriever = retriever or RetrievalEngine(config)
        self._clock = clock
        self._last_stamp = 0
        self._locks = KeyedLock()

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def create_memory(self, title: str, description: str | None = None) -> Memory:
        """Create an empty memory in status CREATED."""
        if not title or not title.strip():
            raise _invalid("Title cannot be blank", "create_memory", "title", title, "not blank")
        if len(title) > TITLE_MAX_LENGTH:
            raise _invalid(
                f"Title cannot exceed {TITLE_MAX_LENGTH} characters",
                "create_memory",
                "title",
                len(title),
                f"<= {TITLE_MAX_LENGTH} characters",
            )
        if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
            raise _invalid(
                f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
                "create_memory",
                "description",
                len(description),
                f"<= {DESCRIPTION_MAX_LENGTH} characters",
            )

        video_filename, index_filename = self.artifact_names(title)
        memory = await self.store.create(
            Memory(
                title=title,
                description=description,
                video_filename=video_filename,
                index_filename=index_filename,
                status=MemoryStatus.CREATED,
            )
        )
        bind_memory(memory.id)
        logger.info(f"Created memory: {title}")
        return memory

    def artifact_names(self, title: str) -> tuple[str, str]:
        """Video and index file names for ``title``, stamped with a strictly increasing millisecond value."""
        stamp = max(self._clock(), self._last_stamp + 1)
        self._last_stamp = stamp
        stem = artifact_stem(title)
        return (
            f"{stem}_{stamp}{self.config.video_extension}",
            f"{stem}_index_{stamp}{self.config.index_extension}",
        )

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def append_chunks(self, memory_id: UUID, texts: Sequence[str]) -> Memory:
        """Append ``texts`` as TEXT chunks after the memory's existing chunks.

        Status is left untouched.
        """
        bind_memory(memory_id)
        async with self._locks.hold(memory_id):
            if not await self.store.exists(memory_id):
                raise NotFoundError.memory(memory_id, "append_chunks")
            if isinstance(texts, str) or not texts:
                raise _invalid("Chunks cannot be empty", "append_chunks", "texts", texts, "non-empty list")
            for position, text in enumerate(texts):
                if not isinstance(text, str) or not text.strip():
                    raise _invalid(
                        "Chunk content cannot be blank",
                        "append_chunks",
                        f"texts[{position}]",
                        text,
                        "not blank",
                    )

            existing = await self.store.count_chunks(memory_id)
            chunks = [
                TextChunk(
                    memory_id=memory_id,
                    chunk_index=existing + offset,
                    content=content,
                    word_count=count_words(content),
                    summary=summarize(content, self.config.chunk_summary_length),
                    chunk_type=ChunkType.TEXT,
                )
                for offset, content in enumerate(texts)
            ]
            await self.store.append_chunks(memory_id, chunks)
            memory = await self.store.get_with_chunks(memory_id)

        logger.info(f"Added {len(chunks)} text chunks to memory: {memory.title}")
        return memory

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def build_index(self, memory_id: UUID) -> Memory:
        """Compile every chunk into a fresh index and move the memory to BUILT.

        PROCESSING is committed before computing. If computing or saving the
        index fails, or the build is cancelled, the memory is moved to ERROR
        and the original exception propagates. A memory found in PROCESSING
        here was left behind by a build that died, since builds hold the
        memory's lock; it is moved to ERROR and rebuilt.
        """
        bind_memory(memory_id)
        async with self._locks.hold(memory_id):
            memory = await self.store.get_with_chunks(memory_id)
            if memory is None:
                raise NotFoundError.memory(memory_id, "build_index")
            if not memory.chunks:
                raise InvalidStateError(
                    "Cannot build index: no text chunks found",
                    details=StateErrorDetails(
                        source="memory_service",
                        operation="build_index",
                        memory_id=memory_id,
                        action="build_index",
                        current_status=memory.status.value,
                    ),
                )
            status = memory.status
            if status is MemoryStatus.PROCESSING:
                logger.warning(f"Recovering interrupted build for: {memory.title}")
                await self.store.update_status(memory_id, MemoryStatus.ERROR, index=None)
                status = MemoryStatus.ERROR
            ensure_transition(status, MemoryStatus.PROCESSING, memory_id)
            # The previous index is discarded as soon as the rebuild starts
            await self.store.update_status(memory_id, MemoryStatus.PROCESSING, index=None)
            logger.info(f"Building index for: {memory.title}", chunks=len(memory.chunks))

            try:
                index = self.builder.build(memory_id, memory.chunks)
                await self.store.update_status(memory_id, MemoryStatus.BUILT, index=index)
            except BaseException as e:
                await self._record_failure(memory_id, memory.title, e)
                raise

            built = await self.store.get_with_all(memory_id)

        logger.info(
            f"Built index for: {memory.title}",
            total_chunks=index.total_chunks,
            total_words=index.total_words,
        )
        return built

    async def _record_failure(self, memory_id: UUID, title: str, cause: BaseException) -> None:
        """Move a failed build to ERROR without masking ``cause``."""
        logger.error(f"Failed to build index for: {title}", error=cause)
        try:
            # Shielded so a second cancellation cannot leave the memory in PROCESSING
            await asyncio.shield(self.store.update_status(memory_id, MemoryStatus.ERROR, index=None))
        except Exception as secondary:
            logger.error(f"Could not mark build as failed for: {title}", error=secondary)

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def chat(self, memory_id: UUID, question: str) -> str:
        """Answer ``question`` from the memory's chunks."""
        bind_memory(memory_id)
        memory = await self.store.get_with_all(memory_id)
        if memory is None:
            raise NotFoundError.memory(memory_id, "chat")
        if not question or not question.strip():
            raise _invalid("Question is required", "chat", "question", question, "not blank")
        if not is_chat_ready(memory.status):
            raise InvalidStateError(
                "Memory index not built yet",
                details=StateErrorDetails(
                    source="memory_service",
                    operation="chat",
                    memory_id=memory_id,
                    action="chat",
                    current_status=memory.status.value,
                    required_status=MemoryStatus.BUILT.value,
                ),
            )

        return self.retriever.answer(memory, question)

    async def get(self, memory_id: UUID) -> Memory:
        """Memory with chunks and index."""
        memory = await self.store.get_with_all(memory_id)
        if memory is None:
            raise NotFoundError.memory(memory_id, "get")
        return memory

    async def list(self, page: int = 0, size: int | None = None) -> Page[Memory]:
        """Memories newest first, one page at a time."""
        size = self.config.default_page_size if size is None else size
        if page < 0:
            raise _invalid("Page cannot be negative", "list", "page", page, ">= 0")
        if not 1 <= size <= self.config.max_page_size:
            raise _invalid(
                f"Page size must be between 1 and {self.config.max_page_size}",
                "list",
                "size",
                size,
                f"1..{self.config.max_page_size}",
            )
        return await self.store.list(page, size)

    async def search(self, query: str) -> list[Memory]:
        """Memories whose title or description contains ``query``, ignoring case."""
        return await self.store.search(query)

    async def list_by_status(self, status: MemoryStatus) -> list[Memory]:
        return await self.store.list_by_status(status)

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def delete(self, memory_id: UUID) -> None:
        """Delete a memory with its chunks and index."""
        bind_memory(memory_id)
        async with self._locks.hold(memory_id):
            if not await self.store.exists(memory_id):
                raise NotFoundError.memory(memory_id, "delete")
            logger.info(f"Deleting memory with id: {memory_id}")
            await self.store.delete(memory_id)

    async def status_summary(self) -> StatusSummary:
        counts = {status: len(await self.store.list_by_status(status)) for status in MemoryStatus}
        return StatusSummary(counts=counts)
