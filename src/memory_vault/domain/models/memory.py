"""Memory aggregate: the memory record, its ordered chunks and its derived index."""

from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator

from memory_vault.domain.models.utils import load_terms, utc_now

T = TypeVar("T")


class MemoryStatus(str, Enum):
    """Build status of a memory."""

    CREATED = "CREATED"
    PROCESSING = "PROCESSING"
    BUILT = "BUILT"
    ERROR = "ERROR"


class ChunkType(str, Enum):
    """Kind of text held by a chunk. Ingestion always produces TEXT."""

    TEXT = "TEXT"
    SUMMARY = "SUMMARY"
    METADATA = "METADATA"
    INSTRUCTION = "INSTRUCTION"


class TextChunk(BaseModel):
    """One ordered fragment of text owned by a memory."""

    id: UUID = Field(default_factory=uuid4)
    memory_id: UUID
    chunk_index: int = Field(ge=0)
    content: str = Field(min_length=1)
    word_count: int = Field(ge=0)
    summary: str | None = Field(None, max_length=500)
    chunk_type: ChunkType = ChunkType.TEXT
    created_at: datetime = Field(default_factory=utc_now)
    metadata: dict[str, Any] | None = None

    model_config = {"frozen": True}


class MemoryIndex(BaseModel):
    """Derived index built from every chunk of a memory."""

    id: UUID = Field(default_factory=uuid4)
    memory_id: UUID
    index_content: str = Field(min_length=1, description="JSON payload describing every chunk")
    total_chunks: int = Field(ge=0)
    total_words: int = Field(ge=0)
    summary: str | None = Field(None, max_length=1000)
    keywords: str | None = Field(None, description="JSON array of keywords")
    topics: str | None = Field(None, description="JSON array of topics")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def keyword_list(self) -> list[str]:
        return load_terms(self.keywords)

    @property
    def topic_list(self) -> list[str]:
        return load_terms(self.topics)

    @property
    def average_words_per_chunk(self) -> float:
        return self.total_words / self.total_chunks if self.total_chunks else 0.0


class Memory(BaseModel):
    """Aggregate root owning an ordered list of chunks and at most one index."""

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    video_filename: str = Field(min_length=1)
    index_filename: str = Field(min_length=1)
    status: MemoryStatus = MemoryStatus.CREATED
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    chunks: list[TextChunk] = Field(default_factory=list)
    index: MemoryIndex | None = None

    @model_validator(mode="after")
    def _index_matches_status(self) -> "Memory":
        """Only BUILT memories may carry an index.

        The converse is not checked here: partial reads (`get`, `get_with_chunks`)
        return BUILT memories without loading their index. The store enforces
        BUILT iff index on every status write.
        """
        if self.index is not None and self.status is not MemoryStatus.BUILT:
            raise ValueError(f"A memory in status {self.status.value} cannot carry an index")
        return self

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    def is_built(self) -> bool:
        return self.status is MemoryStatus.BUILT


class Page(BaseModel, Generic[T]):
    """One page of a listing ordered newest first."""

    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.size - 1) // self.size if self.size else 0


class StatusSummary(BaseModel):
    """How many memories sit in each build status."""

    counts: dict[MemoryStatus, int]

    @property
    def total_memories(self) -> int:
        return sum(self.counts.values())

    @property
    def ready_for_chat(self) -> int:
        return self.counts.get(MemoryStatus.BUILT, 0)

    @property
    def processing(self) -> int:
        return self.counts.get(MemoryStatus.PROCESSING, 0)
