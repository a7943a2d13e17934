"""Memory API endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator

from memory_vault.api.dependencies import get_memory_service
from memory_vault.core.logging import get_logger
from memory_vault.domain.models.memory import Memory, MemoryIndex, MemoryStatus, TextChunk
from memory_vault.services.memory_service import MemoryService

logger = get_logger(__name__)
router = APIRouter()


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class CreateMemoryRequest(BaseModel):
    """Request model for creating a memory."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _not_blank(v)


class AddChunksRequest(BaseModel):
    """Request model for appending text chunks."""

    chunks: list[str] = Field(..., min_length=1, description="Chunk texts in append order")

    @field_validator("chunks")
    @classmethod
    def validate_chunks(cls, v: list[str]) -> list[str]:
        for position, chunk in enumerate(v):
            if not chunk.strip():
                raise ValueError(f"chunk {position} must not be blank")
        return v


class ChatRequest(BaseModel):
    """Request model for asking a memory a question."""

    question: str = Field(..., min_length=1)

    @field_validator("question")
    @classmethod
    def validate_question(cls, v: str) -> str:
        return _not_blank(v)


class ChatResponse(BaseModel):
    response: str


class ChunkResponse(BaseModel):
    id: UUID
    chunk_index: int
    content: str
    summary: str | None
    word_count: int
    chunk_type: str
    created_at: datetime

    @classmethod
    def from_chunk(cls, chunk: TextChunk) -> "ChunkResponse":
        return cls(
            id=chunk.id,
            chunk_index=chunk.chunk_index,
            content=chunk.content,
            summary=chunk.summary,
            word_count=chunk.word_count,
            chunk_type=chunk.chunk_type.value,
            created_at=chunk.created_at,
        )


class IndexResponse(BaseModel):
    id: UUID
    total_chunks: int
    total_words: int
    average_words_per_chunk: float
    summary: str | None
    keywords: list[str]
    topics: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_index(cls, index: MemoryIndex) -> "IndexResponse":
        return cls(
            id=index.id,
            total_chunks=index.total_chunks,
            total_words=index.total_words,
            average_words_per_chunk=index.average_words_per_chunk,
            summary=index.summary,
            keywords=index.keyword_list,
            topics=index.topic_list,
            created_at=index.created_at,
            updated_at=index.updated_at,
        )


class MemoryResponse(BaseModel):
    id: UUID
    title: str
    description: str | None
    video_filename: str
    index_filename: str
    status: MemoryStatus
    total_chunks: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_memory(cls, memory: Memory) -> "MemoryResponse":
        return cls(
            id=memory.id,
            title=memory.title,
            description=memory.description,
            video_filename=memory.video_filename,
            index_filename=memory.index_filename,
            status=memory.status,
            total_chunks=memory.total_chunks,
            created_at=memory.created_at,
            updated_at=memory.updated_at,
        )


class MemoryDetailResponse(MemoryResponse):
    chunks: list[ChunkResponse]
    index: IndexResponse | None

    @classmethod
    def from_memory(cls, memory: Memory) -> "MemoryDetailResponse":
        base = MemoryResponse.from_memory(memory).model_dump()
        return cls(
            **base,
            chunks=[ChunkResponse.from_chunk(chunk) for chunk in memory.chunks],
            index=IndexResponse.from_index(memory.index) if memory.index else None,
        )


class MemoryPageResponse(BaseModel):
    items: list[MemoryResponse]
    total: int
    page: int
    size: int
    total_pages: int


@router.post("", response_model=MemoryResponse, status_code=status.HTTP_201_CREATED, operation_id="create_memory")
async def create_memory(
    request: CreateMemoryRequest,
    memory_service: MemoryService = Depends(get_memory_service),
) -> MemoryResponse:
    memory = await memory_service.create_memory(request.title, request.description)
    return MemoryResponse.from_memory(memory)


@router.post("/{memory_id}/chunks", response_model=MemoryResponse, operation_id="add_chunks")
async def add_chunks(
    memory_id: UUID,
    request: AddChunksRequest,
    memory_service: MemoryService = Depends(get_memory_service),
) -> MemoryResponse:
    memory = await memory_service.append_chunks(memory_id, request.chunks)
    return MemoryResponse.from_memory(memory)


@router.post("/{memory_id}/build", response_model=MemoryResponse, operation_id="build_index")
async def build_index(
    memory_id: UUID,
    memory_service: MemoryService = Depends(get_memory_service),
) -> MemoryResponse:
    memory = await memory_service.build_index(memory_id)
    return MemoryResponse.from_memory(memory)


@router.post("/{memory_id}/chat", response_model=ChatResponse, operation_id="chat")
async def chat(
    memory_id: UUID,
    request: ChatRequest,
    memory_service: MemoryService = Depends(get_memory_service),
) -> ChatResponse:
    logger.info("Chat request", question_length=len(request.question))
    return ChatResponse(response=await memory_service.chat(memory_id, request.question))


@router.get("", response_model=MemoryPageResponse, operation_id="list_memories")
async def list_memories(
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1),
    memory_service: MemoryService = Depends(get_memory_service),
) -> MemoryPageResponse:
    result = await memory_service.list(page, size)
    return MemoryPageResponse(
        items=[MemoryResponse.from_memory(memory) for memory in result.items],
        total=result.total,
        page=result.page,
        size=result.size,
        total_pages=result.total_pages,
    )


@router.get("/search", response_model=list[MemoryResponse], operation_id="search_memories")
async def search_memories(
    query: str,
    memory_service: MemoryService = Depends(get_memory_service),
) -> list[MemoryResponse]:
    return [MemoryResponse.from_memory(memory) for memory in await memory_service.search(query)]


@router.get("/status/{memory_status}", response_model=list[MemoryResponse], operation_id="memories_by_status")
async def memories_by_status(
    memory_status: MemoryStatus,
    memory_service: MemoryService = Depends(get_memory_service),
) -> list[MemoryResponse]:
    return [MemoryResponse.from_memory(memory) for memory in await memory_service.list_by_status(memory_status)]


@router.get("/{memory_id}", response_model=MemoryDetailResponse, operation_id="get_memory")
async def get_memory(
    memory_id: UUID,
    memory_service: MemoryService = Depends(get_memory_service),
) -> MemoryDetailResponse:
    return MemoryDetailResponse.from_memory(await memory_service.get(memory_id))


@router.delete("/{memory_id}", status_code=status.HTTP_204_NO_CONTENT, operation_id="delete_memory")
async def delete_memory(
    memory_id: UUID,
    memory_service: MemoryService = Depends(get_memory_service),
) -> None:
    await memory_service.delete(memory_id)
