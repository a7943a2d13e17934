"""Service-level endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from memory_vault import __version__
from memory_vault.api.dependencies import get_memory_service
from memory_vault.domain.models.memory import MemoryStatus
from memory_vault.domain.models.utils import utc_now
from memory_vault.services.memory_service import MemoryService

router = APIRouter()


class SystemStatusResponse(BaseModel):
    status_counts: dict[MemoryStatus, int]
    total_memories: int
    ready_for_chat: int
    processing: int


@router.get("/")
async def root():
    return {"message": "Memory Vault API", "version": __version__, "status": "running"}


@router.get("/health", operation_id="health")
async def health_check():
    return {"status": "healthy", "timestamp": utc_now().isoformat()}


@router.get("/status", response_model=SystemStatusResponse, operation_id="system_status")
async def system_status(memory_service: MemoryService = Depends(get_memory_service)) -> SystemStatusResponse:
    """Number of memories per build status."""
    summary = await memory_service.status_summary()
    return SystemStatusResponse(
        status_counts=summary.counts,
        total_memories=summary.total_memories,
        ready_for_chat=summary.ready_for_chat,
        processing=summary.processing,
    )
