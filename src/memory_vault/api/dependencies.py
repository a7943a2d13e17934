"""API dependencies."""

from fastapi import HTTPException

from memory_vault.services.memory_service import MemoryService

# Set by the application lifespan
memory_service: MemoryService | None = None


def get_memory_service() -> MemoryService:
    """Return the service wired by the running application."""
    if memory_service is None:
        raise HTTPException(status_code=503, detail="Services not initialized")
    return memory_service
