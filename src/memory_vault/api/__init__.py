"""API module."""

from fastapi import APIRouter

from .endpoints import core, memory

router = APIRouter()

router.include_router(memory.router, prefix="/api/v1/memories", tags=["memories"])
router.include_router(core.router, tags=["core"])
