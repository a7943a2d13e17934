"""Memory Vault FastAPI application."""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import uuid4

import logfire
import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_mcp import FastApiMCP

from memory_vault import __version__
from memory_vault.api import dependencies
from memory_vault.api import router as api_router
from memory_vault.core.base import ApplicationError, ValidationErrorDetails
from memory_vault.core.config import settings
from memory_vault.core.errors import InvalidArgumentError
from memory_vault.core.handlers import ErrorHandler
from memory_vault.core.logging import clear_log_context, get_logger, set_log_context, setup_logging
from memory_vault.infrastructure.repositories.memory import InMemoryMemoryRepository
from memory_vault.services.memory_service import MemoryService
from memory_vault.services.samples import seed_sample_data

logger = get_logger(__name__)
error_handler = ErrorHandler()

MCP_OPERATIONS = (
    "create_memory",
    "add_chunks",
    "build_index",
    "chat",
    "list_memories",
    "search_memories",
    "memories_by_status",
    "get_memory",
    "delete_memory",
    "system_status",
)


def _error_response(request: Request, error: Exception) -> JSONResponse:
    status_code, payload = error_handler.handle(error, path=request.url.path, method=request.method)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


async def application_error_handler(request: Request, error: Exception) -> JSONResponse:
    return _error_response(request, error)


async def validation_error_handler(request: Request, error: RequestValidationError) -> JSONResponse:
    """Reject malformed request bodies as invalid arguments before they reach the service."""
    first = error.errors()[0] if error.errors() else {}
    invalid = InvalidArgumentError(
        f"Invalid request: {first.get('msg', 'validation failed')}",
        details=ValidationErrorDetails(
            source="api",
            operation="validate_request",
            field=".".join(str(part) for part in first.get("loc", ())),
            constraint=first.get("type"),
        ),
    )
    return _error_response(request, invalid)


def create_app(service: MemoryService | None = None, instrument: bool = True) -> FastAPI:
    """Build the application around ``service``; an in-memory store is used when none is given."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        logger.info("Starting Memory Vault application...")
        memory_service = service or MemoryService(InMemoryMemoryRepository())
        dependencies.memory_service = memory_service
        if memory_service.config.seed_sample_data:
            try:
                await seed_sample_data(memory_service)
            except ApplicationError as e:
                logger.error("Error during sample data initialization", error=e)
        try:
            yield
        finally:
            dependencies.memory_service = None
            logger.info("Memory Vault shutdown complete")

    app = FastAPI(
        title="Memory Vault API",
        description="Chunk ingestion, index builds and lexical chat over named memories",
        version=__version__,
        lifespan=lifespan,
    )

    if instrument:
        logfire.instrument_fastapi(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_log_context(request: Request, call_next):
        set_log_context({"trace_id": uuid4().hex, "path": request.url.path, "method": request.method})
        try:
            return await call_next(request)
        finally:
            clear_log_context()

    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, application_error_handler)
    app.include_router(api_router)

    # MCP tools are generated from the routes, so mount after they are registered
    mcp = FastApiMCP(
        app,
        name="Memory Vault",
        description="Create memories, add text chunks, build their index and chat with them",
        include_operations=list(MCP_OPERATIONS),
    )
    mcp.mount_http()
    app.state.mcp = mcp
    return app


def main() -> None:
    """Development server entry point."""
    logfire.configure(
        service_name=settings.service_name,
        token=os.getenv("LOGFIRE_TOKEN"),
        send_to_logfire="if-token-present",
    )
    setup_logging()
    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
