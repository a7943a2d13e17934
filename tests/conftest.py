import pytest

from memory_vault.core.config import Settings
from memory_vault.infrastructure.repositories.memory import InMemoryMemoryRepository
from memory_vault.services.memory_service import MemoryService

SPRING_CHUNKS = [
    "Spring Boot simplifies Java development.",
    "Dependency injection reduces coupling.",
    "Auto-configuration speeds up setup.",
]


@pytest.fixture
def config() -> Settings:
    return Settings()


@pytest.fixture
def store() -> InMemoryMemoryRepository:
    return InMemoryMemoryRepository()


@pytest.fixture
def service(store, config) -> MemoryService:
    return MemoryService(store, config=config)


@pytest.fixture
async def spring_memory(service):
    memory = await service.create_memory("Spring Boot Basics", "Intro notes")
    await service.append_chunks(memory.id, SPRING_CHUNKS)
    return memory


@pytest.fixture
async def built_spring_memory(service, spring_memory):
    return await service.build_index(spring_memory.id)
