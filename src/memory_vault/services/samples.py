"""Sample memories for demos and local development."""

from pydantic import BaseModel

from memory_vault.core.logging import get_logger
from memory_vault.services.memory_service import MemoryService

logger = get_logger(__name__)


class SampleMemory(BaseModel):
    title: str
    description: str
    chunks: list[str]
    build: bool = True


SAMPLE_MEMORIES = [
    SampleMemory(
        title="Spring Boot Fundamentals",
        description="Comprehensive guide to Spring Boot development with best practices",
        chunks=[
            "Spring Boot is an opinionated framework that simplifies Spring application development by providing auto-configuration and embedded servers.",  # noqa: E501
            "Dependency injection is a core principle of Spring, allowing for loose coupling and easier testing of components.",  # noqa: E501
            "Spring Data JPA provides a powerful abstraction over database operations, offering repository patterns and query methods.",  # noqa: E501
            "Spring Boot Actuator provides production-ready features like health checks, metrics, and monitoring endpoints.",  # noqa: E501
            "Auto-configuration in Spring Boot automatically configures your application based on the dependencies present in the classpath.",  # noqa: E501
        ],
    ),
    SampleMemory(
        title="Artificial Intelligence Overview",
        description="Introduction to AI, machine learning, and their applications in modern technology",
        chunks=[
            "Artificial Intelligence (AI) refers to the simulation of human intelligence in machines programmed to think and learn.",  # noqa: E501
            "Machine Learning is a subset of AI that enables computers to learn and improve from experience without being explicitly programmed.",  # noqa: E501
            "Deep Learning uses neural networks with multiple layers to model and understand complex patterns in data.",
            "Natural Language Processing (NLP) enables machines to understand, interpret, and generate human language.",
            "Computer Vision allows machines to interpret and understand visual information from the world around them.",
            "AI applications include autonomous vehicles, medical diagnosis, recommendation systems, and voice assistants.",
        ],
    ),
    SampleMemory(
        title="Model Context Protocol Explained",
        description="Understanding MCP and its role in AI application development",
        chunks=[
            "Model Context Protocol (MCP) is an open standard for connecting AI models with external tools and data sources.",  # noqa: E501
            "MCP enables secure and controlled access to resources, allowing AI models to interact with databases, APIs, and files.",  # noqa: E501
            "The protocol supports multiple transport mechanisms including STDIO, HTTP Server-Sent Events, and WebSocket connections.",  # noqa: E501
            "MCP tools are functions that AI models can discover and execute to perform specific tasks or retrieve information.",  # noqa: E501
            "Resource management in MCP allows AI models to access and read various types of content through URI-based addressing.",  # noqa: E501
            "Spring AI provides comprehensive MCP integration through boot starters and auto-configuration for easy setup.",
        ],
    ),
    # Left unbuilt so a fresh install shows more than one status
    SampleMemory(
        title="Kotlin for Spring Development",
        description="Leveraging Kotlin's features for better Spring Boot applications",
        chunks=[
            "Kotlin provides excellent interoperability with Java, making it perfect for Spring development.",
            "Data classes in Kotlin reduce boilerplate code for DTOs and entity classes.",
            "Null safety in Kotlin helps prevent NullPointerException at compile time.",
            "Extension functions allow adding functionality to existing classes without inheritance.",
        ],
        build=False,
    ),
]


async def seed_sample_data(service: MemoryService, samples: list[SampleMemory] = SAMPLE_MEMORIES) -> int:
    """Create (and usually build) each sample memory. Returns how many were created."""
    logger.info("Initializing sample data...")
    created = 0
    for sample in samples:
        memory = await service.create_memory(sample.title, sample.description)
        await service.append_chunks(memory.id, sample.chunks)
        if sample.build:
            await service.build_index(memory.id)
        created += 1
        logger.info(f"Seeded memory: {sample.title}", built=sample.build)
    return created
