from .memory import InMemoryMemoryRepository

__all__ = ["InMemoryMemoryRepository"]
