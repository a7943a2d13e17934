from uuid import uuid4

import pytest

from memory_vault.core.errors import InvalidArgumentError, InvalidStateError, NotFoundError
from memory_vault.domain.models.memory import Memory, MemoryStatus, TextChunk
from memory_vault.services.retrieval import RetrievalEngine


def memory_with(*contents: str) -> Memory:
    memory = Memory(title="Fixture", video_filename="fixture.mp4", index_filename="fixture_index.json")
    memory.chunks = [
        TextChunk(memory_id=memory.id, chunk_index=i, content=content, word_count=len(content.split()))
        for i, content in enumerate(contents)
    ]
    return memory


class TestChat:
    async def test_answer_names_title_and_quotes_matching_chunk(self, service, built_spring_memory):
        answer = await service.chat(built_spring_memory.id, "What is Spring Boot?")

        assert answer == (
            "Based on the memory 'Spring Boot Basics', here's what I found:\n\n"
            "Chunk 0: Spring Boot simplifies Java development."
        )

    async def test_no_overlap_returns_fixed_message(self, service, built_spring_memory):
        answer = await service.chat(built_spring_memory.id, "xyz nonsense query")

        assert answer == "I couldn't find relevant information about 'xyz nonsense query' in this memory."

    async def test_unbuilt_memory_is_rejected(self, service, spring_memory):
        with pytest.raises(InvalidStateError):
            await service.chat(spring_memory.id, "What is Spring Boot?")

    @pytest.mark.parametrize("status", [MemoryStatus.PROCESSING, MemoryStatus.ERROR])
    async def test_other_statuses_are_rejected(self, service, store, spring_memory, status):
        await store.update_status(spring_memory.id, status)

        with pytest.raises(InvalidStateError):
            await service.chat(spring_memory.id, "What is Spring Boot?")

    async def test_unknown_memory(self, service):
        with pytest.raises(NotFoundError):
            await service.chat(uuid4(), "anything")

    @pytest.mark.parametrize("question", ["", "   "])
    async def test_blank_question(self, service, built_spring_memory, question):
        with pytest.raises(InvalidArgumentError):
            await service.chat(built_spring_memory.id, question)


class TestRetrievalEngine:
    def test_question_tokens_keep_words_longer_than_two(self, config):
        engine = RetrievalEngine(config)
        assert engine.question_tokens("What is Spring Boot?") == ["what", "spring", "boot"]

    def test_question_token_must_sit_inside_a_chunk_token(self, config):
        engine = RetrievalEngine(config)
        memory = memory_with("Bootstrapping the context", "A boot sequence")

        assert [c.chunk_index for c in engine.find_relevant_chunks(memory.chunks, "boot")] == [0, 1]
        assert [c.chunk_index for c in engine.find_relevant_chunks(memory.chunks, "bootstrapping")] == [0]

    def test_takes_first_three_in_stored_order(self, config):
        engine = RetrievalEngine(config)
        memory = memory_with(
            "alpha once",
            "nothing here",
            "alpha alpha alpha twice over",
            "alpha again",
            "alpha last",
        )

        selected = engine.find_relevant_chunks(memory.chunks, "alpha")

        assert [c.chunk_index for c in selected] == [0, 2, 3]

    def test_short_question_tokens_match_nothing(self, config):
        engine = RetrievalEngine(config)
        memory = memory_with("it is on")

        assert engine.find_relevant_chunks(memory.chunks, "is it on?") == []

    def test_answer_separates_chunks_with_blank_line(self, config):
        engine = RetrievalEngine(config)
        memory = memory_with("Java records", "Kotlin data classes", "Java streams")

        answer = engine.answer(memory, "java")

        assert answer.endswith("Chunk 0: Java records\n\nChunk 2: Java streams")
