"""Answer questions from a built memory by lexical overlap."""

from collections.abc import Sequence

from memory_vault.core.config import Settings, settings
from memory_vault.core.logging import get_logger
from memory_vault.domain.models.memory import Memory, TextChunk
from memory_vault.domain.text import tokenize

logger = get_logger(__name__)

NO_MATCH_TEMPLATE = "I couldn't find relevant information about '{question}' in this memory."
ANSWER_TEMPLATE = "Based on the memory '{title}', here's what I found:\n\n{context}"


class RetrievalEngine:
    def __init__(self, config: Settings = settings):
        self.config = config

    def question_tokens(self, question: str) -> list[str]:
        return [token for token in tokenize(question) if len(token) >= self.config.min_question_token_length]

    @staticmethod
    def is_relevant(chunk: TextChunk, question_tokens: Sequence[str]) -> bool:
        # A question token only has to appear inside a chunk token
        chunk_tokens = tokenize(chunk.content)
        return any(q in token for q in question_tokens for token in chunk_tokens)

    def find_relevant_chunks(self, chunks: Sequence[TextChunk], question: str) -> list[TextChunk]:
        """First matching chunks in stored order, not ranked by match count."""
        tokens = self.question_tokens(question)
        selected: list[TextChunk] = []
        if not tokens:
            return selected
        for chunk in sorted(chunks, key=lambda c: c.chunk_index):
            if self.is_relevant(chunk, tokens):
                selected.append(chunk)
                if len(selected) == self.config.max_relevant_chunks:
                    break
        return selected

    def answer(self, memory: Memory, question: str) -> str:
        relevant = self.find_relevant_chunks(memory.chunks, question)
        logger.debug("Selected chunks for question", question_length=len(question), selected=len(relevant))
        if not relevant:
            return NO_MATCH_TEMPLATE.format(question=question)
        context = "\n\n".join(f"Chunk {chunk.chunk_index}: {chunk.content}" for chunk in relevant)
        return ANSWER_TEMPLATE.format(title=memory.title, context=context)
