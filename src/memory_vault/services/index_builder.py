"""Compile a memory's chunks into its derived index."""

import json
from collections.abc import Sequence
from typing import Any
from uuid import UUID

from memory_vault.core.config import Settings, settings
from memory_vault.domain.models.memory import MemoryIndex, TextChunk
from memory_vault.domain.models.utils import dump_terms, utc_now
from memory_vault.domain.text import extract_keywords, extract_topics, summarize


class IndexBuilder:
    """Deterministic index computation over the full ordered chunk list.

    Summary, keywords and topics depend only on chunk contents, so rebuilding
    an unchanged chunk set yields the same values.
    """

    def __init__(self, config: Settings = settings):
        self.config = config

    def build(self, memory_id: UUID, chunks: Sequence[TextChunk]) -> MemoryIndex:
        ordered = sorted(chunks, key=lambda chunk: chunk.chunk_index)
        contents = [chunk.content for chunk in ordered]
        total_words = sum(chunk.word_count for chunk in ordered)

        return MemoryIndex(
            memory_id=memory_id,
            index_content=json.dumps(self.payload(ordered, total_words)),
            total_chunks=len(ordered),
            total_words=total_words,
            summary=self.overall_summary(contents),
            keywords=dump_terms(self.keywords(contents)),
            topics=dump_terms(self.topics(contents)),
        )

    def overall_summary(self, contents: Sequence[str]) -> str:
        return summarize(" ".join(contents), self.config.index_summary_length)

    def keywords(self, contents: Sequence[str]) -> list[str]:
        return extract_keywords(
            contents,
            limit=self.config.max_keywords,
            min_length=self.config.min_keyword_length,
        )

    def topics(self, contents: Sequence[str]) -> list[str]:
        return extract_topics(
            contents,
            limit=self.config.max_topics,
            min_sentence_length=self.config.topic_min_sentence_length,
            words=self.config.topic_words,
        )

    @staticmethod
    def payload(chunks: Sequence[TextChunk], total_words: int) -> dict[str, Any]:
        return {
            "chunks": [
                {
                    "index": chunk.chunk_index,
                    "content": chunk.content,
                    "summary": chunk.summary,
                    "wordCount": chunk.word_count,
                    "type": chunk.chunk_type.value,
                }
                for chunk in chunks
            ],
            "metadata": {
                "totalChunks": len(chunks),
                "totalWords": total_words,
                "averageWordsPerChunk": total_words / len(chunks) if chunks else 0.0,
                "createdAt": utc_now().isoformat(),
            },
        }
