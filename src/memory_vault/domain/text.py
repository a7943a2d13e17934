"""Lexical helpers shared by ingestion, index building and retrieval."""

import re
from collections import Counter
from collections.abc import Iterable

ELLIPSIS = "..."

_NON_ALNUM = re.compile(r"[\W_]+")
_SENTENCE_END = re.compile(r"[.!?]+")
_NOT_NAME_CHAR = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Number of whitespace-delimited non-blank tokens."""
    return len(text.split())


def summarize(content: str, max_length: int) -> str:
    """Truncate ``content`` to ``max_length`` characters at a space boundary.

    Content that fits is returned unchanged. Longer content is cut at
    ``max_length``, trimmed back to the last space inside the cut and suffixed
    with an ellipsis. Without such a space the hard cut is kept.
    """
    if len(content) <= max_length:
        return content
    truncated = content[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS


def tokenize(text: str) -> list[str]:
    """Lower-case ``text`` and split it on runs of non-alphanumeric characters."""
    return [token for token in _NON_ALNUM.split(text.lower()) if token]


def extract_keywords(contents: Iterable[str], limit: int = 20, min_length: int = 4) -> list[str]:
    """Most frequent tokens across ``contents``.

    Ties keep the order in which tokens were first seen.
    """
    counts: Counter[str] = Counter()
    for content in contents:
        counts.update(token for token in tokenize(content) if len(token) >= min_length)
    return [token for token, _ in counts.most_common(limit)]


def extract_topics(
    contents: Iterable[str],
    limit: int = 10,
    min_sentence_length: int = 20,
    words: int = 3,
) -> list[str]:
    """Leading words of every long sentence, deduplicated in first-seen order."""
    topics: dict[str, None] = {}
    for content in contents:
        for sentence in _SENTENCE_END.split(content):
            if len(sentence) <= min_sentence_length:
                continue
            sentence_words = sentence.split()
            if len(sentence_words) < words:
                continue
            topics.setdefault(" ".join(sentence_words[:words]).lower(), None)
            if len(topics) == limit:
                return list(topics)
    return list(topics)


def artifact_stem(title: str) -> str:
    """File-name friendly form of a title: ``"Spring Boot!"`` -> ``"spring_boot"``."""
    sanitized = _NOT_NAME_CHAR.sub("", title)
    return _WHITESPACE.sub("_", sanitized).lower()
