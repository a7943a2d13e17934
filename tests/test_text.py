from memory_vault.domain.text import (
    artifact_stem,
    count_words,
    extract_keywords,
    extract_topics,
    summarize,
    tokenize,
)


class TestCountWords:
    def test_counts_whitespace_delimited_tokens(self):
        assert count_words("Spring Boot simplifies Java development.") == 5

    def test_ignores_repeated_and_surrounding_whitespace(self):
        assert count_words("  one\ttwo \n\n three  ") == 3


class TestSummarize:
    def test_short_content_is_returned_unchanged(self):
        content = "x" * 150
        assert summarize(content, 150) == content

    def test_long_content_is_trimmed_back_to_a_space(self):
        content = "word " * 40
        summary = summarize(content, 150)
        assert summary == ("word " * 30).rstrip() + "..."
        assert len(summary) <= 153

    def test_hard_cut_when_no_space_precedes_the_limit(self):
        assert summarize("a" * 200, 150) == "a" * 150 + "..."

    def test_leading_space_only_falls_back_to_hard_cut(self):
        content = " " + "b" * 200
        assert summarize(content, 150) == content[:150] + "..."


class TestTokenize:
    def test_lowercases_and_splits_on_punctuation(self):
        assert tokenize("Auto-configuration speeds up setup!") == ["auto", "configuration", "speeds", "up", "setup"]

    def test_underscores_separate_tokens(self):
        assert tokenize("snake_case") == ["snake", "case"]

    def test_blank_text_has_no_tokens(self):
        assert tokenize("  ...  ") == []


class TestKeywords:
    def test_frequency_order_with_first_seen_tie_break(self):
        contents = ["beta alpha beta", "gamma alpha delta"]
        assert extract_keywords(contents) == ["beta", "alpha", "gamma", "delta"]

    def test_drops_tokens_of_three_characters_or_fewer(self):
        assert extract_keywords(["the cat sat on a mat with java"]) == ["with", "java"]

    def test_keeps_at_most_the_limit(self):
        contents = [" ".join(f"keyword{i:02d}" for i in range(30))]
        keywords = extract_keywords(contents, limit=20)
        assert len(keywords) == 20
        assert keywords[0] == "keyword00"
        assert all(len(k) > 3 for k in keywords)


class TestTopics:
    def test_first_three_words_of_long_sentences(self):
        contents = ["Spring Boot simplifies Java development. Short one! Dependency injection reduces coupling?"]
        assert extract_topics(contents) == ["spring boot simplifies", "dependency injection reduces"]

    def test_sentences_of_twenty_characters_or_less_are_skipped(self):
        assert extract_topics(["exactly twenty chars"]) == []
        assert extract_topics(["exactly twenty chars!"]) == []

    def test_deduplicated_in_first_seen_order(self):
        contents = ["Spring boot makes things easy.", "SPRING BOOT MAKES it all work."]
        assert extract_topics(contents) == ["spring boot makes"]

    def test_capped_at_limit(self):
        contents = [". ".join(f"Topic number {i} has enough characters" for i in range(15))]
        topics = extract_topics(contents, limit=10)
        assert len(topics) == 10
        assert topics[0] == "topic number 0"


def test_artifact_stem_strips_symbols_and_joins_words():
    assert artifact_stem("Spring  Boot: Basics!") == "spring_boot_basics"
