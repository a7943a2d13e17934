"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App config
    service_name: str = "memory-vault"
    host: str = "0.0.0.0"
    port: int = 8000
    seed_sample_data: bool = Field(default=False, description="Load the sample memories at startup")

    # Logging
    log_level: str = Field(default="INFO", description="Minimum level for structlog and stdlib loggers")
    log_json: bool = Field(default=False, description="Render log lines as JSON instead of console output")

    # Chunk ingestion
    chunk_summary_length: int = Field(default=150, description="Max characters kept in a chunk summary")

    # Index build
    index_summary_length: int = Field(default=500, description="Max characters of the overall index summary")
    max_keywords: int = Field(default=20, description="Keywords kept per index")
    min_keyword_length: int = Field(default=4, description="Shortest token counted as a keyword")
    max_topics: int = Field(default=10, description="Topics kept per index")
    topic_min_sentence_length: int = Field(default=20, description="Sentences must be longer than this to yield a topic")  # noqa: E501
    topic_words: int = Field(default=3, description="Leading words that form a topic")

    # Retrieval
    min_question_token_length: int = Field(default=3, description="Shortest question token used for matching")
    max_relevant_chunks: int = Field(default=3, description="Chunks quoted in a chat answer")

    # Listing
    default_page_size: int = 20
    max_page_size: int = 100

    # Artifact names
    video_extension: str = ".mp4"
    index_extension: str = ".json"

    model_config = SettingsConfigDict(
        env_prefix="MEMORY_VAULT_",
        env_file=".env",
        extra="ignore",  # Ignore extra fields in .env file
    )


settings = Settings()
