"""Time and encoding helpers shared by the domain models."""

import json
import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def epoch_millis() -> int:
    """Wall clock in whole milliseconds, used to stamp artifact file names."""
    return time.time_ns() // 1_000_000


def dump_terms(terms: list[str]) -> str:
    return json.dumps(terms)


def load_terms(encoded: str | None) -> list[str]:
    """Decode a JSON-encoded term list; missing values decode as empty."""
    return json.loads(encoded) if encoded else []
