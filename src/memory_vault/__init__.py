"""Memory Vault: named memories of text chunks, compiled into a lexical index and queried by chat."""

__version__ = "0.1.0"
