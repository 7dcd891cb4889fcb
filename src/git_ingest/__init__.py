"""git_ingest: turn a Git repository into a single text digest for LLM context windows."""

__version__ = "1.1.0"
