"""Journal Service - journal entry storage, search and AI enrichment."""

__version__ = "1.0.0"
