"""External service clients (LLM, HTTP)."""
