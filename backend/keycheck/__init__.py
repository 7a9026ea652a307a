"""API key verification service for LLM providers."""
