"""Eliza character generator: LLM character JSON recovery, normalization, and API."""
