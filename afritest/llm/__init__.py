"""Generation backend clients."""

from .client import GenerationClient, GenerationError, LLMRequest

__all__ = ["GenerationClient", "GenerationError", "LLMRequest"]
