"""Prompt construction for the generation backend."""

from .builder import PromptBuilder

__all__ = ["PromptBuilder"]
