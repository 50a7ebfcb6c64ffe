"""Post-processing of generated text."""

from .fences import ResponseExtractor

__all__ = ["ResponseExtractor"]
