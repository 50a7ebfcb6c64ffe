"""Test generators and the artifact writer."""

from .base import GenerationOrchestrator, sanitize_name
from .integration import IntegrationTestGenerator
from .unit import UnitTestGenerator
from .writer import ArtifactWriter

__all__ = [
    "ArtifactWriter",
    "GenerationOrchestrator",
    "IntegrationTestGenerator",
    "UnitTestGenerator",
    "sanitize_name",
]
