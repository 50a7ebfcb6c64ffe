"""Static analysis over scanned source files."""

from .architecture import ArchitectureClassifier
from .dependencies import DependencyCollector, unique_specifiers
from .functions import FunctionParser
from .imports import ImportExtractor, ImportParseError
from .routes import RouteParser

__all__ = [
    "ArchitectureClassifier",
    "DependencyCollector",
    "FunctionParser",
    "ImportExtractor",
    "ImportParseError",
    "RouteParser",
    "unique_specifiers",
]
