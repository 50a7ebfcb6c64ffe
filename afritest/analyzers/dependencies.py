"""Dependency collection across scanned files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from ..logging import get_logger
from ..models import ImportEdge
from .imports import ImportExtractor, ImportParseError

logger = get_logger("dependencies")


class DependencyCollector:
    """Flattens the import specifiers of many files into one ordered list."""

    def __init__(self, extractor: ImportExtractor | None = None) -> None:
        self.extractor = extractor or ImportExtractor()

    def collect(self, file_paths: Sequence[str]) -> List[str]:
        """Return specifiers in file order, then declaration order; duplicates kept."""
        return [edge.specifier for edge in self.collect_edges(file_paths)]

    def collect_edges(self, file_paths: Sequence[str]) -> List[ImportEdge]:
        edges: List[ImportEdge] = []
        for file_path in file_paths:
            try:
                content = Path(file_path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping %s: unable to read file (%s)", file_path, exc)
                continue
            try:
                specifiers = self.extractor.extract(content, str(file_path))
            except ImportParseError as exc:
                logger.warning("Skipping %s: %s", file_path, exc)
                continue
            edges.extend(ImportEdge(source_path=str(file_path), specifier=s) for s in specifiers)
        logger.debug("Collected %d import edges from %d files", len(edges), len(file_paths))
        return edges


def unique_specifiers(specifiers: Iterable[str]) -> List[str]:
    """Drop repeated specifiers, keeping first-occurrence order."""
    seen: set[str] = set()
    unique: List[str] = []
    for specifier in specifiers:
        if specifier in seen:
            continue
        seen.add(specifier)
        unique.append(specifier)
    return unique


__all__ = ["DependencyCollector", "unique_specifiers"]
