"""Naming-pattern heuristics for project layout."""

from __future__ import annotations

from typing import Sequence

from ..models import ArchitectureReport

_ROLE_MARKERS: tuple[tuple[str, str], ...] = (
    ("controllers", "controller"),
    ("services", "service"),
    ("repositories", "repo"),
)


class ArchitectureClassifier:
    """Counts role markers in file paths. The result is a heuristic summary only."""

    def classify(self, file_paths: Sequence[str], specifiers: Sequence[str]) -> ArchitectureReport:
        tallies = {
            role: sum(1 for path in file_paths if marker in path.lower())
            for role, marker in _ROLE_MARKERS
        }
        return ArchitectureReport(
            controllers=tallies["controllers"],
            services=tallies["services"],
            repositories=tallies["repositories"],
            total_files=len(file_paths),
            total_dependencies=len(specifiers),
        )


__all__ = ["ArchitectureClassifier"]
