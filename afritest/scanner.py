"""Project scanning utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts", ".js")
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = ("node_modules", ".git")
SPEC_MARKERS: tuple[str, ...] = (".spec.", ".test.")


@dataclass
class IgnoreRule:
    """Glob-style exclusion parsed from the `scan.exclude_paths` setting."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def is_spec_file(file_name: str) -> bool:
    """Return True for test-spec files such as `user.spec.ts`."""
    name = os.path.basename(file_name)
    return any(marker in name for marker in SPEC_MARKERS)


class FileScanner:
    """Walks a project root and returns candidate source modules."""

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        exclude_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.exclude_dirs = frozenset(exclude_dirs)
        self._rules: List[IgnoreRule] = [
            rule for rule in (build_ignore_rule(p) for p in exclude_paths) if rule is not None
        ]

    def scan(self, root: str | os.PathLike[str]) -> List[str]:
        """Return source file paths under `root`; a missing root yields no files."""
        root_path = Path(root)
        if not root_path.exists():
            return []
        # A root that itself sits inside an excluded directory yields nothing.
        if any(part in self.exclude_dirs for part in root_path.resolve().parts):
            return []
        if root_path.is_file():
            return [str(root_path)] if self.is_relevant(root_path.name) else []
        return list(self._iter_files(root_path))

    def is_relevant(self, file_name: str) -> bool:
        lower = file_name.lower()
        return lower.endswith(self.extensions) and not is_spec_file(lower)

    def _should_ignore(self, rel_path: str, is_dir: bool) -> bool:
        return any(rule.matches(rel_path, is_dir) for rule in self._rules)

    def _iter_files(self, root: Path) -> Iterator[str]:
        # Symlinked directories are not followed, so link cycles cannot recurse.
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if name in self.exclude_dirs:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if self._should_ignore(rel_path, True):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                if not self.is_relevant(filename):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if self._should_ignore(rel_path, False):
                    continue
                yield str(current_dir / filename)


__all__ = ["FileScanner", "IgnoreRule", "build_ignore_rule", "is_spec_file"]
