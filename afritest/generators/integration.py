"""Per-dependency integration test generation."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..analyzers.routes import RouteParser
from ..failsafe import build_integration_scaffold
from ..models import GenerationResult, PendingArtifact
from ..scanner import DEFAULT_EXTENSIONS
from .base import GeneratedTest, GenerationOrchestrator, read_source, sanitize_name

INTEGRATION_PREAMBLE = "import app from '/app';\nimport request from 'supertest';\n\n"


def looks_like_path(specifier: str) -> bool:
    """Return True for relative or absolute specifiers; bare package names are False."""
    return specifier.startswith((".", "/")) or "/" in specifier or "\\" in specifier


def resolve_specifier(
    specifier: str,
    search_roots: Iterable[Path],
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> Optional[Path]:
    """Find the file a path-like specifier points at, trying extensions and index files."""
    bases: List[Path] = []
    candidate = Path(specifier)
    if candidate.is_absolute():
        bases.append(candidate)
    bases.extend(Path(root) / specifier for root in search_roots)

    for base in bases:
        options = [base]
        if base.name:
            options.extend(base.with_name(base.name + ext) for ext in extensions)
        options.extend(base / f"index{ext}" for ext in extensions)
        for option in options:
            try:
                if option.is_file():
                    return option
            except OSError:
                continue
    return None


class IntegrationTestGenerator(GenerationOrchestrator):
    """Generates one supertest-based integration test per dependency specifier."""

    kind = "integration"

    def __init__(  # type: ignore[no-untyped-def]
        self,
        *args,
        search_roots: Sequence[Path] | None = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.search_roots = list(search_roots) if search_roots is not None else [Path.cwd()]
        self.extensions = tuple(extensions)
        self.route_parser = RouteParser()

    def generate(self, specifiers: Sequence[str], output_dir: str) -> List[PendingArtifact]:
        """Generate, extract and write integration tests for `specifiers` under `output_dir`."""
        self.logger.info("Generating integration tests for %d dependencies", len(specifiers))
        generated = self._map(self._generate_one, list(specifiers))
        return self._write(self._to_artifacts(generated, output_dir))

    def generate_test_code(self, dependencies: Sequence[str]) -> str:
        """Return raw generated text for the first dependency in `dependencies`."""
        if not dependencies:
            return GenerationResult.failure("No dependencies provided").as_text()
        dependency = dependencies[0]
        code = self._read_dependency(dependency)
        request = self.prompt_builder.build_integration_request(
            code, dependency, self.route_parser.parse(code)
        )
        return self.client.complete(request.prompt)

    def _read_dependency(self, specifier: str) -> str:
        if not looks_like_path(specifier):
            return ""
        resolved = resolve_specifier(specifier, self.search_roots, self.extensions)
        if resolved is None:
            self.logger.debug("Could not resolve %s to a file", specifier)
            return ""
        return read_source(resolved)

    def _generate_one(self, specifier: str) -> Optional[GeneratedTest]:
        code = self._read_dependency(specifier)
        routes = self.route_parser.parse(code)
        request = self.prompt_builder.build_integration_request(code, specifier, routes)
        self.logger.debug("Requesting integration test for %s", specifier)
        result = self.client.generate(request.prompt)

        def _scaffold(reason: str) -> str:
            return build_integration_scaffold(specifier, routes, reason=reason)

        text = self._resolve_text(specifier, result, _scaffold)
        if text is None:
            return None
        return GeneratedTest(
            work_item=specifier,
            stem=sanitize_name(specifier),
            content=INTEGRATION_PREAMBLE + text,
        )


__all__ = [
    "INTEGRATION_PREAMBLE",
    "IntegrationTestGenerator",
    "looks_like_path",
    "resolve_specifier",
]
