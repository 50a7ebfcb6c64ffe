"""Pipeline orchestration for analyze and architecture runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping

from .analyzers import ArchitectureClassifier, DependencyCollector, unique_specifiers
from .config import CONFIG_FILENAME, AfritestConfig, load_config, resolve_llm_settings
from .generators import ArtifactWriter, IntegrationTestGenerator, UnitTestGenerator
from .generators.base import TextGenerator
from .llm.client import GenerationClient
from .logging import get_logger
from .models import ArchitectureReport, PendingArtifact
from .prompting.builder import PromptBuilder
from .scanner import FileScanner


@dataclass
class AnalyzeOutcome:
    """Everything an analyze run discovered and produced."""

    files: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    unit_artifacts: List[PendingArtifact] = field(default_factory=list)
    integration_artifacts: List[PendingArtifact] = field(default_factory=list)


class Orchestrator:
    """Wires scanning, dependency collection and both generators into one run."""

    def __init__(
        self,
        *,
        scanner: FileScanner | None = None,
        collector: DependencyCollector | None = None,
        classifier: ArchitectureClassifier | None = None,
        client: TextGenerator | None = None,
        writer: ArtifactWriter | None = None,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._scanner = scanner
        self.collector = collector or DependencyCollector()
        self.classifier = classifier or ArchitectureClassifier()
        self._client = client
        self.writer = writer or ArtifactWriter()
        self.config_path = config_path
        self.environ = environ
        self.logger = get_logger("orchestrator")

    def run_analyze(
        self,
        path: str,
        *,
        unit: bool = True,
        integration: bool = True,
        output_dir: str | None = None,
        concurrency: int | None = None,
    ) -> AnalyzeOutcome:
        """Scan `path` and generate unit and/or integration tests."""
        project_path = Path(path).expanduser()
        config = self._load_config(project_path)
        scanner = self._resolve_scanner(config)
        generation = config.generation

        output_root = Path(output_dir or generation.output_dir)
        effective_concurrency = concurrency or generation.concurrency
        client = self._resolve_client(config)
        prompt_builder = PromptBuilder(generation.templates_dir)

        self.logger.info("Starting analyze run for %s", project_path)
        files = scanner.scan(project_path)
        self.logger.debug("Scanner discovered %d files", len(files))
        outcome = AnalyzeOutcome(files=files)

        common = dict(
            prompt_builder=prompt_builder,
            writer=self.writer,
            concurrency=effective_concurrency,
            on_failure=generation.on_failure,
            test_suffix=generation.test_suffix,
        )

        if unit:
            unit_generator = UnitTestGenerator(
                client,
                import_root=generation.import_root or Path.cwd(),
                **common,  # type: ignore[arg-type]
            )
            outcome.unit_artifacts = unit_generator.generate(
                files, str(output_root / generation.unit_dir)
            )
            self.logger.info("Generated %d unit test files", len(outcome.unit_artifacts))

        if integration:
            outcome.dependencies = self.collector.collect(files)
            specifiers = unique_specifiers(outcome.dependencies)
            if len(specifiers) != len(outcome.dependencies):
                self.logger.debug(
                    "Collapsed %d import edges into %d unique dependencies",
                    len(outcome.dependencies),
                    len(specifiers),
                )
            integration_generator = IntegrationTestGenerator(
                client,
                search_roots=self._search_roots(project_path),
                extensions=scanner.extensions,
                **common,  # type: ignore[arg-type]
            )
            outcome.integration_artifacts = integration_generator.generate(
                specifiers, str(output_root / generation.integration_dir)
            )
            self.logger.info(
                "Generated %d integration test files", len(outcome.integration_artifacts)
            )

        return outcome

    def run_architecture(self, path: str) -> ArchitectureReport:
        """Return naming-pattern heuristics for the project at `path`."""
        project_path = Path(path).expanduser()
        config = self._load_config(project_path)
        files = self._resolve_scanner(config).scan(project_path)
        dependencies = self.collector.collect(files)
        return self.classifier.classify(files, dependencies)

    def _load_config(self, project_path: Path) -> AfritestConfig:
        if self.config_path is not None:
            return load_config(self.config_path)
        for candidate in (project_path, Path.cwd()):
            if candidate.is_dir() and (candidate / CONFIG_FILENAME).exists():
                return load_config(candidate)
        return load_config(Path.cwd())

    def _resolve_scanner(self, config: AfritestConfig) -> FileScanner:
        if self._scanner is not None:
            return self._scanner
        return FileScanner(
            extensions=config.scan.extensions,
            exclude_dirs=config.scan.exclude_dirs,
            exclude_paths=config.scan.exclude_paths,
        )

    def _resolve_client(self, config: AfritestConfig) -> TextGenerator:
        if self._client is not None:
            return self._client
        settings = resolve_llm_settings(config, self.environ)
        self.logger.debug("Using %s model %s", settings.provider, settings.model)
        return GenerationClient(settings)

    @staticmethod
    def _search_roots(project_path: Path) -> List[Path]:
        roots: List[Path] = [Path.cwd()]
        resolved = project_path.resolve()
        if resolved.is_dir() and resolved != roots[0].resolve():
            roots.append(resolved)
        return roots


__all__ = ["AnalyzeOutcome", "Orchestrator"]
