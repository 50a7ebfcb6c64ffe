"""Shared request/extract/write cycle for the test generators."""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar

from ..config import FAILURE_POLICIES
from ..logging import get_logger
from ..models import GenerationResult, PendingArtifact
from ..postproc.fences import ResponseExtractor
from ..prompting.builder import PromptBuilder
from .writer import ArtifactWriter

DEFAULT_TEST_SUFFIX = ".ai.spec.ts"

_NON_WORD = re.compile(r"\W")

T = TypeVar("T")
R = TypeVar("R")


class TextGenerator(Protocol):
    """Anything that turns a prompt into a tagged generation result."""

    def generate(self, prompt: str) -> GenerationResult: ...

    def complete(self, prompt: str) -> str: ...


@dataclass
class GeneratedTest:
    """Generated content for one work item, before a file name is allocated."""

    work_item: str
    stem: str
    content: str


def sanitize_name(identity: str) -> str:
    """Replace every non-word character so the name cannot traverse directories."""
    return _NON_WORD.sub("_", identity)


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


class GenerationOrchestrator:
    """Builds one request per work item, extracts code, and batch-writes artifacts."""

    kind = "base"

    def __init__(
        self,
        client: TextGenerator,
        *,
        prompt_builder: PromptBuilder | None = None,
        extractor: ResponseExtractor | None = None,
        writer: ArtifactWriter | None = None,
        concurrency: int = 1,
        on_failure: str = "write",
        test_suffix: str = DEFAULT_TEST_SUFFIX,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if on_failure not in FAILURE_POLICIES:
            raise ValueError(f"Unknown failure policy: {on_failure}")
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.extractor = extractor or ResponseExtractor()
        self.writer = writer or ArtifactWriter()
        self.concurrency = concurrency
        self.on_failure = on_failure
        self.test_suffix = test_suffix
        self.logger = get_logger(f"generators.{self.kind}")

    def _map(self, worker: Callable[[T], R], items: Sequence[T]) -> List[R]:
        """Run `worker` over `items`; results always come back in input order."""
        if self.concurrency <= 1 or len(items) <= 1:
            return [worker(item) for item in items]
        with ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="afritest-gen"
        ) as executor:
            return list(executor.map(worker, items))

    def _resolve_text(
        self,
        work_item: str,
        result: GenerationResult,
        scaffold: Callable[[str], str],
    ) -> Optional[str]:
        """Apply the failure policy and fenced-block extraction to one result."""
        if result.ok:
            text = self.extractor.extract(result.text)
        elif self.on_failure == "skip":
            self.logger.warning("Skipped %s test for %s: %s", self.kind, work_item, result.cause)
            return None
        elif self.on_failure == "scaffold":
            self.logger.warning(
                "Generation failed for %s; writing scaffold instead: %s", work_item, result.cause
            )
            text = scaffold(result.cause or "")
        else:
            self.logger.warning("Generation failed for %s: %s", work_item, result.cause)
            text = self.extractor.extract(result.as_text())

        if not text.strip():
            self.logger.warning("Skipped %s test for %s: empty response", self.kind, work_item)
            return None
        return text

    def _to_artifacts(
        self, generated: Sequence[Optional[GeneratedTest]], output_dir: str
    ) -> List[PendingArtifact]:
        artifacts: List[PendingArtifact] = []
        taken: set[str] = set()
        for item in generated:
            if item is None:
                continue
            file_name = self._allocate_name(item.stem, taken)
            if file_name != f"{item.stem}{self.test_suffix}":
                self.logger.info(
                    "Renamed %s test for %s to %s to avoid a collision",
                    self.kind,
                    item.work_item,
                    file_name,
                )
            artifacts.append(
                PendingArtifact(directory=str(output_dir), file_name=file_name, content=item.content)
            )
        return artifacts

    def _allocate_name(self, stem: str, taken: set[str]) -> str:
        candidate = f"{stem}{self.test_suffix}"
        counter = 2
        while candidate in taken:
            candidate = f"{stem}_{counter}{self.test_suffix}"
            counter += 1
        taken.add(candidate)
        return candidate

    def _write(self, artifacts: List[PendingArtifact]) -> List[PendingArtifact]:
        report = self.writer.write(artifacts)
        if report is not None and report.failed:
            self.logger.warning("%d %s test file(s) could not be written", len(report.failed), self.kind)
        return artifacts


__all__ = [
    "DEFAULT_TEST_SUFFIX",
    "GeneratedTest",
    "GenerationOrchestrator",
    "TextGenerator",
    "read_source",
    "sanitize_name",
]
