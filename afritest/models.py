"""Core data models shared across afritest components."""

from dataclasses import dataclass, field
from typing import List, Optional

FAILURE_MARKER = "AI generation failed"


@dataclass(frozen=True)
class ImportEdge:
    """A single static import: the importing file and the literal specifier."""

    source_path: str
    specifier: str


@dataclass
class GenerationRequest:
    """Prompt text plus the work item it was built for."""

    prompt: str
    work_item: str
    source: str = ""


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call: either text or a failure cause."""

    ok: bool
    text: str = ""
    cause: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "GenerationResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, cause: str) -> "GenerationResult":
        return cls(ok=False, cause=cause)

    def as_text(self) -> str:
        """Return generated text, or the failure sentinel for failed calls."""
        if self.ok:
            return self.text
        return f"// {FAILURE_MARKER}: {self.cause}"


@dataclass(frozen=True)
class PendingArtifact:
    """A generated file waiting to be written."""

    directory: str
    file_name: str
    content: str


@dataclass
class WriteReport:
    """Per-artifact outcome of a batch write."""

    written: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FunctionSignature:
    """Top-level function declaration discovered in a module."""

    name: str
    parameters: List[str]
    expected_placeholder: str = "undefined"


@dataclass
class ParsedModule:
    """Typed result of parsing a module for function declarations."""

    functions: List[FunctionSignature] = field(default_factory=list)


@dataclass(frozen=True)
class Route:
    """HTTP route registered on an Express app."""

    method: str
    path: str


@dataclass(frozen=True)
class ArchitectureReport:
    """Heuristic tallies of naming patterns across a project."""

    controllers: int
    services: int
    repositories: int
    total_files: int
    total_dependencies: int

    def render(self) -> str:
        return "\n".join(
            [
                "Architecture heuristics (naming patterns, not a verified classification)",
                f"Controllers: {self.controllers}",
                f"Services: {self.services}",
                f"Repositories: {self.repositories}",
                f"Total Files: {self.total_files}",
                f"Total Dependencies: {self.total_dependencies}",
            ]
        )
