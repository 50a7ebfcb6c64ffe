"""Per-file unit test generation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Sequence

from ..analyzers.functions import FunctionParser
from ..failsafe import build_unit_scaffold
from ..models import PendingArtifact
from ..scanner import is_spec_file
from .base import GeneratedTest, GenerationOrchestrator, read_source, sanitize_name


def is_unit_target(file_path: str) -> bool:
    """Return True for TypeScript modules that are neither specs nor declaration files."""
    name = os.path.basename(file_path).lower()
    return name.endswith(".ts") and not name.endswith(".d.ts") and not is_spec_file(name)


def module_import_path(file_path: str | os.PathLike[str], import_root: Path) -> str:
    """Return the root-relative, slash-led import path of a module without `.ts`."""
    absolute = Path(file_path).resolve()
    try:
        relative = os.path.relpath(absolute, import_root.resolve())
    except ValueError:
        relative = str(absolute)
    import_path = relative.replace("\\", "/")
    if import_path.endswith(".ts"):
        import_path = import_path[: -len(".ts")]
    if not import_path.startswith("/"):
        import_path = "/" + import_path
    return import_path


def module_alias(stem: str) -> str:
    """Return a valid identifier for the namespace import of a module."""
    if not stem or stem[0].isdigit():
        return f"_{stem}"
    return stem


class UnitTestGenerator(GenerationOrchestrator):
    """Generates one Jest unit test file per analysed TypeScript module."""

    kind = "unit"

    def __init__(self, *args, import_root: Path | None = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(*args, **kwargs)
        self.import_root = import_root or Path.cwd()
        self.function_parser = FunctionParser()

    def generate(self, file_paths: Sequence[str], output_dir: str) -> List[PendingArtifact]:
        """Generate, extract and write unit tests for `file_paths` under `output_dir`."""
        targets = [str(path) for path in file_paths if is_unit_target(str(path))]
        self.logger.info("Generating unit tests for %d modules", len(targets))
        generated = self._map(self._generate_one, targets)
        return self._write(self._to_artifacts(generated, output_dir))

    def generate_test_code(self, module_code: str) -> str:
        """Return raw generated text for a single module's source."""
        request = self.prompt_builder.build_unit_request(module_code, work_item="<inline>")
        return self.client.complete(request.prompt)

    def _generate_one(self, file_path: str) -> Optional[GeneratedTest]:
        code = read_source(Path(file_path))
        import_path = module_import_path(file_path, self.import_root)
        request = self.prompt_builder.build_unit_request(
            code, work_item=file_path, module_path=import_path
        )
        self.logger.debug("Requesting unit test for %s", file_path)
        result = self.client.generate(request.prompt)

        stem = sanitize_name(Path(file_path).name[: -len(".ts")])
        alias = module_alias(stem)

        def _scaffold(reason: str) -> str:
            parsed = self.function_parser.parse(code, file_path)
            return build_unit_scaffold(alias, parsed, reason=reason)

        text = self._resolve_text(file_path, result, _scaffold)
        if text is None:
            return None
        import_statement = f"import * as {alias} from '{import_path}';\n\n"
        return GeneratedTest(work_item=file_path, stem=stem, content=import_statement + text)


__all__ = ["UnitTestGenerator", "is_unit_target", "module_alias", "module_import_path"]
