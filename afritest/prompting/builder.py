"""Builds generation prompts from Jinja templates."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import GenerationRequest, Route

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_environment(*directories: Path | None) -> Environment:
    """Return a Jinja environment searching `directories` in order."""
    search_path: List[str] = [str(directory) for directory in directories if directory]
    return Environment(
        loader=FileSystemLoader(search_path),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class PromptBuilder:
    """Renders unit and integration prompts; user templates shadow the built-ins."""

    UNIT_TEMPLATE = "unit.j2"
    INTEGRATION_TEMPLATE = "integration.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = create_environment(templates_dir, DEFAULT_TEMPLATES_DIR)

    def build_unit_request(
        self, code: str, *, work_item: str, module_path: str | None = None
    ) -> GenerationRequest:
        template = self._env.get_template(self.UNIT_TEMPLATE)
        prompt = template.render(code=code, module_path=module_path)
        return GenerationRequest(prompt=prompt, work_item=work_item, source=code)

    def build_integration_request(
        self, code: str, dependency: str, routes: Sequence[Route] = ()
    ) -> GenerationRequest:
        template = self._env.get_template(self.INTEGRATION_TEMPLATE)
        prompt = template.render(code=code, dependency=dependency, routes=list(routes))
        return GenerationRequest(prompt=prompt, work_item=dependency, source=code)


__all__ = ["PromptBuilder", "create_environment"]
