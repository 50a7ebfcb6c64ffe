"""Deterministic Jest scaffolds written when generation fails."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .models import ParsedModule, Route
from .prompting.builder import create_environment

_SCAFFOLD_DIR = Path(__file__).with_name("templates") / "scaffolds"
_ENV = create_environment(_SCAFFOLD_DIR)


def build_unit_scaffold(module_name: str, module: ParsedModule, *, reason: str | None = None) -> str:
    """Return a describe/it skeleton per top-level function of the module."""
    body = _ENV.get_template("unit.j2").render(module_name=module_name, functions=module.functions)
    return _with_reason(body, reason)


def build_integration_scaffold(
    dependency: str, routes: Sequence[Route], *, reason: str | None = None
) -> str:
    """Return a supertest skeleton per detected Express route."""
    body = _ENV.get_template("integration.j2").render(dependency=dependency, routes=list(routes))
    return _with_reason(body, reason)


def _with_reason(body: str, reason: str | None) -> str:
    body = body.strip() + "\n"
    cleaned = _format_reason(reason)
    if cleaned:
        return f"// Scaffold generated because generation failed: {cleaned}\n\n{body}"
    return body


def _format_reason(reason: str | None) -> str | None:
    if not reason:
        return None
    cleaned = " ".join(reason.strip().split())
    if not cleaned:
        return None
    return cleaned[:200] + ("..." if len(cleaned) > 200 else "")


__all__ = ["build_integration_scaffold", "build_unit_scaffold"]
