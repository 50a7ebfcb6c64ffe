"""Dependency collection tests."""

from __future__ import annotations

from pathlib import Path

from afritest.analyzers.dependencies import DependencyCollector, unique_specifiers
from afritest.analyzers.imports import ImportExtractor
from afritest.scanner import FileScanner


def test_collects_dependencies_for_two_file_project(project_builder) -> None:
    project_builder.write(
        {
            "src/a.ts": "import { b } from './b';\nexport const a = b + 1;\n",
            "src/b.ts": "export const b = 2;\n",
        }
    )

    files = project_builder.scan()

    assert [Path(p).name for p in files] == ["a.ts", "b.ts"]
    assert DependencyCollector().collect(files) == ["./b"]


def test_empty_project_yields_no_dependencies(project_builder) -> None:
    files = project_builder.scan()

    assert files == []
    assert DependencyCollector().collect(files) == []


def test_preserves_file_order_and_duplicates(project_builder) -> None:
    project_builder.write(
        {
            "one.ts": "import x from 'express';\nimport { y } from './y';\n",
            "two.ts": "import express from 'express';\n",
        }
    )
    files = [str(project_builder.path("two.ts")), str(project_builder.path("one.ts"))]

    assert DependencyCollector().collect(files) == ["express", "express", "./y"]


def test_unreadable_file_contributes_nothing(project_builder) -> None:
    project_builder.write({"ok.ts": "import './side-effect';\n"})
    files = [str(project_builder.path("missing.ts")), str(project_builder.path("ok.ts"))]

    assert DependencyCollector().collect(files) == ["./side-effect"]


def test_strict_parse_failures_are_skipped(project_builder) -> None:
    project_builder.write(
        {
            "broken.ts": "import { a } from './a';\nconst = ;\n",
            "fine.ts": "import { c } from './c';\n",
        }
    )
    collector = DependencyCollector(ImportExtractor(strict=True))
    files = [str(project_builder.path("broken.ts")), str(project_builder.path("fine.ts"))]

    assert collector.collect(files) == ["./c"]


def test_collect_edges_keeps_source_path(project_builder) -> None:
    project_builder.write({"a.ts": "import { b } from './b';\n"})
    source = str(project_builder.path("a.ts"))

    edges = DependencyCollector().collect_edges([source])

    assert len(edges) == 1
    assert edges[0].source_path == source
    assert edges[0].specifier == "./b"


def test_unique_specifiers_keeps_first_occurrence_order() -> None:
    assert unique_specifiers(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_missing_root_yields_no_files_and_no_dependencies(tmp_path: Path) -> None:
    files = FileScanner().scan(tmp_path / "nowhere")

    assert files == []
    assert DependencyCollector().collect(files) == []
