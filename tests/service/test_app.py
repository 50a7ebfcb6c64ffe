"""Tests for the FastAPI service mode."""

from __future__ import annotations

from fastapi.testclient import TestClient

from afritest.config import ConfigError
from afritest.models import ArchitectureReport, PendingArtifact
from afritest.orchestrator import AnalyzeOutcome
from afritest.service import create_app


class _StubOrchestrator:
    def __init__(self) -> None:
        self.analyze_calls: list[dict[str, object]] = []

    def run_analyze(self, path: str, **kwargs) -> AnalyzeOutcome:
        self.analyze_calls.append({"path": path, **kwargs})
        return AnalyzeOutcome(
            files=["src/a.ts", "src/b.ts"],
            dependencies=["./b"],
            unit_artifacts=[
                PendingArtifact(directory="test/unit", file_name="a.ai.spec.ts", content="")
            ],
            integration_artifacts=[],
        )

    def run_architecture(self, path: str) -> ArchitectureReport:
        return ArchitectureReport(
            controllers=1, services=0, repositories=2, total_files=3, total_dependencies=4
        )


def test_health_endpoint() -> None:
    client = TestClient(create_app(_StubOrchestrator))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_endpoint_forwards_options() -> None:
    stub = _StubOrchestrator()
    client = TestClient(create_app(lambda: stub))

    response = client.post(
        "/analyze", json={"path": "src", "integration": False, "concurrency": 2}
    )

    assert response.status_code == 200
    assert response.json() == {
        "files": 2,
        "dependencies": 1,
        "unit": [{"directory": "test/unit", "file_name": "a.ai.spec.ts"}],
        "integration": [],
    }
    assert stub.analyze_calls == [
        {
            "path": "src",
            "unit": True,
            "integration": False,
            "output_dir": None,
            "concurrency": 2,
        }
    ]


def test_architecture_endpoint_returns_counts() -> None:
    client = TestClient(create_app(_StubOrchestrator))

    response = client.post("/architecture", json={"path": "src"})

    body = response.json()
    assert response.status_code == 200
    assert body["repositories"] == 2
    assert body["summary"].startswith("Architecture heuristics")


def test_config_errors_map_to_bad_request() -> None:
    class _Misconfigured(_StubOrchestrator):
        def run_analyze(self, path: str, **kwargs) -> AnalyzeOutcome:
            raise ConfigError("generation.on_failure must be one of: write, skip, scaffold")

    client = TestClient(create_app(_Misconfigured))

    response = client.post("/analyze", json={"path": "src"})

    assert response.status_code == 400
    assert "on_failure" in response.json()["detail"]


def test_analyze_requires_path() -> None:
    client = TestClient(create_app(_StubOrchestrator))

    assert client.post("/analyze", json={}).status_code == 422
