"""FastAPI application entrypoint for afritest service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import ConfigError
from ..orchestrator import Orchestrator


class AnalyzeRequest(BaseModel):
    path: str
    unit: bool = True
    integration: bool = True
    output_dir: Optional[str] = None
    concurrency: Optional[int] = None


class ArtifactModel(BaseModel):
    directory: str
    file_name: str


class AnalyzeResponse(BaseModel):
    files: int
    dependencies: int
    unit: List[ArtifactModel]
    integration: List[ArtifactModel]


class ArchitectureRequest(BaseModel):
    path: str


class ArchitectureResponse(BaseModel):
    controllers: int
    services: int
    repositories: int
    total_files: int
    total_dependencies: int
    summary: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing afritest operations."""

    app = FastAPI(title="afritest Service", version=__version__)

    async def get_orchestrator() -> Orchestrator:
        # Fresh orchestrator per request so config is re-read each time.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(
            None,
            lambda: orchestrator.run_analyze(
                payload.path,
                unit=payload.unit,
                integration=payload.integration,
                output_dir=payload.output_dir,
                concurrency=payload.concurrency,
            ),
        )
        return AnalyzeResponse(
            files=len(outcome.files),
            dependencies=len(outcome.dependencies),
            unit=[
                ArtifactModel(directory=a.directory, file_name=a.file_name)
                for a in outcome.unit_artifacts
            ],
            integration=[
                ArtifactModel(directory=a.directory, file_name=a.file_name)
                for a in outcome.integration_artifacts
            ],
        )

    @app.post("/architecture", response_model=ArchitectureResponse)
    async def architecture(
        payload: ArchitectureRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ArchitectureResponse:
        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, orchestrator.run_architecture, payload.path)
        return ArchitectureResponse(
            controllers=report.controllers,
            services=report.services,
            repositories=report.repositories,
            total_files=report.total_files,
            total_dependencies=report.total_dependencies,
            summary=report.render(),
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
