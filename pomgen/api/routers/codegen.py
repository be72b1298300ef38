from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ...core.errors import CodegenError
from ...core.settings import resolve_output_dir
from ...services.codegen_service import CodegenService
from ...services.project_loader import DEFAULT_PACKAGE, load_project, project_from_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/codegen", tags=["codegen"])


class StepPayload(BaseModel):
    stepName: Optional[str] = None
    action: str
    elemId: str
    varName: Optional[str] = None
    tagName: Optional[str] = None


class ElementPayload(BaseModel):
    xpaths: List[str] = Field(default_factory=list, description="Candidate XPaths, first one is used.")
    descriptor: Dict[str, Any] = Field(default_factory=dict, description="Recorded element descriptor.")


class RecordedTestPayload(BaseModel):
    id: Optional[str] = None
    name: str
    url: str = Field(..., description="URL the test starts on.")
    script: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)
    datasheet: Optional[str] = Field(None, description="Optional Excel/CSV datasheet path on the server.")
    steps: Dict[str, StepPayload] = Field(default_factory=dict)
    elements: Dict[str, ElementPayload] = Field(default_factory=dict)


class ProjectPayload(BaseModel):
    name: str = "project"
    package: str = DEFAULT_PACKAGE
    author: str = ""
    pageMap: Dict[str, str] = Field(default_factory=dict, description="URL pattern -> page class name.")
    tests: List[RecordedTestPayload] = Field(default_factory=list)


class CodegenResponse(BaseModel):
    files: Dict[str, str]
    pages: List[str]
    modules: int


class ProjectFileRequest(BaseModel):
    projectPath: str = Field(..., description="Path of a project JSON file on the server.")
    outputDir: Optional[str] = Field(None, description="Output root; defaults to POMGEN_OUTPUT_DIR.")


class ProjectFileResponse(BaseModel):
    outputDir: str
    written: List[str]


@router.post("/webdriver")
async def generate_webdriver(req: ProjectPayload) -> CodegenResponse:
    try:
        project = project_from_dict(req.model_dump())
        result = CodegenService().generate(project)
    except CodegenError as exc:
        logger.warning(f"[API] Generation failed: {exc}")
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CodegenResponse(**result.to_dict())


@router.post("/webdriver/project-file")
async def generate_from_project_file(req: ProjectFileRequest) -> ProjectFileResponse:
    project_path = Path(req.projectPath).expanduser()
    if not project_path.exists():
        raise HTTPException(status_code=404, detail=f"Project file not found: {req.projectPath}")

    service = CodegenService()
    output_dir = resolve_output_dir(req.outputDir, service.settings)
    try:
        project = load_project(project_path)
        written = service.generate_to_dir(project, output_dir)
    except CodegenError as exc:
        logger.warning(f"[API] Generation failed for {project_path}: {exc}")
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ProjectFileResponse(outputDir=str(output_dir), written=[str(p) for p in written])
