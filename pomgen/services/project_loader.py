"""Reads recorded projects from JSON files or API payloads."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..core.errors import ProjectLoadError
from ..core.models import ElementInfo, Project, RecordedTest, StepInfo
from ..generators.normalizer import merge_table
from .datasheet_service import load_data_dictionary

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE = "com.example.pages"


def _require(payload: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in payload or payload[key] in (None, ""):
        raise ProjectLoadError(f"Missing '{key}' in {where}")
    return payload[key]


def _as_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ProjectLoadError(f"'{where}' must be an object, got {type(value).__name__}")
    return value


def _step_from_dict(step_id: str, payload: Any) -> StepInfo:
    entry = _as_mapping(payload, f"steps.{step_id}")
    return StepInfo(
        step_id=step_id,
        step_name=str(entry.get("stepName") or step_id),
        action=str(_require(entry, "action", f"step '{step_id}'")),
        elem_id=str(_require(entry, "elemId", f"step '{step_id}'")),
        var_name=str(entry.get("varName") or ""),
        tag_name=str(entry.get("tagName") or ""),
    )


def _element_from_dict(elem_id: str, payload: Any) -> ElementInfo:
    entry = _as_mapping(payload, f"elements.{elem_id}")
    xpaths = entry.get("xpaths") or []
    if isinstance(xpaths, str):
        xpaths = [xpaths]
    if not isinstance(xpaths, list):
        raise ProjectLoadError(f"'elements.{elem_id}.xpaths' must be a list")
    descriptor = entry.get("descriptor") or {}
    return ElementInfo(elem_id=elem_id, xpaths=tuple(str(x) for x in xpaths if x), descriptor=descriptor)


def _test_from_dict(payload: Any, index: int, base_dir: Optional[Path]) -> RecordedTest:
    entry = _as_mapping(payload, f"tests[{index}]")
    name = str(_require(entry, "name", f"tests[{index}]"))
    data: Dict[str, Any] = dict(_as_mapping(entry.get("data"), f"tests[{index}].data"))

    datasheet = entry.get("datasheet")
    if datasheet:
        sheet_path = Path(datasheet)
        if not sheet_path.is_absolute() and base_dir is not None:
            sheet_path = base_dir / sheet_path
        merge_table(data, load_data_dictionary(sheet_path), "data")

    steps = _as_mapping(entry.get("steps"), f"tests[{index}].steps")
    elements = _as_mapping(entry.get("elements"), f"tests[{index}].elements")
    return RecordedTest(
        id=str(entry.get("id") or index),
        name=name,
        url=str(_require(entry, "url", f"test '{name}'")),
        script=str(entry.get("script") or ""),
        data=data,
        steps={step_id: _step_from_dict(step_id, step) for step_id, step in steps.items()},
        elements={elem_id: _element_from_dict(elem_id, el) for elem_id, el in elements.items()},
    )


def project_from_dict(payload: Any, base_dir: Optional[Path] = None) -> Project:
    """Build a ``Project`` from the camelCase JSON structure."""
    entry = _as_mapping(payload, "project")
    tests = entry.get("tests") or []
    if not isinstance(tests, list):
        raise ProjectLoadError("'tests' must be a list")
    page_map = _as_mapping(entry.get("pageMap"), "pageMap")

    return Project(
        name=str(entry.get("name") or "project"),
        tests=tuple(_test_from_dict(test, idx, base_dir) for idx, test in enumerate(tests)),
        page_map={str(k): str(v) for k, v in page_map.items()},
        package=str(entry.get("package") or DEFAULT_PACKAGE),
        author=str(entry.get("author") or ""),
    )


def load_project(path: Path) -> Project:
    path = Path(path)
    if not path.exists():
        raise ProjectLoadError(f"Project file not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProjectLoadError(f"Invalid project JSON in {path}: {exc}") from exc

    project = project_from_dict(payload, base_dir=path.parent)
    logger.info(f"[Loader] Loaded project '{project.name}' with {len(project.tests)} tests from {path}")
    return project
