"""Merges the tests of a project into one normalised representation."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, TypeVar

from ..core.errors import DataConflictError
from ..core.models import NormalizedProject, NormalizedTest, Project

logger = logging.getLogger(__name__)

V = TypeVar("V")


def merge_table(target: Dict[str, V], source: Mapping[str, V], table: str) -> Dict[str, V]:
    """Merge ``source`` into ``target``; equal duplicates are fine, different ones are not."""
    for key, value in source.items():
        if key in target and target[key] != value:
            raise DataConflictError(table, key, target[key], value)
        target[key] = value
    return target


def normalize_project(project: Project) -> NormalizedProject:
    tests = []
    data: Dict = {}
    steps: Dict = {}
    elements: Dict = {}

    for test in project.tests:
        if not (test.script or "").strip():
            logger.info(f"[Normalize] Skipping test '{test.name}' with an empty script")
            continue
        tests.append(NormalizedTest(name=test.name, start_url=test.url, script=test.script))
        merge_table(data, test.data, "data")
        merge_table(steps, test.steps, "step")
        merge_table(elements, test.elements, "element")

    logger.info(
        f"[Normalize] {len(tests)} tests, {len(data)} variables, "
        f"{len(steps)} steps, {len(elements)} elements"
    )
    return NormalizedProject(
        name=project.name,
        package=project.package,
        author=project.author,
        tests=tests,
        data=data,
        steps=steps,
        elements=elements,
        url_page_map=dict(project.page_map),
    )
