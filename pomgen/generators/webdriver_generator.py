"""
WebDriver page-object generator: recorded project in, Java sources out.

    files = generate_webdriver_code(project)
    files["PageExampleLogin0"]  # -> Java source text

Pipeline: normalise the tests, interpret every script into page models,
render the page models plus BasePage, CustomException and the Tests harness.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..core.models import GenerationContext, Project
from ..core.settings import GeneratorSettings
from .java_emitter import JavaEmitter
from .normalizer import normalize_project
from .script_interpreter import interpret_project

logger = logging.getLogger(__name__)


def run_generation(
    project: Project,
    settings: Optional[GeneratorSettings] = None,
) -> Tuple[GenerationContext, Dict[str, str]]:
    """Run the whole pipeline and return the finished context with the files."""
    settings = settings or GeneratorSettings()
    normalized = normalize_project(project)
    context = GenerationContext(project=normalized)
    emitter = JavaEmitter(
        settings,
        package=normalized.package,
        author=normalized.author,
        project_name=normalized.name,
    )
    interpret_project(context, emitter, settings.name_component_limit)
    files = emitter.emit_files(context)
    logger.info(f"[Generator] Project '{project.name}' -> {len(files)} files")
    return context, files


def generate_webdriver_code(project: Project, settings: Optional[GeneratorSettings] = None) -> Dict[str, str]:
    _, files = run_generation(project, settings)
    return files
