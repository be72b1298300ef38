"""Service helpers for WebDriver code generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.models import Project
from ..core.settings import GeneratorSettings
from ..generators.java_emitter import TEST_HARNESS
from ..generators.webdriver_generator import run_generation

logger = logging.getLogger(__name__)

JAVA_SUFFIX = ".java"


@dataclass
class CodegenResult:
    files: Dict[str, str]
    pages: List[str] = field(default_factory=list)
    modules: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": self.files,
            "pages": self.pages,
            "modules": self.modules,
        }


def package_dir(output_dir: Path, package: str) -> Path:
    target = Path(output_dir)
    for part in (package or "").split("."):
        if part:
            target = target / part
    return target


def write_files(
    files: Dict[str, str],
    output_dir: Path,
    package: str,
    test_package: Optional[str] = None,
) -> List[Path]:
    """Write ``<output_dir>/<package path>/<Name>.java``; the harness goes to the test package."""
    written: List[Path] = []
    for name, text in files.items():
        pkg = (test_package or package) if name == TEST_HARNESS else package
        target_dir = package_dir(output_dir, pkg)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}{JAVA_SUFFIX}"
        path.write_text(text, encoding="utf-8")
        written.append(path)
    logger.info(f"[Codegen] Wrote {len(written)} files under {output_dir}")
    return written


class CodegenService:
    """Facade around the generator pipeline with settings and file output."""

    def __init__(self, settings: Optional[GeneratorSettings] = None) -> None:
        self.settings = settings or GeneratorSettings.from_env()

    def generate(self, project: Project) -> CodegenResult:
        context, files = run_generation(project, self.settings)
        return CodegenResult(
            files=files,
            pages=list(context.pages),
            modules=context.module_count(),
        )

    def generate_to_dir(self, project: Project, output_dir: Path) -> List[Path]:
        # Nothing is written unless generation completed.
        result = self.generate(project)
        return write_files(
            result.files,
            output_dir,
            project.package,
            test_package=self.settings.harness_package(project.package),
        )
