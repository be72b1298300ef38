"""CLI for generating Java WebDriver page objects from a recorded project.

Usage:
    # Generate into ./generated (or POMGEN_OUTPUT_DIR)
    python -m pomgen.codegen_cli --project recordings/login/project.json

    # Override package and author, print the file list without writing
    python -m pomgen.codegen_cli --project project.json --package com.acme.pages --author qa --dry-run
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from pomgen.core.errors import CodegenError
from pomgen.core.settings import GeneratorSettings, resolve_output_dir
from pomgen.services.codegen_service import CodegenService, write_files
from pomgen.services.project_loader import load_project

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="pomgen - compile recorded browser tests into Java WebDriver page objects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--project",
        type=Path,
        required=True,
        help="Recorded project JSON file"
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output root directory (default: POMGEN_OUTPUT_DIR or ./generated)"
    )
    parser.add_argument(
        "--package",
        default=None,
        help="Java package of the generated pages (overrides the project file)"
    )
    parser.add_argument(
        "--author",
        default=None,
        help="@author line of the generated classes (overrides the project file)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate and list the files without writing them"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = GeneratorSettings.from_env()
    service = CodegenService(settings)

    try:
        project = load_project(args.project)
        if args.package is not None or args.author is not None:
            project = replace(
                project,
                package=project.package if args.package is None else args.package,
                author=project.author if args.author is None else args.author,
            )
        result = service.generate(project)
    except CodegenError as exc:
        logger.error(f"[CLI] Generation failed: {exc}")
        return 1

    if args.dry_run:
        for name in result.files:
            print(f"{name}.java")
        logger.info(f"[CLI] Dry run: {len(result.files)} files, {result.modules} test methods")
        return 0

    output_dir = resolve_output_dir(str(args.out) if args.out else None, settings)
    written = write_files(
        result.files,
        output_dir,
        project.package,
        test_package=settings.harness_package(project.package),
    )
    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
