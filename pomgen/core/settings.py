from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_COPYRIGHT = "Copyright The pomgen Authors. All Rights Reserved."


def load_env_files() -> None:
    """Load .env from the working directory, then from the repository root."""
    load_dotenv()
    repo_root = Path(__file__).resolve().parents[2]
    root_env = repo_root / ".env"
    if root_env.exists():
        load_dotenv(dotenv_path=root_env, override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"[Settings] Ignoring non-integer {name}={raw!r}, using {default}")
        return default


@dataclass(frozen=True)
class GeneratorSettings:
    settle_delay_ms: int = 600
    wait_timeout_seconds: int = 6
    name_component_limit: int = 20
    copyright: str = DEFAULT_COPYRIGHT
    remote_driver_url: str = "http://127.0.0.1:9515"
    # Falls back to the project package when empty.
    test_package: str = ""
    output_dir: str = "generated"

    @classmethod
    def from_env(cls, load_env: bool = True) -> "GeneratorSettings":
        if load_env:
            load_env_files()
        return cls(
            settle_delay_ms=_int_env("POMGEN_SETTLE_DELAY_MS", cls.settle_delay_ms),
            wait_timeout_seconds=_int_env("POMGEN_WAIT_TIMEOUT_SECONDS", cls.wait_timeout_seconds),
            name_component_limit=_int_env("POMGEN_NAME_COMPONENT_LIMIT", cls.name_component_limit),
            copyright=os.getenv("POMGEN_COPYRIGHT", DEFAULT_COPYRIGHT),
            remote_driver_url=os.getenv("POMGEN_REMOTE_DRIVER_URL", cls.remote_driver_url),
            test_package=os.getenv("POMGEN_TEST_PACKAGE", ""),
            output_dir=os.getenv("POMGEN_OUTPUT_DIR", cls.output_dir),
        )

    def harness_package(self, project_package: str) -> str:
        return self.test_package or project_package


def resolve_output_dir(explicit: Optional[str], settings: GeneratorSettings) -> Path:
    return Path(explicit or settings.output_dir).expanduser().resolve()
