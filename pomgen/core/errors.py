"""Exceptions raised by the code generator.

Every error here aborts the whole generation run: generated pages import each
other and share ``BasePage``, so a partial file set is never usable.
"""

from __future__ import annotations


class CodegenError(RuntimeError):
    """Base class for generation failures."""


class InputIntegrityError(CodegenError):
    """A script references metadata that is not in the project."""


class MissingStepInfoError(InputIntegrityError):
    def __init__(self, step_id: str, test_name: str = "") -> None:
        self.step_id = step_id
        self.test_name = test_name
        where = f" in test '{test_name}'" if test_name else ""
        super().__init__(f"Step '{step_id}'{where} has no recorded step info")


class MissingElementInfoError(InputIntegrityError):
    def __init__(self, elem_id: str, step_id: str = "") -> None:
        self.elem_id = elem_id
        self.step_id = step_id
        where = f" (step '{step_id}')" if step_id else ""
        super().__init__(f"Element '{elem_id}'{where} has no usable element info")


class DataShapeError(CodegenError):
    """A data value has the wrong shape for the step that consumes it."""


class DataConflictError(CodegenError):
    """Two tests define the same key with different values."""

    def __init__(self, table: str, key: str, first, second) -> None:
        self.table = table
        self.key = key
        super().__init__(
            f"Conflicting {table} entry '{key}': {first!r} vs {second!r}"
        )


class ProjectLoadError(CodegenError):
    """A project or datasheet file could not be read."""
