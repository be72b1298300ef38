"""Typed records shared by the normalizer, router, interpreter and emitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple, Union

# A scalar test value or a field/value map used by verification steps.
DataValue = Union[str, int, float, bool, Dict[str, Any]]

# "" means "no argument", otherwise a quoted Java literal or a map of
# field name -> quoted Java literal.
DataLiteral = Union[str, Dict[str, str]]


@dataclass(frozen=True)
class StepInfo:
    step_id: str
    step_name: str
    action: str
    elem_id: str
    var_name: str = ""
    tag_name: str = ""
    # Filled on the resolved copy kept by the generation context.
    page_name: str = ""
    return_page_name: str = ""
    url: str = ""


@dataclass(frozen=True)
class ElementInfo:
    elem_id: str
    xpaths: Tuple[str, ...]
    descriptor: Mapping[str, Any] = field(default_factory=dict)

    @property
    def primary_selector(self) -> str:
        return self.xpaths[0]


@dataclass(frozen=True)
class RecordedTest:
    id: str
    name: str
    url: str
    script: str
    data: Mapping[str, DataValue] = field(default_factory=dict)
    steps: Mapping[str, StepInfo] = field(default_factory=dict)
    elements: Mapping[str, ElementInfo] = field(default_factory=dict)


@dataclass(frozen=True)
class Project:
    name: str
    tests: Tuple[RecordedTest, ...]
    page_map: Mapping[str, str] = field(default_factory=dict)
    package: str = "com.example.pages"
    author: str = ""


@dataclass(frozen=True)
class MethodSignature:
    """Identity of a generated action method: one per (action, selector) pair."""

    action: str
    selector_variable: str


@dataclass
class MethodRef:
    signature: MethodSignature
    data: DataLiteral


@dataclass(frozen=True)
class SelectorDeclaration:
    variable: str
    value: str


@dataclass
class ModuleStep:
    original_name: str
    method_name: str
    data: DataLiteral


@dataclass
class Module:
    name: str
    is_module: bool
    start_url: str
    steps: List[ModuleStep] = field(default_factory=list)


@dataclass
class PageModel:
    """Mutable accumulator for one generated page class."""

    name: str
    # dedup key -> declaration, insertion ordered
    selectors: Dict[str, SelectorDeclaration] = field(default_factory=dict)
    # original step name -> method reference
    methods: Dict[str, MethodRef] = field(default_factory=dict)
    modules: Dict[str, Module] = field(default_factory=dict)
    # ordered set of page names
    custom_imports: Dict[str, None] = field(default_factory=dict)
    body: List[str] = field(default_factory=list)

    @property
    def properties(self) -> List[SelectorDeclaration]:
        return list(self.selectors.values())

    def add_import(self, page_name: str) -> None:
        if page_name and page_name != self.name:
            self.custom_imports.setdefault(page_name, None)


@dataclass(frozen=True)
class NormalizedTest:
    name: str
    start_url: str
    script: str


@dataclass
class NormalizedProject:
    """Project data merged across tests, ready for interpretation."""

    name: str
    package: str
    author: str
    tests: List[NormalizedTest]
    data: Dict[str, DataValue]
    steps: Dict[str, StepInfo]
    elements: Dict[str, ElementInfo]
    url_page_map: Dict[str, str]

    @property
    def scripts(self) -> List[str]:
        return [t.script for t in self.tests]

    @property
    def start_urls(self) -> List[str]:
        return [t.start_url for t in self.tests]

    @property
    def test_names(self) -> List[str]:
        return [t.name for t in self.tests]


@dataclass
class GenerationContext:
    """All mutable state of one generation run."""

    project: NormalizedProject
    pages: Dict[str, PageModel] = field(default_factory=dict)
    selector_index: int = 0
    # signature -> generated method name, shared by every page of the run
    method_names: Dict[MethodSignature, str] = field(default_factory=dict)
    # step id -> StepInfo copy with page/return page/url resolved
    resolved_steps: Dict[str, StepInfo] = field(default_factory=dict)

    @property
    def url_page_map(self) -> Dict[str, str]:
        return self.project.url_page_map

    def ensure_page(self, page_name: str) -> PageModel:
        page = self.pages.get(page_name)
        if page is None:
            page = PageModel(name=page_name)
            self.pages[page_name] = page
        return page

    def next_selector_variable(self) -> str:
        name = f"selector{self.selector_index}"
        self.selector_index += 1
        return name

    def module_count(self) -> int:
        return sum(len(page.modules) for page in self.pages.values())
