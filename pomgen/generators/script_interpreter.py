"""
Walks recorded test scripts and fills the page models of a generation run.

For every test a ``Module`` is registered on its start page. Each step line
adds (or reuses) a selector declaration and an action method on the page the
browser is on at that point; redirect lines move the walk to another page.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, Optional

from ..core.errors import DataShapeError, InputIntegrityError, MissingElementInfoError, MissingStepInfoError
from ..core.models import (
    DataLiteral,
    ElementInfo,
    GenerationContext,
    MethodRef,
    MethodSignature,
    Module,
    ModuleStep,
    NormalizedTest,
    PageModel,
    SelectorDeclaration,
    StepInfo,
)
from ..recorder.element_descriptor import get_attrs_to_verify, get_tag_name
from ..recorder.script_parser import (
    RedirectToken,
    StepToken,
    following_redirects,
    is_module,
    tokenize_script,
)
from .java_emitter import Actions, JavaEmitter, STRING_DATA_ACTIONS
from .java_templates import JavaTemplate
from .page_router import PageRouter

logger = logging.getLogger(__name__)


def selector_dedup_key(selector: str) -> str:
    return re.sub(r"\W+", "", selector, flags=re.ASCII)


class ScriptInterpreter:
    """Interprets every test of a normalised project into ``context.pages``."""

    def __init__(self, context: GenerationContext, router: PageRouter, emitter: JavaEmitter) -> None:
        self.context = context
        self.router = router
        self.emitter = emitter
        # Current walk state, reset per test.
        self.page: Optional[PageModel] = None
        self.url = ""
        # Java test method name -> test name
        self.test_method_names: Dict[str, str] = {}

    @classmethod
    def for_context(cls, context: GenerationContext, emitter: JavaEmitter, component_limit: int) -> "ScriptInterpreter":
        # Seed pages exist before routing so page creation order follows the seed map.
        for page_name in context.url_page_map.values():
            context.ensure_page(page_name)
        router = PageRouter(
            context.url_page_map,
            component_limit=component_limit,
            on_new_page=context.ensure_page,
        )
        return cls(context, router, emitter)

    def run(self) -> GenerationContext:
        for test in self.context.project.tests:
            self.interpret_test(test)
        return self.context

    def _switch_to(self, url: str) -> None:
        page_name = self.router.resolve(url)
        if self.page is not None and self.page.name == page_name:
            return
        self.page = self.context.ensure_page(page_name)
        self.url = url

    def interpret_test(self, test: NormalizedTest) -> Module:
        # Harness and module methods are named after the Java identifier.
        method_name = JavaTemplate.to_test_method_name(test.name)
        clash = self.test_method_names.get(method_name)
        if clash is not None:
            raise InputIntegrityError(
                f"Tests '{clash}' and '{test.name}' both map to test method '{method_name}'"
            )
        self.test_method_names[method_name] = test.name

        self.page = None
        self._switch_to(test.start_url)
        start_page = self.page
        module = Module(name=test.name, is_module=is_module(test.script), start_url=test.start_url)
        start_page.modules[test.name] = module
        logger.info(f"[Interpret] Test '{test.name}' starts on {start_page.name}")

        tokens = tokenize_script(test.script)
        lookahead = following_redirects(tokens)
        for token, redirect in zip(tokens, lookahead):
            if isinstance(token, StepToken):
                self.interpret_step(token, redirect, module, test.name)
            elif isinstance(token, RedirectToken):
                self._switch_to(token.url)

        final_page = self.page
        if module.is_module:
            start_page.body.append(self.emitter.render_module_method(module, final_page.name))
        start_page.add_import(final_page.name)
        return module

    def interpret_step(
        self,
        token: StepToken,
        redirect: Optional[RedirectToken],
        module: Module,
        test_name: str = "",
    ) -> ModuleStep:
        project = self.context.project
        step = project.steps.get(token.step_id)
        if step is None:
            raise MissingStepInfoError(token.step_id, test_name)
        element = project.elements.get(step.elem_id)
        if element is None or not element.xpaths:
            raise MissingElementInfoError(step.elem_id, token.step_id)

        page = self.page
        action = Actions.VERIFY_NOT if token.action == Actions.VERIFY_NOT else step.action
        return_page = self.router.resolve(redirect.url) if redirect else page.name
        page.add_import(return_page)

        resolved = replace(
            step,
            action=action,
            tag_name=step.tag_name or get_tag_name(element.descriptor),
            page_name=page.name,
            return_page_name=return_page,
            url=self.url,
        )
        self.context.resolved_steps[token.step_id] = resolved

        selector_variable = self.declare_selector(page, element.primary_selector)
        signature = MethodSignature(action=action, selector_variable=selector_variable)
        data = self.data_literal(resolved, element)

        method_name = self.context.method_names.get(signature)
        if method_name is None:
            method_name = JavaTemplate.to_method_name(step.step_name)
            self.context.method_names[signature] = method_name
            page.body.append(self.emitter.render_action_method(resolved, method_name, selector_variable))
        page.methods[step.step_name] = MethodRef(signature=signature, data=data)

        module_step = ModuleStep(original_name=step.step_name, method_name=method_name, data=data)
        module.steps.append(module_step)
        return module_step

    def declare_selector(self, page: PageModel, selector: str) -> str:
        key = selector_dedup_key(selector)
        declaration = page.selectors.get(key)
        if declaration is None:
            declaration = SelectorDeclaration(variable=self.context.next_selector_variable(), value=selector)
            page.selectors[key] = declaration
        return declaration.variable

    def data_literal(self, step: StepInfo, element: ElementInfo) -> DataLiteral:
        """Argument a step is called with: a quoted literal, a map, or "" for none."""
        value = self.context.project.data.get(step.var_name) if step.var_name else None

        if step.action == Actions.VERIFY:
            attrs = get_attrs_to_verify(element.descriptor, JavaTemplate.quote, element.elem_id)
            if attrs:
                return attrs
            if value is None:
                return {}
            if not isinstance(value, dict):
                raise DataShapeError(
                    f"Verify step '{step.step_id}' needs a field/value map for '{step.var_name}', got {value!r}"
                )
            return {str(k): JavaTemplate.quote(v) for k, v in value.items()}

        if step.action not in STRING_DATA_ACTIONS:
            return ""
        if isinstance(value, dict):
            raise DataShapeError(
                f"Step '{step.step_id}' ({step.action}) needs a scalar for '{step.var_name}', got a map"
            )
        return JavaTemplate.quote("" if value is None else value)


def interpret_project(context: GenerationContext, emitter: JavaEmitter, component_limit: int) -> Dict[str, PageModel]:
    ScriptInterpreter.for_context(context, emitter, component_limit).run()
    return context.pages
