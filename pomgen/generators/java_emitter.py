"""
Renders page models into Java WebDriver source text.

The interpreter calls ``render_action_method`` / ``render_module_method``
while it walks the scripts and appends the result to the page body; once all
tests are interpreted ``emit_files`` serialises every page together with the
fixed BasePage / CustomException files and the test harness.
"""
from __future__ import annotations

import logging
from typing import Dict, List

from ..core.models import (
    DataLiteral,
    GenerationContext,
    Module,
    PageModel,
    SelectorDeclaration,
    StepInfo,
)
from ..core.settings import GeneratorSettings
from .java_templates import HARNESS_IMPORTS, JAVA_IMPORTS, JavaTemplate

logger = logging.getLogger(__name__)

BASE_PAGE = "BasePage"
CUSTOM_EXCEPTION = "CustomException"
TEST_HARNESS = "Tests"


class Actions:
    CLICK = "click"
    TYPE = "type"
    CHANGE = "change"
    VERIFY = "verify"
    VERIFY_NOT = "verifyNot"
    SUBMIT = "submit"
    SELECT = "select"


STRING_DATA_ACTIONS = {Actions.TYPE, Actions.CHANGE, Actions.SELECT, Actions.VERIFY_NOT}
MAP_TYPE = "HashMap<String, String>"


def has_data(data: DataLiteral) -> bool:
    return isinstance(data, dict) or bool(data)


def data_param(action: str) -> str:
    if action in STRING_DATA_ACTIONS:
        return "String data"
    if action == Actions.VERIFY:
        return f"{MAP_TYPE} data"
    return ""


def element_lookup(selector_variable: str, action: str) -> List[str]:
    wait_lines = [
        "element = wait.until(",
        f"    waitAndGetElement(By.xpath({selector_variable})));",
    ]
    if action != Actions.VERIFY_NOT:
        return wait_lines
    return (
        ["Boolean isThrow = true;", "try {"]
        + JavaTemplate.add_indentations(2, wait_lines)
        + [
            "} catch (Exception e) {",
            "  isThrow = false;",
            "}",
            "if (isThrow) {",
            '  throw new CustomException("Element exists error.");',
            "}",
        ]
    )


def action_commands(action: str) -> List[str]:
    if action == Actions.CLICK:
        return ["element.click();"]
    if action in (Actions.TYPE, Actions.CHANGE):
        return ["element.clear();", "element.sendKeys(data);"]
    if action == Actions.VERIFY:
        return ["verifyElement(element, data);"]
    if action == Actions.SUBMIT:
        return ["element.submit();"]
    if action == Actions.SELECT:
        return ["selectOption(element, data);"]
    return []


class JavaEmitter:
    def __init__(self, settings: GeneratorSettings, package: str, author: str, project_name: str = "") -> None:
        self.settings = settings
        self.package = package
        self.author = author
        self.project_name = project_name

    # ------------------------------------------------------------------
    # Pieces appended during interpretation
    # ------------------------------------------------------------------

    @staticmethod
    def render_selector_declaration(declaration: SelectorDeclaration) -> List[str]:
        return [
            f"private static final String {declaration.variable} =",
            f'    "{JavaTemplate.escape_double_quotes(declaration.value)}";',
        ]

    def render_action_method(self, step: StepInfo, method_name: str, selector_variable: str) -> str:
        return_page = step.return_page_name
        doc = JavaTemplate.java_doc([
            f"Performs a {step.action} on a {step.tag_name or 'web'} element.",
            "",
            f"@return Instance of {return_page}",
        ])
        body = [
            f'logger.log(Level.INFO, "{method_name} started.");',
            f'logDebugInfo("{JavaTemplate.escape_double_quotes(step.step_id)}");',
            f"sleep({self.settings.settle_delay_ms});",
        ]
        body += element_lookup(selector_variable, step.action)
        body += action_commands(step.action)
        body.append(f"return new {return_page}(driver);")

        lines = doc + [f"public {return_page} {method_name}({data_param(step.action)}) {{"]
        lines += JavaTemplate.add_indentations(2, body)
        lines.append("}")
        return "\n".join([""] + JavaTemplate.add_indentations(2, lines))

    def render_module_method(self, module: Module, return_page: str) -> str:
        method_name = JavaTemplate.to_test_method_name(module.name)
        doc = JavaTemplate.java_doc([
            f"Performs a sequence of actions for {module.name}.",
            "",
            f"@return Instance of {return_page}",
        ])
        body = [f'logger.log(Level.INFO, "{JavaTemplate.escape_double_quotes(module.name)} started.");']

        params: List[str] = []
        index = 0
        chain: List[str] = []
        for i, step in enumerate(module.steps):
            prefix = "return this" if i == 0 else "    "
            args: List[str] = []
            if has_data(step.data):
                var_id = f"data{index}"
                index += 1
                args.append(var_id)
                arg_type = MAP_TYPE if isinstance(step.data, dict) else "String"
                params.append(f"{arg_type} {var_id}")
            chain.append(f"{prefix}.{step.method_name}({', '.join(args)})")
        if chain:
            chain[-1] += ";"
        else:
            chain.append("return this;")
        body += chain

        lines = doc + [f"public {return_page} {method_name}({', '.join(params)}) {{"]
        lines += JavaTemplate.add_indentations(2, body)
        lines.append("}")
        return "\n".join([""] + JavaTemplate.add_indentations(2, lines))

    # ------------------------------------------------------------------
    # Whole files
    # ------------------------------------------------------------------

    def _imports(self, names) -> List[str]:
        if not self.package:
            return []
        return [f"import {self.package}.{name};" for name in names]

    def render_page(self, page: PageModel) -> str:
        lines = JavaTemplate.header(self.settings.copyright, self.package)
        lines += JAVA_IMPORTS + [""]
        custom = self._imports([BASE_PAGE] + list(page.custom_imports))
        if custom:
            lines += custom + [""]
        lines += JavaTemplate.class_doc(
            f"The {page.name} class which contains its locators and actions.", self.author
        )
        lines.append(f"public class {page.name} extends {BASE_PAGE} {{")
        lines += JavaTemplate.add_indentations(2, JavaTemplate.logger_field(page.name))
        for declaration in page.properties:
            lines += JavaTemplate.add_indentations(2, self.render_selector_declaration(declaration))
        lines.append("")
        lines += JavaTemplate.add_indentations(2, [
            f"public {page.name}(WebDriver driver) {{",
            "  super(driver);",
            "}",
        ])
        lines += page.body
        lines += ["}", ""]
        return "\n".join(lines)

    def _header_text(self, package: str) -> str:
        return "\n".join(JavaTemplate.header(self.settings.copyright, package))

    def render_base_page(self) -> str:
        return JavaTemplate.render("BasePage.java.template", {
            "HEADER": self._header_text(self.package),
            "IMPORTS": "\n".join(JAVA_IMPORTS),
            "CLASS_DOC": "\n".join(JavaTemplate.class_doc(
                "The base class of every generated page.", self.author)),
            "WAIT_SECONDS": str(self.settings.wait_timeout_seconds),
            "PROJECT": JavaTemplate.escape_double_quotes(self.project_name),
            "PACKAGE": JavaTemplate.escape_double_quotes(self.package),
        })

    def render_exception(self) -> str:
        return JavaTemplate.render("CustomException.java.template", {
            "HEADER": self._header_text(self.package),
            "CLASS_DOC": "\n".join(JavaTemplate.class_doc("The exception class.", self.author)),
        })

    def render_test_harness(self, pages: Dict[str, PageModel]) -> str:
        test_package = self.settings.harness_package(self.package)
        methods: List[str] = []
        for page in pages.values():
            for module in page.modules.values():
                methods += self.render_test_method(page.name, module)

        return JavaTemplate.render("Tests.java.template", {
            "HEADER": self._header_text(test_package),
            "IMPORTS": "\n".join(HARNESS_IMPORTS),
            "PAGE_IMPORTS": "\n".join(self._imports(pages)),
            "CLASS_DOC": "\n".join(JavaTemplate.class_doc("The test file.", self.author)),
            "LOGGER": "\n".join(JavaTemplate.add_indentations(2, JavaTemplate.logger_field(TEST_HARNESS))),
            "DRIVER_URL": JavaTemplate.escape_double_quotes(self.settings.remote_driver_url),
            "TEST_METHODS": "\n".join(methods),
        })

    def render_test_method(self, page_name: str, module: Module) -> List[str]:
        method_name = JavaTemplate.to_test_method_name(module.name)
        lines = [
            "",
            "  @Test",
            f"  public void {method_name}() {{",
            f'    driver.get("{JavaTemplate.escape_double_quotes(module.start_url)}");',
            f"    {page_name} page = new {page_name}(driver);",
        ]
        lines += JavaTemplate.add_indentations(4, self.test_method_body(module))
        lines.append("  }")
        return lines

    @staticmethod
    def test_method_body(module: Module) -> List[str]:
        """Declarations for map arguments followed by the calls.

        Composite modules are called once with every argument; plain tests
        chain the individual step methods.
        """
        declarations: List[str] = []
        args: List[str] = []
        calls: List[str] = []
        variable_index = 0

        for i, step in enumerate(module.steps):
            prefix = "page" if i == 0 else "    "
            data = step.data
            if isinstance(data, dict):
                var_name = f"data{variable_index}"
                variable_index += 1
                declarations.append(f"{MAP_TYPE} {var_name} = new HashMap<>();")
                for key, value in data.items():
                    literal = value or '""'
                    declarations.append(
                        f'{var_name}.put("{JavaTemplate.escape_double_quotes(key)}", {literal});'
                    )
                data = var_name
            if data:
                args.append(data)
            calls.append(f"{prefix}.{step.method_name}({data})")

        if module.is_module:
            method_name = JavaTemplate.to_test_method_name(module.name)
            return declarations + [f"page.{method_name}({', '.join(args)});"]
        if calls:
            calls[-1] += ";"
        return declarations + calls

    def emit_files(self, context: GenerationContext) -> Dict[str, str]:
        files: Dict[str, str] = {}
        for name, page in context.pages.items():
            files[name] = self.render_page(page)
        files[BASE_PAGE] = self.render_base_page()
        files[CUSTOM_EXCEPTION] = self.render_exception()
        files[TEST_HARNESS] = self.render_test_harness(context.pages)
        logger.info(f"[Emit] Rendered {len(context.pages)} pages and {context.module_count()} test methods")
        return files
