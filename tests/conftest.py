"""Shared builders for recorded projects used across the test suite."""
from typing import Any, Dict, Optional

import pytest

from pomgen.core.models import ElementInfo, Project, RecordedTest, StepInfo
from pomgen.core.settings import GeneratorSettings

LOGIN_URL = "http://www.example.com/login"
HOME_URL = "http://www.example.com/home"
GO_XPATH = "//button[@id='go']"


def make_step(step_id: str, action: str = "click", elem_id: Optional[str] = None, var_name: str = "") -> StepInfo:
    return StepInfo(
        step_id=step_id,
        step_name=step_id,
        action=action,
        elem_id=elem_id or f"elem-{step_id}",
        var_name=var_name,
    )


def make_element(elem_id: str, xpath: str, descriptor: Optional[Dict[str, Any]] = None) -> ElementInfo:
    return ElementInfo(elem_id=elem_id, xpaths=(xpath,), descriptor=descriptor or {})


def make_test(
    name: str,
    script: str,
    steps=(),
    elements=(),
    url: str = LOGIN_URL,
    data: Optional[Dict[str, Any]] = None,
) -> RecordedTest:
    return RecordedTest(
        id=name,
        name=name,
        url=url,
        script=script,
        data=data or {},
        steps={s.step_id: s for s in steps},
        elements={e.elem_id: e for e in elements},
    )


def make_project(*tests: RecordedTest, page_map: Optional[Dict[str, str]] = None, package: str = "com.example.pages") -> Project:
    return Project(
        name="demo",
        tests=tuple(tests),
        page_map=page_map or {},
        package=package,
        author="qa-team",
    )


def step_line(action: str, step_id: str) -> str:
    return f'{action}(getElem("{step_id}"));'


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings(copyright="Copyright Example Corp.")


@pytest.fixture
def click_project() -> Project:
    """One test: click a button on the login page, no redirect."""
    step = make_step("Click-Go-1", elem_id="go")
    test = make_test(
        "login click",
        step_line("click", "Click-Go-1"),
        steps=[step],
        elements=[make_element("go", GO_XPATH)],
    )
    return make_project(test)


@pytest.fixture
def redirect_project() -> Project:
    """Click on the login page followed by a redirect to the home page."""
    step = make_step("Click-Go-1", elem_id="go")
    script = "\n".join([
        step_line("click", "Click-Go-1"),
        f'redirectTo("{HOME_URL}");',
    ])
    test = make_test("login redirect", script, steps=[step], elements=[make_element("go", GO_XPATH)])
    return make_project(test)


@pytest.fixture
def verify_project() -> Project:
    """A verify step whose descriptor asks for the element text."""
    step = make_step("Verify-Ok-1", action="verify", elem_id="ok")
    descriptor = {
        "tagName": {"value": "SPAN", "show": "ignore"},
        "elementText": {"value": "OK", "show": "must"},
        "checked": {"value": "false", "show": "ignore"},
    }
    test = make_test(
        "verify ok",
        step_line("verify", "Verify-Ok-1"),
        steps=[step],
        elements=[make_element("ok", "//span[@class='status']", descriptor)],
    )
    return make_project(test)


# JSON payload of a one-test project, as read from disk or posted to the API.
SHOP_PROJECT = {
    "name": "shop",
    "package": "com.shop.pages",
    "author": "qa",
    "pageMap": {"shop.example.com/cart": "CartPage"},
    "tests": [
        {
            "id": "t1",
            "name": "add to cart",
            "url": "https://shop.example.com/cart",
            "script": 'type(getElem("Type-Qty-1"));',
            "data": {"qty": "2"},
            "steps": {
                "Type-Qty-1": {"stepName": "Type-Qty-1", "action": "type", "elemId": "qty", "varName": "qty"},
            },
            "elements": {"qty": {"xpaths": ["//input[@name='qty']", "//input[1]"], "descriptor": {}}},
        }
    ],
}
