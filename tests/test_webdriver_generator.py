"""
End-to-end tests for generate_webdriver_code.
"""
from dataclasses import replace

from pomgen.generators.webdriver_generator import generate_webdriver_code, run_generation

from conftest import make_element, make_project, make_step, make_test, step_line


def test_output_order(redirect_project, settings):
    files = generate_webdriver_code(redirect_project, settings)
    assert list(files) == ["PageExampleLogin0", "PageExampleHome1", "BasePage", "CustomException", "Tests"]


def test_repeated_runs_are_identical(redirect_project, verify_project, settings):
    project = make_project(*redirect_project.tests, *verify_project.tests)
    assert generate_webdriver_code(project, settings) == generate_webdriver_code(project, settings)


def test_input_project_is_not_mutated(redirect_project, settings):
    run_generation(redirect_project, settings)
    assert redirect_project.page_map == {}
    assert redirect_project.tests[0].steps["Click-Go-1"].page_name == ""


def test_methods_are_shared_across_tests(settings):
    """Two tests clicking the same selector on the same page reuse one method"""
    step = make_step("Click-Go-1", elem_id="go")
    elements = [make_element("go", "//button")]
    first = make_test("first", step_line("click", "Click-Go-1"), steps=[step], elements=elements)
    second = make_test("second", step_line("click", "Click-Go-1"), steps=[step], elements=elements)

    context, files = run_generation(make_project(first, second), settings)

    assert context.module_count() == 2
    assert files["PageExampleLogin0"].count("public PageExampleLogin0 clickGo1()") == 1
    assert files["Tests"].count("page.clickGo1();") == 2


def test_test_package_setting(click_project, settings):
    files = generate_webdriver_code(click_project, replace(settings, test_package="com.example.tests"))
    assert "package com.example.tests;" in files["Tests"]
    assert "import com.example.pages.PageExampleLogin0;" in files["Tests"]


def test_settle_delay_setting(click_project, settings):
    page = generate_webdriver_code(click_project, replace(settings, settle_delay_ms=250))["PageExampleLogin0"]
    assert "    sleep(250);" in page
