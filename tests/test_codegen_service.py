"""
Tests for the codegen service, the CLI and settings.
"""
import json

from pomgen import codegen_cli
from pomgen.core.settings import GeneratorSettings
from pomgen.services.codegen_service import CodegenService, write_files

from conftest import SHOP_PROJECT as PROJECT


def test_generate_result(click_project, settings):
    result = CodegenService(settings).generate(click_project)

    assert result.pages == ["PageExampleLogin0"]
    assert result.modules == 1
    assert set(result.to_dict()) == {"files", "pages", "modules"}


def test_write_files_uses_package_dirs(tmp_path):
    files = {"PageA0": "class A", "Tests": "class T"}
    written = write_files(files, tmp_path, "com.example.pages", test_package="com.example.tests")

    assert written == [
        tmp_path / "com" / "example" / "pages" / "PageA0.java",
        tmp_path / "com" / "example" / "tests" / "Tests.java",
    ]
    assert written[0].read_text(encoding="utf-8") == "class A"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("POMGEN_SETTLE_DELAY_MS", "100")
    monkeypatch.setenv("POMGEN_WAIT_TIMEOUT_SECONDS", "not-a-number")
    monkeypatch.setenv("POMGEN_TEST_PACKAGE", "com.example.tests")

    settings = GeneratorSettings.from_env(load_env=False)

    assert settings.settle_delay_ms == 100
    assert settings.wait_timeout_seconds == 6
    assert settings.harness_package("com.example.pages") == "com.example.tests"


def test_cli_writes_files(tmp_path, monkeypatch):
    monkeypatch.delenv("POMGEN_TEST_PACKAGE", raising=False)
    project_path = tmp_path / "project.json"
    project_path.write_text(json.dumps(PROJECT), encoding="utf-8")
    out = tmp_path / "out"

    assert codegen_cli.main(["--project", str(project_path), "--out", str(out), "--package", "com.acme"]) == 0

    generated = sorted(p.name for p in (out / "com" / "acme").glob("*.java"))
    assert generated == ["BasePage.java", "CartPage.java", "CustomException.java", "Tests.java"]


def test_cli_dry_run_writes_nothing(tmp_path, capsys):
    project_path = tmp_path / "project.json"
    project_path.write_text(json.dumps(PROJECT), encoding="utf-8")

    assert codegen_cli.main(["--project", str(project_path), "--out", str(tmp_path / "out"), "--dry-run"]) == 0

    assert "CartPage.java" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()


def test_cli_reports_failure(tmp_path):
    assert codegen_cli.main(["--project", str(tmp_path / "missing.json")]) == 1
