"""
Tests for the HTTP API.
"""
import json

from fastapi.testclient import TestClient

from pomgen.api.main import app

from conftest import SHOP_PROJECT as PROJECT

client = TestClient(app)


def test_healthz():
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["service"] == "pomgen"


def test_generate_webdriver():
    response = client.post("/codegen/webdriver", json=PROJECT)

    assert response.status_code == 200
    body = response.json()
    assert body["pages"] == ["CartPage"]
    assert body["modules"] == 1
    assert list(body["files"]) == ["CartPage", "BasePage", "CustomException", "Tests"]
    assert "public CartPage typeQty1(String data) {" in body["files"]["CartPage"]


def test_generate_webdriver_missing_step_is_422():
    payload = json.loads(json.dumps(PROJECT))
    payload["tests"][0]["steps"] = {}

    response = client.post("/codegen/webdriver", json=payload)

    assert response.status_code == 422
    assert "Type-Qty-1" in response.json()["detail"]


def test_generate_from_project_file(tmp_path):
    project_path = tmp_path / "project.json"
    project_path.write_text(json.dumps(PROJECT), encoding="utf-8")

    response = client.post(
        "/codegen/webdriver/project-file",
        json={"projectPath": str(project_path), "outputDir": str(tmp_path / "out")},
    )

    assert response.status_code == 200
    written = response.json()["written"]
    assert len(written) == 4
    assert any(path.endswith("CartPage.java") for path in written)


def test_generate_from_missing_project_file(tmp_path):
    response = client.post("/codegen/webdriver/project-file", json={"projectPath": str(tmp_path / "nope.json")})
    assert response.status_code == 404
