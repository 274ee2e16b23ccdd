"""Tests for FastAPI application."""

import pytest
from fastapi.testclient import TestClient

from sfpackage.api.app import app

DIFF = (
    "M\tforce-app/main/default/classes/Foo.cls\n"
    "M\tforce-app/main/default/classes/Foo.cls-meta.xml\n"
    "D\tforce-app/main/default/objects/Account/fields/Old__c.field-meta.xml\n"
    "C\tforce-app/main/default/classes/Copy.cls\n"
)


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestAPIEndpoints:
    """Test API endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "sfpackage API"
        assert "version" in data
        assert "endpoints" in data

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_version_endpoint(self, client):
        response = client.get("/version")
        assert response.status_code == 200
        data = response.json()
        assert data["api_version"] == "v1"
        assert "default_package_version" in data
        assert "supported_features" in data

    def test_manifest_validation(self, client):
        response = client.post("/manifest", json={})
        assert response.status_code == 422

        response = client.post("/manifest", json={"diff": "", "source_root": "/"})
        assert response.status_code == 422

        response = client.post("/manifest", json={"diff": "", "api_version": 0})
        assert response.status_code == 422

    def test_manifest(self, client):
        response = client.post("/manifest", json={"diff": DIFF, "api_version": 48})
        assert response.status_code == 200

        body = response.json()
        assert body["ok"] is True
        data = body["data"]
        assert data["package"] == {
            "types": [{"folder": "classes", "name": "ApexClass", "members": ["Foo"]}],
            "version": "48",
        }
        assert data["destructive"]["types"] == [
            {"folder": "fields", "name": "CustomField", "members": ["Account.Old__c"]}
        ]
        assert "<members>Foo</members>" in data["package_xml"]
        assert "<members>Account.Old__c</members>" in data["destructive_xml"]
        assert data["deletes_occurred"] is True
        assert data["staged_paths"] == [
            "force-app/main/default/classes/Foo.cls",
            "force-app/main/default/classes/Foo.cls-meta.xml",
        ]
        assert [w["details"]["status"] for w in data["warnings"]] == ["C"]
        assert data["conflicts"] == []

    def test_manifest_destructive_only(self, client):
        response = client.post(
            "/manifest", json={"diff": DIFF, "destructive_only": True}
        )

        data = response.json()["data"]
        assert data["package"]["types"] == []
        assert data["staged_paths"] == []
        assert data["destructive"]["types"][0]["members"] == ["Account.Old__c"]

    def test_manifest_empty_diff(self, client):
        response = client.post("/manifest", json={"diff": ""})

        data = response.json()["data"]
        assert data["package"]["types"] == []
        assert data["destructive"]["types"] == []
        assert data["package_xml"].startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert data["deletes_occurred"] is False

    def test_manifest_truncated_path(self, client):
        response = client.post(
            "/manifest", json={"diff": "M\tforce-app/main/default/classes\n"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "UNPROCESSABLE_PATH"
        assert body["error"]["details"]["path"] == "force-app/main/default/classes"
