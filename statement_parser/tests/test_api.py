"""
Tests for the FastAPI upload service.
"""
import pytest
from fastapi.testclient import TestClient

from backend.main import app
from ..core.exceptions import DocumentUnreadableError


@pytest.fixture
def client():
    return TestClient(app)


class TestUploadEndpoint:

    def test_health(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_parse_statement(self, client, icici_pdf):
        response = client.post(
            "/api/upload",
            files={"statement": ("icici.pdf", icici_pdf, "application/pdf")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["issuer"] == "ICICI"
        assert data["assetRef"] == "https://i.imgur.com/83p1J4g.png"
        assert data["totalDue"] == "15250.00"
        assert data["dueDate"] == "05-Jan-2025"
        assert data["last4Digits"] == "4321"
        assert data["statementPeriod"] == "N/A"
        assert data["confidence"] == "3/5 fields found"

    def test_no_file(self, client):
        response = client.post("/api/upload")

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded."}

    def test_not_a_pdf(self, client):
        response = client.post(
            "/api/upload",
            files={"statement": ("statement.txt", b"Total Due 1.00", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File must be a PDF"}

    def test_corrupted_pdf(self, client):
        response = client.post(
            "/api/upload",
            files={"statement": ("broken.pdf", b"not really a pdf", "application/pdf")}
        )

        assert response.status_code == 422
        assert response.json() == {"error": DocumentUnreadableError.user_message}


class TestIssuersEndpoint:

    def test_list_issuers(self, client):
        response = client.get("/api/issuers")

        assert response.status_code == 200
        issuers = response.json()["issuers"]
        assert [issuer["name"] for issuer in issuers] == ["SBI", "ICICI", "HDFC", "IndusInd", "Kotak"]
        assert issuers[0]["key"] == "sbi card"


class TestUnexpectedErrors:

    def test_unexpected_error_is_json(self, monkeypatch, icici_pdf):
        import backend.main as main

        class BrokenParser:
            def parse(self, content):
                raise RuntimeError("boom")

        monkeypatch.setattr(main, "get_parser", lambda: BrokenParser())
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post(
            "/api/upload",
            files={"statement": ("icici.pdf", icici_pdf, "application/pdf")}
        )

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert "boom" in response.json()["error"]
