"""
tests/test_api.py
-----------------
Integration tests for the FastAPI endpoints.
Run with:  python -m pytest tests/ -v
"""

import sys
import os

# Make sure project root is in path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
# Empty value survives load_dotenv, keeping the embedded table
os.environ["ICD10_TABLE_PATH"] = ""

from fastapi.testclient import TestClient

import main
from main import app

client = TestClient(app)


class TestServiceEndpoints:

    def test_root_banner(self):
        response = client.get("/")
        assert response.status_code == 200
        assert "version" in response.json()

    def test_health_reports_table(self):
        body = client.get("/health").json()
        assert body["status"] == "running"
        assert body["table_size"] == 5
        assert body["vocabulary_size"] == 13


class TestAnalyzeEndpoint:

    def test_analyze_sentence(self):
        response = client.post("/analyze", json={"text": "Patient has diabetes and cholera"})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["analysis_id"]
        assert body["token_count"] == 3
        assert body["matched_count"] == 2

        messages = [r["message"] for r in body["results"]]
        assert messages == [
            "patient not found and no suggestions.",
            "diabetes → E11 – Type 2 diabetes mellitus",
            "cholera → A00 – Cholera",
        ]

    def test_suggestion_message(self):
        body = client.post("/analyze", json={"text": "anemic"}).json()
        assert body["results"][0]["suggestion"] == "anemia"
        assert body["results"][0]["message"] == "anemic not found – did you mean anemia?"

    def test_empty_text(self):
        body = client.post("/analyze", json={}).json()
        assert body["results"] == []
        assert body["token_count"] == 0

    def test_malformed_body_rejected(self):
        response = client.post("/analyze", json=["not", "an", "object"])
        assert response.status_code == 422

    def test_engine_failure_returns_500(self, monkeypatch):
        def fail(text):
            raise RuntimeError("engine exploded")

        monkeypatch.setattr(main.term_engine, "analyze_text", fail)
        response = client.post("/analyze", json={"text": "cholera"})
        assert response.status_code == 500
        assert "Analysis failed" in response.json()["detail"]


class TestSearchEndpoints:

    def test_search_by_code(self):
        body = client.get("/search", params={"q": "A00"}).json()
        assert body["count"] == 1
        assert body["results"] == [{"code": "A00", "description": "Cholera"}]

    def test_search_empty_lists_table(self):
        body = client.get("/search").json()
        assert body["count"] == 5
        assert [r["code"] for r in body["results"]] == ["A00", "B01", "C34", "D50", "E11"]

    def test_icd10_lookup(self):
        body = client.get("/codes/icd10", params={"q": "cholera"}).json()
        assert body["matched"] is True
        assert body["code"] == "A00"

    def test_icd10_requires_query(self):
        body = client.get("/codes/icd10").json()
        assert "error" in body

    def test_vocabulary(self):
        body = client.get("/vocabulary").json()
        assert body["count"] == 13
        assert body["words"][0] == "cholera"
