"""
tests/test_api.py — End-to-end tests for the HTTP API.

Runs the FastAPI app against an in-memory SQLite database with no LLM
provider configured, so intent always comes from the local heuristic.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.db.models import Base
from app.db.session import get_db
from app.services.scoring import BatchScoringError, ScoringEngine
from api.dependencies import get_engine
from api.main import app


OFFER = {
    "name": "AI Outreach Automation",
    "value_props": ["24/7 outreach", "6x more meetings"],
    "ideal_use_cases": ["B2B SaaS mid-market", "Sales teams"],
}

LEADS_CSV = (
    b"name,role,company,industry,location,linkedin_bio\n"
    b"Ava Patel,Head of Growth,FlowMetrics,B2B SaaS,San Francisco,Growth lead\n"
    b"Ben Ortiz,Developer,ShopCo,Retail,Austin,\n"
    b"Cara Lin,,DataWorks,Technology,Remote,Missing role\n"
)


@pytest.fixture
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def _get_db():
        db = TestingSession()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_engine] = lambda: ScoringEngine()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    engine.dispose()


def _upload(client, content=LEADS_CSV, filename="leads.csv"):
    return client.post("/api/leads/upload", files={"file": (filename, content, "text/csv")})


# ── System ────────────────────────────────────────────────────────────────────

def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


# ── Offer ─────────────────────────────────────────────────────────────────────

class TestOfferRoutes:
    def test_create_and_fetch_latest(self, client):
        created = client.post("/api/offer", json=OFFER)
        assert created.status_code == 201
        assert created.json()["name"] == OFFER["name"]

        latest = client.get("/api/offer")
        assert latest.status_code == 200
        assert latest.json()["ideal_use_cases"] == OFFER["ideal_use_cases"]
        assert len(client.get("/api/offer/all").json()) == 1

    def test_no_offer_is_404(self, client):
        assert client.get("/api/offer").status_code == 404

    @pytest.mark.parametrize("payload", [
        {"name": "X", "value_props": [], "ideal_use_cases": ["a"]},
        {"name": " ", "value_props": ["a"], "ideal_use_cases": ["a"]},
        {"name": "X", "value_props": ["a"]},
    ])
    def test_invalid_offer_is_422(self, client, payload):
        assert client.post("/api/offer", json=payload).status_code == 422


# ── Leads ─────────────────────────────────────────────────────────────────────

class TestLeadRoutes:
    def test_upload_requires_offer(self, client):
        assert _upload(client).status_code == 404

    def test_upload_skips_invalid_rows(self, client):
        client.post("/api/offer", json=OFFER)
        response = _upload(client)

        assert response.status_code == 201
        body = response.json()
        assert body["leads_count"] == 2
        assert body["invalid_count"] == 1
        assert body["invalid_rows"][0]["line"] == 4

        batch = client.get(f"/api/leads/batch/{body['batch_id']}").json()
        assert [lead["name"] for lead in batch] == ["Ava Patel", "Ben Ortiz"]
        assert len(client.get("/api/leads").json()) == 2

    def test_non_csv_rejected(self, client):
        client.post("/api/offer", json=OFFER)
        assert _upload(client, filename="leads.xlsx").status_code == 400

    def test_missing_columns_rejected(self, client):
        client.post("/api/offer", json=OFFER)
        response = _upload(client, content=b"name,role\nAva,CEO\n")
        assert response.status_code == 400
        assert "Missing required columns" in response.json()["detail"]

    def test_unknown_batch_is_404(self, client):
        assert client.get("/api/leads/batch/batch_nope").status_code == 404

    def test_oversized_upload_rejected(self, client):
        client.post("/api/offer", json=OFFER)
        row = b"Ava Patel,Head of Growth,FlowMetrics,B2B SaaS,San Francisco,Growth lead\n"
        content = LEADS_CSV + row * (6 * 1024 * 1024 // len(row))

        response = _upload(client, content=content)

        assert response.status_code == 400
        assert response.json()["detail"] == "File too large"
        assert client.get("/api/leads").json() == []

    def test_upload_at_limit_accepted(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_bytes", len(LEADS_CSV))
        client.post("/api/offer", json=OFFER)

        assert _upload(client).status_code == 201
        assert _upload(client, content=LEADS_CSV + b"x").status_code == 400


# ── Scoring + results ─────────────────────────────────────────────────────────

class TestScoringFlow:
    def _batch(self, client) -> str:
        client.post("/api/offer", json=OFFER)
        return _upload(client).json()["batch_id"]

    def test_score_batch(self, client):
        batch_id = self._batch(client)

        response = client.post("/api/score", json={"batch_id": batch_id})

        assert response.status_code == 200
        body = response.json()
        assert body["leads_count"] == 2
        ava, ben = body["leads"]
        assert ava["name"] == "Ava Patel"
        assert (ava["rule_score"], ava["ai_score"], ava["score"], ava["intent"]) == (50, 50, 100, "High")
        assert ben["name"] == "Ben Ortiz"
        assert (ben["rule_score"], ben["ai_score"], ben["score"], ben["intent"]) == (10, 10, 20, "Low")
        assert "Rule-based analysis: data completeness (10 pts)" in ben["reasoning"]

    def test_results_and_export(self, client):
        batch_id = self._batch(client)
        client.post("/api/score", json={"batch_id": batch_id})

        results = client.get("/api/results", params={"batch_id": batch_id}).json()
        assert [r["score"] for r in results] == [100, 20]

        export = client.get("/api/results/export", params={"batch_id": batch_id})
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        lines = export.text.strip().splitlines()
        assert lines[0] == "name,role,company,industry,location,intent,score,reasoning"
        assert lines[1].startswith("Ava Patel,Head of Growth,FlowMetrics,B2B SaaS,San Francisco,High,100,")

        assert len(client.get("/api/results/all").json()) == 2

    def test_score_unknown_batch_is_404(self, client):
        assert client.post("/api/score", json={"batch_id": "batch_nope"}).status_code == 404

    def test_results_unknown_batch_is_404(self, client):
        assert client.get("/api/results", params={"batch_id": "batch_nope"}).status_code == 404
        assert client.get("/api/results/export", params={"batch_id": "batch_nope"}).status_code == 404

    def test_batch_failure_is_500_and_nothing_saved(self, client):
        batch_id = self._batch(client)

        class _FailingEngine:
            def score_batch_sync(self, leads, offer):
                raise BatchScoringError("boom", index=0, lead_name=leads[0].name)

        app.dependency_overrides[get_engine] = lambda: _FailingEngine()
        response = client.post("/api/score", json={"batch_id": batch_id})

        assert response.status_code == 500
        results = client.get("/api/results", params={"batch_id": batch_id}).json()
        assert all(r["intent"] is None and r["score"] == 0 for r in results)

    def test_scoring_runs_outside_the_event_loop(self, client):
        batch_id = self._batch(client)
        seen = {}

        class _RecordingEngine(ScoringEngine):
            def score_batch_sync(self, leads, offer):
                try:
                    asyncio.get_running_loop()
                    seen["loop"] = True
                except RuntimeError:
                    seen["loop"] = False
                return super().score_batch_sync(leads, offer)

        app.dependency_overrides[get_engine] = lambda: _RecordingEngine()
        response = client.post("/api/score", json={"batch_id": batch_id})

        assert response.status_code == 200
        # blocking DB and scoring work must not run on the server's loop
        assert seen == {"loop": False}
