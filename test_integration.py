"""
Integration Test Suite for the Wellness Insight service
=======================================================

Exercises the HTTP surface end-to-end through httpx's ASGI transport
(no network, no running server):
1. Health and reference conditions
2. Symptom extraction
3. Analysis in both scoring modes
4. Request validation
5. Optional LLM decoration when disabled

Run with: pytest test_integration.py
"""

import httpx
import pytest

from insight_service.app import app, explanation_selector


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "1.0.0"
    assert "enabled" in body["llm"]


@pytest.mark.asyncio
async def test_conditions_lists_reference_table(client):
    resp = await client.get("/conditions")
    assert resp.status_code == 200
    conditions = resp.json()["conditions"]
    assert len(conditions) == 23
    assert "Hyperthyroidism" in [c["name"] for c in conditions]


@pytest.mark.asyncio
async def test_extract_symptoms(client):
    resp = await client.post("/extract_symptoms", json={"text": "Fatigue; Headache\nNausea, for 2 weeks"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["symptoms"] == ["fatigue", "headache", "nausea", "for 2 weeks"]
    assert body["duration_days"] == 14


@pytest.mark.asyncio
async def test_analyze_urgent_presentation(client):
    resp = await client.post("/analyze", json={
        "symptoms": ["chest pain", "fainting", "difficulty breathing"],
    })
    assert resp.status_code == 200
    body = resp.json()

    assert body["mode"] == "advanced"
    assert body["urgent"] is True
    assert any(f["urgent"] for f in body["red_flags"])
    assert "**Urgent:**" in body["safe_summary"]
    assert "Seek emergency medical care immediately." in body["safe_summary"]
    assert body["safety_notice"]
    assert body["time_course"]["interpretation"]


@pytest.mark.asyncio
async def test_analyze_simple_mode(client):
    resp = await client.post("/analyze", json={
        "symptoms": "weight loss, heart palpitations, anxiety",
        "mode": "simple",
    })
    assert resp.status_code == 200
    body = resp.json()

    assert body["mode"] == "simple"
    names = [c["condition"] for c in body["conditions"]]
    assert names[0] == "Graves' Disease"
    assert body["conditions"][0]["display_text"] == "100%"
    assert body["close_call_label"] is None


@pytest.mark.asyncio
async def test_analyze_with_answers_and_profile(client):
    resp = await client.post("/analyze", json={
        "symptoms": ["fatigue"],
        "answers": ["for 3 weeks"],
        "profile": {"age": "45", "gender": "female"},
    })
    assert resp.status_code == 200
    time_course = resp.json()["time_course"]
    assert time_course["duration_days"] == 21
    assert time_course["derived"] is False


@pytest.mark.asyncio
async def test_analyze_rejects_unknown_mode(client):
    resp = await client.post("/analyze", json={"symptoms": ["fatigue"], "mode": "bayesian"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_analyze_requires_symptoms(client):
    resp = await client.post("/analyze", json={"answers": ["for 3 weeks"]})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_use_llm_with_selector_disabled_keeps_templates(client, monkeypatch):
    monkeypatch.setattr(explanation_selector, "enabled", False)
    resp = await client.post("/analyze", json={
        "symptoms": ["dry eyes", "dry mouth"],
        "use_llm": True,
    })
    assert resp.status_code == 200
    top = resp.json()["conditions"][0]
    assert top["condition"] == "Sjögren's Syndrome"
    assert top["explanation"] == "This condition may be considered based on dry eyes and dry mouth."
