from datetime import date, timedelta

import httpx

from casebook.main import app
from casebook.services.ai_client import AIClient, get_ai_client


def _seed(client, youth):
    today = date.today()
    for offset in range(3):
        client.post(
            "/api/v1/behavior-points",
            json={
                "youth_id": youth["id"],
                "date": (today - timedelta(days=offset)).isoformat(),
                "morning_points": 20000,
                "afternoon_points": 20000,
                "evening_points": 20000,
            },
        )
    client.post(
        "/api/v1/case-notes",
        json={"youth_id": youth["id"], "date": today.isoformat(), "note": "Helped clean the kitchen."},
    )


def test_comprehensive_report(client, youth):
    _seed(client, youth)
    response = client.post("/api/v1/reports", json={"youth_id": youth["id"], "period": "last7"})
    assert response.status_code == 200
    body = response.json()
    assert body["report_type"] == "comprehensive"
    assert body["filename"].startswith("Reed, Marcus, Comprehensive Report, ")
    assert "Total Points This Period: 180000" in body["content"]
    assert "Helped clean the kitchen." in body["content"]
    assert "AI-GENERATED NARRATIVE" not in body["content"]


def test_excluded_sections(client, youth):
    _seed(client, youth)
    body = client.post(
        "/api/v1/reports",
        json={"youth_id": youth["id"], "include": {"profile": False, "points": False, "notes": False}},
    ).json()
    assert "PROFILE INFORMATION" not in body["content"]
    assert "BEHAVIOR POINT SUMMARY" not in body["content"]
    assert "PROGRESS NOTES" not in body["content"]


def test_bad_custom_range(client, youth):
    response = client.post(
        "/api/v1/reports",
        json={
            "youth_id": youth["id"],
            "period": "custom",
            "custom_start_date": "2026-03-10",
            "custom_end_date": "2026-03-01",
        },
    )
    assert response.status_code == 400


def test_unknown_report_type_rejected(client, youth):
    response = client.post("/api/v1/reports", json={"youth_id": youth["id"], "report_type": "weekly"})
    assert response.status_code == 422


def test_download(client, youth):
    response = client.post("/api/v1/reports/download", json={"youth_id": youth["id"], "report_type": "dpnMonthly"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert 'filename="Reed, Marcus, DPN Monthly Progress Evaluation, ' in response.headers["content-disposition"]
    assert response.text.startswith("DPN MONTHLY PROGRESS EVALUATION")


def test_ai_narrative_via_api(client, youth):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"content": "A steady week."}}]})

    app.dependency_overrides[get_ai_client] = lambda: AIClient(
        api_key="k", base_url="https://ai.test/v1", transport=httpx.MockTransport(handler)
    )
    body = client.post(
        "/api/v1/reports", json={"youth_id": youth["id"], "report_type": "summary", "use_ai": True}
    ).json()
    assert body["content"].endswith("AI-GENERATED NARRATIVE:\nA steady week.")


def test_enhance_without_key_returns_input(client):
    body = client.post("/api/v1/reports/enhance", json={"text": "kid was good today"}).json()
    assert body == {"text": "kid was good today", "enhanced": False}


def test_enhance_upstream_failure(client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    app.dependency_overrides[get_ai_client] = lambda: AIClient(
        api_key="k", base_url="https://ai.test/v1", transport=httpx.MockTransport(handler)
    )
    assert client.post("/api/v1/reports/enhance", json={"text": "notes"}).status_code == 502


def test_print_report(client, youth):
    _seed(client, youth)
    response = client.get(f"/print/reports/{youth['id']}", params={"report_type": "court", "period": "last30"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<pre>COURT REPORT" in response.text
    assert "Reed, Marcus, Court Report" in response.text

    assert client.get(f"/print/reports/{youth['id']}", params={"report_type": "bogus"}).status_code == 400
    assert client.get(f"/print/reports/{youth['id']}", params={"period": "forever"}).status_code == 400
