from casebook.services.export_service import parse_csv


def _save(client, youth_id, day, morning=0, afternoon=0, evening=0, comments=None):
    return client.post(
        "/api/v1/behavior-points",
        json={
            "youth_id": youth_id,
            "date": day,
            "morning_points": morning,
            "afternoon_points": afternoon,
            "evening_points": evening,
            "comments": comments,
        },
    )


def test_daily_entry_upserts_by_date(client, youth):
    first = _save(client, youth["id"], "2026-03-02", 30000, 30000, 30000)
    assert first.status_code == 200
    assert first.json()["total_points"] == 90000

    second = _save(client, youth["id"], "2026-03-02", 35000, 35000, 35000, "Great day")
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["total_points"] == 105000

    entries = client.get("/api/v1/behavior-points", params={"youth_id": youth["id"]}).json()
    assert len(entries) == 1
    assert entries[0]["comments"] == "Great day"


def test_card_rules_enforced(client, youth):
    assert _save(client, youth["id"], "2026-03-02", 1500).status_code == 400
    assert _save(client, youth["id"], "2026-03-02", 50000, 50000, 10000).status_code == 400


def test_low_day_raises_alert(client, youth):
    _save(client, youth["id"], "2026-03-03", 2000, 2000, 1000)
    alerts = client.get("/api/v1/alerts", params={"youth_id": youth["id"], "unresolved": True}).json()
    assert [a["title"] for a in alerts] == ["Low Behavior Points"]
    assert "(5000)" in alerts[0]["description"]


def test_summary_and_date_filter(client, youth):
    _save(client, youth["id"], "2026-03-01", 10000, 10000, 10000)
    _save(client, youth["id"], "2026-03-02", 20000, 20000, 20000)
    _save(client, youth["id"], "2026-03-10", 1000)

    summary = client.get(
        "/api/v1/behavior-points/summary",
        params={"youth_id": youth["id"], "start_date": "2026-03-01", "end_date": "2026-03-05"},
    ).json()
    assert summary["total_points"] == 90000
    assert summary["average_daily"] == 45000
    assert summary["days_recorded"] == 2
    assert summary["shift_averages"]["average_morning"] == 15000


def test_weekly_and_statistics_shapes(client, youth):
    weekly = client.get("/api/v1/behavior-points/weekly", params={"youth_id": youth["id"], "weeks": 3}).json()
    assert [w["week"] for w in weekly] == ["Week 3", "Week 2", "Week 1"]

    stats = client.get("/api/v1/behavior-points/statistics", params={"youth_id": youth["id"]}).json()
    assert stats["total_points"] == 0
    assert stats["trend"] == "stable"


def test_csv_export(client, youth):
    _save(client, youth["id"], "2026-03-02", 20000, 20000, 20000, "Helped, then rested")
    _save(client, youth["id"], "2026-03-01", 10000)

    response = client.get("/api/v1/behavior-points/export", params={"youth_id": youth["id"]})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="Reed, Marcus, Behavior Points,' in response.headers["content-disposition"]

    records = parse_csv(response.text)
    assert [r["total_points"] for r in records] == [10000, 60000]
    assert records[1]["comments"] == "Helped, then rested"


def test_delete_entry(client, youth):
    entry = _save(client, youth["id"], "2026-03-02", 20000).json()
    assert client.delete(f"/api/v1/behavior-points/{entry['id']}").status_code == 204
    assert client.delete(f"/api/v1/behavior-points/{entry['id']}").status_code == 404
