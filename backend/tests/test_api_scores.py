def test_shift_score_upsert_and_averages(client, youth):
    payload = {"youth_id": youth["id"], "date": "2026-03-02", "shift": "day", "peer": 3.5, "adult": 3, "investment": 2, "authority": 1.5}
    first = client.post("/api/v1/shift-scores", json=payload)
    assert first.status_code == 200
    assert first.json()["overall"] == 2.5

    payload["peer"] = 4
    client.post("/api/v1/shift-scores", json=payload)
    scores = client.get("/api/v1/shift-scores", params={"youth_id": youth["id"]}).json()
    assert len(scores) == 1
    assert scores[0]["peer"] == 4.0

    client.post(
        "/api/v1/shift-scores/weekly",
        json={"youth_id": youth["id"], "week_date": "2026-03-04", "peer": 2, "adult": 2, "investment": 2, "authority": 2},
    )
    averages = client.get("/api/v1/shift-scores/averages", params={"youth_id": youth["id"]}).json()
    assert averages["daily"]["peer"] == 4.0
    assert averages["weekly"]["peer"] == 2.0
    assert averages["combined"]["peer"] == 3.0
    assert averages["combined"]["total_entries"] == 2


def test_shift_scores_reject_out_of_range(client, youth):
    response = client.post(
        "/api/v1/shift-scores",
        json={"youth_id": youth["id"], "date": "2026-03-02", "shift": "day", "peer": 5},
    )
    assert response.status_code == 422


def test_weekly_evals_keep_latest_per_week(client, youth):
    for peer in (1, 3):
        client.post(
            "/api/v1/shift-scores/weekly",
            json={"youth_id": youth["id"], "week_date": "2026-03-04", "peer": peer},
        )
    weekly = client.get("/api/v1/shift-scores/weekly", params={"youth_id": youth["id"]}).json()
    assert len(weekly) == 1
    assert weekly[0]["date"] == "2026-03-02"


def test_monthly_and_stay_averages(client, youth):
    client.post(
        "/api/v1/shift-scores",
        json={"youth_id": youth["id"], "date": "2026-02-27", "shift": "evening", "peer": 2},
    )
    march = client.get(
        "/api/v1/shift-scores/averages/monthly", params={"youth_id": youth["id"], "year": 2026, "month": 3}
    ).json()
    assert march["daily"]["total_entries"] == 0
    assert march["start_date"] == "2026-03-01"

    stay = client.get("/api/v1/shift-scores/averages/stay", params={"youth_id": youth["id"]}).json()
    assert stay["start_date"] == "2025-09-01"
    assert stay["daily"]["total_entries"] == 1


def test_school_scores(client, youth):
    # 2026-03-07 is a Saturday
    weekend = client.post("/api/v1/school-scores", json={"youth_id": youth["id"], "date": "2026-03-07", "score": 3})
    assert weekend.status_code == 400

    for day, score in (("2026-03-02", 2), ("2026-03-03", 2), ("2026-03-04", 3.5), ("2026-03-05", 3.5)):
        body = client.post("/api/v1/school-scores", json={"youth_id": youth["id"], "date": day, "score": score}).json()
    assert body["weekday"] == 4
    assert body["score"] == 3.5

    stats = client.get(f"/api/v1/school-scores/stats/{youth['id']}").json()
    assert stats["total"] == 4
    assert stats["trend"] == "improving"
    assert stats["average"] == 2.8

    all_stats = client.get("/api/v1/school-scores/stats").json()
    assert [s["youth_id"] for s in all_stats] == [youth["id"]]


def test_school_stats_missing(client, youth):
    assert client.get(f"/api/v1/school-scores/stats/{youth['id']}").status_code == 404
