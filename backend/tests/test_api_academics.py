def test_academic_records_and_summary(client, youth):
    sid = youth["id"]
    assert client.post("/api/v1/academics/credits", json={"student_id": sid, "date_earned": "2026-01-10", "credit_value": 0.5}).status_code == 201
    client.post("/api/v1/academics/credits", json={"student_id": sid, "date_earned": "2026-02-03", "credit_value": 0.25})
    client.post("/api/v1/academics/grades", json={"student_id": sid, "date_entered": "2026-02-20", "grade_value": 88, "course_name": "Algebra I"})
    client.post("/api/v1/academics/steps", json={"student_id": sid, "date_completed": "2026-01-12", "steps_count": 4})

    summary = client.get(f"/api/v1/academics/summary/{sid}").json()
    assert summary["total_credits"] == 0.75
    assert summary["grade_average"] == 88.0
    assert summary["total_steps"] == 4
    assert summary["last_activity"] == "2026-02-20"
    assert summary["credits_by_month"] == {"2026-01": 0.5, "2026-02": 0.25}

    january = client.get(f"/api/v1/academics/summary/{sid}", params={"end_date": "2026-01-31"}).json()
    assert january["total_credits"] == 0.5

    everyone = client.get("/api/v1/academics/summary").json()
    assert [s["student_id"] for s in everyone] == [sid]


def test_grade_bounds_and_delete(client, youth):
    sid = youth["id"]
    bad = client.post("/api/v1/academics/grades", json={"student_id": sid, "date_entered": "2026-02-20", "grade_value": 120})
    assert bad.status_code == 422

    grade = client.post("/api/v1/academics/grades", json={"student_id": sid, "date_entered": "2026-02-20", "grade_value": 70}).json()
    assert client.delete(f"/api/v1/academics/grades/{grade['id']}").status_code == 204
    assert client.get("/api/v1/academics/grades", params={"student_id": sid}).json() == []
