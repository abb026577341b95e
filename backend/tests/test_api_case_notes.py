from casebook.services.export_service import parse_csv


def test_create_note_classifies_and_summarizes(client, youth):
    long_text = "Calm evening shift overall. " + "Played cards with peers. " * 6
    response = client.post(
        "/api/v1/case-notes",
        json={"youth_id": youth["id"], "date": "2026-03-02", "note_type": "general", "note": long_text, "staff": "Ms. Lane"},
    )
    assert response.status_code == 201
    note = response.json()
    assert note["note_type"] == "general"
    assert note["label"] == "Shift Summary"
    assert note["summary"].endswith("...")
    assert len(note["summary"]) == 103


def test_session_notes_are_not_classified(client, youth):
    note = client.post(
        "/api/v1/case-notes",
        json={"youth_id": youth["id"], "date": "2026-03-02", "note_type": "session", "note": "Coping skills session"},
    ).json()
    assert note["label"] is None


def test_bulk_import_and_filters(client, youth):
    text = "3/1/2026: Family visit with grandmother.\n3/2/2026: Fight in the hallway, restraint not needed."
    response = client.post(
        "/api/v1/case-notes/bulk", json={"youth_id": youth["id"], "text": text, "staff": "Mr. Cruz"}
    )
    assert response.status_code == 201
    body = response.json()
    assert body["created"] == 2
    assert {n["label"] for n in body["notes"]} == {"Family Contact", "Incident Follow-Up"}

    notes = client.get("/api/v1/case-notes", params={"youth_id": youth["id"]}).json()
    assert [n["date"] for n in notes] == ["2026-03-02", "2026-03-01"]

    found = client.get("/api/v1/case-notes", params={"youth_id": youth["id"], "search": "grandmother"}).json()
    assert len(found) == 1

    ranged = client.get(
        "/api/v1/case-notes", params={"youth_id": youth["id"], "start_date": "2026-03-02"}
    ).json()
    assert len(ranged) == 1

    stats = client.get("/api/v1/case-notes/statistics", params={"youth_id": youth["id"]}).json()
    assert stats["total_notes"] == 2
    assert stats["staff_counts"] == {"Mr. Cruz": 2}


def test_bulk_split_entries(client, youth):
    text = "3/1/2026: - Ate breakfast\n- Went to class"
    body = client.post(
        "/api/v1/case-notes/bulk",
        json={"youth_id": youth["id"], "text": text, "split_entries": True, "note_type": "shift"},
    ).json()
    assert [n["note"] for n in body["notes"]] == ["Ate breakfast", "Went to class"]
    assert all(n["note_type"] == "shift" for n in body["notes"])


def test_classify_preview(client):
    body = client.post("/api/v1/case-notes/classify", json={"text": "Processing the handoff with staff"}).json()
    assert body["note_type"] == "shift"
    assert body["label"] == "Skill Building"


def test_update_reclassifies(client, youth):
    note = client.post(
        "/api/v1/case-notes",
        json={"youth_id": youth["id"], "date": "2026-03-02", "note": "Read a book."},
    ).json()
    assert note["label"] == "General Log"

    updated = client.patch(f"/api/v1/case-notes/{note['id']}", json={"note": "Phone call with parent."}).json()
    assert updated["label"] == "Family Contact"
    assert updated["note_type"] == "general"


def test_export_and_delete(client, youth):
    note = client.post(
        "/api/v1/case-notes",
        json={"youth_id": youth["id"], "date": "2026-03-02", "note": "Quiet day."},
    ).json()
    response = client.get("/api/v1/case-notes/export", params={"youth_id": youth["id"]})
    assert response.text.splitlines()[0] == "date,note_type,staff,label,summary,note"
    assert "Quiet day." in response.text

    assert client.delete(f"/api/v1/case-notes/{note['id']}").status_code == 204
    assert client.get(f"/api/v1/case-notes/{note['id']}").status_code == 404


def test_note_for_unknown_youth(client):
    response = client.post(
        "/api/v1/case-notes",
        json={"youth_id": "00000000-0000-0000-0000-000000000000", "date": "2026-03-02", "note": "x"},
    )
    assert response.status_code == 404


def test_filtered_export_matches_list(client, youth):
    for day, text in [
        ("2026-03-01", "Family call went well."),
        ("2026-03-05", "Family session postponed."),
        ("2026-03-06", "Worked on homework."),
        ("2026-03-20", "Family visit on Sunday."),
    ]:
        client.post("/api/v1/case-notes", json={"youth_id": youth["id"], "date": day, "note": text})

    params = {"youth_id": youth["id"], "start_date": "2026-03-02", "end_date": "2026-03-10", "search": "family"}
    listed = client.get("/api/v1/case-notes", params=params).json()
    exported = parse_csv(client.get("/api/v1/case-notes/export", params=params).text)

    assert [n["note"] for n in listed] == ["Family session postponed."]
    assert [r["note"] for r in exported] == [n["note"] for n in listed]
