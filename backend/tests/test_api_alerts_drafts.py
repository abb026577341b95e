def test_manual_alert_and_resolve(client, youth):
    response = client.post(
        "/api/v1/alerts",
        json={
            "alert_type": "warning",
            "priority": "high",
            "category": "Medical",
            "title": "Missed medication",
            "description": "Evening dose refused",
            "youth_id": youth["id"],
        },
    )
    assert response.status_code == 201
    alert = response.json()
    assert alert["youth_name"] == "Marcus Reed"
    assert alert["resolved"] is False

    resolved = client.post(f"/api/v1/alerts/{alert['id']}/resolve").json()
    assert resolved["resolved"] is True
    assert resolved["resolved_at"] is not None

    assert client.get("/api/v1/alerts", params={"unresolved": True}).json() == []
    assert len(client.get("/api/v1/alerts").json()) == 1

    assert client.delete(f"/api/v1/alerts/{alert['id']}").status_code == 204
    assert client.get("/api/v1/alerts").json() == []


def test_manual_alert_rejects_unknown_type(client):
    response = client.post(
        "/api/v1/alerts", json={"alert_type": "panic", "title": "x", "description": "y"}
    )
    assert response.status_code == 422


def test_drafts_are_scoped_by_author(client, youth):
    url = f"/api/v1/drafts/{youth['id']}/court"
    assert client.get(url).status_code == 404

    saved = client.put(url, params={"author_id": "lane"}, json={"data": {"recommendations": "Continue plan"}})
    assert saved.status_code == 200
    assert saved.json()["data"] == {"recommendations": "Continue plan"}

    client.put(url, params={"author_id": "lane"}, json={"data": {"recommendations": "Step down"}})
    assert client.get(url, params={"author_id": "lane"}).json()["data"]["recommendations"] == "Step down"
    assert client.get(url, params={"author_id": "cruz"}).status_code == 404

    assert client.delete(url, params={"author_id": "lane"}).status_code == 204
    assert client.get(url, params={"author_id": "lane"}).status_code == 404
