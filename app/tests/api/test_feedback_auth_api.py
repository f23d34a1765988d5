def test_feedback_crud(client):
    r = client.post(
        "/api/feedback",
        json={
            "issue_type": "Bug",
            "issue_title": "Chart is empty",
            "description": "The regional chart shows no bars",
            "email": " user@example.org ",
        },
    )
    assert r.status_code == 201
    fb = r.json()["data"]
    assert fb["priority"] == "Medium"
    assert fb["email"] == "user@example.org"

    r = client.put(f"/api/feedback/{fb['id']}", json={"priority": "High"})
    assert r.json()["data"]["priority"] == "High"
    assert r.json()["data"]["issue_title"] == "Chart is empty"

    assert [f["id"] for f in client.get("/api/feedback").json()["data"]] == [fb["id"]]
    assert client.delete(f"/api/feedback/{fb['id']}").status_code == 200
    assert client.get(f"/api/feedback/{fb['id']}").status_code == 404


def test_feedback_rejects_unknown_priority(client):
    r = client.post(
        "/api/feedback",
        json={"issue_type": "Bug", "issue_title": "x", "description": "y", "priority": "Urgent"},
    )
    assert r.status_code == 400


def test_login_and_me(client, admin_headers):
    r = client.get("/api/auth/me", headers=admin_headers)
    assert r.status_code == 200
    me = r.json()["data"]
    assert me["email"] == "admin@example.org"
    assert me["role"] == "ADMIN"
    assert "APPROVE_PENDING" in me["permissions"]


def test_login_wrong_password_is_401(client, db):
    from app.services.auth_service import create_user

    create_user(db, "editor@example.org", "right-password")
    r = client.post("/api/auth/login", json={"email": "editor@example.org", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"status": False, "message": "Invalid credentials."}


def test_editor_cannot_moderate(client, db):
    from app.models.enums import UserRole
    from app.services.auth_service import create_user

    create_user(db, "editor@example.org", "pw-123456", role=UserRole.EDITOR)
    token = client.post(
        "/api/auth/login", json={"email": "editor@example.org", "password": "pw-123456"}
    ).json()["data"]["access_token"]

    r = client.delete(
        "/api/pending-project/reject/anything",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert r.status_code == 403


def test_recent_activity(client):
    client.post(
        "/api/project/add-project",
        json={"title": "Heat Action Plan", "status": "Active", "approval_fy": "2024"},
    )
    client.post("/api/pending-project/create", json={"title": "Queued", "status": "Pipeline", "approval_fy": "2024"})

    events = client.get("/api/activity/recent?limit=5").json()["data"]
    kinds = {e["activity_type"] for e in events}
    assert kinds == {"project_created", "pending_project_submitted"}
    assert client.get("/api/activity/recent?limit=0").status_code == 400
