import json
from pathlib import Path

from sqlalchemy.exc import OperationalError

from app.services.projects_service import ProjectsService


def _project(**overrides):
    body = {
        "title": "Climate Smart Agriculture",
        "status": "Active",
        "approval_fy": "2023",
        "beginning": "2023-01-15",
        "total_cost_usd": 2500000,
        "sector": "Agriculture",
    }
    body.update(overrides)
    return body


def _add_agency(client, name):
    r = client.post("/api/agency/add", json={"name": name})
    assert r.status_code == 201, r.text
    return r.json()["data"]["id"]


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Request-Id"]


def test_create_and_fetch_project(client):
    agency_id = _add_agency(client, "Ministry of Agriculture")

    r = client.post("/api/project/add-project", json=_project(agency_ids=[agency_id]))
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["status"] is True
    project_id = body["data"]["project_id"]

    r = client.get(f"/api/project/get/{project_id}")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["title"] == "Climate Smart Agriculture"
    assert data["agency_ids"] == [agency_id]
    assert data["agencies"][0]["name"] == "Ministry of Agriculture"

    listed = client.get("/api/project/all-project").json()["data"]
    assert [p["project_id"] for p in listed] == [project_id]


def test_relation_ids_accept_json_string(client):
    a = _add_agency(client, "A")
    b = _add_agency(client, "B")

    r = client.post("/api/project/add-project", json=_project(agency_ids=json.dumps([a, b])))
    project_id = r.json()["data"]["project_id"]

    data = client.get(f"/api/project/get/{project_id}").json()["data"]
    assert sorted(data["agency_ids"]) == sorted([a, b])


def test_update_replaces_relations(client):
    a, b, c = (_add_agency(client, n) for n in ("A", "B", "C"))
    project_id = client.post(
        "/api/project/add-project", json=_project(agency_ids=[a, b])
    ).json()["data"]["project_id"]

    r = client.put(f"/api/project/update/{project_id}", json=_project(agency_ids=[b, c]))
    assert r.status_code == 200, r.text

    data = client.get(f"/api/project/get/{project_id}").json()["data"]
    assert sorted(data["agency_ids"]) == sorted([b, c])


def test_update_unknown_project_is_404(client):
    r = client.put("/api/project/update/does-not-exist", json=_project())
    assert r.status_code == 404
    assert r.json() == {"status": False, "message": "Project not found"}
    assert client.get("/api/project/all-project").json()["data"] == []


def test_missing_required_fields_is_400(client):
    r = client.post("/api/project/add-project", json={"title": "No status"})
    assert r.status_code == 400
    assert r.json()["status"] is False
    assert "status" in r.json()["message"]
    assert client.get("/api/project/all-project").json()["data"] == []


def test_delete_project(client):
    project_id = client.post("/api/project/add-project", json=_project()).json()["data"]["project_id"]

    assert client.delete(f"/api/project/delete/{project_id}").status_code == 200
    assert client.get(f"/api/project/get/{project_id}").status_code == 404
    assert client.delete(f"/api/project/delete/{project_id}").status_code == 404


def test_multipart_create_with_pdf(client, settings):
    r = client.post(
        "/api/project/add-project",
        data={
            "title": "Solar Irrigation",
            "status": "Pipeline",
            "approval_fy": "2024",
            "type": "Mitigation,Adaptation",
            "wash_component": json.dumps({"presence": True, "wash_percentage": 20}),
        },
        files={"supporting_document": ("Design Report.pdf", b"%PDF-1.4 test", "application/pdf")},
    )
    assert r.status_code == 201, r.text
    project_id = r.json()["data"]["project_id"]

    data = client.get(f"/api/project/get/{project_id}").json()["data"]
    assert data["type"] == ["Mitigation", "Adaptation"]
    assert data["supporting_document"].endswith("-Design_Report.pdf")
    assert data["wash_component"]["presence"] is True


def test_non_pdf_upload_is_rejected(client):
    r = client.post(
        "/api/project/add-project",
        data={"title": "T", "status": "Active", "approval_fy": "2020"},
        files={"supporting_document": ("notes.txt", b"hello", "text/plain")},
    )
    assert r.status_code == 500
    assert "Only PDF files are allowed" in r.json()["message"]


def test_dashboard_endpoints(client):
    client.post("/api/project/add-project", json=_project(geographic_division=["Dhaka"]))
    client.post("/api/project/add-project", json=_project(status="Completed", beginning="2021-03-01"))

    overview = client.get("/api/project/get-overview-stat").json()["data"]
    assert overview["total_projects"] == 2
    assert overview["completed_projects"] == 1

    by_status = client.get("/api/project/get-project-by-status").json()["data"]
    assert {"name": "Active", "value": 1} in by_status

    trend = client.get("/api/project/get-project-by-trend").json()["data"]
    assert [t["year"] for t in trend] == ["2021", "2023"]

    for path in (
        "projectsOverviewStats",
        "get-project-by-sector",
        "get-project-by-type",
        "get-climate-finance-by-trend",
        "get-wash-stat",
        "get-project-by-hotspot",
        "get-project-by-vulnerability-type",
        "get-project-by-portfolio-type",
        "get-regional-distribution",
        "get-district-project-distribution",
        "get-implementing-entity-stats",
        "get-executing-agency-stats",
        "get-delivery-partner-stats",
        "get-funding-source-by-type",
        "get-funding-source-overview",
        "get-funding-source-trend",
        "get-funding-source-sector-allocation",
        "get-funding-source",
    ):
        r = client.get(f"/api/project/{path}")
        assert r.status_code == 200, path
        assert r.json()["status"] is True


def _stored_files(settings):
    root = Path(settings.upload_dir)
    return sorted(p.name for p in root.iterdir()) if root.is_dir() else []


def test_missing_fields_rejected_before_upload_is_stored(client, settings):
    r = client.post(
        "/api/project/add-project",
        data={"title": "Only a title"},
        files={"supporting_document": ("plan.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert r.status_code == 400
    assert _stored_files(settings) == []


def test_failed_create_removes_its_upload(client, settings, monkeypatch):
    def broken(self, db, payload):
        raise OperationalError("INSERT INTO projects", {}, Exception("disk full"))

    monkeypatch.setattr(ProjectsService, "create", broken)
    r = client.post(
        "/api/project/add-project",
        data={"title": "T", "status": "Active", "approval_fy": "2020"},
        files={"supporting_document": ("plan.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert r.status_code == 500
    assert _stored_files(settings) == []
