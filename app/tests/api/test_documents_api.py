from pathlib import Path

from sqlalchemy.exc import OperationalError

from app.services.documents_service import DocumentsService

PDF = b"%PDF-1.4\n" + b"0" * 2048


def _upload(client, prefix, **fields):
    data = {"heading": "Climate Budget Report", "categories": '["Budget", "Policy"]'}
    data.update(fields)
    r = client.post(
        f"{prefix}/create",
        data=data,
        files={"supporting_document": ("budget report.pdf", PDF, "application/pdf")},
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_document_create_list_update_delete(client):
    doc = _upload(client, "/api/document-repository")
    assert doc["categories"] == ["Budget", "Policy"]
    assert doc["document_link"].endswith("-budget_report.pdf")
    assert doc["document_size"] == "2.0 KB"

    listed = client.get("/api/document-repository").json()["data"]
    assert [d["repo_id"] for d in listed] == [doc["repo_id"]]

    r = client.put(f"/api/document-repository/{doc['repo_id']}", json={"sub_heading": "FY24"})
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["sub_heading"] == "FY24"
    assert updated["heading"] == "Climate Budget Report"

    assert client.delete(f"/api/document-repository/{doc['repo_id']}").status_code == 200
    assert client.get(f"/api/document-repository/{doc['repo_id']}").status_code == 404
    assert client.delete(f"/api/document-repository/{doc['repo_id']}").status_code == 404


def test_document_requires_heading(client):
    r = client.post("/api/document-repository/create", json={"agency_name": "Finance Division"})
    assert r.status_code == 400
    assert "heading" in r.json()["message"]


def test_update_unknown_document_is_404(client):
    r = client.put("/api/document-repository/missing", json={"heading": "x"})
    assert r.status_code == 404


def test_pending_document_accept(client, admin_headers):
    pending = _upload(client, "/api/pending-document-repository", submitter_email="a@b.org")
    repo_id = pending["repo_id"]

    r = client.put(f"/api/pending-document-repository/accept/{repo_id}", headers=admin_headers)
    assert r.status_code == 200, r.text
    accepted = r.json()["data"]
    assert accepted["heading"] == "Climate Budget Report"
    assert accepted["document_link"] == pending["document_link"]

    assert client.get("/api/pending-document-repository").json()["data"] == []
    assert len(client.get("/api/document-repository").json()["data"]) == 1

    r = client.put(f"/api/pending-document-repository/accept/{repo_id}", headers=admin_headers)
    assert r.status_code == 404


def test_accept_requires_token(client):
    pending = _upload(client, "/api/pending-document-repository")
    r = client.put(f"/api/pending-document-repository/accept/{pending['repo_id']}")
    assert r.status_code in (401, 403)


def test_download_serves_stored_file(client, settings):
    doc = _upload(client, "/api/document-repository")

    r = client.get(f"/api/download/{doc['document_link']}")
    assert r.status_code == 200
    assert r.content == PDF
    assert r.headers["content-type"] == "application/pdf"
    disposition = r.headers["content-disposition"]
    assert disposition.startswith("attachment")
    assert 'filename="budget_report.pdf"' in disposition

    assert (Path(settings.upload_dir) / doc["document_link"]).is_file()


def test_download_missing_file_is_404(client):
    r = client.get("/api/download/1700000000000-nothing.pdf")
    assert r.status_code == 404


def _stored_files(settings):
    root = Path(settings.upload_dir)
    return sorted(p.name for p in root.iterdir()) if root.is_dir() else []


def test_update_cannot_blank_heading(client):
    doc = client.post("/api/document-repository/create", json={"heading": "Keep me"}).json()["data"]

    for body in ({"heading": ""}, {"heading": None}):
        r = client.put(f"/api/document-repository/{doc['repo_id']}", json=body)
        assert r.status_code == 400
        assert "heading" in r.json()["message"]

    assert client.get(f"/api/document-repository/{doc['repo_id']}").json()["data"]["heading"] == "Keep me"


def test_failed_create_removes_its_upload(client, settings, monkeypatch):
    def broken(self, db, data):
        raise OperationalError("INSERT INTO document_repository", {}, Exception("disk full"))

    monkeypatch.setattr(DocumentsService, "create", broken)
    r = client.post(
        "/api/document-repository/create",
        data={"heading": "Report"},
        files={"supporting_document": ("r.pdf", PDF, "application/pdf")},
    )
    assert r.status_code == 500
    assert _stored_files(settings) == []


def test_missing_heading_keeps_no_upload(client, settings):
    r = client.post(
        "/api/pending-document-repository/create",
        data={"agency_name": "Finance Division"},
        files={"supporting_document": ("r.pdf", PDF, "application/pdf")},
    )
    assert r.status_code == 400
    assert _stored_files(settings) == []
