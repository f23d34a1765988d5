import pytest


@pytest.mark.parametrize(
    "prefix",
    ["/api/agency", "/api/executing-agency", "/api/implementing-entity", "/api/delivery-partner", "/api/location"],
)
def test_entity_crud(client, prefix):
    r = client.post(f"{prefix}/add", json={"name": "  Alpha  "})
    assert r.status_code == 201
    entity_id = r.json()["data"]["id"]
    assert r.json()["data"]["name"] == "Alpha"

    r = client.put(f"{prefix}/update/{entity_id}", json={"name": "Beta"})
    assert r.json()["data"]["name"] == "Beta"

    assert [e["name"] for e in client.get(f"{prefix}/all").json()["data"]] == ["Beta"]
    assert client.delete(f"{prefix}/delete/{entity_id}").status_code == 200
    assert client.get(f"{prefix}/get/{entity_id}").status_code == 404


@pytest.mark.parametrize(
    "prefix",
    ["/api/agency", "/api/executing-agency", "/api/implementing-entity", "/api/delivery-partner", "/api/location"],
)
def test_entity_update_unknown_id_is_404(client, prefix):
    client.post(f"{prefix}/add", json={"name": "Existing"})

    r = client.put(f"{prefix}/update/missing-id", json={"name": "Ghost"})
    assert r.status_code == 404
    assert r.json()["status"] is False
    assert [e["name"] for e in client.get(f"{prefix}/all").json()["data"]] == ["Existing"]


def test_find_or_create_matches_existing_name(client):
    first = client.post("/api/agency/find-or-create", json={"name": "Forest Department"}).json()["data"]
    second = client.post("/api/agency/find-or-create", json={"name": "FOREST department"}).json()["data"]

    assert first["id"] == second["id"]
    assert len(client.get("/api/agency/all").json()["data"]) == 1


def test_blank_name_is_400(client):
    r = client.post("/api/agency/add", json={"name": "   "})
    assert r.status_code == 400
    assert r.json()["status"] is False


def test_legacy_add_aliases(client):
    assert client.post("/api/agency/add-agency", json={"name": "X"}).status_code == 201
    r = client.post("/api/location/add-location", json={"name": "Barisal", "region": "South"})
    assert r.json()["data"]["region"] == "South"


def test_funding_source_endpoints(client):
    r = client.post(
        "/api/funding-source/add-funding-source",
        json={"name": "Green Climate Fund", "dev_partner": "UN", "type": "Multilateral"},
    )
    assert r.status_code == 201
    fs_id = r.json()["data"]["funding_source_id"]

    client.post(
        "/api/project/add-project",
        json={
            "title": "Mangroves",
            "status": "Active",
            "approval_fy": "2022",
            "gef_grant": 500,
            "funding_source_ids": [fs_id],
        },
    )

    [item] = client.get("/api/funding-source/all").json()["data"]
    assert item["grant_amount"] == 500
    assert item["project_count"] == 1

    detail = client.get(f"/api/funding-source/get/{fs_id}").json()["data"]
    assert detail["projects"][0]["title"] == "Mangroves"

    counts = client.get("/api/funding-source/get-funding-source-count").json()["data"]
    assert counts == [{"funding_source_id": fs_id, "funding_source_name": "Green Climate Fund", "total_projects": 1}]

    overview = client.get("/api/funding-source/get-funding-source-overview").json()["data"]
    assert overview == {
        "total_funding_sources": 1,
        "total_projects_supported": 1,
        "total_development_partners": 1,
    }

    r = client.put(f"/api/funding-source/update/{fs_id}", json={"type": "Bilateral"})
    assert r.json()["data"]["name"] == "Green Climate Fund"
    assert r.json()["data"]["type"] == "Bilateral"

    assert client.delete(f"/api/funding-source/delete/{fs_id}").status_code == 200
    assert client.get(f"/api/funding-source/get/{fs_id}").status_code == 404


def test_sdg_endpoints(client):
    r = client.post("/api/sdg/add", json={"sdg_number": 13, "title": "Climate Action"})
    assert r.status_code == 201
    sdg_id = r.json()["data"]["sdg_id"]

    r = client.put(f"/api/sdg/update/{sdg_id}", json={"title": "Climate action"})
    assert r.json()["data"] == {"sdg_id": sdg_id, "sdg_number": 13, "title": "Climate action"}

    assert client.delete(f"/api/sdg/delete/{sdg_id}").status_code == 200
    assert client.get(f"/api/sdg/get/{sdg_id}").status_code == 404


def test_funding_source_update_unknown_or_null_name(client):
    fs_id = client.post(
        "/api/funding-source/add-funding-source", json={"name": "Adaptation Fund"}
    ).json()["data"]["funding_source_id"]

    r = client.put("/api/funding-source/update/missing-id", json={"type": "Bilateral"})
    assert r.status_code == 404

    for body in ({"name": None}, {"name": "  "}):
        r = client.put(f"/api/funding-source/update/{fs_id}", json=body)
        assert r.status_code == 400

    [item] = client.get("/api/funding-source/all").json()["data"]
    assert item["name"] == "Adaptation Fund"
    assert item["type"] is None


def test_sdg_update_unknown_id_is_404(client):
    client.post("/api/sdg/add", json={"sdg_number": 7, "title": "Affordable and Clean Energy"})

    r = client.put("/api/sdg/update/missing-id", json={"title": "Changed"})
    assert r.status_code == 404
    assert [s["title"] for s in client.get("/api/sdg/all").json()["data"]] == ["Affordable and Clean Energy"]
