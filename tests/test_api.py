import pytest
from fastapi.testclient import TestClient

from yardview.core.constants import CATEGORY_COLORS
from yardview.main import app

API = "/api/v1"


@pytest.fixture
def client():
    with TestClient(app) as c:
        c.post(f"{API}/blocks/reset")
        yield c


@pytest.fixture
def upload_id(client, yard_csv):
    response = client.post(
        f"{API}/yard/uploads",
        files={"file": ("yard.csv", yard_csv, "text/csv")},
    )
    assert response.status_code == 200
    return response.json()["uploadId"]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert "version" in client.get("/").json()


def test_upload_returns_stats(client, yard_csv):
    response = client.post(f"{API}/yard/uploads", files={"file": ("yard.csv", yard_csv, "text/csv")})
    body = response.json()

    assert response.status_code == 200
    assert body["stats"] == {
        "totalRows": 7,
        "createdContainers": 5,
        "skippedRows": 1,
        "ignoredSummaryRows": 1,
    }
    assert body["vessels"] == ["EVER ORIENT", "MAERSK KOWLOON"]
    assert body["blocks"] == ["A2", "APR01", "R1", "UNK"]


def test_corrupt_upload_is_rejected(client):
    response = client.post(
        f"{API}/yard/uploads",
        files={"file": ("yard.xlsx", b"garbage", "application/octet-stream")},
    )
    assert response.status_code == 400


def test_unknown_upload(client):
    assert client.get(f"{API}/yard/uploads/nope").status_code == 404
    assert client.get(f"{API}/yard/uploads/nope/block-stats").status_code == 404


def test_get_upload(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}").json()
    assert len(body["containers"]) == 7


def test_block_stats(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}/block-stats").json()

    gp = next(g for g in body["groups"] if g["group"] == "GP")
    a2 = next(b for b in gp["blocks"] if b["name"] == "A2")

    assert (a2["exportFullTeus"], a2["importFullTeus"], a2["emptyTeus"]) == (1, 2, 0)
    assert body["total"]["usedTeus"] == 6
    assert body["colors"] == CATEGORY_COLORS
    assert [g["group"] for g in body["groups"]][:2] == ["GP", "REEFER"]


def test_block_stats_dry_only_shows_gp(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}/block-stats", params={"iso_type": "DRY"}).json()
    assert [g["group"] for g in body["groups"]] == ["GP"]
    assert body["isoType"] == "DRY"


def test_vessel_stats(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}/vessel-stats").json()
    assert body["totals"] == {"EVER ORIENT": 2, "MAERSK KOWLOON": 1}

    body = client.get(
        f"{API}/yard/uploads/{upload_id}/vessel-stats",
        params={"export_full": "false"},
    ).json()
    assert body["totals"] == {"MAERSK KOWLOON": 1}


def test_dwell_stats(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}/dwell-stats").json()
    categories = {c["category"]: c for c in body["categories"]}

    assert sorted(categories) == ["EXPORT", "IMPORT", "STORAGE EMPTY"]
    assert categories["STORAGE EMPTY"]["buckets"][-1]["label"] == "30+"
    assert categories["STORAGE EMPTY"]["buckets"][-1]["count"] == 1


def test_search_and_block_containers(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}/search", params={"q": "A2-22-05-2"}).json()
    assert body["containerIds"] == ["TGHU7654321"]

    containers = client.get(f"{API}/yard/uploads/{upload_id}/blocks/a2").json()
    assert len(containers) == 3


def test_block_crud(client):
    response = client.post(f"{API}/blocks", json={"name": "x9", "capacity": 100})
    assert response.status_code == 201
    assert response.json()["name"] == "X9"

    assert client.post(f"{API}/blocks", json={"name": "X9", "capacity": 50}).status_code == 409

    response = client.put(f"{API}/blocks/X9", json={"capacity": 200})
    assert response.status_code == 200
    assert response.json()["capacity"] == 200

    assert client.put(f"{API}/blocks/NOPE", json={"capacity": 1}).status_code == 404
    assert client.delete(f"{API}/blocks/X9").status_code == 204
    assert client.delete(f"{API}/blocks/X9").status_code == 404


def test_reset_blocks(client):
    client.delete(f"{API}/blocks/A1")
    names = [b["name"] for b in client.post(f"{API}/blocks/reset").json()]
    assert "A1" in names


def test_discharge_capacity(client, upload_id):
    body = client.get(f"{API}/yard/uploads/{upload_id}/discharge-capacity").json()

    # A2 es RTG en la configuración por defecto; R1 y APR01 son RS
    assert "A2" in body["rtgBlocks"]
    assert "R1" in body["rsBlocks"] and "APR01" in body["rsBlocks"]
    assert body["rtgUsedTeus"] == 3
    assert body["rtgAvailableTeus"] == body["rtgCapacity"] - 3


def test_vessel_stats_ignores_unknown_vessels(client, upload_id):
    body = client.get(
        f"{API}/yard/uploads/{upload_id}/vessel-stats",
        params=[("vessels", "EVER ORIENT"), ("vessels", "GHOST SHIP")],
    ).json()

    assert body["vessels"] == ["EVER ORIENT"]
    assert body["totals"] == {"EVER ORIENT": 2}


def test_get_single_block(client):
    response = client.get(f"{API}/blocks/a2")
    assert response.status_code == 200
    assert response.json()["machineType"] == "RTG"

    assert client.get(f"{API}/blocks/NOPE").status_code == 404
