"""Tests router FastAPI — catalogue, étapes, lecture / sauvegarde du layout, erreurs HTTP."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


# ── Fixture client ─────────────────────────────────────────────────────────

@pytest.fixture
def client(tmp_path):
    from funnel_builder.database import init_db
    init_db(f"sqlite:///{tmp_path / 'test.db'}")
    from funnel_builder.app import app
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def campaign_id(client):
    r = client.post("/funnel-builder/campaigns", json={"name": "Uniformes", "steps": [
        {"id": "initial_data", "label": "Seus Dados", "order": 0},
        {"id": "review", "label": "Revisão", "order": 2},
        {"id": "upload_logos", "label": "Logos", "order": 1, "enabled": False},
    ]})
    assert r.status_code == 201
    return r.json()["id"]


LAYOUT = {
    "components": [
        {"id": "h1", "type": "heading", "order": 0, "content": "Meu título", "level": 1, "align": "center"},
        {"id": "v1", "type": "video", "order": 1, "url": "/v.mp4"},
    ],
    "backgroundColor": "#ffffff",
    "containerWidth": "800px",
    "padding": "2rem",
}


# ── Catalogue ─────────────────────────────────────────────────────────────────

def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_catalog(client):
    blocks = client.get("/funnel-builder/catalog").json()["blocks"]
    assert len(blocks) == 9
    assert blocks[0]["type"] == "heading"


def test_roles(client):
    assert "initial_data" in client.get("/funnel-builder/roles").json()["roles"]


def test_list_records(client, campaign_id):
    records = client.get("/funnel-builder/campaigns").json()
    assert records == [{"id": campaign_id, "name": "Uniformes", "steps": 3}]
    assert client.get("/funnel-builder/workflows").json() == []


def test_unknown_kind(client):
    assert client.get("/funnel-builder/prospects").status_code == 422


# ── Étapes / layout ───────────────────────────────────────────────────────────

def test_steps_filtered_and_sorted(client, campaign_id):
    steps = client.get(f"/funnel-builder/campaigns/{campaign_id}/steps").json()
    assert [s["id"] for s in steps] == ["initial_data", "review"]
    assert not steps[0]["has_layout"]


def test_get_layout_synthesized(client, campaign_id):
    r = client.get(f"/funnel-builder/campaigns/{campaign_id}/steps/initial_data/layout")
    assert r.status_code == 200
    body = r.json()
    assert body["synthesized"] is True
    assert body["layout"]["components"][0]["content"] == "Seus Dados"


def test_put_then_get(client, campaign_id):
    url = f"/funnel-builder/campaigns/{campaign_id}/steps/review/layout"
    r = client.put(url, json=LAYOUT)
    assert r.status_code == 200
    assert r.json()["layout"] == LAYOUT

    body = client.get(url).json()
    assert body["synthesized"] is False
    assert body["layout"] == LAYOUT

    steps = client.get(f"/funnel-builder/campaigns/{campaign_id}/steps").json()
    assert [s["has_layout"] for s in steps] == [False, True]


def test_put_invalid_layout(client, campaign_id):
    bad = {"components": [{"type": "heading", "level": 42}]}
    r = client.put(f"/funnel-builder/campaigns/{campaign_id}/steps/review/layout", json=bad)
    assert r.status_code == 422


def test_missing_step_conflict(client, campaign_id):
    r = client.put(f"/funnel-builder/campaigns/{campaign_id}/steps/gone/layout", json=LAYOUT)
    assert r.status_code == 409
    assert client.get(f"/funnel-builder/campaigns/{campaign_id}/steps/gone/layout").status_code == 409


def test_missing_record(client):
    assert client.get("/funnel-builder/workflows/nope/steps").status_code == 404
    assert client.put("/funnel-builder/workflows/nope/steps/s1/layout", json=LAYOUT).status_code == 404


def test_backend_unavailable(client):
    from funnel_builder.app import app
    from funnel_builder.persistence import LayoutStore
    from funnel_builder.router import get_store

    factory = MagicMock(side_effect=OperationalError("SELECT", {}, Exception("database is locked")))
    app.dependency_overrides[get_store] = lambda: LayoutStore(session_factory=factory)
    r = client.get("/funnel-builder/campaigns/c1/steps/s1/layout")
    assert r.status_code == 503


def test_list_and_create_backend_unavailable(client):
    from funnel_builder.app import app
    from funnel_builder.persistence import LayoutStore
    from funnel_builder.router import get_store

    factory = MagicMock(side_effect=OperationalError("SELECT", {}, Exception("database is locked")))
    app.dependency_overrides[get_store] = lambda: LayoutStore(session_factory=factory)
    assert client.get("/funnel-builder/campaigns").status_code == 503
    assert client.post("/funnel-builder/campaigns", json={"name": "X", "steps": []}).status_code == 503


# ── Validation ────────────────────────────────────────────────────────────────

def test_validate(client):
    r = client.post("/funnel-builder/validate", json=LAYOUT)
    assert r.json() == {"valid": True, "error": None, "blocks": 2}
    r = client.post("/funnel-builder/validate", json={"components": [{"type": "text", "align": "justify"}]})
    assert r.json()["valid"] is False
