"""Flask JSON API over the calculator."""

import pytest

import app as web
from card_calculator import audit
from card_calculator.store import MemoryStore
from src.state import STATE_KEY, Calculator, decode


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def client(store, tmp_path, monkeypatch):
    monkeypatch.setattr(audit, "AUDIT_DIR", tmp_path)
    monkeypatch.setattr(audit, "AUDIT_FILE", tmp_path / "audit.log")
    web.app.config["TESTING"] = True
    web.app.config["CALCULATOR"] = Calculator(store)
    yield web.app.test_client()
    web.app.config.pop("CALCULATOR", None)


def test_state_defaults(client):
    res = client.get("/api/state")
    assert res.status_code == 200
    data = res.get_json()
    assert data["level"] == 1
    assert data["modifier"] is False
    assert data["ceiling"] == 30
    assert data["level_display_max"] == 15
    assert len(data["entities"]) == 3
    assert data["entities"][0]["status"] == "clear"
    assert len(data["entities"][0]["per_category"]) == 8


def test_categories(client):
    data = client.get("/api/categories").get_json()
    assert [c["cap"] for c in data["categories"]] == [5, 4, None, None, None, None, None, None]


def test_set_count_clamps(client, store):
    res = client.put("/api/entities/1/counts/0", json={"value": 7})
    assert res.status_code == 200
    entity = res.get_json()["entities"][0]
    assert entity["counts"][0] == 5
    assert entity["total"] == 100
    assert entity["over_limit"] is True
    assert entity["status"] == "blurred"
    assert decode(store.get(STATE_KEY)).entities[0][0] == 5


def test_set_count_non_numeric_becomes_zero(client):
    client.put("/api/entities/2/counts/3", json={"value": 4})
    res = client.put("/api/entities/2/counts/3", json={"value": "lots"})
    assert res.get_json()["entities"][1]["counts"][3] == 0


def test_increment_and_decrement(client):
    for _ in range(6):
        client.post("/api/entities/3/counts/1/increment")
    data = client.get("/api/state").get_json()
    assert data["entities"][2]["counts"][1] == 4
    assert data["entities"][2]["total"] == 80
    for _ in range(6):
        client.post("/api/entities/3/counts/1/decrement")
    data = client.get("/api/state").get_json()
    assert data["entities"][2]["counts"][1] == 0


def test_level_and_modifier(client):
    data = client.put("/api/level", json={"level": 15}).get_json()
    assert data["ceiling"] == 170
    data = client.post("/api/modifier/toggle").get_json()
    assert data["modifier"] is True
    assert data["ceiling"] == 180
    data = client.put("/api/level", json={"level": 0}).get_json()
    assert data["level"] == 1
    data = client.post("/api/level/step", json={"delta": 2}).get_json()
    assert data["level"] == 3


def test_step_level_bad_delta(client):
    res = client.post("/api/level/step", json={"delta": "up"})
    assert res.status_code == 400


def test_reset_entity_and_reset_all(client):
    client.put("/api/entities/1/counts/6", json={"value": 1})
    client.put("/api/entities/2/counts/6", json={"value": 1})
    data = client.post("/api/entities/1/reset").get_json()
    assert data["entities"][0]["total"] == 0
    assert data["entities"][1]["total"] == 50
    data = client.post("/api/reset").get_json()
    assert all(e["total"] == 0 for e in data["entities"])


@pytest.mark.parametrize(
    "method,url",
    [
        ("put", "/api/entities/4/counts/0"),
        ("put", "/api/entities/1/counts/8"),
        ("put", "/api/entities/1/counts/abc"),
        ("post", "/api/entities/0/reset"),
    ],
)
def test_unknown_entity_or_category_404(client, method, url):
    res = getattr(client, method)(url, json={"value": 1})
    assert res.status_code == 404
    assert res.get_json()["code"] == "NOT_FOUND"


def test_mutations_are_audited(client, tmp_path):
    client.put("/api/entities/1/counts/2", json={"value": 2})
    lines = (tmp_path / "audit.log").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert '"action": "set_count"' in lines[0]
    assert '"total": 40' in lines[0]


@pytest.mark.parametrize("body", [[5], 7, "text", None])
def test_non_object_body_is_coerced(client, body):
    """A JSON body that is not an object is treated as empty input."""
    res = client.put("/api/level", json=body)
    assert res.status_code == 200
    assert res.get_json()["level"] == 1
    res = client.put("/api/entities/1/counts/2", json=body)
    assert res.status_code == 200
    assert res.get_json()["entities"][0]["counts"][2] == 0
    res = client.post("/api/level/step", json=body)
    assert res.status_code == 200
    assert res.get_json()["level"] == 2


def test_huge_count_value(client):
    res = client.put("/api/entities/1/counts/2", json={"value": 10**400})
    assert res.status_code == 200
    assert res.get_json()["entities"][0]["counts"][2] == 10**400
