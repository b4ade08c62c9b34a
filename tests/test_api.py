# File: tests/test_api.py
"""
HTTP service: POST /analyze with the compact model format.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _beam_model():
    return {
        "nodes": [
            {"x": 0, "y": 0, "s": "p"},
            {"x": 2, "y": 0, "s": "f"},
            {"x": 4, "y": 0, "s": "r"},
        ],
        "members": [
            {"i": 1, "j": 2, "A": 0.005, "I": 8e-6, "Z": 1e-4, "F": 235},
            {"i": 2, "j": 3, "A": 0.005, "I": 8e-6, "Z": 1e-4, "F": 235},
        ],
        "nl": [{"n": 2, "py": -10}],
    }


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_analyze_simple_beam(client):
    response = client.post("/analyze", json={"model": _beam_model()})
    assert response.status_code == 200
    body = response.json()

    reactions = {r["node"]: r for r in body["reactions"]}
    assert sorted(reactions) == [1, 3]
    assert reactions[1]["Ry"] == pytest.approx(5.0)
    assert reactions[3]["Ry"] == pytest.approx(5.0)
    assert len(body["displacements"]) == 3
    assert len(body["member_forces"]) == 2
    assert [c["status"] for c in body["section_checks"]] == ["OK", "OK"]
    assert body["buckling"][0]["safety_factor"] is None
    assert body["all_ok"] is True
    print(f"✓ API reactions: {reactions[1]['Ry']:.3f}, {reactions[3]['Ry']:.3f} kN")


def test_analyze_with_self_weight_and_short_term(client):
    model = _beam_model()
    for member in model["members"]:
        member["density"] = 7850
    response = client.post(
        "/analyze",
        json={"model": model, "self_weight": True, "load_term": "short"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["self_weight_total"] > 0.0
    total_Ry = sum(r["Ry"] for r in body["reactions"])
    assert total_Ry == pytest.approx(10.0 + body["self_weight_total"])


def test_bad_reference_returns_422(client):
    model = _beam_model()
    model["members"][1]["j"] = 7
    response = client.post("/analyze", json={"model": model})
    assert response.status_code == 422
    assert "out of range" in response.json()["detail"]["errors"][0]


def test_unknown_material_returns_422(client):
    model = _beam_model()
    model["members"][0]["material"] = "titanium"
    response = client.post("/analyze", json={"model": model})
    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == ["member 1: unknown material 'titanium'"]


def test_zero_length_member_returns_422(client):
    model = _beam_model()
    model["nodes"][1] = {"x": 0, "y": 0, "s": "f"}
    response = client.post("/analyze", json={"model": model})
    assert response.status_code == 422
    assert response.json()["detail"]["member"] == 1


def test_unstable_structure_returns_409(client):
    model = {
        "nodes": [{"x": 0, "y": 0, "s": "f"}, {"x": 1, "y": 0, "s": "f"}],
        "members": [{"i": 1, "j": 2, "E": 12000, "A": 0.01, "I": 1e-4, "Z": 1e-3}],
        "nodeLoads": [{"n": 2, "py": -10}],
    }
    response = client.post("/analyze", json={"model": model})
    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["mechanism_members"] == [0]
    assert detail["unconstrained_nodes"] == [0, 1]


def test_member_force_csv(client):
    response = client.post("/analyze/csv", json={"model": _beam_model()})
    assert response.status_code == 200
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("member,L,N_i")
    assert len(lines) == 3
