# File: tests/test_modelio.py
"""
Compact JSON model format: reference validation and conversion to engine
objects.
"""

import pytest

from framecalc.kernel.connections import EndCondition
from framecalc.materials import FValueStrength, MetalFamily, WoodStrength
from framecalc.model import Support
from framecalc.modelio import ModelFormatError, load_model, validate_references


def _model(**overrides):
    data = {
        "nodes": [
            {"x": 0, "y": 0, "s": "p"},
            {"x": 6, "y": 0, "s": "r", "dy_forced": -5},
            {"x": 3, "y": 2, "s": "f"},
        ],
        "members": [
            {"i": 1, "j": 2, "A": 0.005, "I": 1e-4, "Z": 5e-4, "F": 235},
            {"i": 1, "j": 3, "E": 10000, "A": 0.01, "I": 2e-4, "Z": 1e-3,
             "j_conn": "pinned", "wood": "sugi", "density": 400},
        ],
        "nl": [{"n": 3, "py": -10}],
        "ml": [{"m": 1, "w": 2.5}],
    }
    data.update(overrides)
    return data


def test_valid_model_has_no_errors():
    assert validate_references(_model()) == []


def test_load_model_converts_to_zero_based():
    model = load_model(_model())

    assert [n.support for n in model.nodes] == [Support.PINNED, Support.ROLLER, Support.FREE]
    assert model.nodes[1].prescribed.dy == -5.0

    m0, m1 = model.members
    assert (m0.ni, m0.nj) == (0, 1)
    assert (m1.ni, m1.nj) == (0, 2)
    assert m0.E == 205000.0
    assert m0.strength == FValueStrength(235.0, MetalFamily.STEEL)
    assert m1.j_conn is EndCondition.PINNED and m1.i_conn is EndCondition.RIGID
    assert m1.strength == WoodStrength(species="sugi")
    assert m1.density == 400.0

    assert model.node_loads[0].node == 2 and model.node_loads[0].py == -10.0
    assert model.member_loads[0].member == 0 and model.member_loads[0].w == 2.5


def test_long_load_keys_are_accepted():
    data = _model()
    data["nodeLoads"] = data.pop("nl")
    data["memberLoads"] = data.pop("ml")
    model = load_model(data)
    assert len(model.node_loads) == 1 and len(model.member_loads) == 1


def test_custom_wood_and_metal_family():
    data = _model()
    data["members"][0]["material"] = "aluminum"
    data["members"][1]["wood"] = {"Fc": 20, "Ft": 15, "Fb": 25, "Fs": 2}
    model = load_model(data)
    assert model.members[0].strength.family is MetalFamily.ALUMINUM
    assert model.members[1].strength.base.Fb == 25.0


@pytest.mark.parametrize("mutate, fragment", [
    (lambda d: d["nodes"][0].pop("s"), "missing"),
    (lambda d: d["nodes"][1].update(x="six"), "not numeric"),
    (lambda d: d["nodes"][2].update(s="q"), "unknown support"),
    (lambda d: d["members"][0].update(i=1.5), "not integers"),
    (lambda d: d["members"][0].update(j=9), "out of range"),
    (lambda d: d["members"][1].update(j=1), "both"),
    (lambda d: d["nl"][0].update(n=4), "node load 1"),
    (lambda d: d["ml"][0].update(m=0), "member load 1"),
    (lambda d: d["members"][0].update(E="abc"), "E not numeric"),
    (lambda d: d["members"][1].update(density="heavy"), "density not numeric"),
    (lambda d: d["members"][0].update(material="titanium"), "unknown material"),
    (lambda d: d["members"][1].update(wood={"Fc": 20, "Fb": 25}), "missing Ft"),
    (lambda d: d["members"][1].update(wood={"Fc": 20, "Ft": "x", "Fb": 25}), "Ft not numeric"),
    (lambda d: d["nodes"][1].update(dy_forced="down"), "dy_forced not numeric"),
    (lambda d: d["ml"][0].update(w="5"), "w not numeric"),
])
def test_reference_errors(mutate, fragment):
    data = _model()
    mutate(data)
    errors = validate_references(data)
    assert len(errors) == 1
    assert fragment in errors[0]


def test_all_errors_are_reported():
    data = _model()
    data["members"][0]["j"] = 9
    data["nl"][0]["n"] = 0
    with pytest.raises(ModelFormatError) as exc:
        load_model(data)
    assert len(exc.value.errors) == 2
    assert isinstance(exc.value, ValueError)


def test_missing_arrays():
    assert validate_references({"members": []}) == ["nodes array is missing"]
    assert validate_references({"nodes": []}) == ["members array is missing"]


def test_bad_member_fields_raise_format_error():
    data = _model()
    data["members"][0]["E"] = "abc"
    data["members"][0]["material"] = "titanium"
    with pytest.raises(ModelFormatError) as exc:
        load_model(data)
    assert exc.value.errors == [
        "member 1: E not numeric",
        "member 1: unknown material 'titanium'",
    ]
