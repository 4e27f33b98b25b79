#!/usr/bin/env python3
"""
Tests for the sparse live-cell codec.

Verifies:
1. encode() emits size, ordered live cells and rules
2. decode(encode(L)) preserves live cells and rule, resets generation
3. Malformed payloads are rejected and leave an existing lattice untouched
4. JSON text / file helpers and the lenient pasted-cell format
"""

import json

import pytest

from life3d import codec
from life3d.errors import ConfigurationError, DataFormatError, Life3DError
from life3d.life import Life3D
from life3d.rules import DEFAULT_RULE, Rule


def _lattice():
    engine = Life3D(5, 4, 3, rule="B5,7/S4,5,6")
    for cell in [(4, 3, 2), (0, 0, 0), (1, 2, 0), (3, 0, 1)]:
        engine.set(*cell, True)
    return engine


def test_encode():
    payload = codec.encode(_lattice())
    assert payload == {
        "size": [5, 4, 3],
        "liveCells": [[0, 0, 0], [1, 2, 0], [3, 0, 1], [4, 3, 2]],
        "rules": {"birth": [5, 7], "survive": [4, 5, 6]},
    }
    # JSON-serializable as is
    json.dumps(payload)


def test_round_trip():
    engine = Life3D(9, 7, 6, rule="B5/S4,5", seed=21)
    engine.randomize(0.3)
    engine.step()
    engine.step()

    decoded = codec.decode(codec.encode(engine))
    assert decoded is not engine
    assert decoded.size == engine.size
    assert set(decoded.live_cells()) == set(engine.live_cells())
    assert decoded.rule == engine.rule
    assert decoded.generation == 0
    assert decoded.live_count == engine.live_count


def test_decode_without_rules_uses_default():
    engine = codec.decode({"size": [3, 3, 3], "liveCells": [[1, 1, 1]]})
    assert engine.rule == DEFAULT_RULE
    assert engine.live_cells() == [(1, 1, 1)]

    engine = codec.decode({"size": (3, 3, 3), "liveCells": [], "rules": None})
    assert engine.rule == DEFAULT_RULE
    assert engine.live_count == 0


def test_decode_accepts_duplicate_cells():
    engine = codec.decode({"size": [3, 3, 3], "liveCells": [[1, 1, 1], [1, 1, 1]]})
    assert engine.live_count == 1


@pytest.mark.parametrize("size", [[0, 5, 5], [5, -1, 5], [5, 5], [5, 5, 5, 5], ["5", 5, 5],
                                  [True, 5, 5], [5.0, 5, 5], None, "5x5x5"])
def test_decode_rejects_bad_size(size):
    with pytest.raises(ConfigurationError):
        codec.decode({"size": size, "liveCells": []})


@pytest.mark.parametrize("cells", [
    [[5, -1, 0]],
    [[5, 0, 0]],
    [[0, 0, 5]],
    [[1, 2]],
    [[1, 2, 3, 4]],
    [[1.0, 2, 3]],
    [["1", 2, 3]],
    [[1, 1, 1], "1,1,1"],
    [[1, 1, 1], None],
    "[[1, 1, 1]]",
    {"x": 1},
])
def test_decode_rejects_bad_cells(cells):
    with pytest.raises(DataFormatError):
        codec.decode({"size": [5, 5, 5], "liveCells": cells})


@pytest.mark.parametrize("rules", [
    {"birth": [], "survive": [5]},
    {"birth": [6], "survive": []},
    {"birth": [27], "survive": [5]},
    {"birth": [6], "survive": [-1]},
    {"birth": ["6"], "survive": [5]},
    {"birth": [6.0], "survive": [5]},
    {"birth": [6]},
    {"survive": [5, 6]},
    [6, 5],
    "B6/S5,6",
])
def test_decode_rejects_bad_rules(rules):
    with pytest.raises(DataFormatError):
        codec.decode({"size": [5, 5, 5], "liveCells": [], "rules": rules})


@pytest.mark.parametrize("payload", [None, [], "text", {"size": [5, 5, 5]}])
def test_decode_rejects_bad_payload(payload):
    with pytest.raises(DataFormatError):
        codec.decode(payload)


def test_failed_load_leaves_engine_untouched():
    engine = _lattice()
    engine.step()
    cells = engine.live_cells()
    rule = engine.rule

    for bad in ({"size": [0, 5, 5], "liveCells": []},
                {"size": [5, 5, 5], "liveCells": [[5, -1, 0]]},
                {"size": [5, 5, 5], "liveCells": [[1, 1, 1]], "rules": {"birth": [30], "survive": [1]}}):
        with pytest.raises(Life3DError):
            engine.load(bad)
        assert engine.size == (5, 4, 3)
        assert engine.live_cells() == cells
        assert engine.rule == rule
        assert engine.generation == 1


def test_load_replaces_state():
    engine = _lattice()
    engine.step()
    engine.load({"size": [6, 6, 6], "liveCells": [[1, 2, 3], [5, 5, 5]],
                 "rules": {"birth": [4], "survive": [2, 3]}})
    assert engine.size == (6, 6, 6)
    assert engine.generation == 0
    assert engine.live_count == 2
    assert engine.rule == Rule({4}, {2, 3})
    assert engine.get(5, 5, 5)

    # Stepping works on the replaced buffers
    engine.step()
    assert engine.generation == 1
    assert engine.live_count == int(engine.snapshot().sum())


def test_dumps_loads():
    engine = _lattice()
    text = codec.dumps(engine)
    assert json.loads(text)["size"] == [5, 4, 3]
    decoded = codec.loads(text)
    assert decoded.live_cells() == engine.live_cells()
    assert decoded.rule == engine.rule

    with pytest.raises(DataFormatError):
        codec.loads("{not json")
    with pytest.raises(DataFormatError):
        codec.loads(None)


def test_save_and_load_file(tmp_path):
    engine = _lattice()
    path = codec.save(engine, tmp_path / codec.DEFAULT_FILENAME)
    assert path.name == "3dlife.json"
    loaded = codec.load(path)
    assert loaded.live_cells() == engine.live_cells()
    assert loaded.rule == engine.rule

    with pytest.raises(OSError):
        codec.load(tmp_path / "missing.json")


@pytest.mark.parametrize("text, expected", [
    ("[2,2,1],[2,3,2]", [[2, 2, 1], [2, 3, 2]]),
    ("[[2,2,1],[2,3,2]]", [[2, 2, 1], [2, 3, 2]]),
    ("[2,2,1]", [[2, 2, 1]]),
    ("2,2,1", [[2, 2, 1]]),
    ("  [1,1,1] ", [[1, 1, 1]]),
    ("", []),
    ("[]", []),
])
def test_parse_live_cells(text, expected):
    assert codec.parse_live_cells(text) == expected


@pytest.mark.parametrize("text", ["[1,2", "hello", "{\"x\": 1}", "7"])
def test_parse_live_cells_rejects(text):
    with pytest.raises(DataFormatError):
        codec.parse_live_cells(text)


def test_apply_live_cells_skips_invalid():
    engine = Life3D(4, 4, 4)
    cells = codec.parse_live_cells("[1,1,1],[9,9,9],[1,2],[0,0,3],[1,1,1]")
    applied = codec.apply_live_cells(engine, cells)
    assert applied == 3
    assert engine.live_cells() == [(1, 1, 1), (0, 0, 3)]
    assert engine.live_count == 2


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-q"]))
