import json
import pytest

from wrestling.battle.core import Wrestler
from wrestling.battle.factory import create_wrestler_template
from wrestling.core.errors import DataLoadError, ValidationError
from wrestling.system.storage import KeyValueStore


def test_save_and_load(storage):
    assert storage.load("missing", default=[]) == []
    assert storage.save("thing", {"a": 1}) is True
    assert storage.load("thing") == {"a": 1}
    assert storage.keys() == ["thing"]
    assert storage.delete("thing") is True
    assert storage.delete("thing") is False


def test_corrupt_file_raises_on_read_and_defaults_on_load(storage):
    storage.directory.mkdir(parents=True)
    (storage.directory / "bad.json").write_text("[1, 2", encoding="utf-8")
    with pytest.raises(DataLoadError):
        storage.read("bad")
    assert storage.load("bad", default="fallback") == "fallback"


def test_keys_on_missing_directory(tmp_path):
    assert KeyValueStore(tmp_path / "nowhere").keys() == []


def test_wrestler_json_uses_camel_case(storage):
    w = create_wrestler_template("Booker T", 3)
    storage.save("w", w.to_json())
    raw = json.loads((storage.directory / "w.json").read_text(encoding="utf-8"))
    assert raw["maxHp"] == 140
    assert raw["moves"]["taunt"] == {"name": "Taunt", "damageRange": [5, 10], "type": "charisma"}
    back = Wrestler.from_json(raw)
    assert back == w


def test_legacy_record_loads():
    w = Wrestler.from_json({
        "id": 42, "name": "Old Timer", "level": 2, "maxHp": 120,
        "moves": {"taunt": {"name": "Taunt", "damage": [5, 10], "type": "charisma"}},
    })
    assert w.id == "42"
    assert w.hp == 120
    assert w.experience == 0
    assert w.moves["taunt"].damage_range == (5, 10)


def test_hp_is_clamped_on_load():
    w = Wrestler.from_json({"id": "x", "name": "Over", "level": 1, "hp": 999, "maxHp": 100})
    assert w.hp == 100


@pytest.mark.parametrize("record", [
    {"name": "No Id", "level": 1, "maxHp": 100},
    {"id": "a", "name": "Bad Level", "level": "high", "maxHp": 100},
    {"id": "a", "name": "Bad Move", "level": 1, "maxHp": 100, "moves": {"x": {"name": "X"}}},
    "not a dict",
])
def test_invalid_records_raise(record):
    with pytest.raises(ValidationError):
        Wrestler.from_json(record)
