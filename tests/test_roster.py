from wrestling.battle.factory import create_wrestler_template
from wrestling.roster.store import RosterStore, RosterAdd, MAX_ROSTER_SIZE
from wrestling.system.storage import ROSTER_KEY, PLAYER_KEY, DEFEATED_KEY


def fill(roster, n):
    added = [create_wrestler_template(f"Wrestler {i}", 1 + i % 3) for i in range(n)]
    for w in added:
        assert roster.add(w) is RosterAdd.ADDED
    return added


def test_default_player_created_and_persisted(roster, storage):
    assert roster.player.name == "Your Custom Wrestler"
    saved = storage.load(PLAYER_KEY)
    assert saved["id"] == roster.player.id
    assert saved["maxHp"] == 150
    # Reloading keeps the same wrestler
    assert RosterStore(storage).player.id == roster.player.id


def test_roster_caps_at_six(roster):
    fill(roster, MAX_ROSTER_SIZE)
    assert roster.is_full()
    extra = create_wrestler_template("Seventh", 2)
    assert roster.add(extra) is RosterAdd.FULL
    assert roster.count == MAX_ROSTER_SIZE


def test_full_is_reported_before_duplicate(roster):
    fill(roster, MAX_ROSTER_SIZE)
    dup = create_wrestler_template("Wrestler 0", 1)
    assert roster.add(dup) is RosterAdd.FULL


def test_duplicate_name_rejected(roster):
    roster.add(create_wrestler_template("The Rock", 2))
    result = roster.add(create_wrestler_template("The Rock", 5))
    assert result is RosterAdd.DUPLICATE_NAME
    assert result.value == "duplicate-name"
    assert not result.ok
    assert roster.count == 1


def test_remove_frees_a_slot(roster):
    added = fill(roster, MAX_ROSTER_SIZE)
    assert roster.remove(added[2].id) is True
    assert roster.remove(added[2].id) is False
    assert roster.add(create_wrestler_template("Seventh", 1)) is RosterAdd.ADDED
    assert [w.name for w in roster.members][-1] == "Seventh"


def test_members_is_a_copy(roster):
    fill(roster, 2)
    roster.members.clear()
    assert roster.count == 2


def test_heal_caps_at_max(roster):
    w = create_wrestler_template("Sting", 2)
    w.hp = 10
    roster.add(w)
    assert roster.heal(w.id, 30) is True
    assert roster.get(w.id).hp == 40
    roster.heal(w.id, 10000)
    assert roster.get(w.id).hp == roster.get(w.id).max_hp
    assert roster.heal("nope", 5) is False


def test_level_up_bumps_stats(roster):
    w = create_wrestler_template("Goldberg", 3)
    roster.add(w)
    before = w.copy()
    assert roster.level_up(w.id) is True
    after = roster.get(w.id)
    assert after.level == 4
    assert after.max_hp == before.max_hp + 20
    assert after.hp == after.max_hp
    assert after.power == before.power + 2
    assert after.speed == before.speed + 1
    assert after.charisma == before.charisma + 1
    assert after.moves["finisher"].damage_range == (32, 43)
    assert roster.level_up("missing") is False


def test_heal_and_level_up_reach_the_player(roster, storage):
    p = roster.player
    p.hp = 5
    assert roster.heal(p.id, 20) is True
    assert storage.load(PLAYER_KEY)["hp"] == 25
    assert roster.level_up(p.id) is True
    assert storage.load(PLAYER_KEY)["level"] == 6


def test_update_changes_fields_and_clamps_hp(roster):
    w = create_wrestler_template("Edge", 1)
    roster.add(w)
    assert roster.update(w.id, name="Rated R", hp=9999) is True
    got = roster.get(w.id)
    assert got.name == "Rated R"
    assert got.hp == got.max_hp


def test_update_rejects_id_and_unknown_fields(roster):
    w = create_wrestler_template("Edge", 1)
    roster.add(w)
    assert roster.update(w.id, id="other") is False
    assert roster.update(w.id, mana=5) is False
    assert roster.update("missing", name="x") is False
    assert roster.get(w.id).name == "Edge"


def test_update_rejects_bad_values_without_raising(roster, storage):
    w = create_wrestler_template("Edge", 2)
    roster.add(w)
    assert roster.update(w.id, hp="lots") is False
    assert roster.update(w.id, name="") is False
    assert roster.update(w.id, moves=["not", "moves"]) is False
    # Methods are not fields
    assert roster.update(w.id, heal=lambda n: 0) is False
    assert roster.update(w.id, to_json=None) is False
    got = roster.get(w.id)
    assert got.hp == got.max_hp
    assert got.heal(0) == 0
    assert storage.load(ROSTER_KEY)[0]["name"] == "Edge"


def test_update_is_all_or_nothing(roster):
    w = create_wrestler_template("Edge", 2)
    roster.add(w)
    assert roster.update(w.id, name="Rated R", power="strong") is False
    assert roster.get(w.id).name == "Edge"


def test_update_keeps_level_and_stats_in_range(roster):
    w = create_wrestler_template("Edge", 2)
    roster.add(w)
    assert roster.update(w.id, level=0, power=-5, speed="12", hp=-1) is True
    got = roster.get(w.id)
    assert got.level == 1
    assert got.power == 0
    assert got.speed == 12
    assert got.hp == 0
    assert RosterStore(roster.storage).get(w.id).level == 1


def test_same_name_can_return_after_removal(roster):
    first = create_wrestler_template("The Rock", 2)
    assert roster.add(first) is RosterAdd.ADDED
    assert roster.add(create_wrestler_template("The Rock", 3)) is RosterAdd.DUPLICATE_NAME
    assert roster.remove(first.id) is True
    again = create_wrestler_template("The Rock", 4)
    assert roster.add(again) is RosterAdd.ADDED
    assert [w.id for w in roster.members] == [again.id]



def test_summary(roster):
    assert roster.summary().as_dict() == {"count": 0, "averageLevel": 0, "highestLevel": 0}
    for name, level in (("A", 1), ("B", 2), ("C", 4)):
        roster.add(create_wrestler_template(name, level))
    s = roster.summary()
    assert (s.count, s.average_level, s.highest_level) == (3, 2, 4)


def test_summary_average_rounds_half_up(roster):
    roster.add(create_wrestler_template("A", 1))
    roster.add(create_wrestler_template("B", 2))
    assert roster.summary().average_level == 2


def test_roster_persists_across_reload(roster, storage):
    added = fill(roster, 3)
    reloaded = RosterStore(storage)
    assert [w.id for w in reloaded.members] == [w.id for w in added]
    assert reloaded.members[0].moves["bigMove"].damage_range == (15, 25)


def test_mark_defeated_dedupes_and_persists(roster, storage):
    assert roster.mark_defeated(2) is True
    assert roster.mark_defeated(2) is False
    assert roster.is_defeated(2)
    assert storage.load(DEFEATED_KEY) == [2]
    assert RosterStore(storage).defeated_npcs() == [2]


def test_corrupt_roster_file_loads_empty(storage):
    storage.directory.mkdir(parents=True, exist_ok=True)
    (storage.directory / f"{ROSTER_KEY}.json").write_text("{not json", encoding="utf-8")
    assert RosterStore(storage).count == 0


def test_invalid_entries_are_skipped(storage):
    good = create_wrestler_template("Kane", 2).to_json()
    storage.save(ROSTER_KEY, [good, {"name": "No Id"}, "junk"])
    roster = RosterStore(storage)
    assert [w.name for w in roster.members] == ["Kane"]


def test_invalid_player_record_falls_back_to_default(storage):
    storage.save(PLAYER_KEY, {"name": "Broken"})
    roster = RosterStore(storage)
    assert roster.player.name == "Your Custom Wrestler"
    assert storage.load(PLAYER_KEY)["name"] == "Your Custom Wrestler"
