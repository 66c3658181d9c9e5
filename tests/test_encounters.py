import random

from wrestling.battle.factory import create_wrestler_template
from wrestling.encounters.generator import (
    generate_opponent, build_lineup, CANDIDATE_NAMES, DEFAULT_NPCS,
)
from wrestling.encounters.handoff import BattleHandoff, HandoffChannel


def test_generated_opponents_are_in_range():
    rng = random.Random(42)
    levels = set()
    for _ in range(300):
        w = generate_opponent(rng)
        assert w.name in CANDIDATE_NAMES
        assert 1 <= w.level <= 5
        assert w.hp == w.max_hp == 100 + (w.level - 1) * 20
        levels.add(w.level)
    assert levels == {1, 2, 3, 4, 5}


def test_lineup_skips_defeated_npcs():
    lineup = build_lineup(defeated=[1, 3], rng=random.Random(0))
    assert [e.npc_id for e in lineup] == [0, 2]
    assert [e.label for e in lineup] == ["Hulk Hogan", "The Rock"]


def test_full_lineup():
    lineup = build_lineup(rng=random.Random(0))
    assert len(lineup) == len(DEFAULT_NPCS)
    assert len({e.wrestler.id for e in lineup}) == len(lineup)


def test_channel_post_snapshots_and_clears():
    channel = HandoffChannel()
    player = create_wrestler_template("Me", 5)
    opponent = create_wrestler_template("Them", 2)
    channel.post(BattleHandoff(opponent, player, 7))
    player.hp = 1
    opponent.name = "Renamed"
    posted = channel.peek()
    assert posted.player_wrestler.hp == player.max_hp
    assert posted.opponent.name == "Them"
    assert posted.npc_id == 7
    assert channel.clear() is True
    assert channel.clear() is False
    assert channel.peek() is None


def test_handoff_json_keys():
    h = BattleHandoff(create_wrestler_template("Them", 2), create_wrestler_template("Me", 5), 1)
    data = h.to_json()
    assert set(data) == {"opponent", "playerWrestler", "npcId"}
    back = BattleHandoff.from_json(data)
    assert back.opponent.name == "Them"
    assert back.player_wrestler.level == 5
    assert back.npc_id == 1
