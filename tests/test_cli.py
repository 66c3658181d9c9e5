import io
import random

from rich.console import Console

from wrestling.cli import GameContext, run
from wrestling.system.settings import Settings, SettingsData
from wrestling.ui.battle import run_battle_ui


def make_settings(tmp_path):
    data = SettingsData(opponent_delay=0.0, save_dir=str(tmp_path / "saves"))
    return Settings(data, tmp_path / "settings.json")


def test_win_removes_npc_from_lineup_and_persists(tmp_path, scheduler):
    settings = make_settings(tmp_path)
    ctx = GameContext(settings, rng=random.Random(3), scheduler=scheduler)
    assert len(ctx.remaining_encounters()) == 4
    target = ctx.lineup[1]
    target.wrestler.hp = 1
    ctx.challenge(target)
    outcome = run_battle_ui(ctx.battle_service, con=Console(file=io.StringIO()), ask=lambda p: "1")
    ctx.after_battle(outcome)
    assert outcome.outcome == "PLAYER_WIN"
    assert [e.npc_id for e in ctx.remaining_encounters()] == [0, 2, 3]
    assert ctx.roster.members[0].name == target.wrestler.name

    again = GameContext(settings, rng=random.Random(3), scheduler=scheduler)
    assert [e.npc_id for e in again.lineup] == [0, 2, 3]
    assert again.roster.count == 1


def test_rest_player_heals_to_full(tmp_path):
    ctx = GameContext(make_settings(tmp_path), rng=random.Random(1))
    ctx.roster.player.hp = 10
    assert ctx.rest_player() is True
    assert ctx.roster.player.hp == ctx.roster.player.max_hp


def test_rng_seed_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("WRESTLING_RNG_SEED", "99")
    a = GameContext(make_settings(tmp_path))
    b = GameContext(make_settings(tmp_path))
    assert a.rng.random() == b.rng.random()
    monkeypatch.setenv("WRESTLING_RNG_SEED", "not-a-number")
    assert GameContext(make_settings(tmp_path)).rng is not None


def test_menu_loop_quits_and_saves_settings(tmp_path):
    settings = make_settings(tmp_path)
    answers = iter(["2", "3", "bogus", "6"])
    console = Console(file=io.StringIO(), width=120)
    run(console=console, ask=lambda p: next(answers), settings=settings)
    out = console.file.getvalue()
    assert "Welcome to Wrestling RPG" in out
    assert "Your Custom Wrestler is fully rested." in out
    assert "Goodbye!" in out
    assert (tmp_path / "settings.json").exists()
