"""
Pytest fixtures shared by the wrestling tests.
"""
import random
import pytest

from wrestling.system.storage import KeyValueStore
from wrestling.system.settings import SettingsData
from wrestling.battle.scheduler import TurnScheduler
from wrestling.battle.factory import create_wrestler_template
from wrestling.roster.store import RosterStore
from wrestling.encounters.handoff import HandoffChannel, BattleHandoff
from wrestling.battle.service import BattleService


class FakeClock:
    """Manual clock: sleeping just advances time."""
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> TurnScheduler:
    return TurnScheduler(clock=clock, sleep=clock.sleep)


@pytest.fixture
def storage(tmp_path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "saves")


@pytest.fixture
def roster(storage) -> RosterStore:
    return RosterStore(storage)


@pytest.fixture
def settings() -> SettingsData:
    return SettingsData(opponent_delay=0.0)


@pytest.fixture
def channel() -> HandoffChannel:
    return HandoffChannel()


@pytest.fixture
def service(roster, channel, settings, scheduler) -> BattleService:
    return BattleService(roster, channel, settings, rng=random.Random(7), scheduler=scheduler)


@pytest.fixture
def make_tank():
    """Factory for opponents that cannot be knocked out in one hit."""
    def _make(name: str = "Iron Wall", level: int = 1, hp: int = 10000):
        w = create_wrestler_template(name, level)
        w.max_hp = hp
        w.hp = hp
        return w
    return _make


@pytest.fixture
def post(channel):
    """Post a battle handoff on the shared channel."""
    def _post(player, opponent, npc_id=0) -> BattleHandoff:
        handoff = BattleHandoff(opponent=opponent, player_wrestler=player, npc_id=npc_id)
        channel.post(handoff)
        return handoff
    return _post
