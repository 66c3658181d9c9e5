from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import random

from wrestling.battle.core import Wrestler
from wrestling.battle.factory import create_wrestler_template

MIN_OPPONENT_LEVEL = 1
MAX_OPPONENT_LEVEL = 5

# Some names repeat across promotions
CANDIDATE_NAMES: Tuple[str, ...] = (
    # WWE Superstars
    "John Cena", "Roman Reigns", "Seth Rollins", "Kevin Owens", "Sami Zayn",
    "AJ Styles", "Randy Orton", "Drew McIntyre", "Bobby Lashley", "Big E",
    "Kofi Kingston", "Xavier Woods", "The Miz", "Damian Priest", "Finn Bálor",
    # WWE Legends
    "Hulk Hogan", "Stone Cold Steve Austin", "The Rock", "The Undertaker", "Triple H",
    "Shawn Michaels", "Bret Hart", "Chris Jericho", "Eddie Guerrero", "Rey Mysterio",
    "Kurt Angle", "Chris Benoit", "Rob Van Dam", "Booker T", "Goldberg",
    # WCW Stars
    "Sting", "Diamond Dallas Page", "Ric Flair", "Arn Anderson", "Lex Luger",
    "Scott Hall", "Kevin Nash", "Hollywood Hogan", "Buff Bagwell", "Scott Steiner",
    # TNA/Impact Wrestling
    "AJ Styles", "Samoa Joe", "Bobby Roode", "James Storm", "Eric Young",
    "Austin Aries", "Bobby Lashley", "Ethan Carter III", "Matt Hardy", "Jeff Hardy",
    # AEW Superstars
    "CM Punk", "Bryan Danielson", "Adam Cole", "Kenny Omega", "Chris Jericho",
    "MJF", "Darby Allin", "Jungle Boy", "Sammy Guevara", "Orange Cassidy",
    "The Young Bucks", "FTR", "Jon Moxley", "Hangman Adam Page", "PAC",
    # ROH Stars
    "Bryan Danielson", "Seth Rollins", "Kevin Owens", "Cesaro", "Samoa Joe",
    "Austin Aries", "Adam Cole", "The Briscoes", "Christopher Daniels", "Frankie Kazarian",
    # Future/Indie Stars
    "Walter", "Ilja Dragunov", "Jordan Devlin", "Travis Banks", "David Starr",
    "Zack Sabre Jr.", "Will Ospreay", "Marty Scurll", "KUSHIDA", "Taiji Ishimori",
)

# Walk-map NPCs: (npc id, label shown on the map)
DEFAULT_NPCS: Tuple[Tuple[int, str], ...] = (
    (0, "Hulk Hogan"),
    (1, "Stone Cold Steve Austin"),
    (2, "The Rock"),
    (3, "John Cena"),
)

@dataclass
class Encounter:
    npc_id: int
    label: str
    wrestler: Wrestler

def generate_opponent(rng: Optional[random.Random] = None) -> Wrestler:
    rng = rng or random.Random()
    name = rng.choice(CANDIDATE_NAMES)
    level = rng.randint(MIN_OPPONENT_LEVEL, MAX_OPPONENT_LEVEL)
    return create_wrestler_template(name, level)

def build_lineup(defeated: Iterable = (), rng: Optional[random.Random] = None) -> List[Encounter]:
    """NPCs still standing on the walk map, each with a fresh opponent."""
    rng = rng or random.Random()
    beaten = set(defeated)
    return [Encounter(npc_id, label, generate_opponent(rng))
            for npc_id, label in DEFAULT_NPCS if npc_id not in beaten]

__all__ = ["generate_opponent","build_lineup","Encounter","CANDIDATE_NAMES","DEFAULT_NPCS"]
