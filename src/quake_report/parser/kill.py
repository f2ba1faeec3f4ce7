"""
Kill line grammar.

A kill record in the games log looks like::

     21:42 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT

The three numbers are the killer id, victim id and means-of-death id; only
the names and the means-of-death token after them are kept.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .primitives import skip_past, tag, take_until
from .timestamp import scan_timestamp

WORLD_KILLER = "<world>"


class MeansOfDeath(Enum):
    """Means of death known to the ioquake3 game module, in server id order."""
    MOD_UNKNOWN = 0
    MOD_SHOTGUN = 1
    MOD_GAUNTLET = 2
    MOD_MACHINEGUN = 3
    MOD_GRENADE = 4
    MOD_GRENADE_SPLASH = 5
    MOD_ROCKET = 6
    MOD_ROCKET_SPLASH = 7
    MOD_PLASMA = 8
    MOD_PLASMA_SPLASH = 9
    MOD_RAILGUN = 10
    MOD_LIGHTNING = 11
    MOD_BFG = 12
    MOD_BFG_SPLASH = 13
    MOD_WATER = 14
    MOD_SLIME = 15
    MOD_LAVA = 16
    MOD_CRUSH = 17
    MOD_TELEFRAG = 18
    MOD_FALLING = 19
    MOD_SUICIDE = 20
    MOD_TARGET_LASER = 21
    MOD_TRIGGER_HURT = 22
    MOD_NAIL = 23
    MOD_CHAINGUN = 24
    MOD_PROXIMITY_MINE = 25
    MOD_KAMIKAZE = 26
    MOD_JUICED = 27
    MOD_GRAPPLE = 28

    @classmethod
    def is_known(cls, token: str) -> bool:
        """Check whether a weapon token names a known means of death."""
        return token in cls.__members__


@dataclass(frozen=True)
class Kill:
    """A single kill record."""
    killer: str
    victim: str
    weapon: str

    def killer_is_world(self) -> bool:
        """True for environment kills (falling, lava, trigger_hurt...)."""
        return self.killer == WORLD_KILLER

    def killer_is_victim(self) -> bool:
        """True when a player killed themselves, e.g. with rocket splash."""
        return self.killer == self.victim


def parse_kill(text: str, pos: int = 0) -> Optional[Tuple[int, Kill]]:
    """
    Match a kill line starting at ``pos``.

    Args:
        text: The log buffer
        pos: Offset of the start of the line

    Returns:
        Tuple of (offset just after the line's newline, Kill), or None if the
        line is not a kill record.
    """
    line_end = text.find("\n", pos)
    if line_end < 0:
        return None

    pos = scan_timestamp(text, pos)
    if pos is None:
        return None
    pos = tag(text, pos, "Kill: ")
    if pos is None:
        return None

    # Skip the numeric ids
    pos = skip_past(text, pos, ": ", line_end)
    if pos is None:
        return None

    taken = take_until(text, pos, " ", line_end)
    if taken is None:
        return None
    pos, killer = taken
    pos = tag(text, pos, " killed ")
    if pos is None:
        return None

    taken = take_until(text, pos, " ", line_end)
    if taken is None:
        return None
    pos, victim = taken
    pos = tag(text, pos, " by ")
    if pos is None:
        return None

    weapon = text[pos:line_end]
    return line_end + 1, Kill(killer=killer, victim=victim, weapon=weapon)
