"""
Quake 3 Games Log Parser

This package turns the text of a Quake 3 Arena dedicated server games log
into a list of games, each holding its classified log lines.
"""

from .game import (Game, GameLogEntry, EntryKind, GameSegmenter, SegmenterState,
                   IGNORED, classify_line, parse_games)
from .kill import Kill, MeansOfDeath, WORLD_KILLER, parse_kill
from .timestamp import scan_timestamp

__all__ = [
    'EntryKind',
    'Game',
    'GameLogEntry',
    'GameSegmenter',
    'IGNORED',
    'Kill',
    'MeansOfDeath',
    'SegmenterState',
    'WORLD_KILLER',
    'classify_line',
    'parse_games',
    'parse_kill',
    'scan_timestamp',
]
