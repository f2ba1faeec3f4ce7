"""
Per-game kill reports.

Kill attribution rules:
- every kill line counts towards ``total_kills``
- a normal kill credits the killer with +1
- world kills and suicides charge the victim with -1
- every kill line counts towards its means of death
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from .parser.game import Game

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameReport:
    """Kill statistics of one game."""
    index: int
    total_kills: int = 0
    kills: Dict[str, int] = field(default_factory=dict)
    kills_by_means: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_game(cls, index: int, game: Game) -> 'GameReport':
        """
        Aggregate the kills of a game.

        Args:
            index: 0-based position of the game in the log
            game: The parsed game

        Returns:
            The game's report
        """
        total_kills = 0
        kills: Dict[str, int] = {}
        kills_by_means: Dict[str, int] = {}

        for kill in game.kills():
            total_kills += 1

            # Suicides and environment deaths count against the victim
            if kill.killer_is_world() or kill.killer_is_victim():
                kills[kill.victim] = kills.get(kill.victim, 0) - 1
            else:
                kills[kill.killer] = kills.get(kill.killer, 0) + 1

            kills_by_means[kill.weapon] = kills_by_means.get(kill.weapon, 0) + 1

        return cls(index=index, total_kills=total_kills, kills=kills, kills_by_means=kills_by_means)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form of the report, as written to the JSON output."""
        return {
            "game": self.index,
            "total_kills": self.total_kills,
            "kills": dict(self.kills),
            "kills_by_means": dict(self.kills_by_means),
        }


def build_reports(games: Sequence[Game]) -> List[GameReport]:
    """Build one report per game, indexed by position."""
    reports = [GameReport.from_game(idx, game) for idx, game in enumerate(games)]
    logger.debug(f"Built {len(reports)} game reports")
    return reports


def leaderboard(reports: Sequence[GameReport]) -> List[Dict[str, Any]]:
    """
    Rank players by their net kill score over all games.

    Args:
        reports: Game reports to combine

    Returns:
        List of dicts with Rank, Player, Kills and Games keys, best first.
        Ties are ordered by player name.
    """
    totals: Counter = Counter()
    games_played: Counter = Counter()
    for report in reports:
        for player, count in report.kills.items():
            totals[player] += count
            games_played[player] += 1

    ranked = sorted(totals.items(), key=lambda x: (-x[1], x[0]))
    return [
        {"Rank": rank, "Player": player, "Kills": count, "Games": games_played[player]}
        for rank, (player, count) in enumerate(ranked, start=1)
    ]


def means_of_death_totals(reports: Sequence[GameReport]) -> Counter:
    """Sum kills per means of death over all games."""
    totals: Counter = Counter()
    for report in reports:
        totals.update(report.kills_by_means)
    return totals
