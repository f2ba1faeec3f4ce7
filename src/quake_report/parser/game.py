"""
Game segmentation for Quake 3 games logs.

A games log is a sequence of games. Each game starts with an ``InitGame:``
line and normally ends with::

     20:37 ShutdownGame:
     20:37 ------------------------------------------------------------
     20:37 ------------------------------------------------------------

When the server crashes the shutdown can be reduced to a single separator
line, with or without the ``ShutdownGame:`` marker. Everything between the
start and end markers is classified line by line as either a kill or an
ignored line.

Parsing is all-or-nothing: a log either yields at least one complete game or
raises LogParseError.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..exceptions import LogParseError
from .kill import Kill, parse_kill
from .primitives import skip_past, tag
from .timestamp import scan_timestamp

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    KILL = "kill"
    IGNORED = "ignored"


@dataclass(frozen=True)
class GameLogEntry:
    """
    One classified line of a game.

    ``kill`` is set exactly when ``kind`` is EntryKind.KILL.
    """
    kind: EntryKind
    kill: Optional[Kill] = None

    @classmethod
    def from_kill(cls, kill: Kill) -> 'GameLogEntry':
        return cls(EntryKind.KILL, kill)

    @property
    def is_kill(self) -> bool:
        return self.kind is EntryKind.KILL


IGNORED = GameLogEntry(EntryKind.IGNORED)


@dataclass(frozen=True)
class Game:
    """All classified lines between a game's start and end markers."""
    logs: Tuple[GameLogEntry, ...] = ()

    def kills(self) -> List[Kill]:
        """Kill records of this game, in log order."""
        return [entry.kill for entry in self.logs if entry.is_kill]


def parse_ignored(text: str, pos: int) -> Optional[Tuple[int, GameLogEntry]]:
    """
    Match any timestamped line that is not a shutdown or separator line.

    The lookahead keeps game end markers out of the game body so the
    segmenter always sees them.
    """
    pos = scan_timestamp(text, pos)
    if pos is None:
        return None
    if text.startswith("ShutdownGame:\n", pos) or text.startswith("-", pos):
        return None
    pos = skip_past(text, pos, "\n")
    if pos is None:
        return None
    return pos, IGNORED


def classify_line(text: str, pos: int) -> Optional[Tuple[int, GameLogEntry]]:
    """
    Classify the line at ``pos`` as a kill or an ignored line.

    Returns:
        Tuple of (offset of the next line, entry), or None if the line ends
        the game or is malformed.
    """
    parsed = parse_kill(text, pos)
    if parsed is not None:
        pos, kill = parsed
        return pos, GameLogEntry.from_kill(kill)
    return parse_ignored(text, pos)


def parse_separator_line(text: str, pos: int) -> Optional[int]:
    """Match a timestamp followed by dashes, ending with a newline or end of input."""
    pos = scan_timestamp(text, pos)
    if pos is None:
        return None
    dashes_end = pos
    while dashes_end < len(text) and text[dashes_end] == "-":
        dashes_end += 1
    if dashes_end == pos:
        return None
    if dashes_end == len(text):
        return dashes_end
    return tag(text, dashes_end, "\n")


def parse_game_start(text: str, pos: int) -> Optional[int]:
    """Match an ``InitGame:`` line. The server settings on it are skipped."""
    pos = scan_timestamp(text, pos)
    if pos is None:
        return None
    pos = tag(text, pos, "InitGame: ")
    if pos is None:
        return None
    return skip_past(text, pos, "\n")


def parse_shutdown(text: str, pos: int) -> Optional[int]:
    """
    Match a ``ShutdownGame:`` line followed by one or two separator lines.

    Normal shutdowns have two separator lines. Only one is left when the log
    file was overwritten after a crash, or at the very end of a log.
    """
    pos = scan_timestamp(text, pos)
    if pos is None:
        return None
    pos = tag(text, pos, "ShutdownGame:\n")
    if pos is None:
        return None
    pos = parse_separator_line(text, pos)
    if pos is None:
        return None
    second = parse_separator_line(text, pos)
    return pos if second is None else second


def parse_game_end(text: str, pos: int) -> Optional[int]:
    """Match a full shutdown, or a bare separator line left by a crash."""
    end = parse_shutdown(text, pos)
    if end is not None:
        return end
    return parse_separator_line(text, pos)


class SegmenterState(Enum):
    START = "start"
    EXPECT_INIT = "expect_init"
    BODY = "body"
    EXPECT_END = "expect_end"
    DONE = "done"


class GameSegmenter:
    """
    State machine splitting a games log buffer into games.

    Call ``step()`` to perform one transition or ``run()`` to drive the
    machine until DONE. A game is only appended to ``games`` once its end
    marker has matched.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.state = SegmenterState.START
        self.games: List[Game] = []
        self._current_logs: List[GameLogEntry] = []

    def step(self) -> SegmenterState:
        """
        Perform one transition from the current state.

        Returns:
            The new state.

        Raises:
            LogParseError: If a required marker is missing.
        """
        if self.state is SegmenterState.START:
            self._consume_leading_separator()
        elif self.state is SegmenterState.EXPECT_INIT:
            self._expect_init()
        elif self.state is SegmenterState.BODY:
            self._read_body()
        elif self.state is SegmenterState.EXPECT_END:
            self._expect_end()
        return self.state

    def run(self) -> List[Game]:
        """
        Drive the state machine to completion.

        Returns:
            The parsed games, in log order.

        Raises:
            LogParseError: If the log does not contain at least one complete game.
        """
        while self.state is not SegmenterState.DONE:
            self.step()
        logger.debug(f"Segmented {len(self.games)} games, stopped at offset {self.pos}/{len(self.text)}")
        return list(self.games)

    def _consume_leading_separator(self):
        end = parse_separator_line(self.text, self.pos)
        if end is not None:
            self.pos = end
        self.state = SegmenterState.EXPECT_INIT

    def _expect_init(self):
        end = parse_game_start(self.text, self.pos)
        if end is None:
            if not self.games:
                self._fail("No game start (InitGame) found")
            self.state = SegmenterState.DONE
            return
        self.pos = end
        self._current_logs = []
        self.state = SegmenterState.BODY

    def _read_body(self):
        while True:
            classified = classify_line(self.text, self.pos)
            if classified is None:
                break
            self.pos, entry = classified
            self._current_logs.append(entry)
        self.state = SegmenterState.EXPECT_END

    def _expect_end(self):
        end = parse_game_end(self.text, self.pos)
        if end is None:
            self._fail("Game is not terminated by a shutdown or separator line")
        self.pos = end
        self.games.append(Game(tuple(self._current_logs)))
        logger.debug(f"Game {len(self.games) - 1} finalized with {len(self._current_logs)} entries")
        self._current_logs = []
        self.state = SegmenterState.EXPECT_INIT

    def _fail(self, message: str):
        line_number = self.text.count("\n", 0, self.pos) + 1
        logger.debug(f"Segmenter failed in state {self.state.value} at offset {self.pos}")
        raise LogParseError(message, state=self.state.value, offset=self.pos,
                            line_number=line_number, games_parsed=len(self.games))


def parse_games(text: str) -> List[Game]:
    """
    Parse a whole games log into games.

    Args:
        text: Complete contents of the games log

    Returns:
        List of games in log order, never empty.

    Raises:
        LogParseError: If the log is malformed or contains no complete game.
    """
    return GameSegmenter(text).run()
