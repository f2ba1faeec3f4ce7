"""
Exception hierarchy for the Quake report tools.
"""

from typing import Optional


class QuakeReportError(Exception):
    """Base exception for the Quake report tools"""
    pass


class LogParseError(QuakeReportError, ValueError):
    """
    The games log does not follow the expected grammar.

    Attributes:
        state: Name of the segmenter state that failed
        offset: Offset into the log buffer where matching failed
        line_number: 1-based line number of that offset
        games_parsed: Number of games finalized before the failure
    """

    def __init__(self, message: str, state: Optional[str] = None, offset: Optional[int] = None,
                 line_number: Optional[int] = None, games_parsed: int = 0):
        self.state = state
        self.offset = offset
        self.line_number = line_number
        self.games_parsed = games_parsed
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)


class LogReadError(QuakeReportError, IOError):
    """The games log file could not be read"""
    pass
